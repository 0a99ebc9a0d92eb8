class StudyTrackerError(Exception):
	"""Base class for errors raised by the study tracker back end."""
	pass


class PersistenceError(StudyTrackerError):
	"""Raised when the local store fails to read or write a row."""
	pass


class ValidationError(StudyTrackerError):
	"""Raised when user input cannot be stored (e.g. a blank subject name)."""
	pass
