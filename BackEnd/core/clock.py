from datetime import datetime, timezone

def utc_now_iso():
	"""Return current UTC time as ISO8601 string (no microseconds)."""
	return datetime.now(timezone.utc).replace(microsecond=0).isoformat()

def to_utc_iso(moment: datetime) -> str:
	"""Normalise an aware or naive-local datetime to the stored UTC ISO form."""
	if moment.tzinfo is None:
		moment = moment.astimezone()
	return moment.astimezone(timezone.utc).replace(microsecond=0).isoformat()

def local_midnight(now: datetime = None) -> datetime:
	"""Return the aware local wall-clock midnight that starts the day of `now`.

	The offset is resolved for midnight itself, so a DST switch later in the
	day does not shift the boundary.
	"""
	if now is None:
		now = datetime.now()
	elif now.tzinfo is not None:
		now = now.astimezone().replace(tzinfo=None)
	midnight = datetime(now.year, now.month, now.day)
	return midnight.astimezone()
