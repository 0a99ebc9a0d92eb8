from typing import Optional

from BackEnd.core.config import STATUS_DONE
from BackEnd.core.durations import elapsed_duration
from BackEnd.core.entities import NoteRecord, StudySessionRecord, Subject, Topic

def _clean_notes(notes) -> Optional[str]:
	if notes is None:
		return None
	notes = notes.strip()
	return notes or None

def build_session_record(subject: Subject, topic: Optional[Topic], elapsed_seconds: int,
		notes: Optional[str] = None, user_id=None) -> StudySessionRecord:
	"""Shape a finished focus session into a row for the session store."""
	duration = elapsed_duration(max(0, int(elapsed_seconds)))
	return StudySessionRecord(
		subject_name=subject.name,
		topic_name=topic.name if topic is not None else None,
		duration=duration.label(),
		status=STATUS_DONE,
		notes=_clean_notes(notes),
		icon=subject.icon,
		color=subject.color,
		user_id=user_id,
		parsed=duration,
	)

def build_note_record(record: StudySessionRecord, subject: Subject) -> Optional[NoteRecord]:
	"""Note mirroring a session's notes; None when the session has none."""
	if not record.notes:
		return None
	title = subject.name if not record.topic_name else f"{subject.name}: {record.topic_name}"
	return NoteRecord(
		title=title,
		category=subject.name,
		preview=record.notes,
		tags=("#SESSAO",),
		subject_id=subject.id,
		user_id=record.user_id,
	)
