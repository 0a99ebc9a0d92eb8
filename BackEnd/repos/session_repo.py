from datetime import datetime
from typing import Optional

from BackEnd.core.clock import utc_now_iso, to_utc_iso
from BackEnd.core.entities import NoteRecord, StudySessionRecord
from BackEnd.core.log import setup_logger
from BackEnd.repos.db import Repo
from BackEnd.repos.note_repo import insert_note_row

logger = setup_logger(__name__)

_COLUMNS = "id, user_id, subject_name, topic_name, duration, status, notes, icon, color, created_at"

def _from_row(row):
	return StudySessionRecord(
		id=row["id"],
		user_id=row["user_id"],
		subject_name=row["subject_name"],
		topic_name=row["topic_name"],
		duration=row["duration"],
		status=row["status"],
		notes=row["notes"],
		icon=row["icon"],
		color=row["color"],
		created_at=row["created_at"],
	)


class SessionRepo(Repo):
	"""Study session rows. Rows are only ever inserted and read."""

	def insert_session(self, record: StudySessionRecord, note: Optional[NoteRecord] = None) -> StudySessionRecord:
		"""Insert a session and return it with the store-assigned id and created_at.

		`note` (the session notes mirrored as a note) goes in the same
		transaction: either both rows are stored or neither is.
		"""
		created_at = utc_now_iso()
		with self._tx() as conn:
			cur = conn.execute(
				"""
				INSERT INTO sessions (user_id, subject_name, topic_name, duration, status, notes, icon, color, created_at)
				VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
				""",
				(record.user_id, record.subject_name, record.topic_name, record.duration,
				 record.status, record.notes, record.icon, record.color, created_at)
			)
			session_id = cur.lastrowid
			if note is not None:
				insert_note_row(conn, note, created_at)
		logger.info(f"Saved session {session_id}: {record.subject_name} {record.duration}")
		return record.stored(session_id, created_at)

	def list_sessions_since(self, since: datetime):
		"""Sessions created at or after `since`, oldest first."""
		with self._tx() as conn:
			cur = conn.execute(
				f"SELECT {_COLUMNS} FROM sessions WHERE created_at >= ? ORDER BY created_at ASC, id ASC",
				(to_utc_iso(since),)
			)
			return [_from_row(row) for row in cur.fetchall()]

	def list_recent_sessions(self, limit=5):
		"""Newest sessions first."""
		with self._tx() as conn:
			cur = conn.execute(
				f"SELECT {_COLUMNS} FROM sessions ORDER BY created_at DESC, id DESC LIMIT ?",
				(int(limit),)
			)
			return [_from_row(row) for row in cur.fetchall()]
