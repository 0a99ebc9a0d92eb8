import json

from BackEnd.core.clock import utc_now_iso
from BackEnd.core.entities import NoteRecord
from BackEnd.core.errors import ValidationError
from BackEnd.core.log import setup_logger
from BackEnd.repos.db import Repo

logger = setup_logger(__name__)

def insert_note_row(conn, record: NoteRecord, created_at) -> int:
	"""Insert a note on an open connection; shared with the session insert."""
	if not record.title.strip():
		raise ValidationError("note title must not be blank")
	cur = conn.execute(
		"""
		INSERT INTO notes (user_id, subject_id, title, category, preview, tags, created_at)
		VALUES (?, ?, ?, ?, ?, ?, ?)
		""",
		(record.user_id, record.subject_id, record.title.strip(), record.category,
		 record.preview, json.dumps(list(record.tags)), created_at)
	)
	return cur.lastrowid


class NoteRepo(Repo):

	def insert_note(self, record: NoteRecord) -> NoteRecord:
		created_at = utc_now_iso()
		with self._tx() as conn:
			note_id = insert_note_row(conn, record, created_at)
		logger.info(f"Saved note {note_id} in {record.category}")
		return record.stored(note_id, created_at)

	def list_notes(self, category=None):
		"""Notes newest first, optionally only one category."""
		query = "SELECT * FROM notes"
		params = ()
		if category:
			query += " WHERE category = ?"
			params = (category,)
		query += " ORDER BY created_at DESC, id DESC"
		with self._tx() as conn:
			rows = conn.execute(query, params).fetchall()
		return [
			NoteRecord(
				id=row["id"],
				user_id=row["user_id"],
				subject_id=row["subject_id"],
				title=row["title"],
				category=row["category"],
				preview=row["preview"] or "",
				tags=tuple(json.loads(row["tags"] or "[]")),
				created_at=row["created_at"],
			)
			for row in rows
		]

	def categories(self):
		with self._tx() as conn:
			rows = conn.execute("SELECT DISTINCT category FROM notes ORDER BY category").fetchall()
		return [row["category"] for row in rows]
