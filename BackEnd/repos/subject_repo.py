from BackEnd.core.clock import utc_now_iso
from BackEnd.core.config import DEFAULT_SUBJECT_COLOR, DEFAULT_SUBJECT_ICON
from BackEnd.core.entities import Subject, Topic
from BackEnd.core.errors import ValidationError
from BackEnd.core.log import setup_logger
from BackEnd.repos.db import Repo

logger = setup_logger(__name__)

def _clean_name(name, what):
	name = (name or "").strip()
	if not name:
		raise ValidationError(f"{what} name must not be blank")
	return name


class SubjectRepo(Repo):
	"""Subjects and their topics, both kept in creation order."""

	def list_subjects(self):
		with self._tx() as conn:
			subject_rows = conn.execute(
				"SELECT * FROM subjects ORDER BY created_at ASC, id ASC").fetchall()
			topic_rows = conn.execute(
				"SELECT id, subject_id, name FROM topics ORDER BY created_at ASC, id ASC").fetchall()

		subjects = [
			Subject(
				id=row["id"],
				name=row["name"],
				icon=row["icon"] or DEFAULT_SUBJECT_ICON,
				color=row["color"] or DEFAULT_SUBJECT_COLOR,
				planned_time=row["planned_time"] or "",
				percentage=row["percentage"] or 0,
				position=row["position"],
			)
			for row in subject_rows
		]
		by_id = {s.id: s for s in subjects}
		for row in topic_rows:
			subject = by_id.get(row["subject_id"])
			if subject is not None:
				subject.topics.append(Topic(id=row["id"], subject_id=row["subject_id"], name=row["name"]))
		return subjects

	def add_subject(self, name, planned_time="", icon=DEFAULT_SUBJECT_ICON, color=DEFAULT_SUBJECT_COLOR,
			percentage=0, user_id=None) -> Subject:
		name = _clean_name(name, "subject")
		with self._tx() as conn:
			cur = conn.execute(
				"""
				INSERT INTO subjects (user_id, name, planned_time, icon, color, percentage, created_at)
				VALUES (?, ?, ?, ?, ?, ?, ?)
				""",
				(user_id, name, planned_time or "", icon, color, int(percentage), utc_now_iso())
			)
			subject_id = cur.lastrowid
		logger.info(f"Added subject {subject_id} ({name})")
		return Subject(id=subject_id, name=name, icon=icon, color=color,
			planned_time=planned_time or "", percentage=int(percentage))

	def delete_subject(self, subject_id):
		with self._tx() as conn:
			conn.execute("DELETE FROM topics WHERE subject_id=?", (subject_id,))
			conn.execute("DELETE FROM subjects WHERE id=?", (subject_id,))
		logger.info(f"Deleted subject {subject_id}")

	def add_topic(self, subject_id, name, user_id=None) -> Topic:
		name = _clean_name(name, "topic")
		with self._tx() as conn:
			cur = conn.execute(
				"INSERT INTO topics (subject_id, user_id, name, created_at) VALUES (?, ?, ?, ?)",
				(subject_id, user_id, name, utc_now_iso())
			)
			topic_id = cur.lastrowid
		logger.info(f"Added topic {topic_id} to subject {subject_id}")
		return Topic(id=topic_id, subject_id=subject_id, name=name)

	def delete_topic(self, topic_id):
		with self._tx() as conn:
			conn.execute("DELETE FROM topics WHERE id=?", (topic_id,))
		logger.info(f"Deleted topic {topic_id}")
