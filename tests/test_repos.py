from datetime import timedelta

import pytest

from BackEnd.core.clock import local_midnight
from BackEnd.core.entities import NoteRecord, StudySessionRecord
from BackEnd.core.errors import PersistenceError, ValidationError
from BackEnd.repos.session_repo import SessionRepo


def test_insert_session_assigns_id_and_timestamp(sessions, users):
	user = users.get_or_create_user("ana@example.com")
	stored = sessions.insert_session(StudySessionRecord(
		subject_name="Direito", topic_name="Constitucional", duration="45s", notes="art. 5", user_id=user.id))
	assert stored.id is not None
	assert stored.created_at.endswith("+00:00")

	[loaded] = sessions.list_recent_sessions(5)
	assert loaded == stored
	assert loaded.minutes == pytest.approx(0.75)


def test_recent_sessions_newest_first_and_limited(sessions):
	for label in ("1m", "2m", "3m", "4m"):
		sessions.insert_session(StudySessionRecord(subject_name="X", duration=label))
	recent = sessions.list_recent_sessions(3)
	assert [r.duration for r in recent] == ["4m", "3m", "2m"]


def test_sessions_since_excludes_earlier_rows(sessions):
	sessions.insert_session(StudySessionRecord(subject_name="X", duration="1m"))
	assert len(sessions.list_sessions_since(local_midnight())) == 1
	assert sessions.list_sessions_since(local_midnight() + timedelta(days=1)) == []


def test_unreachable_database_raises_persistence_error(tmp_path):
	repo = SessionRepo(tmp_path / "missing" / "estuda.db")
	with pytest.raises(PersistenceError):
		repo.insert_session(StudySessionRecord(subject_name="X", duration="1m"))



def test_session_and_note_are_stored_together(sessions, notes, subjects):
	law = subjects.add_subject("Direito")
	stored = sessions.insert_session(
		StudySessionRecord(subject_name="Direito", duration="25m", notes="art. 5"),
		note=NoteRecord(title="Sessão de Direito", category="Direito", preview="art. 5", subject_id=law.id),
	)
	assert stored.id is not None
	[note] = notes.list_notes()
	assert note.preview == "art. 5"
	assert note.subject_id == law.id


def test_failed_note_insert_rolls_back_the_session(sessions, notes):
	with pytest.raises(PersistenceError):
		sessions.insert_session(
			StudySessionRecord(subject_name="X", duration="1m", notes="resumo"),
			note=NoteRecord(title="x", category="y", subject_id=999),
		)
	assert sessions.list_recent_sessions(5) == []
	assert notes.list_notes() == []

def test_subjects_with_topics(subjects):
	law = subjects.add_subject("Direito", "1h 30m", icon="gavel", color="#008080", percentage=45)
	math = subjects.add_subject("Matemática")
	subjects.add_topic(law.id, "Constitucional")
	subjects.add_topic(law.id, "Penal")

	listed = subjects.list_subjects()
	assert [s.name for s in listed] == ["Direito", "Matemática"]
	assert [t.name for t in listed[0].topics] == ["Constitucional", "Penal"]
	assert listed[0].planned_time == "1h 30m"
	assert listed[0].icon == "gavel"
	assert listed[1].topics == []

	subjects.delete_topic(listed[0].topics[0].id)
	assert [t.name for t in subjects.list_subjects()[0].topics] == ["Penal"]

	subjects.delete_subject(law.id)
	assert [s.id for s in subjects.list_subjects()] == [math.id]


def test_blank_names_are_rejected(subjects, notes):
	with pytest.raises(ValidationError):
		subjects.add_subject("   ")
	law = subjects.add_subject("Direito")
	with pytest.raises(ValidationError):
		subjects.add_topic(law.id, "")
	with pytest.raises(ValidationError):
		notes.insert_note(NoteRecord(title=" ", category="Direito"))


def test_notes_filter_by_category(notes):
	notes.insert_note(NoteRecord(title="Álgebra Linear", category="Matemática", tags=("#VETORES", "#PROVA")))
	notes.insert_note(NoteRecord(title="Células", category="Biologia", preview="mitocôndrias"))

	assert [n.title for n in notes.list_notes()] == ["Células", "Álgebra Linear"]
	[algebra] = notes.list_notes("Matemática")
	assert algebra.tags == ("#VETORES", "#PROVA")
	assert notes.categories() == ["Biologia", "Matemática"]


def test_get_or_create_user_is_stable(users):
	first = users.get_or_create_user("Ana@Example.com", "Ana Souza")
	again = users.get_or_create_user("ana@example.com")
	assert again == first
	assert again.first_name == "Ana"
	renamed = users.get_or_create_user("ana@example.com", "Ana S.")
	assert renamed.id == first.id
	assert renamed.display_name == "Ana S."
	with pytest.raises(ValidationError):
		users.get_or_create_user("")
