import os
import tempfile

# keep log files and the default database out of the real user data dir
os.environ.setdefault("ESTUDA_DATA_DIR", tempfile.mkdtemp(prefix="estuda-tests-"))

import pytest
from PySide6.QtCore import QCoreApplication

from BackEnd.core.entities import Subject, Topic, User
from BackEnd.core.errors import PersistenceError
from BackEnd.repos.note_repo import NoteRepo
from BackEnd.repos.session_repo import SessionRepo
from BackEnd.repos.subject_repo import SubjectRepo
from BackEnd.repos.user_repo import UserRepo
from BackEnd.services.auth_state import AuthSession


@pytest.fixture(scope="session")
def qapp():
	app = QCoreApplication.instance() or QCoreApplication([])
	yield app


@pytest.fixture
def db_file(tmp_path):
	return tmp_path / "estuda.db"


@pytest.fixture
def sessions(db_file):
	return SessionRepo(db_file)


@pytest.fixture
def notes(db_file):
	return NoteRepo(db_file)


@pytest.fixture
def subjects(db_file):
	return SubjectRepo(db_file)


@pytest.fixture
def users(db_file):
	return UserRepo(db_file)


@pytest.fixture
def math():
	return Subject(id=1, name="Matemática", icon="calculate", color="#006666",
		topics=[Topic(id=10, subject_id=1, name="Álgebra")])


@pytest.fixture
def auth(qapp):
	session = AuthSession()
	session.sign_in(User(id=7, email="ana@example.com", display_name="Ana Souza"))
	return session


class FlakyStore:
	"""In-memory session store that can be told to fail the next writes.

	Like SessionRepo, a session and its note are stored together or not at all.
	"""

	def __init__(self):
		self.sessions = []
		self.notes = []
		self.fail_sessions = 0
		self.fail_notes = 0

	def insert_session(self, record, note=None):
		if self.fail_sessions:
			self.fail_sessions -= 1
			raise PersistenceError("database is locked")
		if note is not None and self.fail_notes:
			self.fail_notes -= 1
			raise PersistenceError("disk I/O error")
		stored = record.stored(len(self.sessions) + 1, "2026-10-19T12:00:00+00:00")
		self.sessions.append(stored)
		if note is not None:
			self.notes.append(note.stored(len(self.notes) + 1, stored.created_at))
		return stored


@pytest.fixture
def store():
	return FlakyStore()
