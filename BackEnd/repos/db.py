import sqlite3
from contextlib import contextmanager
from pathlib import Path

from BackEnd.core.errors import PersistenceError
from BackEnd.core.log import setup_logger
from BackEnd.core.paths import db_path

logger = setup_logger(__name__)

SCHEMA_PATH = Path(__file__).parent.parent.parent / "SQL" / "schema.sql"

def connect(db_file=None):
	"""Open SQLite connection and ensure schema is applied."""
	dbfile = db_file or db_path()
	conn = sqlite3.connect(dbfile)
	conn.row_factory = sqlite3.Row
	conn.execute("PRAGMA foreign_keys = ON")
	with open(SCHEMA_PATH, encoding="utf-8") as f:
		conn.executescript(f.read())
	return conn

@contextmanager
def transaction(db_file=None):
	"""Yield a connection; commit on success, roll back and raise PersistenceError on failure."""
	try:
		conn = connect(db_file)
	except sqlite3.Error as e:
		logger.error(f"Could not open database {db_file}: {e}")
		raise PersistenceError(f"could not open database: {e}") from e
	try:
		with conn:
			yield conn
	except sqlite3.Error as e:
		logger.error(f"Database error: {e}")
		raise PersistenceError(str(e)) from e
	finally:
		conn.close()


class Repo:
	"""Base for the table repos; each one is bound to a single database file."""

	def __init__(self, db_file=None):
		self.db_file = db_file or db_path()

	def _tx(self):
		return transaction(self.db_file)
