from BackEnd.core.clock import utc_now_iso
from BackEnd.core.entities import User
from BackEnd.core.errors import ValidationError
from BackEnd.repos.db import Repo


class UserRepo(Repo):
	"""Local profiles standing in for accounts of a hosted auth provider."""

	def get_or_create_user(self, email, display_name=None) -> User:
		email = (email or "").strip().lower()
		if not email:
			raise ValidationError("email must not be blank")
		with self._tx() as conn:
			row = conn.execute(
				"SELECT id, email, display_name FROM users WHERE email=?", (email,)).fetchone()
			if row is None:
				cur = conn.execute(
					"INSERT INTO users (email, display_name, created_at) VALUES (?, ?, ?)",
					(email, display_name, utc_now_iso())
				)
				return User(id=cur.lastrowid, email=email, display_name=display_name)
			if display_name and row["display_name"] != display_name:
				conn.execute("UPDATE users SET display_name=? WHERE id=?", (display_name, row["id"]))
				return User(id=row["id"], email=email, display_name=display_name)
			return User(id=row["id"], email=row["email"], display_name=row["display_name"])
