from BackEnd.core.entities import User
from BackEnd.services.auth_state import AuthEvent, AuthSession, AuthStateChanged


def test_auth_session_lifecycle(qapp):
	session = AuthSession()
	seen = []
	session.changed.connect(seen.append)
	assert session.current_user() is None

	user = User(id=1, email="bia@example.com")
	session.sign_in(user)
	assert session.current_user() == user
	assert session.signed_in

	renamed = User(id=1, email="bia@example.com", display_name="Beatriz Lima")
	session.apply(AuthStateChanged(AuthEvent.USER_UPDATED, renamed))
	assert session.current_user().first_name == "Beatriz"

	session.sign_out()
	assert session.current_user() is None
	assert [c.event for c in seen] == [AuthEvent.SIGNED_IN, AuthEvent.USER_UPDATED, AuthEvent.SIGNED_OUT]


def test_first_name_falls_back_to_email():
	assert User(id=2, email="carlos@example.com").first_name == "carlos"
