from dataclasses import dataclass
from enum import Enum
from typing import Optional

from PySide6.QtCore import QObject, Signal

from BackEnd.core.entities import User
from BackEnd.core.log import setup_logger

logger = setup_logger(__name__)

class AuthEvent(Enum):
	SIGNED_IN = "SIGNED_IN"
	SIGNED_OUT = "SIGNED_OUT"
	USER_UPDATED = "USER_UPDATED"


@dataclass(frozen=True)
class AuthStateChanged:
	event: AuthEvent
	user: Optional[User] = None


class AuthSession(QObject):
	"""Holds the signed-in user for the life of the process.

	Populated at startup, updated on every AuthStateChanged, cleared on
	sign-out. Consumers get it injected and only read from it.
	"""
	changed = Signal(object)  # emits AuthStateChanged

	def __init__(self):
		super().__init__()
		self._user = None

	def current_user(self) -> Optional[User]:
		return self._user

	@property
	def signed_in(self):
		return self._user is not None

	def apply(self, change: AuthStateChanged):
		if change.event is AuthEvent.SIGNED_OUT:
			self._user = None
		else:
			self._user = change.user
		logger.info(f"Auth state: {change.event.value} ({self._user.email if self._user else 'no user'})")
		self.changed.emit(change)

	def sign_in(self, user: User):
		self.apply(AuthStateChanged(AuthEvent.SIGNED_IN, user))

	def sign_out(self):
		self.apply(AuthStateChanged(AuthEvent.SIGNED_OUT))
