from enum import Enum
from typing import Callable, Optional

from BackEnd.core.config import DEFAULT_TARGET_SECONDS, MIN_TARGET_SECONDS
from BackEnd.core.log import setup_logger
from BackEnd.services.session_recorder import build_session_record

logger = setup_logger(__name__)

class CountdownPhase(Enum):
	CONFIGURING = "configuring"
	RUNNING = "running"
	PAUSED = "paused"
	COMPLETED = "completed"


class CountdownEngine:
	"""
	Focus countdown state machine.

	Holds no timer of its own: whoever drives it calls tick() about once a
	second while the phase is RUNNING and stops calling it on any other phase.
	`guard` is checked before start/resume/commit (e.g. "a subject is selected").
	"""
	def __init__(self, target_seconds=DEFAULT_TARGET_SECONDS, guard: Callable[[], bool] = None,
			min_target_seconds=MIN_TARGET_SECONDS):
		self.min_target_seconds = min_target_seconds
		self.target_seconds = max(min_target_seconds, int(target_seconds))
		self.remaining_seconds = self.target_seconds
		self.phase = CountdownPhase.CONFIGURING
		self.notes = ""
		self._guard = guard or (lambda: True)

	@property
	def is_running(self):
		return self.phase is CountdownPhase.RUNNING

	@property
	def elapsed_seconds(self):
		return self.target_seconds - self.remaining_seconds

	@property
	def progress(self):
		"""Fraction of the target already elapsed, 0.0 .. 1.0."""
		return self.elapsed_seconds / self.target_seconds

	def _allowed(self, action):
		if self._guard():
			return True
		logger.info(f"Countdown {action} ignored: precondition not met")
		return False

	def adjust_target(self, delta_seconds) -> bool:
		"""Change the target while untouched; remaining follows the new target."""
		if self.phase is not CountdownPhase.CONFIGURING or self.remaining_seconds != self.target_seconds:
			return False
		self.target_seconds = max(self.min_target_seconds, self.target_seconds + int(delta_seconds))
		self.remaining_seconds = self.target_seconds
		return True

	def start(self) -> bool:
		if self.phase is not CountdownPhase.CONFIGURING or not self._allowed("start"):
			return False
		self.phase = CountdownPhase.RUNNING
		logger.info(f"Countdown started for {self.target_seconds}s")
		return True

	def pause(self) -> bool:
		if self.phase is not CountdownPhase.RUNNING:
			return False
		self.phase = CountdownPhase.PAUSED
		return True

	def resume(self) -> bool:
		if self.phase is not CountdownPhase.PAUSED or not self._allowed("resume"):
			return False
		self.phase = CountdownPhase.RUNNING
		return True

	def tick(self):
		"""Advances the countdown by exactly one second."""
		if self.phase is not CountdownPhase.RUNNING:
			return self.phase
		self.remaining_seconds -= 1
		if self.remaining_seconds <= 0:
			self.remaining_seconds = 0
			self.phase = CountdownPhase.COMPLETED
			logger.info("Countdown completed")
		return self.phase

	def stop_early(self) -> bool:
		if self.phase not in (CountdownPhase.RUNNING, CountdownPhase.PAUSED):
			return False
		self.phase = CountdownPhase.COMPLETED
		logger.info(f"Countdown stopped early after {self.elapsed_seconds}s")
		return True

	def discard(self) -> bool:
		if self.phase is not CountdownPhase.COMPLETED:
			return False
		self._reset()
		return True

	def commit(self, notes, subject, topic=None, persist: Optional[Callable] = None, user_id=None):
		"""
		Turn the completed countdown into a session record.

		`persist(record)` runs before the reset; if it raises, the completed
		state and the notes stay so the caller can retry. Returns the record
		(or what persist returned), or None when the commit is not allowed.
		"""
		if self.phase is not CountdownPhase.COMPLETED:
			return None
		if subject is None or not self._allowed("commit"):
			logger.info("Countdown commit ignored: no subject selected")
			return None
		self.notes = notes or ""
		record = build_session_record(subject, topic, self.elapsed_seconds, self.notes, user_id=user_id)
		if persist is not None:
			record = persist(record) or record
		self._reset()
		return record

	def _reset(self):
		self.remaining_seconds = self.target_seconds
		self.phase = CountdownPhase.CONFIGURING
		self.notes = ""

	def snapshot(self):
		return {
			"phase": self.phase.value,
			"target_seconds": self.target_seconds,
			"remaining_seconds": self.remaining_seconds,
			"elapsed_seconds": self.elapsed_seconds,
			"progress": self.progress,
		}
