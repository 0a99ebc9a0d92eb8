from PySide6.QtCore import QObject, Signal, QTimer

from BackEnd.core.config import DEFAULT_TARGET_SECONDS, TARGET_STEP_SECONDS, TICK_INTERVAL_MS
from BackEnd.core.errors import PersistenceError
from BackEnd.core.log import setup_logger
from BackEnd.services.countdown import CountdownEngine, CountdownPhase
from BackEnd.services.session_recorder import build_note_record

logger = setup_logger(__name__)

class TimerService(QObject):
	tick = Signal(int)  # emits remaining seconds
	state_changed = Signal(str)  # emits 'configuring', 'running', 'paused', 'completed'
	completed = Signal(int)  # emits elapsed seconds
	saved = Signal(object)  # emits the stored StudySessionRecord
	save_failed = Signal(str)

	def __init__(self, sessions, auth, target_seconds=DEFAULT_TARGET_SECONDS):
		super().__init__()
		self.sessions = sessions
		self.auth = auth
		self.subject = None
		self.topic = None
		self.engine = CountdownEngine(target_seconds, guard=lambda: self.subject is not None)
		self._timer = QTimer(self)
		self._timer.setInterval(TICK_INTERVAL_MS)
		self._timer.timeout.connect(self._on_tick)

	@property
	def phase(self):
		return self.engine.phase

	def select_subject(self, subject, topic=None):
		self.subject = subject
		self.topic = topic

	def adjust_target(self, steps):
		"""Move the target by `steps` five-minute increments while untouched."""
		if self.engine.adjust_target(steps * TARGET_STEP_SECONDS):
			self.tick.emit(self.engine.remaining_seconds)
			return True
		return False

	def start(self):
		if self.engine.start():
			self._sync_timer()

	def pause_resume(self):
		if self.engine.phase is CountdownPhase.RUNNING:
			self.engine.pause()
		elif self.engine.phase is CountdownPhase.PAUSED:
			self.engine.resume()
		else:
			return
		self._sync_timer()

	def stop(self):
		if self.engine.stop_early():
			self._sync_timer()
			self.completed.emit(self.engine.elapsed_seconds)

	def discard(self):
		if self.engine.discard():
			self._sync_timer()
			self.tick.emit(self.engine.remaining_seconds)

	def commit(self, notes=""):
		"""Save the completed session (and its notes); False keeps it for a retry."""
		if self.engine.phase is not CountdownPhase.COMPLETED:
			return False
		user = self.auth.current_user() if self.auth is not None else None
		try:
			record = self.engine.commit(
				notes, self.subject, self.topic,
				persist=self._persist,
				user_id=user.id if user else None,
			)
		except PersistenceError as e:
			logger.error(f"Could not save session: {e}")
			self.save_failed.emit(str(e))
			return False
		if record is None:
			return False
		self._sync_timer()
		self.tick.emit(self.engine.remaining_seconds)
		self.saved.emit(record)
		return True

	def shutdown(self):
		"""Leaving the focus screen: stop ticking and drop an unfinished countdown."""
		self._timer.stop()
		if self.engine.phase in (CountdownPhase.RUNNING, CountdownPhase.PAUSED):
			logger.info(f"Focus screen left after {self.engine.elapsed_seconds}s; session not recorded")
			self.engine.stop_early()
			self.engine.discard()
			self.state_changed.emit(self.engine.phase.value)
			self.tick.emit(self.engine.remaining_seconds)

	def _persist(self, record):
		# session row and mirrored note share one transaction
		return self.sessions.insert_session(record, note=build_note_record(record, self.subject))

	def _sync_timer(self):
		# the QTimer is active exactly while the engine is running
		if self.engine.is_running:
			if not self._timer.isActive():
				self._timer.start()
		else:
			self._timer.stop()
		self.state_changed.emit(self.engine.phase.value)

	def _on_tick(self):
		phase = self.engine.tick()
		self.tick.emit(self.engine.remaining_seconds)
		if phase is CountdownPhase.COMPLETED:
			self._sync_timer()
			self.completed.emit(self.engine.elapsed_seconds)
