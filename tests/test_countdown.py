from BackEnd.core.config import STATUS_DONE
from BackEnd.services.countdown import CountdownEngine, CountdownPhase


def test_defaults_to_a_25_minute_target():
	engine = CountdownEngine()
	assert engine.target_seconds == 1500
	assert engine.remaining_seconds == 1500
	assert engine.phase is CountdownPhase.CONFIGURING


def test_adjust_target_clamps_to_one_minute():
	engine = CountdownEngine(target_seconds=300)
	assert engine.adjust_target(-300)
	assert engine.target_seconds == 60
	assert engine.remaining_seconds == 60
	assert engine.adjust_target(-300)
	assert engine.target_seconds == 60
	assert engine.adjust_target(600)
	assert engine.remaining_seconds == engine.target_seconds == 660


def test_adjust_target_rejected_after_first_tick():
	engine = CountdownEngine(target_seconds=300)
	engine.start()
	engine.tick()
	engine.pause()
	assert not engine.adjust_target(300)
	assert engine.target_seconds == 300
	assert engine.remaining_seconds == 299


def test_adjust_target_allowed_again_after_discard():
	engine = CountdownEngine(target_seconds=300)
	engine.start()
	engine.tick()
	engine.stop_early()
	engine.discard()
	assert engine.adjust_target(300)
	assert engine.target_seconds == 600


def test_each_tick_removes_exactly_one_second():
	engine = CountdownEngine(target_seconds=120)
	engine.start()
	for expected in range(119, 100, -1):
		engine.tick()
		assert engine.remaining_seconds == expected
		assert 0 <= engine.remaining_seconds <= engine.target_seconds


def test_ticks_ignored_unless_running():
	engine = CountdownEngine(target_seconds=120)
	engine.tick()
	assert engine.remaining_seconds == 120
	engine.start()
	engine.tick()
	engine.pause()
	engine.tick()
	engine.tick()
	assert engine.remaining_seconds == 119
	assert engine.resume()
	engine.tick()
	assert engine.remaining_seconds == 118


def test_completes_exactly_at_zero(math):
	engine = CountdownEngine(target_seconds=1500)
	engine.start()
	for _ in range(1499):
		engine.tick()
	assert engine.phase is CountdownPhase.RUNNING
	assert engine.remaining_seconds == 1
	assert engine.tick() is CountdownPhase.COMPLETED
	assert engine.remaining_seconds == 0
	engine.tick()
	assert engine.remaining_seconds == 0

	record = engine.commit("", math)
	assert record.duration == "25m"
	assert record.status == STATUS_DONE
	assert record.notes is None
	assert engine.phase is CountdownPhase.CONFIGURING
	assert engine.remaining_seconds == 1500


def test_stop_early_records_elapsed_seconds(math):
	engine = CountdownEngine(target_seconds=300)
	engine.start()
	for _ in range(45):
		engine.tick()
	assert engine.stop_early()
	assert engine.phase is CountdownPhase.COMPLETED
	assert engine.remaining_seconds == 255

	record = engine.commit("", math)
	assert record.duration == "45s"


def test_stop_early_from_pause(math):
	engine = CountdownEngine(target_seconds=1500)
	engine.start()
	for _ in range(300):
		engine.tick()
	engine.pause()
	assert engine.stop_early()
	assert engine.commit("revisão", math).duration == "5m"


def test_discard_produces_nothing():
	engine = CountdownEngine(target_seconds=60)
	engine.start()
	engine.tick()
	engine.stop_early()
	assert engine.discard()
	assert engine.phase is CountdownPhase.CONFIGURING
	assert engine.remaining_seconds == 60


def test_guard_blocks_start_and_commit(math):
	selected = {"subject": None}
	engine = CountdownEngine(target_seconds=60, guard=lambda: selected["subject"] is not None)
	assert not engine.start()
	assert engine.phase is CountdownPhase.CONFIGURING

	selected["subject"] = math
	assert engine.start()
	engine.tick()
	engine.stop_early()
	selected["subject"] = None
	assert engine.commit("", math) is None
	assert engine.phase is CountdownPhase.COMPLETED


def test_commit_without_subject_is_a_noop():
	engine = CountdownEngine(target_seconds=60)
	engine.start()
	engine.stop_early()
	assert engine.commit("notes", None) is None
	assert engine.phase is CountdownPhase.COMPLETED


def test_failed_persist_keeps_completed_state_and_notes(math):
	engine = CountdownEngine(target_seconds=300)
	engine.start()
	for _ in range(120):
		engine.tick()
	engine.stop_early()

	def broken(record):
		raise RuntimeError("offline")

	try:
		engine.commit("capítulo 3", math, persist=broken)
	except RuntimeError:
		pass
	assert engine.phase is CountdownPhase.COMPLETED
	assert engine.remaining_seconds == 180
	assert engine.notes == "capítulo 3"

	saved = []
	record = engine.commit(engine.notes, math, persist=saved.append)
	assert saved == [record]
	assert record.duration == "2m"
	assert record.notes == "capítulo 3"
	assert engine.phase is CountdownPhase.CONFIGURING


def test_snapshot_and_progress():
	engine = CountdownEngine(target_seconds=100)
	engine.start()
	for _ in range(25):
		engine.tick()
	snap = engine.snapshot()
	assert snap["phase"] == "running"
	assert snap["elapsed_seconds"] == 25
	assert snap["progress"] == 0.25
