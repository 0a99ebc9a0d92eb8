from BackEnd.core.config import STATUS_DONE
from BackEnd.services.session_recorder import build_note_record, build_session_record


def test_build_session_record_carries_subject_details(math):
	record = build_session_record(math, math.topics[0], 1500, "  exercícios 1-10 ", user_id=7)
	assert record.subject_name == "Matemática"
	assert record.topic_name == "Álgebra"
	assert record.duration == "25m"
	assert record.minutes == 25
	assert record.status == STATUS_DONE
	assert record.notes == "exercícios 1-10"
	assert record.icon == "calculate"
	assert record.color == "#006666"
	assert record.user_id == 7
	assert record.id is None


def test_sub_minute_sessions_are_recorded_in_seconds(math):
	record = build_session_record(math, None, 30, "")
	assert record.duration == "30s"
	assert record.topic_name is None
	assert record.notes is None


def test_note_mirror_only_for_non_empty_notes(math):
	plain = build_session_record(math, None, 600, "   ")
	assert build_note_record(plain, math) is None

	noted = build_session_record(math, math.topics[0], 600, "revisar matrizes", user_id=7)
	note = build_note_record(noted, math)
	assert note.title == "Matemática: Álgebra"
	assert note.category == "Matemática"
	assert note.preview == "revisar matrizes"
	assert note.subject_id == math.id
	assert note.user_id == 7
