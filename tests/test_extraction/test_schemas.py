"""Tests for ExtractedEvent."""

from syllabus_calendar.extraction.schemas import VALID_EVENT_TYPES, ExtractedEvent

from tests.test_extraction.conftest import make_event


class TestExtractedEvent:
    def test_valid_types(self):
        assert VALID_EVENT_TYPES == {"assignment", "exam", "quiz", "project", "reading", "deadline"}

    def test_defaults(self):
        event = ExtractedEvent(title="Quiz 1", event_type="quiz", due_date="2024-09-20")
        assert event.description is None
        assert event.due_time is None
        assert event.confidence_score == 0.5
        assert event.source_text == ""

    def test_dedup_key(self):
        assert make_event(title="Midterm EXAM", due_date="2024-10-10").dedup_key() == "midterm exam-2024-10-10"

    def test_dict_round_trip(self):
        event = make_event(description="Chapters 1-3", due_time="09:30")
        assert ExtractedEvent.from_dict(event.to_dict()) == event

    def test_from_dict_defaults(self):
        event = ExtractedEvent.from_dict({"title": "Reading", "due_date": "2024-09-01"})
        assert event.event_type == "deadline"
        assert event.source_text == ""


class TestToRecord:
    def test_record_fields(self):
        record = make_event().to_record(
            class_id="class-1",
            user_id="user-1",
            syllabus_id="syl-1",
            extraction_method="regex",
        )

        assert record["class_id"] == "class-1"
        assert record["user_id"] == "user-1"
        assert record["syllabus_id"] == "syl-1"
        assert record["extraction_method"] == "regex"
        assert record["title"] == "Homework 1"
        assert record["due_date"] == "2024-09-15"
        assert record["is_exported"] is False
        assert record["exported_at"] is None
        assert record["ics_uid"] is None

    def test_identity_left_to_persistence(self):
        record = make_event().to_record(class_id="c", user_id="u")
        assert "id" not in record
        assert "created_at" not in record
        assert record["syllabus_id"] is None
        assert record["extraction_method"] == "llm"
