"""Tests for EventClassifier."""

import pytest

from syllabus_calendar.extraction.classifier import KEYWORD_BUCKETS, EventClassifier


@pytest.fixture
def classifier():
    return EventClassifier()


class TestDefaultBuckets:
    def test_midterm_exam(self, classifier):
        assert classifier.classify("Midterm Exam", "") == "exam"

    def test_reading_chapter(self, classifier):
        assert classifier.classify("Reading Chapter 5", "") == "reading"

    def test_homework(self, classifier):
        assert classifier.classify("Homework 3", None) == "assignment"

    def test_exam_beats_assignment(self, classifier):
        assert classifier.classify("Homework review", "in-class exam") == "exam"

    def test_assignment_beats_reading(self, classifier):
        assert classifier.classify("Essay on chapter 4") == "assignment"

    def test_case_insensitive(self, classifier):
        assert classifier.classify("FINAL", "") == "exam"

    def test_description_is_considered(self, classifier):
        assert classifier.classify("Week 3", "Read the textbook intro") == "reading"

    def test_no_keyword_returns_default(self, classifier):
        assert classifier.classify("Office hours", "") == "deadline"

    def test_empty_input(self, classifier):
        assert classifier.classify(None, None) == "deadline"

    def test_deterministic(self, classifier):
        results = {classifier.classify("Quiz 2", "chapter 7") for _ in range(5)}
        assert results == {"exam"}


class TestCustomBuckets:
    def test_keyword_buckets_split_quiz_and_project(self):
        classifier = EventClassifier(buckets=KEYWORD_BUCKETS)
        assert classifier.classify("quiz") == "quiz"
        assert classifier.classify("project") == "project"
        assert classifier.classify("problem set") == "assignment"
        assert classifier.classify("midterm exam") == "exam"

    def test_custom_default(self):
        classifier = EventClassifier(buckets=(), default="other")
        assert classifier.default == "other"
        assert classifier.classify("anything") == "other"
