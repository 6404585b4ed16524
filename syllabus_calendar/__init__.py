"""Syllabus calendar: extract dated events from course syllabi."""

__version__ = "0.1.0"
