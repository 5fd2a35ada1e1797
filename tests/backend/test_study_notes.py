"""Tests for study-notes segmentation."""

import pytest

from services.study_notes import completion_progress, generate_study_notes, toggle_note

SAMPLE = """## Overview
Term: a definition
- first point
• second point
This is an example line long enough.
short"""


class TestGenerateStudyNotes:
    """Test suite for generate_study_notes."""

    def test_classification(self):
        notes = generate_study_notes(SAMPLE, "Biology")

        assert [(n.id, n.type) for n in notes] == [
            ("note-0", "heading"),
            ("note-1", "heading"),
            ("note-2", "definition"),
            ("note-3", "keypoint"),
            ("note-4", "keypoint"),
            ("note-5", "example"),
            ("note-6", "question"),
            ("note-7", "question"),
        ]

    def test_title_heading_and_stripping(self):
        notes = generate_study_notes(SAMPLE, "Biology")

        assert notes[0].content == "Biology"
        assert notes[1].content == "Overview"
        assert notes[3].content == "first point"
        assert notes[4].content == "second point"

    def test_questions_from_key_points(self):
        notes = generate_study_notes(SAMPLE)

        assert notes[6].content == "What is the significance of: first point...?"
        assert notes[6].completed is False

    def test_at_most_three_questions(self):
        content = "\n".join(f"- point number {i}" for i in range(5))
        notes = generate_study_notes(content)

        assert sum(1 for n in notes if n.type == "question") == 3

    def test_empty_content(self):
        notes = generate_study_notes("")

        assert len(notes) == 1
        assert notes[0].content == "Study Material"


class TestProgress:
    """Test suite for completion tracking."""

    def test_no_checkable_notes(self):
        assert completion_progress(generate_study_notes("")) == 0.0

    def test_toggle_updates_progress(self):
        notes = generate_study_notes(SAMPLE)
        assert completion_progress(notes) == 0.0

        toggled = toggle_note(notes, "note-3")

        assert toggled[3].completed is True
        assert notes[3].completed is False
        assert completion_progress(toggled) == pytest.approx(25.0)
