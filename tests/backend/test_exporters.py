"""Tests for the export renderers."""

import json
from datetime import date

from services.exporters import (
    content_disposition, export_history, export_legal_analysis, export_mindmap,
    export_study_notes, export_translation, safe_title
)
from services.legal_analyzer import analyze_legal_content
from services.mindmap import parse_content_to_mindmap
from services.study_notes import StudyNote


class TestStudyNotesExport:
    """Test suite for the study notes markdown."""

    def test_markdown(self):
        notes = [
            StudyNote("note-0", "heading", "Biology"),
            StudyNote("note-1", "keypoint", "Cells divide", completed=False),
            StudyNote("note-2", "definition", "Cell: unit of life"),
            StudyNote("note-3", "example", "A skin cell is one example."),
            StudyNote("note-4", "question", "Why?", completed=False),
        ]

        exported = export_study_notes("Cell Biology 101", notes)

        assert exported.filename == "Cell_Biology_101_study_notes.md"
        assert exported.content == (
            "# Biology\n\n"
            "- Cells divide\n\n"
            "**Cell: unit of life**\n\n"
            "> A skin cell is one example.\n\n"
            "Q: Why?\n"
        )


class TestLegalExport:
    """Test suite for the legal analysis markdown."""

    def test_markdown(self):
        sections = analyze_legal_content("The tenant shall pay rent.")

        exported = export_legal_analysis("Lease Agreement", sections)

        assert exported.filename == "Lease_Agreement_legal_analysis.md"
        assert exported.content == (
            "# Legal Analysis: Lease Agreement\n\n"
            "## ⚖️ OBLIGATION (MEDIUM)\n"
            "**Content:** The tenant shall pay rent.\n"
            "**Explanation:** This creates a binding obligation that must be fulfilled.\n\n"
        )


class TestMindMapExport:
    """Test suite for the SVG export."""

    def test_svg(self):
        nodes = parse_content_to_mindmap("## First Branch Title Is Long\n## Second", "Plan")

        exported = export_mindmap("My Plan", nodes)

        assert exported.filename == "My_Plan_mindmap.svg"
        assert exported.media_type == "image/svg+xml"
        assert 'viewBox="0 0 800 600"' in exported.content
        assert exported.content.count("<line ") == 2
        assert exported.content.count('width="120" height="40"') == 3
        assert "First Branch Ti..." in exported.content
        assert 'x="340" y="280"' in exported.content

    def test_labels_are_escaped(self):
        nodes = parse_content_to_mindmap("", "A <b> & C")

        assert "A &lt;b&gt; &amp; C" in export_mindmap("t", nodes).content


class TestOtherExports:
    """Test suite for translation and history exports."""

    def test_translation_keeps_title(self):
        exported = export_translation("My Doc", "fr", "Bonjour")

        assert exported.filename == "My Doc_translated_fr.txt"
        assert exported.content == "Bonjour"

    def test_history(self):
        exported = export_history([{"id": "1", "title": "Café"}], day=date(2026, 10, 17))

        assert exported.filename == "mindloom-transformations-2026-10-17.json"
        assert json.loads(exported.content) == [{"id": "1", "title": "Café"}]

    def test_safe_title(self):
        assert safe_title("a  b\tc") == "a_b_c"

    def test_content_disposition_non_ascii(self):
        header = content_disposition("Café_study_notes.md")

        assert header.startswith('attachment; filename="Caf?_study_notes.md"')
        assert "filename*=UTF-8''Caf%C3%A9_study_notes.md" in header

    def test_content_disposition_strips_line_breaks(self):
        exported = export_translation("Bad\r\nX-Injected: 1", "es", "text")
        header = content_disposition(exported.filename)

        assert "\r" not in header and "\n" not in header
        assert 'filename="Bad__X-Injected: 1_translated_es.txt"' in header
        assert "filename*=UTF-8''Bad%0D%0AX-Injected%3A%201_translated_es.txt" in header

    def test_translation_export_through_api(self, api_client):
        response = api_client.post("/api/export/translation", json={
            "content": "Hello", "title": "Bad\r\nTitle", "targetLanguage": "es"
        })

        assert response.status_code == 200
        assert 'filename="Bad__Title_translated_es.txt"' in response.headers["content-disposition"]
