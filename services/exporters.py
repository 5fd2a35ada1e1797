"""Downloadable exports: study notes, legal analysis, mind map, translation, history."""

import json
import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Dict, Any, Optional
from urllib.parse import quote

from jinja2 import Environment, FileSystemLoader, select_autoescape

from config import EXPORT_TEMPLATES_PATH
from services.legal_analyzer import LegalSection
from services.mindmap import MindMapNode
from services.study_notes import StudyNote

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / EXPORT_TEMPLATES_PATH

CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

NODE_LABEL_LIMIT = 15

NOTE_FORMATS = {
    "heading": ("# ", ""),
    "keypoint": ("- ", ""),
    "definition": ("**", "**"),
    "example": ("> ", ""),
    "question": ("Q: ", ""),
}

LEGAL_ICONS = {
    "obligation": "⚖️",
    "right": "✅",
    "risk": "⚠️",
    "definition": "📖",
    "deadline": "⏰",
    "clause": "📄",
}
DEFAULT_LEGAL_ICON = "📋"

MINDMAP_COLORS = {
    "background": "#f4f4f5",
    "line": "#2563eb",
    "central": "#2563eb",
    "central_text": "#ffffff",
    "branch": "#fde68a",
    "branch_text": "#111827",
    "border": "#111827",
}


@dataclass
class ExportedFile:
    """A rendered export ready to be sent as a download."""
    filename: str
    media_type: str
    content: str


def node_label(text: str) -> str:
    if len(text) > NODE_LABEL_LIMIT:
        return text[:NODE_LABEL_LIMIT] + "..."
    return text


def coord(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def safe_title(title: str) -> str:
    """Replace each whitespace run with an underscore for use in a file name."""
    return re.sub(r"\s+", "_", title or "")


def _create_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(enabled_extensions=("svg",), default_for_string=False),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["node_label"] = node_label
    env.filters["coord"] = coord
    return env


_env: Optional[Environment] = None


def get_environment() -> Environment:
    global _env
    if _env is None:
        _env = _create_environment()
    return _env


def render_study_notes(notes: List[StudyNote]) -> str:
    return get_environment().get_template("notes.md").render(notes=notes, formats=NOTE_FORMATS)


def render_legal_analysis(title: str, sections: List[LegalSection]) -> str:
    return get_environment().get_template("legal.md").render(
        title=title,
        sections=sections,
        icons=LEGAL_ICONS,
        default_icon=DEFAULT_LEGAL_ICON,
    )


def render_mindmap_svg(nodes: List[MindMapNode]) -> str:
    """Render the node list as an 800x600 SVG with one line per parent-child edge."""
    by_id = {node.id: node for node in nodes}
    edges = []
    for node in nodes:
        for child_id in node.children:
            child = by_id.get(child_id)
            if child is None:
                continue
            edges.append({"x1": node.x, "y1": node.y, "x2": child.x, "y2": child.y})

    return get_environment().get_template("mindmap.svg").render(
        nodes=nodes, edges=edges, colors=MINDMAP_COLORS
    )


# =========================================================================
# Export files
# =========================================================================

def export_study_notes(title: str, notes: List[StudyNote]) -> ExportedFile:
    return ExportedFile(
        filename=f"{safe_title(title)}_study_notes.md",
        media_type="text/markdown",
        content=render_study_notes(notes),
    )


def export_legal_analysis(title: str, sections: List[LegalSection]) -> ExportedFile:
    return ExportedFile(
        filename=f"{safe_title(title)}_legal_analysis.md",
        media_type="text/markdown",
        content=render_legal_analysis(title, sections),
    )


def export_mindmap(title: str, nodes: List[MindMapNode]) -> ExportedFile:
    return ExportedFile(
        filename=f"{safe_title(title)}_mindmap.svg",
        media_type="image/svg+xml",
        content=render_mindmap_svg(nodes),
    )


def export_translation(title: str, target_language: str, translated_content: str) -> ExportedFile:
    # Title is used as given here, unlike the other exports
    return ExportedFile(
        filename=f"{title}_translated_{target_language}.txt",
        media_type="text/plain",
        content=translated_content,
    )


def export_history(records: List[Dict[str, Any]], day: Optional[date] = None) -> ExportedFile:
    day = day or date.today()
    return ExportedFile(
        filename=f"mindloom-transformations-{day.isoformat()}.json",
        media_type="application/json",
        content=json.dumps(records, indent=2, ensure_ascii=False),
    )


def content_disposition(filename: str) -> str:
    """Attachment header value; non-ASCII titles go in the RFC 5987 form."""
    ascii_name = CONTROL_CHARS.sub("_", filename)
    ascii_name = ascii_name.encode("ascii", "replace").decode("ascii").replace('"', "'")
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"
