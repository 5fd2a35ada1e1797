"""Study-notes segmentation."""

import re
from dataclasses import dataclass, asdict, replace
from typing import Dict, Any, List, Optional

MAX_QUESTIONS = 3
QUESTION_SNIPPET = 50

EMPTY_NOTES_MESSAGE = "No study notes could be generated from this content"

CHECKABLE_TYPES = ("keypoint", "question")

BULLET_PREFIX = re.compile(r"^[-•]\s*")


@dataclass
class StudyNote:
    """One entry of a generated study sheet."""
    id: str
    type: str  # heading, definition, keypoint, example, question
    content: str
    completed: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def classify_line(line: str) -> Optional[StudyNote]:
    """Classify a stripped line; returns a note without an id, or None to skip it."""
    if line.startswith("##") or line.startswith("**"):
        return StudyNote(id="", type="heading", content=line.replace("#", "").replace("*", "").strip())
    if ":" in line and len(line) < 100:
        return StudyNote(id="", type="definition", content=line)
    if line.startswith("-") or line.startswith("•"):
        return StudyNote(id="", type="keypoint", content=BULLET_PREFIX.sub("", line), completed=False)
    if 20 < len(line) < 200:
        return StudyNote(id="", type="example", content=line)
    return None


def question_for(point: StudyNote) -> str:
    return f"What is the significance of: {point.content[:QUESTION_SNIPPET]}...?"


def generate_study_notes(content: str, title: str = "Study Material") -> List[StudyNote]:
    """Turn content into headings, definitions, key points, examples and questions."""
    notes: List[StudyNote] = [StudyNote(id="note-0", type="heading", content=title)]

    for line in (content or "").split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        note = classify_line(stripped)
        if note is not None:
            notes.append(replace(note, id=f"note-{len(notes)}"))

    key_points = [note for note in notes if note.type == "keypoint"]
    for point in key_points[:MAX_QUESTIONS]:
        notes.append(StudyNote(
            id=f"note-{len(notes)}",
            type="question",
            content=question_for(point),
            completed=False,
        ))

    return notes


def toggle_note(notes: List[StudyNote], note_id: str) -> List[StudyNote]:
    """Return a new list with one note's completion flipped."""
    return [
        replace(note, completed=not note.completed) if note.id == note_id else note
        for note in notes
    ]


def completion_progress(notes: List[StudyNote]) -> float:
    """Percentage of checkable notes (key points and questions) completed."""
    checkable = [note for note in notes if note.type in CHECKABLE_TYPES]
    if not checkable:
        return 0.0
    completed = sum(1 for note in checkable if note.completed)
    return completed / len(checkable) * 100
