"""Keyword-based legal clause tagger.

Each non-blank line is checked independently against every clause type, so
one line can produce several tagged sections (a "shall ... within 30 days"
line is both an obligation and a deadline).
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, List, Optional, Tuple

LEGAL_TYPES = ("obligation", "right", "risk", "definition", "deadline", "clause")

EMPTY_LEGAL_MESSAGE = "No legal clauses detected"

# (type, trigger substrings, explanation), checked in this order
LEGAL_RULES: List[Tuple[str, Tuple[str, ...], str]] = [
    ("obligation", ("shall", "must", "required"),
     "This creates a binding obligation that must be fulfilled."),
    ("right", ("may", "entitled", "right to"),
     "This grants a right or permission that can be exercised."),
    ("risk", ("penalty", "breach", "violation", "liable"),
     "This identifies potential legal risks or penalties."),
    ("definition", ("means", "defined as", "refers to"),
     "This provides a legal definition of terms used in the document."),
    ("deadline", ("days", "date", "deadline", "expire"),
     "This establishes important time limits or deadlines."),
    ("clause", ("clause", "section", "article"),
     "This is a structural element of the legal document."),
]

FIXED_SEVERITY = {
    "right": "low",
    "risk": "high",
    "definition": "low",
    "deadline": "high",
    "clause": "medium",
}

URGENCY_TRIGGERS = ("immediately", "within")


@dataclass
class LegalSection:
    """A tagged line of a legal document."""
    id: str
    type: str
    content: str
    severity: str
    explanation: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def severity_for(section_type: str, lowered_line: str) -> str:
    """Severity for a tagged line; obligations escalate on urgency words."""
    if section_type == "obligation":
        return "high" if any(word in lowered_line for word in URGENCY_TRIGGERS) else "medium"
    return FIXED_SEVERITY[section_type]


def analyze_legal_content(content: str) -> List[LegalSection]:
    """Tag every line of a document with the legal clause types it contains."""
    sections: List[LegalSection] = []

    for line in (content or "").split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        lowered = stripped.lower()

        for section_type, triggers, explanation in LEGAL_RULES:
            if any(trigger in lowered for trigger in triggers):
                sections.append(LegalSection(
                    id=f"legal-{len(sections)}",
                    type=section_type,
                    content=stripped,
                    severity=severity_for(section_type, lowered),
                    explanation=explanation,
                ))

    return sections


def filter_sections(sections: List[LegalSection], section_type: Optional[str] = "all") -> List[LegalSection]:
    """Keep sections of one type; "all" or None keeps everything."""
    if not section_type or section_type == "all":
        return list(sections)
    return [section for section in sections if section.type == section_type]


def count_by_type(sections: List[LegalSection]) -> Dict[str, int]:
    counts = {section_type: 0 for section_type in LEGAL_TYPES}
    for section in sections:
        counts[section.type] += 1
    return counts
