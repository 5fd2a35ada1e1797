"""Local content analyzers: analytics, legal clauses, mind map, study notes, language."""

from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from services.content_analytics import analyze_content
from services.errors import ContentValidationError
from services.language_detector import (
    SUPPORTED_LANGUAGES, detect_language, language_scores, simulate_translation
)
from services.legal_analyzer import (
    EMPTY_LEGAL_MESSAGE, LEGAL_TYPES, analyze_legal_content, count_by_type, filter_sections
)
from services.mindmap import parse_content_to_mindmap
from services.study_notes import (
    EMPTY_NOTES_MESSAGE, completion_progress, generate_study_notes, toggle_note
)

router = APIRouter(prefix="/api/analyze", tags=["analyze"])


class ContentRequest(BaseModel):
    content: str = ""


class LegalRequest(BaseModel):
    content: str = ""
    filter: str = "all"


class MindMapRequest(BaseModel):
    content: str = ""
    title: str = "Mind Map"


class NotesRequest(BaseModel):
    content: str = ""
    title: str = "Study Material"
    completed: List[str] = Field(default_factory=list)


class LanguageRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: str = ""
    title: str = ""
    source_language: Optional[str] = Field(default=None, alias="sourceLanguage")
    target_language: Optional[str] = Field(default=None, alias="targetLanguage")


@router.post("/analytics")
async def analytics(request: ContentRequest):
    """Reading time, complexity, topics, sentiment and readability."""
    return analyze_content(request.content).to_dict()


@router.post("/legal")
async def legal(request: LegalRequest):
    """Tag obligations, rights, risks, definitions, deadlines and clauses."""
    if request.filter != "all" and request.filter not in LEGAL_TYPES:
        raise HTTPException(status_code=400, detail=f"Unknown clause type: {request.filter}")

    sections = analyze_legal_content(request.content)
    visible = filter_sections(sections, request.filter)
    return {
        "sections": [section.to_dict() for section in visible],
        "counts": count_by_type(sections),
        "highRiskCount": sum(1 for section in sections if section.severity == "high"),
        "obligationCount": sum(1 for section in sections if section.type == "obligation"),
        "message": "" if sections else EMPTY_LEGAL_MESSAGE,
    }


@router.post("/mindmap")
async def mindmap(request: MindMapRequest):
    nodes = parse_content_to_mindmap(request.content, request.title)
    return {"nodes": [node.to_dict() for node in nodes]}


@router.post("/notes")
async def notes(request: NotesRequest):
    """Generate study notes; ids in `completed` are ticked off."""
    study_notes = generate_study_notes(request.content, request.title)
    for note_id in request.completed:
        study_notes = toggle_note(study_notes, note_id)

    return {
        "notes": [note.to_dict() for note in study_notes],
        "progress": completion_progress(study_notes),
        # The title heading alone means nothing was extracted
        "message": "" if len(study_notes) > 1 else EMPTY_NOTES_MESSAGE,
    }


@router.post("/language")
async def language(request: LanguageRequest):
    """Detect the source language and, with a target, build the simulated translation."""
    detected = detect_language(request.content)
    response = {
        "detectedLanguage": detected,
        "scores": language_scores(request.content),
        "supportedLanguages": [
            {"code": lang.code, "name": lang.name, "flag": lang.flag} for lang in SUPPORTED_LANGUAGES
        ],
    }

    if request.target_language:
        try:
            response["translation"] = simulate_translation(
                request.content,
                request.title,
                request.target_language,
                source_language=request.source_language or detected,
            )
        except ContentValidationError as e:
            raise HTTPException(status_code=400, detail=str(e))

    return response
