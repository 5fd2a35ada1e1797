"""Downloadable exports of the analyzer output."""

from typing import List, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field

from services.errors import ContentValidationError
from services.exporters import (
    ExportedFile, content_disposition, export_legal_analysis, export_mindmap,
    export_study_notes, export_translation
)
from services.language_detector import simulate_translation
from services.legal_analyzer import analyze_legal_content, filter_sections
from services.mindmap import parse_content_to_mindmap
from services.study_notes import generate_study_notes, toggle_note

router = APIRouter(prefix="/api/export", tags=["export"])


class ExportRequest(BaseModel):
    content: str = ""
    title: str = "Untitled"


class NotesExportRequest(ExportRequest):
    completed: List[str] = Field(default_factory=list)


class LegalExportRequest(ExportRequest):
    filter: str = "all"


class TranslationExportRequest(ExportRequest):
    model_config = ConfigDict(populate_by_name=True)

    target_language: str = Field(alias="targetLanguage")
    source_language: Optional[str] = Field(default=None, alias="sourceLanguage")


def _download(exported: ExportedFile) -> Response:
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": content_disposition(exported.filename)}
    )


@router.post("/notes")
async def export_notes(request: NotesExportRequest):
    """Study notes as <title>_study_notes.md."""
    notes = generate_study_notes(request.content, request.title)
    for note_id in request.completed:
        notes = toggle_note(notes, note_id)
    return _download(export_study_notes(request.title, notes))


@router.post("/legal")
async def export_legal(request: LegalExportRequest):
    """Legal analysis as <title>_legal_analysis.md."""
    sections = filter_sections(analyze_legal_content(request.content), request.filter)
    return _download(export_legal_analysis(request.title, sections))


@router.post("/mindmap")
async def export_mind_map(request: ExportRequest):
    """Mind map as <title>_mindmap.svg."""
    nodes = parse_content_to_mindmap(request.content, request.title)
    return _download(export_mindmap(request.title, nodes))


@router.post("/translation")
async def export_translated(request: TranslationExportRequest):
    try:
        translation = simulate_translation(
            request.content, request.title, request.target_language, request.source_language
        )
    except ContentValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _download(export_translation(
        request.title, translation["targetLanguage"], translation["translatedContent"]
    ))
