from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import HTMLResponse, Response
from typing import Any, Dict
import logging

from app.agents.prompt_flow import ModelBackend
from app.api.deps import get_model_backend, get_pdf_exporter, get_resume_store, to_http_exception
from app.core.errors import ResumeStudioError
from app.features import resume_editor
from app.features.resume_builder import build_resume_from_form
from app.schemas.FlowSchemas import StyleInstructionRequest
from app.schemas.ResumeSchemas import (
    ResumeContentUpdate,
    ResumeCreatedResponse,
    ResumeListResponse,
    ResumeRecord,
    ResumeSingleResponse,
    ResumeSummary,
)
from app.services.preview_service import render_preview_html
from app.services.resume_service import ResumeStore

logger = logging.getLogger(__name__)

router = APIRouter()


def _summary(record: ResumeRecord) -> ResumeSummary:
    return ResumeSummary(
        id=record.id,
        name=record.content.personalInfo.name,
        createdAt=record.createdAt,
        hasCustomStyles=bool(record.css),
    )


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=ResumeCreatedResponse)
async def create_resume(
    values: Dict[str, Any] = Body(...),
    store: ResumeStore = Depends(get_resume_store),
    backend: ModelBackend = Depends(get_model_backend),
):
    """Enhance the builder form values and save them as a new resume."""
    try:
        resume_id, content = await build_resume_from_form(store, values, backend=backend)
    except ResumeStudioError as e:
        logger.error("Resume builder failed: %s", e.user_message)
        raise to_http_exception(e)
    return {"status": 201, "message": "Resume enhanced", "data": {"id": resume_id, "content": content}}


@router.get("/", response_model=ResumeListResponse)
def read_resumes(store: ResumeStore = Depends(get_resume_store)):
    summaries = [_summary(r) for r in store.list()]
    return {"status": 200, "message": "Resumes returned successfully", "data": summaries}


@router.get("/latest", response_model=ResumeSingleResponse)
def read_latest_resume(store: ResumeStore = Depends(get_resume_store)):
    """The most recently created resume, which the editor opens by default."""
    record = store.latest()
    if record is None:
        raise HTTPException(status_code=404, detail="No resumes found. Create one with the builder first.")
    return {"status": 200, "message": "Resume returned successfully", "data": record}


@router.get("/{resume_id}", response_model=ResumeSingleResponse)
def read_resume(resume_id: str, store: ResumeStore = Depends(get_resume_store)):
    record = store.get(resume_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Resume not found")
    return {"status": 200, "message": "Resume returned successfully", "data": record}


@router.patch("/{resume_id}/content", response_model=ResumeSingleResponse)
def update_resume_content(
    resume_id: str,
    edits: ResumeContentUpdate,
    store: ResumeStore = Depends(get_resume_store),
):
    try:
        record = resume_editor.edit_sections(store, resume_id, edits)
    except ResumeStudioError as e:
        raise to_http_exception(e)
    return {"status": 200, "message": "Resume updated", "data": record}


@router.post("/{resume_id}/style", response_model=ResumeSingleResponse)
async def apply_resume_style(
    resume_id: str,
    request: StyleInstructionRequest,
    store: ResumeStore = Depends(get_resume_store),
    backend: ModelBackend = Depends(get_model_backend),
):
    """Turn a natural-language style instruction into CSS and append it to the resume's styles."""
    try:
        record = await resume_editor.apply_style_instruction(store, resume_id, request.instruction, backend=backend)
    except ResumeStudioError as e:
        logger.error("Style edit for resume %s failed: %s", resume_id, e.user_message)
        raise to_http_exception(e)
    return {"status": 200, "message": "Style Applied!", "data": record}


@router.delete("/{resume_id}/style", response_model=ResumeSingleResponse)
def reset_resume_style(resume_id: str, store: ResumeStore = Depends(get_resume_store)):
    try:
        record = resume_editor.reset_styles(store, resume_id)
    except ResumeStudioError as e:
        raise to_http_exception(e)
    return {"status": 200, "message": "Styles Reset", "data": record}


@router.get("/{resume_id}/preview", response_class=HTMLResponse)
def preview_resume(resume_id: str, editable: bool = True, store: ResumeStore = Depends(get_resume_store)):
    try:
        record = resume_editor.load_resume(store, resume_id)
    except ResumeStudioError as e:
        raise to_http_exception(e)
    return HTMLResponse(render_preview_html(record, editable=editable))


@router.get("/{resume_id}/export")
async def export_resume_pdf(
    resume_id: str,
    store: ResumeStore = Depends(get_resume_store),
    exporter=Depends(get_pdf_exporter),
):
    """Download the rendered preview as a one-page, image-based PDF."""
    try:
        filename, pdf_bytes = await resume_editor.export_resume(store, resume_id, exporter)
    except ResumeStudioError as e:
        logger.error("Export of resume %s failed: %s", resume_id, e.user_message)
        raise to_http_exception(e)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
