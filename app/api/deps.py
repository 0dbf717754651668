"""FastAPI dependency providers. Tests override these through ``app.dependency_overrides``."""
from fastapi import HTTPException

from app.agents.prompt_flow import ModelBackend, get_default_backend
from app.core.errors import ResumeStudioError
from app.features.resume_editor import PdfExporter
from app.services.export_service import render_pdf_from_html
from app.services.resume_service import ResumeStore


def get_resume_store() -> ResumeStore:
    return ResumeStore()


def get_model_backend() -> ModelBackend:
    return get_default_backend()


def get_pdf_exporter() -> PdfExporter:
    return render_pdf_from_html


def to_http_exception(error: ResumeStudioError) -> HTTPException:
    return HTTPException(status_code=error.status_code, detail=error.user_message)
