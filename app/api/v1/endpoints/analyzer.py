from fastapi import APIRouter, Depends, File, UploadFile, status
import logging

from app.agents.prompt_flow import ModelBackend
from app.api.deps import get_model_backend, get_resume_store, to_http_exception
from app.core.config import settings
from app.core.errors import ResumeStudioError
from app.features.resume_builder import enhance_uploaded_resume
from app.schemas.FlowSchemas import AnalysisResponse
from app.schemas.ResumeSchemas import ResumeCreatedResponse
from app.services.resume_service import ResumeStore
from app.tools.data_uri import read_upload_as_data_uri
from app.workflows.resume.resume_flows import analyze_uploaded_resume

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze_resume(
    file: UploadFile = File(...),
    backend: ModelBackend = Depends(get_model_backend),
):
    """Feedback on formatting, grammar, missing skills and ATS compatibility of an uploaded resume."""
    try:
        resume_data_uri = await read_upload_as_data_uri(file, max_bytes=settings.MAX_UPLOAD_BYTES)
        feedback = await analyze_uploaded_resume({"resumeDataUri": resume_data_uri}, backend=backend)
    except ResumeStudioError as e:
        logger.error("Analysis failed: %s", e.user_message)
        raise to_http_exception(e)
    return {"status": 200, "message": "Analysis Complete!", "data": feedback}


@router.post("/enhance", status_code=status.HTTP_201_CREATED, response_model=ResumeCreatedResponse)
async def enhance_resume_upload(
    file: UploadFile = File(...),
    store: ResumeStore = Depends(get_resume_store),
    backend: ModelBackend = Depends(get_model_backend),
):
    """Extract the uploaded resume's sections, enhance them and save the result as a new resume."""
    try:
        resume_data_uri = await read_upload_as_data_uri(file, max_bytes=settings.MAX_UPLOAD_BYTES)
        resume_id, content = await enhance_uploaded_resume(store, resume_data_uri, backend=backend)
    except ResumeStudioError as e:
        logger.error("Enhancing uploaded resume failed: %s", e.user_message)
        raise to_http_exception(e)
    return {"status": 201, "message": "Resume enhanced", "data": {"id": resume_id, "content": content}}
