from fastapi import APIRouter, Body, Depends
from typing import Any, Dict

from app.agents.prompt_flow import ModelBackend
from app.api.deps import get_model_backend, to_http_exception
from app.core.errors import ResumeStudioError
from app.schemas.FlowSchemas import InterviewQuestionsResponse
from app.workflows.resume.resume_flows import generate_interview_questions

router = APIRouter()


@router.post("/questions", response_model=InterviewQuestionsResponse)
async def create_interview_questions(
    payload: Dict[str, Any] = Body(...),
    backend: ModelBackend = Depends(get_model_backend),
):
    """Role-specific interview questions, regenerated on every call."""
    try:
        questions = await generate_interview_questions(payload, backend=backend)
    except ResumeStudioError as e:
        raise to_http_exception(e)
    return {"status": 200, "message": "Questions generated", "data": {"questions": questions}}
