"""
Feature flows.

Each public function is a pure (validated input) -> (validated output) call
through one of the bound prompt flows. None of them touch the resume store.
"""
import logging
from typing import Any, List, Optional

from app.agents.prompt_flow import ModelBackend
from app.agents.resume_agents import (
    analyze_resume_flow,
    edit_style_flow,
    enhance_resume_flow,
    extract_resume_flow,
    interview_questions_flow,
)
from app.core.errors import ExtractionFailure, GenerationFailure
from app.schemas.FlowSchemas import AnalysisFeedback, StyleEditOutput
from app.schemas.ResumeSchemas import ResumeContent
from app.services.style_service import scope_css
from app.tools.data_uri import decode_data_uri

logger = logging.getLogger(__name__)


async def enhance_resume(payload: Any, backend: Optional[ModelBackend] = None) -> ResumeContent:
    return await enhance_resume_flow(payload, backend=backend)


async def analyze_uploaded_resume(payload: Any, backend: Optional[ModelBackend] = None) -> AnalysisFeedback:
    result = await analyze_resume_flow(payload, backend=backend)
    return result.feedback


async def enhance_analyzed_resume(payload: Any, backend: Optional[ModelBackend] = None) -> ResumeContent:
    """Extract structured content from an uploaded resume, then enhance it.

    The enhancement stage only runs when extraction produced usable content.
    """
    document = extract_resume_flow.validate_input(payload)
    _, data = decode_data_uri(document.resumeDataUri)
    if not data:
        raise ExtractionFailure("The uploaded resume is empty.")

    try:
        extracted = await extract_resume_flow(document, backend=backend)
    except GenerationFailure as e:
        raise ExtractionFailure(f"No structured content could be extracted: {e.description}", cause=e)

    if not extracted.has_content():
        raise ExtractionFailure("No structured content could be extracted from the uploaded resume.")

    logger.info("Extraction produced content; running enhancement")
    return await enhance_resume(extracted, backend=backend)


async def generate_interview_questions(payload: Any, backend: Optional[ModelBackend] = None) -> List[str]:
    result = await interview_questions_flow(payload, backend=backend)
    return result.questions


async def edit_resume_style(payload: Any, backend: Optional[ModelBackend] = None) -> StyleEditOutput:
    """Generate CSS for a style instruction. Appending it is the caller's job."""
    result = await edit_style_flow(payload, backend=backend)
    scoped = scope_css(result.css)
    if not scoped.strip():
        raise GenerationFailure("edit_resume_style_prompt returned no usable CSS rules.")
    return StyleEditOutput(css=scoped)
