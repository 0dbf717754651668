"""
Builder and analyzer orchestration: run a generation flow, then persist the
accepted content as a new resume record.
"""
import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

from app.agents.prompt_flow import ModelBackend
from app.agents.resume_agents import enhance_resume_flow
from app.schemas.ResumeSchemas import ResumeContent
from app.services.resume_service import ResumeStore
from app.workflows.resume.resume_flows import enhance_analyzed_resume, enhance_resume

logger = logging.getLogger(__name__)


async def build_resume_from_form(
    store: ResumeStore,
    values: Dict[str, Any],
    backend: Optional[ModelBackend] = None,
) -> Tuple[str, ResumeContent]:
    """
    Enhance the builder form values and save the result.
    The original form values are kept on the record next to the enhanced content.
    """
    form = enhance_resume_flow.validate_input(values)
    content = await enhance_resume(form, backend=backend)
    resume_id = await asyncio.to_thread(store.create, content, form.model_dump(exclude_none=True))
    logger.info("Builder created resume %s", resume_id)
    return resume_id, content


async def enhance_uploaded_resume(
    store: ResumeStore,
    resume_data_uri: str,
    backend: Optional[ModelBackend] = None,
) -> Tuple[str, ResumeContent]:
    content = await enhance_analyzed_resume({"resumeDataUri": resume_data_uri}, backend=backend)
    resume_id = await asyncio.to_thread(store.create, content)
    logger.info("Analyzer created resume %s", resume_id)
    return resume_id, content
