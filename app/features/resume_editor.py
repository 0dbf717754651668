"""
Editor orchestration over a stored resume: section edits, natural-language
style edits, style reset and PDF export.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Optional, Set, Tuple

from app.agents.prompt_flow import ModelBackend
from app.core.errors import ActionInProgress, ResumeNotFound
from app.schemas.ResumeSchemas import ResumeContentUpdate, ResumeRecord
from app.services.preview_service import render_preview_html
from app.services.resume_service import ResumeStore
from app.services.style_service import append_css
from app.workflows.resume.resume_flows import edit_resume_style

logger = logging.getLogger(__name__)

PdfExporter = Callable[[str], Awaitable[bytes]]


class BusyGuard:
    """In-process busy flags keyed by (resume id, action)."""

    def __init__(self):
        self._active: Set[Tuple[str, str]] = set()

    def is_busy(self, resume_id: str, action: str) -> bool:
        return (resume_id, action) in self._active

    @asynccontextmanager
    async def hold(self, resume_id: str, action: str):
        key = (resume_id, action)
        if key in self._active:
            raise ActionInProgress(f"A {action} request for this resume is already running.")
        self._active.add(key)
        try:
            yield
        finally:
            self._active.discard(key)


busy_guard = BusyGuard()


def export_filename(resume_id: str) -> str:
    return f"enhanced-resume-{resume_id}.pdf"


def load_resume(store: ResumeStore, resume_id: str) -> ResumeRecord:
    record = store.get(resume_id)
    if record is None:
        raise ResumeNotFound(f"No resume with id {resume_id}.")
    return record


def edit_sections(store: ResumeStore, resume_id: str, edits: ResumeContentUpdate) -> ResumeRecord:
    """Merge edited sections into the stored content and write the record back.

    ``personalInfo`` edits are merged field by field; untouched address lines
    and contact channels are kept.
    """
    record = load_resume(store, resume_id)
    content = record.content.model_dump()
    changes = edits.model_dump(exclude_unset=True, exclude_none=True)

    personal = changes.pop("personalInfo", None)
    if personal:
        contact = personal.pop("contact", None)
        content["personalInfo"].update(personal)
        if contact:
            content["personalInfo"]["contact"].update(contact)
    content.update(changes)

    updated = store.update(resume_id, {"content": content})
    if updated is None:
        raise ResumeNotFound(f"No resume with id {resume_id}.")
    return updated


async def apply_style_instruction(
    store: ResumeStore,
    resume_id: str,
    instruction: str,
    backend: Optional[ModelBackend] = None,
    guard: BusyGuard = busy_guard,
) -> ResumeRecord:
    """Generate CSS for an instruction and append it to the resume's style override."""
    async with guard.hold(resume_id, "style"):
        record = await asyncio.to_thread(load_resume, store, resume_id)
        result = await edit_resume_style(
            {"currentResume": record.content, "instruction": instruction},
            backend=backend,
        )

        # Re-read so edits saved while the model was running are not lost
        current = await asyncio.to_thread(load_resume, store, resume_id)
        updated = await asyncio.to_thread(store.update, resume_id, {"css": append_css(current.css, result.css)})
        if updated is None:
            raise ResumeNotFound(f"No resume with id {resume_id}.")
        logger.info("Applied style instruction to resume %s", resume_id)
        return updated


def reset_styles(store: ResumeStore, resume_id: str) -> ResumeRecord:
    load_resume(store, resume_id)
    updated = store.clear_css(resume_id)
    if updated is None:
        raise ResumeNotFound(f"No resume with id {resume_id}.")
    return updated


async def export_resume(
    store: ResumeStore,
    resume_id: str,
    exporter: PdfExporter,
    guard: BusyGuard = busy_guard,
) -> Tuple[str, bytes]:
    """Render the stored resume's preview and export it. Returns (filename, pdf bytes)."""
    async with guard.hold(resume_id, "export"):
        record = await asyncio.to_thread(load_resume, store, resume_id)
        html = render_preview_html(record, editable=True)
        pdf_bytes = await exporter(html)
        return export_filename(resume_id), pdf_bytes
