import pytest

from app.core.errors import ActionInProgress, ExportFailure, GenerationFailure, ResumeNotFound
from app.features.resume_editor import BusyGuard, apply_style_instruction, edit_sections, export_resume
from app.schemas.ResumeSchemas import ResumeContentUpdate


@pytest.mark.asyncio
async def test_busy_guard_blocks_duplicate_and_releases_after_error():
    guard = BusyGuard()

    with pytest.raises(RuntimeError):
        async with guard.hold("r1", "export"):
            assert guard.is_busy("r1", "export")
            with pytest.raises(ActionInProgress):
                async with guard.hold("r1", "export"):
                    pass
            # Other actions and other resumes are independent
            async with guard.hold("r1", "style"):
                pass
            raise RuntimeError("boom")

    assert not guard.is_busy("r1", "export")


def test_edit_sections_updates_personal_info(store, sample_content):
    resume_id = store.create(sample_content)

    record = edit_sections(store, resume_id, ResumeContentUpdate(personalInfo={"name": "Janet Doe"}))

    assert record.content.personalInfo.name == "Janet Doe"
    assert record.content.skills == sample_content["skills"]


def test_edit_sections_unknown_resume(store):
    with pytest.raises(ResumeNotFound):
        edit_sections(store, "missing", ResumeContentUpdate(skills="Go"))


@pytest.mark.asyncio
async def test_failed_style_edit_leaves_css_untouched(store, sample_content, make_backend):
    resume_id = store.create(sample_content)
    store.update(resume_id, {"css": ".resume-preview h1 { color: red; }"})
    backend = make_backend({"edit_resume_style_prompt": "not json"})

    with pytest.raises(GenerationFailure):
        await apply_style_instruction(store, resume_id, "Blue titles", backend=backend, guard=BusyGuard())

    assert store.get(resume_id).css == ".resume-preview h1 { color: red; }"


@pytest.mark.asyncio
async def test_export_failure_propagates_and_releases_guard(store, sample_content):
    resume_id = store.create(sample_content)
    guard = BusyGuard()

    async def failing_exporter(html):
        raise ExportFailure("There was an error creating the PDF file.")

    with pytest.raises(ExportFailure):
        await export_resume(store, resume_id, failing_exporter, guard=guard)

    assert not guard.is_busy(resume_id, "export")


def test_edit_personal_info_keeps_untouched_fields(store, sample_content):
    resume_id = store.create(sample_content)

    record = edit_sections(
        store,
        resume_id,
        ResumeContentUpdate.model_validate({"personalInfo": {"name": "Janet Doe", "contact": {"phone": "555-0199"}}}),
    )

    personal = record.content.personalInfo
    assert personal.name == "Janet Doe"
    assert personal.addressLines == ["1 Main St", "Springfield"]
    assert personal.contact.phone == "555-0199"
    assert personal.contact.email == "jane@example.com"
    assert personal.contact.github == "https://github.com/janedoe"
