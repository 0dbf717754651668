"""
Tests for the feature flows (builder enhancement, analyzer, interviews, style edits)
"""
import pytest

from app.core.errors import ExtractionFailure, GenerationFailure, ValidationFailure
from app.schemas.ResumeSchemas import ResumeContent
from app.workflows.resume.resume_flows import (
    analyze_uploaded_resume,
    edit_resume_style,
    enhance_analyzed_resume,
    enhance_resume,
    generate_interview_questions,
)

PDF_URI = "data:application/pdf;base64,JVBERi0xLjQK"
EMPTY_PDF_URI = "data:application/pdf;base64,"

EXTRACTED = {
    "personalInfo": "Jane Doe\njane@example.com",
    "aboutMe": "Engineer",
    "education": "BSc",
    "skills": "Python",
    "softSkills": "",
    "projects": "",
    "achievements": "",
}


@pytest.mark.asyncio
async def test_enhance_resume_with_five_field_form(builder_form, sample_content, make_backend):
    """Builder scenario: projects and achievements omitted, enhanced content returned"""
    sample_content["projects"] = ""
    sample_content["achievements"] = ""
    backend = make_backend({"enhance_resume_prompt": sample_content})

    content = await enhance_resume(builder_form, backend=backend)

    assert isinstance(content, ResumeContent)
    assert content.projects == ""
    assert content.personalInfo.name == "Jane Doe"
    request = backend.calls_for("enhance_resume_prompt")[0]
    assert "Projects: \n" in request.text


@pytest.mark.asyncio
async def test_enhance_resume_rejects_wrong_field_types(make_backend):
    backend = make_backend()
    with pytest.raises(ValidationFailure):
        await enhance_resume({"personalInfo": ["Jane"], "aboutMe": "x"}, backend=backend)
    assert backend.calls == []


@pytest.mark.asyncio
async def test_analyze_uploaded_resume_returns_feedback(make_backend):
    backend = make_backend({
        "analyze_uploaded_resume_prompt": {
            "feedback": {
                "formatting": "Use consistent headings.",
                "grammar": "No issues.",
                "missingSkills": "Docker",
                "atsCompatibility": "Avoid tables.",
                "atsScore": 7.5,
            }
        }
    })

    feedback = await analyze_uploaded_resume({"resumeDataUri": PDF_URI}, backend=backend)

    assert feedback.missingSkills == "Docker"
    assert feedback.atsScore == 7.5
    request = backend.calls[0]
    assert request.media[0].mime_type == "application/pdf"
    assert request.media[0].data.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_analyze_requires_data_uri(make_backend):
    backend = make_backend()
    with pytest.raises(ValidationFailure):
        await analyze_uploaded_resume({"resumeDataUri": "resume.pdf"}, backend=backend)
    assert backend.calls == []


@pytest.mark.asyncio
async def test_enhance_analyzed_resume_runs_both_stages(sample_content, make_backend):
    backend = make_backend({"extract_resume_prompt": EXTRACTED, "enhance_resume_prompt": sample_content})

    content = await enhance_analyzed_resume({"resumeDataUri": PDF_URI}, backend=backend)

    assert content.aboutMe == sample_content["aboutMe"]
    assert [c.name for c in backend.calls] == ["extract_resume_prompt", "enhance_resume_prompt"]
    assert "About Me: Engineer" in backend.calls[1].text


@pytest.mark.asyncio
async def test_enhance_analyzed_resume_empty_payload_skips_enhancement(make_backend):
    backend = make_backend({"extract_resume_prompt": EXTRACTED})

    with pytest.raises(ExtractionFailure):
        await enhance_analyzed_resume({"resumeDataUri": EMPTY_PDF_URI}, backend=backend)

    assert backend.calls_for("enhance_resume_prompt") == []


@pytest.mark.asyncio
@pytest.mark.parametrize("extraction", [None, "garbage", {key: "" for key in EXTRACTED}])
async def test_unusable_extraction_never_enhances(make_backend, extraction):
    backend = make_backend({"extract_resume_prompt": extraction})

    with pytest.raises(ExtractionFailure):
        await enhance_analyzed_resume({"resumeDataUri": PDF_URI}, backend=backend)

    assert len(backend.calls_for("extract_resume_prompt")) == 1
    assert backend.calls_for("enhance_resume_prompt") == []


@pytest.mark.asyncio
async def test_generate_interview_questions_keeps_order(make_backend):
    questions = ["Why this role?", "Explain the GIL.", "Why this role?"]
    backend = make_backend({"generate_interview_questions_prompt": {"questions": questions}})

    result = await generate_interview_questions({"jobRole": "Backend Engineer", "timeLeft": "3 days"}, backend=backend)

    assert result == questions
    assert "Backend Engineer" in backend.calls[0].text


@pytest.mark.asyncio
async def test_generate_interview_questions_missing_time_left(make_backend):
    backend = make_backend()
    with pytest.raises(ValidationFailure):
        await generate_interview_questions({"jobRole": "Backend Engineer"}, backend=backend)
    assert backend.calls == []


@pytest.mark.asyncio
async def test_empty_question_list_is_generation_failure(make_backend):
    backend = make_backend({"generate_interview_questions_prompt": {"questions": []}})
    with pytest.raises(GenerationFailure):
        await generate_interview_questions({"jobRole": "QA", "timeLeft": "1 week"}, backend=backend)


@pytest.mark.asyncio
async def test_edit_resume_style_scopes_css(sample_content, make_backend):
    backend = make_backend({"edit_resume_style_prompt": {"css": "h3 { color: blue; }\n.resume-preview h1 { font-size: 40px; }"}})

    result = await edit_resume_style({"currentResume": sample_content, "instruction": "Blue titles"}, backend=backend)

    assert ".resume-preview h3 {" in result.css
    assert ".resume-preview h1 {" in result.css
    assert "font-size: 40px" in result.css
    assert ".resume-preview .resume-preview" not in result.css


@pytest.mark.asyncio
async def test_edit_resume_style_blank_css(sample_content, make_backend):
    backend = make_backend({"edit_resume_style_prompt": {"css": "  "}})
    with pytest.raises(GenerationFailure):
        await edit_resume_style({"currentResume": sample_content, "instruction": "Blue titles"}, backend=backend)
