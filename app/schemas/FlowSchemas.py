"""Request/response payloads for the analyzer, interview and style flows."""
import pydantic
from pydantic import BaseModel, Field
from typing import List, Optional

from app.schemas.ResumeSchemas import ResumeContent, validate_data_uri


class ResumeDocumentInput(BaseModel):
    resumeDataUri: str = Field(
        description=(
            "The resume file, as a data URI that must include a MIME type and use Base64 encoding. "
            "Expected format: 'data:<mimetype>;base64,<encoded_data>'."
        )
    )

    @pydantic.field_validator("resumeDataUri")
    def _check_data_uri(cls, v: str):
        return validate_data_uri(v)


class AnalysisFeedback(BaseModel):
    formatting: str = Field(description="Feedback on the resume formatting.")
    grammar: str = Field(description="Feedback on the resume grammar and spelling.")
    missingSkills: str = Field(description="Suggestions for missing skills to add to the resume.")
    atsCompatibility: str = Field(description="Feedback on the resume ATS compatibility.")
    atsScore: Optional[float] = Field(
        default=None, ge=0, le=10,
        description="Applicant Tracking System compatibility score from 0 (poor) to 10 (excellent).",
    )

    model_config = pydantic.ConfigDict(extra="ignore")


class AnalyzeUploadedResumeOutput(BaseModel):
    feedback: AnalysisFeedback


class InterviewQuestionsInput(BaseModel):
    jobRole: str = Field(min_length=1, description="The job role for which to generate interview questions.")
    timeLeft: str = Field(min_length=1, description="The time left until the interview (e.g., 1 week, 3 days).")


class InterviewQuestionsOutput(BaseModel):
    questions: List[str] = Field(min_length=1, description="An array of role-specific interview questions.")


class StyleEditInput(BaseModel):
    currentResume: ResumeContent
    instruction: str = Field(
        min_length=1,
        description=(
            "The user's instruction for how to change the resume style. For example: "
            '"Make the section titles blue and bold." or "Change the font for the body text to a serif font."'
        ),
    )


class StyleEditOutput(BaseModel):
    css: str = Field(
        description=(
            "The generated CSS to apply the requested style changes. This should be a string of CSS rules. "
            "For example: `.resume-preview h3 { color: blue; font-weight: bold; }`"
        )
    )

    @pydantic.field_validator("css")
    def _css_not_blank(cls, v: str):
        if not v.strip():
            raise ValueError("css must not be empty")
        return v.strip()


class StyleInstructionRequest(BaseModel):
    instruction: str = Field(min_length=1)


class AnalysisResponse(BaseModel):
    status: int = 200
    message: str = "Analysis Complete!"
    data: Optional[AnalysisFeedback] = None


class InterviewQuestionsResponse(BaseModel):
    status: int = 200
    message: str = "Questions generated"
    data: Optional[InterviewQuestionsOutput] = None
