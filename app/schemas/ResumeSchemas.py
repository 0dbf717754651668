import pydantic
from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict
from datetime import datetime
import re

DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>[A-Za-z0-9+/=\s]*)$")


def validate_data_uri(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    if not DATA_URI_PATTERN.match(v):
        raise ValueError("must be a data URI of the form 'data:<mimetype>;base64,<encoded_data>'")
    return v


class ContactInfo(BaseModel):
    email: Optional[str] = Field(default=None, description="Email address.")
    phone: Optional[str] = Field(default=None, description="Phone number.")
    website: Optional[str] = Field(default=None, description="Personal website or portfolio URL.")
    github: Optional[str] = Field(default=None, description="GitHub profile URL.")
    linkedin: Optional[str] = Field(default=None, description="LinkedIn profile URL.")

    model_config = pydantic.ConfigDict(extra="ignore")

    def channels(self) -> List[str]:
        """Non-empty direct contact channels in display order (links excluded)."""
        return [v for v in (self.email, self.phone, self.website) if v]


class PersonalInfo(BaseModel):
    name: str = Field(default="", description="The candidate's full name, e.g. 'Jane Doe'.")
    addressLines: List[str] = Field(default_factory=list, description="Postal address, one line per entry.")
    contact: ContactInfo = Field(default_factory=ContactInfo, description="Contact channels of the candidate.")

    model_config = pydantic.ConfigDict(extra="ignore")


class ResumeContent(BaseModel):
    """The canonical enhanced resume. Every flow produces or consumes this shape."""
    personalInfo: PersonalInfo = Field(description="Structured personal information: name, address lines, contact channels.")
    aboutMe: str = Field(description="The enhanced 'About Me' section.")
    education: str = Field(description="The enhanced education section.")
    skills: str = Field(description="The enhanced list of technical skills.")
    softSkills: str = Field(description="The enhanced list of soft skills and strengths.")
    projects: str = Field(description="The enhanced projects section. May be empty if no projects were provided.")
    achievements: str = Field(description="The enhanced achievements section. May be empty if none were provided.")

    model_config = pydantic.ConfigDict(extra="ignore")


# Section keys that hold free-form text (everything but personalInfo)
TEXT_SECTIONS = ("aboutMe", "education", "skills", "softSkills", "projects", "achievements")


class ResumeBuilderFields(BaseModel):
    """Raw builder form content. Also the shape extracted from an uploaded resume."""
    personalInfo: str = Field(default="", description="Personal information of the user. e.g. Name, Address, Email, Phone.")
    aboutMe: str = Field(default="", description='A brief "About Me" section for the resume.')
    education: str = Field(default="", description="Educational background of the user.")
    skills: str = Field(default="", description="Technical skills of the user.")
    softSkills: str = Field(default="", description="Soft skills and strengths of the user.")
    projects: str = Field(default="", description="Projects the user has worked on.")
    achievements: str = Field(default="", description="Achievements of the user.")
    githubLink: Optional[str] = Field(default=None, description="Link to the user's GitHub profile.")
    linkedinProfile: Optional[str] = Field(default=None, description="Link to the user's LinkedIn profile.")

    model_config = pydantic.ConfigDict(extra="ignore")

    def has_content(self) -> bool:
        return any(getattr(self, key).strip() for key in ("personalInfo",) + TEXT_SECTIONS)


class EnhanceResumeInput(ResumeBuilderFields):
    exampleResume: Optional[str] = Field(
        default=None,
        description=(
            "Optional: An example resume to use as inspiration for layout, as a data URI that must include a "
            "MIME type and use Base64 encoding. Expected format: 'data:<mimetype>;base64,<encoded_data>'."
        ),
    )

    @pydantic.field_validator("exampleResume", mode="before")
    def _blank_example_is_none(cls, v: Any):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @pydantic.field_validator("exampleResume")
    def _check_example_resume(cls, v: Optional[str]):
        return validate_data_uri(v)


class ResumeRecord(BaseModel):
    """One persisted resume: content plus the input it came from and its style overrides."""
    id: str
    content: ResumeContent
    formValues: Optional[Dict[str, Any]] = None
    css: str = ""
    createdAt: datetime

    model_config = pydantic.ConfigDict(extra="ignore")


class ResumeContentUpdate(BaseModel):
    """Partial section edits coming from the editor."""
    personalInfo: Optional[PersonalInfo] = None
    aboutMe: Optional[str] = None
    education: Optional[str] = None
    skills: Optional[str] = None
    softSkills: Optional[str] = None
    projects: Optional[str] = None
    achievements: Optional[str] = None

    model_config = pydantic.ConfigDict(extra="forbid")


class ResumeSummary(BaseModel):
    id: str
    name: str
    createdAt: datetime
    hasCustomStyles: bool


class ResumeSingleResponse(BaseModel):
    """Envelope response for single resume retrieval: { status, message, data }"""
    status: int = 200
    message: str = "Resume returned successfully"
    data: Optional[ResumeRecord] = None


class ResumeListResponse(BaseModel):
    """Envelope response returned by GET /api/v1/resumes

    Keeps a stable shape for the frontend: { status, message, data }
    where data is the list of resumes, newest first.
    """
    status: int = 200
    message: str = "Resumes returned successfully"
    data: List[ResumeSummary] = Field(default_factory=list)


class ResumeCreated(BaseModel):
    id: str
    content: ResumeContent


class ResumeCreatedResponse(BaseModel):
    status: int = 201
    message: str = "Resume enhanced"
    data: Optional[ResumeCreated] = None
