"""
Error taxonomy shared by flows, the store and the export pipeline.

Every error carries a short ``title`` and a ``description`` that endpoints
hand back to the client as the user-visible notification.
"""
from typing import Any, List, Optional


class ResumeStudioError(Exception):
    title = "An error occurred."
    status_code = 500

    def __init__(self, description: str, *, cause: Optional[BaseException] = None):
        super().__init__(description)
        self.description = description
        self.cause = cause

    @property
    def user_message(self) -> str:
        return f"{self.title} {self.description}"


class ValidationFailure(ResumeStudioError):
    """Input does not match its schema. Raised before any external call."""
    title = "Invalid input."
    status_code = 422

    def __init__(self, description: str, errors: Optional[List[Any]] = None, **kwargs):
        super().__init__(description, **kwargs)
        self.errors = errors or []


class GenerationFailure(ResumeStudioError):
    """The model returned nothing, or something that fails the output schema."""
    title = "Generation failed."
    status_code = 502


class ExtractionFailure(ResumeStudioError):
    """First stage of a two-stage flow produced no usable structured content."""
    title = "Could not read resume."
    status_code = 422


class ExportFailure(ResumeStudioError):
    title = "PDF Generation Failed"
    status_code = 500


class FileReadFailure(ResumeStudioError):
    title = "Could not read file."
    status_code = 400


class ResumeNotFound(ResumeStudioError):
    title = "Resume not found."
    status_code = 404


class ActionInProgress(ResumeStudioError):
    """The same editor action is already running for this resume."""
    title = "Please wait."
    status_code = 409
