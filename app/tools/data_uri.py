# In app/tools/data_uri.py
import base64
import binascii
import logging
from typing import Tuple

from fastapi import UploadFile

from app.core.errors import FileReadFailure, ValidationFailure
from app.schemas.ResumeSchemas import DATA_URI_PATTERN

logger = logging.getLogger(__name__)


def encode_data_uri(data: bytes, mime_type: str) -> str:
    """Encode raw bytes as ``data:<mime>;base64,<payload>``."""
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """Split a base64 data URI into its MIME type and decoded payload."""
    match = DATA_URI_PATTERN.match(uri or "")
    if not match:
        raise ValidationFailure("Expected a data URI of the form 'data:<mimetype>;base64,<encoded_data>'.")
    try:
        data = base64.b64decode("".join(match.group("payload").split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationFailure(f"Data URI payload is not valid base64: {e}", cause=e)
    return match.group("mime"), data


async def read_upload_as_data_uri(upload: UploadFile, max_bytes: int | None = None) -> str:
    """Read an uploaded file to completion and return it as a data URI.

    Raises FileReadFailure when the upload is missing, empty, too large or unreadable.
    """
    if upload is None:
        raise FileReadFailure("Please upload a resume file to analyze.")
    try:
        content = await upload.read()
    except Exception as e:
        logger.exception("Failed to read uploaded file %s", getattr(upload, "filename", None))
        raise FileReadFailure(f"Could not read the uploaded file: {e}", cause=e)

    if not content:
        raise FileReadFailure("The uploaded file is empty.")
    if max_bytes is not None and len(content) > max_bytes:
        raise FileReadFailure(f"The uploaded file is larger than {max_bytes} bytes.")

    # Parameters such as "; charset=utf-8" are not part of a data URI media type
    mime_type = (upload.content_type or "").split(";", 1)[0].strip() or "application/octet-stream"
    return encode_data_uri(content, mime_type)
