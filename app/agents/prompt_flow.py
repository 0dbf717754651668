"""
Prompt-call adapter.

A ``PromptFlow`` binds an input schema, an output schema and a Jinja2 prompt
template into a single awaitable. Each invocation validates the input, renders
the prompt, issues exactly one request to the model backend and validates what
comes back. Nothing is cached and nothing is retried.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Generic, List, Optional, Protocol, Tuple, Type, TypeVar, Union

from jinja2 import Environment, StrictUndefined
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.core.errors import GenerationFailure, ResumeStudioError, ValidationFailure
from app.tools.data_uri import decode_data_uri

logger = logging.getLogger(__name__)

InT = TypeVar("InT", bound=BaseModel)
OutT = TypeVar("OutT", bound=BaseModel)


class MediaPart(BaseModel):
    """An inline document attached to a prompt (decoded from a data URI)."""
    mime_type: str
    data: bytes


class PromptRequest(BaseModel):
    """One logical request to the model: rendered prompt, media and expected output shape."""
    name: str
    text: str
    media: List[MediaPart] = Field(default_factory=list)
    output_schema: Type[BaseModel]

    model_config = ConfigDict(arbitrary_types_allowed=True)


class ModelBackend(Protocol):
    async def generate(self, request: PromptRequest) -> Union[str, Dict[str, Any], BaseModel, None]:
        ...


_default_backend: Optional[ModelBackend] = None


def get_default_backend() -> ModelBackend:
    global _default_backend
    if _default_backend is None:
        from app.agents.adk_backend import AdkModelBackend

        _default_backend = AdkModelBackend()
    return _default_backend


def clean_json_response(raw_text: str) -> str:
    """
    Clean raw LLM response by removing markdown formatting and extracting pure JSON.
    Handles cases where LLM returns JSON wrapped in markdown code blocks.
    """
    if not raw_text:
        return raw_text

    text = raw_text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]

    if text.endswith("```"):
        text = text[:-3]

    text = text.strip()

    # Explanatory text around the payload: keep the outermost JSON object
    if not text.startswith("{"):
        start_idx = text.find("{")
        end_idx = text.rfind("}")
        if start_idx != -1 and end_idx != -1 and end_idx > start_idx:
            text = text[start_idx:end_idx + 1]

    return text


_env = Environment(undefined=StrictUndefined, autoescape=False, keep_trailing_newline=True)


class PromptFlow(Generic[InT, OutT]):
    def __init__(
        self,
        name: str,
        input_schema: Type[InT],
        output_schema: Type[OutT],
        template: str,
        strict: bool = False,
    ):
        self.name = name
        self.input_schema = input_schema
        self.output_schema = output_schema
        self.template_source = template
        self.template = _env.from_string(template)
        self.strict = strict

    def __repr__(self) -> str:
        return f"PromptFlow(name={self.name!r})"

    def validate_input(self, payload: Any) -> InT:
        if isinstance(payload, self.input_schema):
            return payload
        if isinstance(payload, BaseModel):
            payload = payload.model_dump()
        if not isinstance(payload, dict):
            raise ValidationFailure(f"{self.name} expects an object, got {type(payload).__name__}.")

        if self.strict:
            known = set(self.input_schema.model_fields)
            extra = sorted(set(payload) - known)
            if extra:
                raise ValidationFailure(f"Unknown fields for {self.name}: {extra}")

        try:
            return self.input_schema.model_validate(payload)
        except ValidationError as e:
            fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
            raise ValidationFailure(f"Invalid input for {self.name}: {fields}", errors=e.errors(), cause=e)

    def render(self, validated: InT) -> Tuple[str, List[MediaPart]]:
        """Substitute the template placeholders and collect attached media."""
        media: List[MediaPart] = []

        def attach(uri: Optional[str]) -> str:
            if not uri:
                return ""
            mime_type, data = decode_data_uri(uri)
            media.append(MediaPart(mime_type=mime_type, data=data))
            return f"[attached document #{len(media)} ({mime_type})]"

        text = self.template.render(**validated.model_dump(), media=attach)
        return text, media

    def parse_output(self, raw: Any) -> OutT:
        if raw is None or raw == {} or (isinstance(raw, str) and not raw.strip()):
            raise GenerationFailure(f"{self.name} returned no structured result.")

        if isinstance(raw, BaseModel):
            data = raw.model_dump()
        elif isinstance(raw, str):
            try:
                data = json.loads(clean_json_response(raw))
            except json.JSONDecodeError as e:
                raise GenerationFailure(f"{self.name} returned invalid JSON: {e}", cause=e)
        else:
            data = raw

        try:
            return self.output_schema.model_validate(data)
        except ValidationError as e:
            raise GenerationFailure(
                f"{self.name} returned output that does not match {self.output_schema.__name__}.", cause=e
            )

    async def __call__(self, payload: Any, backend: Optional[ModelBackend] = None) -> OutT:
        validated = self.validate_input(payload)
        text, media = self.render(validated)
        request = PromptRequest(name=self.name, text=text, media=media, output_schema=self.output_schema)

        backend = backend or get_default_backend()
        logger.info("Invoking flow %s (%d media part(s))", self.name, len(media))
        try:
            raw = await backend.generate(request)
        except ResumeStudioError:
            raise
        except Exception as e:
            logger.exception("Model call failed for flow %s", self.name)
            raise GenerationFailure(f"{self.name} model call failed: {e}", cause=e)

        try:
            return self.parse_output(raw)
        except GenerationFailure as e:
            logger.error("Flow %s produced unusable output: %s", self.name, e.description)
            raise
