"""
Google ADK model boundary.

Each request becomes a one-shot ``LlmAgent`` with ``output_schema`` set to the
flow's output model, run once through a ``Runner`` on a fresh in-memory session.
"""
import logging
import os
import uuid
from typing import Optional

from google.adk.agents import LlmAgent
from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from app.agents.prompt_flow import PromptRequest
from app.core.config import settings

logger = logging.getLogger(__name__)

APP_NAME = "resume_studio"

BASE_INSTRUCTION = (
    "You are the assistant behind a resume tooling application. "
    "Follow the user's prompt exactly and reply ONLY with a JSON object that matches the requested schema. "
    "Do not wrap the JSON in markdown and do not add explanations."
)


class AdkModelBackend:
    def __init__(self, model: Optional[str] = None, user_id: str = "resume_studio_user"):
        self.model = model or settings.GEMINI_MODEL
        self.user_id = user_id
        # google-genai reads credentials from the environment
        if settings.GOOGLE_API_KEY and not os.getenv("GOOGLE_API_KEY"):
            os.environ["GOOGLE_API_KEY"] = settings.GOOGLE_API_KEY
        os.environ.setdefault("GOOGLE_GENAI_USE_VERTEXAI", settings.GOOGLE_GENAI_USE_VERTEXAI)

    def build_agent(self, request: PromptRequest) -> LlmAgent:
        return LlmAgent(
            model=self.model,
            name=request.name,
            description=f"Structured generation for {request.name}.",
            instruction=BASE_INSTRUCTION,
            generate_content_config=types.GenerateContentConfig(temperature=0.4),
            output_schema=request.output_schema,
            output_key=f"{request.name}_output",
        )

    @staticmethod
    def build_content(request: PromptRequest) -> types.Content:
        parts = [types.Part(text=request.text)]
        for media in request.media:
            parts.append(types.Part(inline_data=types.Blob(mime_type=media.mime_type, data=media.data)))
        return types.Content(role="user", parts=parts)

    async def generate(self, request: PromptRequest) -> Optional[str]:
        session_service = InMemorySessionService()
        session_id = uuid.uuid4().hex
        await session_service.create_session(app_name=APP_NAME, user_id=self.user_id, session_id=session_id)
        runner = Runner(agent=self.build_agent(request), session_service=session_service, app_name=APP_NAME)

        final_text = None
        async for event in runner.run_async(
            new_message=self.build_content(request), session_id=session_id, user_id=self.user_id
        ):
            if event.is_final_response() and event.content and event.content.parts:
                final_text = event.content.parts[0].text
                logger.debug("Final response from %s: %s", event.author, (final_text or "")[:200])

        if final_text is None:
            logger.warning("Agent %s finished without a final response", request.name)
        return final_text
