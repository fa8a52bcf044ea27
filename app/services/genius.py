"""
Service module for interacting with Google's Gemini Generative AI API.

Generation goes prompt builder -> one Gemini call -> response resolver.
Chat replies are scoped to the selected topic through a system instruction.
"""

import logging
from typing import Any, List, Sequence

from google import genai
from google.genai import types

from app.errors import EmptyTopic, ServiceFailure
from app.models.chat_models import ChatTurn
from app.models.study_models import GeneratedContent, MaterialKind
from app.services.prompts import build_chat_system_prompt, build_instruction
from app.services.resolver import resolve_content
from config import language_name, settings

logger = logging.getLogger(__name__)


# --- Core Service ---

class GeniusService:
    """
    Handles all interactions with the Gemini API.

    `client` is the async surface of a `genai.Client` (`client.aio`); only
    `client.models.generate_content` is used.
    """

    def __init__(self, client: Any, model: str = settings.GEMINI_MODEL):
        self.client = client
        self.model = model

    async def generate_study_material(self, topic: str, kind: MaterialKind, language: str) -> GeneratedContent:
        """
        Generate one piece of study material for `topic`.

        Raises:
            EmptyTopic: `topic` is blank; Gemini is not called.
            InvalidMaterialKind: `kind` is unknown.
            ServiceFailure: the Gemini call failed.
            MalformedResponse: Gemini's answer could not be decoded.
        """
        topic = topic.strip()
        if not topic:
            raise EmptyTopic()

        instruction = build_instruction(topic, kind, language_name(language))

        config = None
        if instruction.output_schema is not None:
            config = types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=instruction.output_schema,
            )

        logger.info("Generating %s for topic '%s' (%s)", MaterialKind(kind).value, topic, language)
        try:
            response = await self.client.models.generate_content(
                model=self.model,
                contents=instruction.prompt,
                config=config,
            )
        except Exception as e:
            logger.error("Error generating content from Gemini: %s", e)
            raise ServiceFailure(f"Failed to generate content: {e}") from e

        return resolve_content(self._extract_response_text(response), kind)

    async def get_chat_response(
        self,
        topic: str,
        language: str,
        history: Sequence[ChatTurn],
        message: str,
    ) -> str:
        """
        Send the transcript plus `message` to Gemini and return the reply verbatim.

        Raises:
            ServiceFailure: the Gemini call failed.
        """
        contents: List[types.Content] = [
            types.Content(role=turn.role, parts=[types.Part(text=turn.text)])
            for turn in history
        ]
        contents.append(types.Content(role="user", parts=[types.Part(text=message)]))

        config = types.GenerateContentConfig(
            system_instruction=build_chat_system_prompt(topic, language_name(language)),
        )

        try:
            response = await self.client.models.generate_content(
                model=self.model,
                contents=contents,
                config=config,
            )
        except Exception as e:
            logger.error("Error generating chat response from Gemini: %s", e)
            raise ServiceFailure(f"Failed to get chat response: {e}") from e

        return self._extract_response_text(response)

    def _extract_response_text(self, response: Any) -> str:
        """
        Extract the text payload from a Gemini response.
        """
        text = getattr(response, "text", None)
        if isinstance(text, str):
            return text

        parts = []
        for candidate in getattr(response, "candidates", None) or []:
            content = getattr(candidate, "content", None)
            for part in getattr(content, "parts", None) or []:
                part_text = getattr(part, "text", None)
                if part_text:
                    parts.append(part_text)
        return "".join(parts)


# Initialize the Gemini Client globally
client = genai.Client(api_key=settings.GOOGLE_GEMINI_API_KEY)

# Export singleton
genius_service = GeniusService(client.aio)
