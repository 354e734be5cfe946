"""Generative-AI assistant for event suggestions and event discovery.

``EventAssistant`` is the capability the API depends on; ``OpenAIEventAssistant``
is the production implementation. Replies are validated against fixed
pydantic shapes and anything else is treated as a failure: nothing is
repaired or guessed.
"""
import json
import logging
from abc import ABC, abstractmethod

import openai
from openai import AsyncOpenAI
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.core.errors import UpstreamUnavailable
from app.models.event import ScrapedEvent

logger = logging.getLogger(__name__)

DISCOVERED_EVENT_COUNT = 5

SUGGESTION_SYSTEM_MESSAGE = """You help people plan events.
Return ONLY a JSON object (no markdown, no commentary) with exactly these keys:
{"suggestedDescription": "an engaging, well-written description for the event",
 "suggestedTasks": ["a list of suggested tasks to complete for the event"]}"""

DISCOVERY_SYSTEM_MESSAGE = """You are a helpful assistant that finds local events.
Return ONLY a JSON object (no markdown, no commentary) of the form
{"events": [{"name": "...", "date": "YYYY-MM-DD", "location": "...", "description": "..."}]}
If you know of no events, return {"events": []}."""


class EventSuggestion(BaseModel):
    """Suggested description and tasks for an event being planned."""
    model_config = ConfigDict(extra="forbid")

    suggestedDescription: str
    suggestedTasks: list[str]


class _DiscoveryReply(BaseModel):
    events: list[ScrapedEvent]


class EventAssistant(ABC):
    """Capability interface for the generative-AI backend.

    Results are not deterministic: the same input may produce different
    output on every call.
    """

    @abstractmethod
    async def suggest(self, prompt: str) -> EventSuggestion:
        """Suggest a description and tasks for the event described by ``prompt``.

        Raises:
            UpstreamUnavailable: If the backend fails or replies in another shape.
        """
        ...

    @abstractmethod
    async def find_events(self, location_query: str) -> list[ScrapedEvent]:
        """Find plausible upcoming public events near ``location_query``.

        Raises:
            UpstreamUnavailable: If the backend fails or replies in another shape.
        """
        ...


class OpenAIEventAssistant(EventAssistant):
    """``EventAssistant`` backed by the OpenAI chat completions API."""

    def __init__(self, client: AsyncOpenAI | None = None, model: str | None = None):
        self._client = client
        self.model = model or settings.openai_model

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not settings.openai_api_key:
                logger.error("OPENAI_API_KEY not configured")
                raise UpstreamUnavailable("AI service is not configured.")
            self._client = AsyncOpenAI(api_key=settings.openai_api_key)
        return self._client

    async def _complete_json(self, system_message: str, user_message: str) -> object:
        """Run one JSON-mode completion and return the decoded reply."""
        client = self._get_client()
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_message},
                    {"role": "user", "content": user_message},
                ],
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as e:
            logger.error(f"OpenAI request failed: {e}")
            raise UpstreamUnavailable("AI service request failed.") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise UpstreamUnavailable("AI service returned an empty response.")
        try:
            return json.loads(content.strip())
        except json.JSONDecodeError as e:
            logger.warning(f"AI reply is not JSON: {content[:200]!r}")
            raise UpstreamUnavailable("AI service returned malformed data.") from e

    async def suggest(self, prompt: str) -> EventSuggestion:
        data = await self._complete_json(SUGGESTION_SYSTEM_MESSAGE, prompt)
        try:
            return EventSuggestion.model_validate(data)
        except PydanticValidationError as e:
            logger.warning(f"AI suggestion has unexpected shape: {e}")
            raise UpstreamUnavailable("Failed to get suggestions from AI.") from e

    async def find_events(self, location_query: str) -> list[ScrapedEvent]:
        user_message = (
            f"Find {DISCOVERED_EVENT_COUNT} plausible, upcoming public events "
            f'for the following location: "{location_query}"'
        )
        data = await self._complete_json(DISCOVERY_SYSTEM_MESSAGE, user_message)
        try:
            return _DiscoveryReply.model_validate(data).events
        except PydanticValidationError as e:
            logger.warning(f"AI event list has unexpected shape: {e}")
            raise UpstreamUnavailable("Failed to scrape events for location.") from e
