"""AI routes proxying event suggestions and event discovery."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.dependencies import get_assistant, get_current_user
from app.models.event import ScrapedEvent
from app.services.assistant import EventAssistant, EventSuggestion

router = APIRouter(
    prefix="/ai", tags=["ai"], dependencies=[Depends(get_current_user)]
)


class SuggestionRequest(BaseModel):
    prompt: str = Field(min_length=1)


class ScrapeRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    location_query: str = Field(min_length=1)


@router.post("/suggestions", response_model=EventSuggestion)
async def suggestions(
    payload: SuggestionRequest,
    assistant: EventAssistant = Depends(get_assistant),
):
    """
    Ask the AI backend for an event description and a task list.

    Returns 500 if the backend fails or answers in an unexpected shape.
    """
    return await assistant.suggest(payload.prompt)


@router.post("/scrape-events", response_model=list[ScrapedEvent])
async def scrape_events(
    payload: ScrapeRequest,
    assistant: EventAssistant = Depends(get_assistant),
):
    """
    Ask the AI backend for plausible upcoming public events near a location.

    Returns 500 if the backend fails or answers in an unexpected shape.
    """
    return await assistant.find_events(payload.location_query)
