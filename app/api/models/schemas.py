from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, StringConstraints

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# ---------- Itinerary (generation output) ----------


class ItineraryItem(BaseModel):
    location: NonEmptyStr = Field(description="The name of the location.")
    activities: List[str] = Field(default_factory=list, description="Suggested activities at this location.")
    duration: NonEmptyStr = Field(description="Suggested duration of stay, e.g. '3 days'.")


class Itinerary(BaseModel):
    items: List[ItineraryItem] = Field(
        description="Trip itinerary with locations, activities and durations, in visiting order."
    )


# ---------- Place / Suggestion (enrichment) ----------


class Place(BaseModel):
    name: str
    description: str
    lat: float
    lng: float


SuggestionKind = Literal["activity", "dining"]


class Suggestion(BaseModel):
    kind: SuggestionKind = Field(description="Either 'activity' or 'dining'.")
    description: str = Field(description="A description of the suggestion.")


class EnrichmentResult(BaseModel):
    suggestions: List[Suggestion] = Field(description="Tailored suggestions for activities and dining.")


class EnrichedLocation(BaseModel):
    place: Place
    suggestions: List[Suggestion]
    duration: str


class PlaceCard(EnrichedLocation):
    mapLink: Optional[str] = None
    mapEmbedUrl: Optional[str] = None


# ---------- Chat ----------


ChatSender = Literal["user", "assistant"]
TurnStatus = Literal["idle", "generating", "enriching", "done", "failed"]


class ChatMessage(BaseModel):
    id: str = Field(default_factory=lambda: f"msg_{uuid4().hex[:10]}")
    text: str
    sender: ChatSender = "user"
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ChatSession(BaseModel):
    id: str
    status: TurnStatus
    messages: List[ChatMessage]
    itinerary: Optional[Itinerary] = None
    places: List[PlaceCard]
    createdAt: datetime
    updatedAt: datetime


# ---------- Request/Response models ----------


class CreateItineraryRequest(BaseModel):
    tripDetails: str


class EnrichLocationRequest(BaseModel):
    place: Place
    tripDetails: str


class SendMessageRequest(BaseModel):
    text: str


class TurnResponse(BaseModel):
    status: TurnStatus
    reply: ChatMessage
    itinerary: Optional[Itinerary] = None
    places: List[PlaceCard]
