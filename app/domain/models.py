from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from app.api.models.schemas import ChatMessage, EnrichedLocation, Itinerary, PlaceCard, TurnStatus
from app.external.maps import map_embed_url, map_search_link

IN_FLIGHT_STATUSES = ("generating", "enriching")


def to_place_card(location: EnrichedLocation, maps_api_key: Optional[str] = None) -> PlaceCard:
    return PlaceCard(
        place=location.place,
        suggestions=location.suggestions,
        duration=location.duration,
        mapLink=map_search_link(location.place.name),
        mapEmbedUrl=map_embed_url(location.place.name, maps_api_key),
    )


@dataclass
class ChatSessionEntity:
    id: str
    created_at: datetime
    updated_at: datetime
    status: TurnStatus = "idle"
    messages: List[ChatMessage] = field(default_factory=list)
    itinerary: Optional[Itinerary] = None
    locations: List[EnrichedLocation] = field(default_factory=list)

    @property
    def in_flight(self) -> bool:
        return self.status in IN_FLIGHT_STATUSES

    def user_turns(self) -> List[str]:
        return [msg.text for msg in self.messages if msg.sender == "user"]

    def to_api_model(self, maps_api_key: Optional[str] = None):
        from app.api.models.schemas import ChatSession as ChatSessionSchema

        return ChatSessionSchema(
            id=self.id,
            status=self.status,
            messages=self.messages,
            itinerary=self.itinerary,
            places=[to_place_card(loc, maps_api_key) for loc in self.locations],
            createdAt=self.created_at,
            updatedAt=self.updated_at,
        )
