from functools import lru_cache

from fastapi import Depends

from app.ai.openai_client import ModelClient, create_openai_client
from app.core.config import settings
from app.domain.repositories import ChatSessionRepository, InMemoryChatSessionRepository
from app.domain.services.chat_service import ChatService
from app.domain.services.planner_service import PlannerService
from app.external.places import PlaceLookup, StubPlaceLookup

_repo: ChatSessionRepository = InMemoryChatSessionRepository()
_places: PlaceLookup = StubPlaceLookup()


@lru_cache
def _model_clients() -> tuple[ModelClient, ModelClient]:
    openai_client = create_openai_client(settings)
    return (
        ModelClient(openai_client, settings.openai_model_itinerary, settings.openai_max_output_tokens),
        ModelClient(openai_client, settings.openai_model_enrichment, settings.openai_max_output_tokens),
    )


def get_itinerary_model() -> ModelClient:
    return _model_clients()[0]


def get_enrichment_model() -> ModelClient:
    return _model_clients()[1]


def get_place_lookup() -> PlaceLookup:
    return _places


def get_session_repo() -> ChatSessionRepository:
    return _repo


def get_planner_service(
    itinerary_model: ModelClient = Depends(get_itinerary_model),
    enrichment_model: ModelClient = Depends(get_enrichment_model),
    places: PlaceLookup = Depends(get_place_lookup),
) -> PlannerService:
    return PlannerService(itinerary_model, enrichment_model, places)


def get_chat_service(
    repo: ChatSessionRepository = Depends(get_session_repo),
    planner: PlannerService = Depends(get_planner_service),
) -> ChatService:
    return ChatService(repo=repo, planner=planner, maps_api_key=settings.google_maps_api_key)


__all__ = [
    "get_itinerary_model",
    "get_enrichment_model",
    "get_place_lookup",
    "get_session_repo",
    "get_planner_service",
    "get_chat_service",
    "settings",
]
