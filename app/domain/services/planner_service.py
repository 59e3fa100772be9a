from __future__ import annotations

from typing import Any, AsyncIterator, Dict, List, Sequence, Tuple

from app.ai.openai_client import ModelClient
from app.ai.planner_graph import build_planner_graph, initial_state
from app.api.models.schemas import EnrichedLocation
from app.external.places import PlaceLookup

TRIP_CONTEXT_SEPARATOR = "\n"


def join_trip_context(chat_history: Sequence[str]) -> str:
    return TRIP_CONTEXT_SEPARATOR.join(text.strip() for text in chat_history if text and text.strip())


class PlannerService:
    def __init__(self, itinerary_model: ModelClient, enrichment_model: ModelClient, places: PlaceLookup):
        self._graph = build_planner_graph(itinerary_model, enrichment_model, places)

    async def stream_turn(self, trip_details: str, chat_history: Sequence[str]) -> AsyncIterator[Tuple[str, Dict[str, Any]]]:
        """Yield (node name, state update) pairs as the planner graph advances."""
        state = initial_state(trip_details, join_trip_context(chat_history))
        async for chunk in self._graph.astream(state, stream_mode="updates"):
            for node, update in chunk.items():
                yield node, update or {}

    async def plan(self, trip_details: str, chat_history: Sequence[str]) -> List[EnrichedLocation]:
        """
        Generate an itinerary and enrich every location.
        Locations whose lookup or enrichment fails are dropped; a failed
        generation or enrichment phase re-raises the underlying error.
        """
        result = await self._graph.ainvoke(initial_state(trip_details, join_trip_context(chat_history)))
        if result["status"] == "failed" and result.get("error") is not None:
            raise result["error"]
        return result["locations"]
