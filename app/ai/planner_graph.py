from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, TypedDict

from langgraph.graph import END, StateGraph

from app.ai.enrichment_flow import enrich_location
from app.ai.itinerary_flow import generate_itinerary
from app.ai.openai_client import ModelClient
from app.api.models.schemas import EnrichedLocation, Itinerary, ItineraryItem, TurnStatus
from app.core.errors import ModelCallError, SchemaViolationError
from app.external.places import PlaceLookup

logger = logging.getLogger(__name__)


class PlannerState(TypedDict):
    trip_details: str
    trip_context: str
    status: TurnStatus
    itinerary: Optional[Itinerary]
    locations: List[EnrichedLocation]
    error: Optional[Exception]


def initial_state(trip_details: str, trip_context: str) -> PlannerState:
    return {
        "trip_details": trip_details,
        "trip_context": trip_context,
        "status": "generating",
        "itinerary": None,
        "locations": [],
        "error": None,
    }


def build_planner_graph(itinerary_model: ModelClient, enrichment_model: ModelClient, places: PlaceLookup):
    """
    generate_itinerary -> enrich_locations -> END, short-circuiting to END when
    generation fails.
    """

    async def generate(state: PlannerState) -> Dict[str, Any]:
        try:
            itinerary = await generate_itinerary(itinerary_model, state["trip_details"])
        except (SchemaViolationError, ModelCallError) as exc:
            logger.warning("Itinerary generation failed: %s", exc.detail)
            return {"status": "failed", "error": exc, "itinerary": None, "locations": []}
        return {"status": "enriching", "itinerary": itinerary}

    async def enrich_one(index: int, item: ItineraryItem, trip_context: str) -> Optional[EnrichedLocation]:
        try:
            place = await places.lookup(item.location)
            suggestions = await enrich_location(enrichment_model, place, trip_context)
        except Exception as exc:
            logger.warning("Dropping itinerary location #%d '%s': %s", index, item.location, exc)
            return None
        return EnrichedLocation(place=place, suggestions=suggestions, duration=item.duration)

    async def enrich_all(state: PlannerState) -> Dict[str, Any]:
        itinerary = state["itinerary"]
        items = itinerary.items if itinerary else []
        try:
            # gather returns results in argument order regardless of completion order
            results = await asyncio.gather(
                *(enrich_one(idx, item, state["trip_context"]) for idx, item in enumerate(items))
            )
            locations = [loc for loc in results if loc is not None]
        except Exception as exc:
            logger.exception("Enrichment phase failed: %s", exc)
            return {"status": "failed", "error": exc, "locations": []}
        logger.info("Enriched %d of %d itinerary locations", len(locations), len(items))
        return {"status": "done", "locations": locations}

    def route_after_generate(state: PlannerState) -> str:
        return "end" if state["status"] == "failed" else "enrich"

    builder = StateGraph(PlannerState)
    builder.add_node("generate_itinerary", generate)
    builder.add_node("enrich_locations", enrich_all)

    builder.set_entry_point("generate_itinerary")
    builder.add_conditional_edges(
        "generate_itinerary",
        route_after_generate,
        {"enrich": "enrich_locations", "end": END},
    )
    builder.add_edge("enrich_locations", END)
    return builder.compile()
