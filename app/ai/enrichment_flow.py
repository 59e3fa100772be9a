from __future__ import annotations

from typing import List

from app.ai.openai_client import ModelClient
from app.ai.prompts import ENRICHMENT_SYSTEM_PROMPT, ENRICHMENT_USER_PROMPT
from app.api.models.schemas import EnrichmentResult, Place, Suggestion
from app.core.errors import ValidationError


async def enrich_location(model: ModelClient, place: Place, trip_context: str) -> List[Suggestion]:
    """Return activity/dining suggestions for a place, in the order the model gave them."""
    if not place.name.strip():
        raise ValidationError("Place name must not be empty.", {"field": "place.name"})
    if not place.description.strip():
        raise ValidationError("Place description must not be empty.", {"field": "place.description"})

    user_prompt = ENRICHMENT_USER_PROMPT.format(
        place_name=place.name,
        place_description=place.description,
        trip_details=trip_context,
    )
    result = await model.complete_json(ENRICHMENT_SYSTEM_PROMPT, user_prompt, EnrichmentResult)
    return result.suggestions
