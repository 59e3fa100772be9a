from __future__ import annotations

import logging

from app.ai.openai_client import ModelClient
from app.ai.prompts import ITINERARY_SYSTEM_PROMPT, ITINERARY_USER_PROMPT
from app.api.models.schemas import Itinerary
from app.core.errors import ValidationError

logger = logging.getLogger(__name__)


async def generate_itinerary(model: ModelClient, trip_details: str) -> Itinerary:
    """
    Ask the model for a structured itinerary.
    Raises ValidationError for blank input before any network call; schema and
    transport failures propagate unretried.
    """
    if not trip_details or not trip_details.strip():
        raise ValidationError("Trip details must not be empty.", {"field": "tripDetails"})

    user_prompt = ITINERARY_USER_PROMPT.format(trip_details=trip_details)
    itinerary = await model.complete_json(ITINERARY_SYSTEM_PROMPT, user_prompt, Itinerary)
    logger.info("Generated itinerary with %d locations", len(itinerary.items))
    return itinerary
