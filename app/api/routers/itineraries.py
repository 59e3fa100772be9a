from fastapi import APIRouter, Depends

from app.ai.enrichment_flow import enrich_location
from app.ai.itinerary_flow import generate_itinerary
from app.ai.openai_client import ModelClient
from app.api.models.schemas import CreateItineraryRequest, EnrichLocationRequest, EnrichmentResult, Itinerary, Place
from app.dependencies import get_enrichment_model, get_itinerary_model, get_place_lookup
from app.external.places import PlaceLookup

router = APIRouter(tags=["itineraries"])


@router.post("/itineraries", response_model=Itinerary)
async def create_itinerary(body: CreateItineraryRequest, model: ModelClient = Depends(get_itinerary_model)):
    return await generate_itinerary(model, body.tripDetails)


@router.post("/enrichments", response_model=EnrichmentResult)
async def enrich(body: EnrichLocationRequest, model: ModelClient = Depends(get_enrichment_model)):
    suggestions = await enrich_location(model, body.place, body.tripDetails)
    return EnrichmentResult(suggestions=suggestions)


@router.get("/places/{name}", response_model=Place)
async def lookup_place(name: str, places: PlaceLookup = Depends(get_place_lookup)):
    return await places.lookup(name)
