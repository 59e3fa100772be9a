from typing import List

from fastapi import APIRouter

from app.api.models.schemas import PlaceCard

router = APIRouter(prefix="/meta", tags=["meta"])

# Shown by the client before the first itinerary is generated.
_PLACEHOLDERS = [
    {
        "place": {
            "name": "The 'Find My Keys' Adventure",
            "description": "A thrilling quest to locate your missing keys. High stakes, unpredictable environments "
            "(couch cushions, under the fridge), and potential delays.",
            "lat": 0,
            "lng": 0,
        },
        "suggestions": [
            {"kind": "activity", "description": "Check all pockets (again)."},
            {"kind": "dining", "description": "Snack break to fuel the search."},
        ],
        "duration": "30 minutes - 3 hours",
    },
    {
        "place": {
            "name": "The 'Avoid Eye Contact' Expedition",
            "description": "Navigate the treacherous waters of social avoidance. Skillfully dodge acquaintances "
            "while pretending to be deeply engrossed in your phone.",
            "lat": 0,
            "lng": 0,
        },
        "suggestions": [
            {"kind": "activity", "description": "Perfect the art of the quick turn."},
            {"kind": "dining", "description": "Grab a coffee for disguise purposes."},
        ],
        "duration": "Varies, depending on neighborhood density",
    },
    {
        "place": {
            "name": "The 'Midnight Snack' Pilgrimage",
            "description": "A daring raid on the kitchen pantry in the dead of night. Stealth and strategic "
            "cupboard maneuvers are paramount.",
            "lat": 0,
            "lng": 0,
        },
        "suggestions": [
            {"kind": "activity", "description": "Decide what snack to get."},
            {"kind": "dining", "description": "Eat it quickly and quietly."},
        ],
        "duration": "15 - 45 minutes",
    },
    {
        "place": {
            "name": "The 'Unplug the Router' Getaway",
            "description": "This app can plan real trips too, like visiting the Amazon, unplugging a router, "
            "sky diving and so on.",
            "lat": 0,
            "lng": 0,
        },
        "suggestions": [
            {"kind": "activity", "description": "Plan a real trip with AI."},
            {"kind": "dining", "description": "Maybe get sushi."},
        ],
        "duration": "As long as you like",
    },
]


@router.get("/placeholders", response_model=List[PlaceCard])
async def list_placeholders():
    return [PlaceCard.model_validate(item) for item in _PLACEHOLDERS]
