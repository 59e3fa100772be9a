from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from app.api.models.schemas import Place
from app.core.errors import PlaceNotFoundError

logger = logging.getLogger(__name__)

STUB_DESCRIPTION = "A wonderful place to visit."
STUB_LAT = 34.0522
STUB_LNG = -118.2437


class PlaceLookup(ABC):
    @abstractmethod
    async def lookup(self, name: str) -> Place:
        """Resolve a place name; raises PlaceLookupError when it cannot."""
        raise NotImplementedError


class StubPlaceLookup(PlaceLookup):
    """
    Deterministic stand-in for a geocoding/places API.
    Echoes the name and always answers with the same description and coordinates.
    """

    async def lookup(self, name: str) -> Place:
        if not name or not name.strip():
            raise PlaceNotFoundError(name)
        logger.debug("Stub place lookup for '%s'", name)
        return Place(name=name, description=STUB_DESCRIPTION, lat=STUB_LAT, lng=STUB_LNG)
