from __future__ import annotations

from typing import Optional
from urllib.parse import quote

MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query={query}"
MAPS_EMBED_URL = "https://www.google.com/maps/embed/v1/place?key={key}&q={query}"


def map_search_link(place_name: str) -> Optional[str]:
    if not place_name:
        return None
    return MAPS_SEARCH_URL.format(query=quote(place_name, safe=""))


def map_embed_url(place_name: str, api_key: Optional[str]) -> Optional[str]:
    """Embeddable map URL; None without a maps key so callers fall back to the search link."""
    if not place_name or not api_key:
        return None
    return MAPS_EMBED_URL.format(key=api_key, query=quote(place_name, safe=""))
