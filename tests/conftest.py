import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_enrichment_model, get_itinerary_model, get_place_lookup, get_session_repo
from app.domain.repositories import InMemoryChatSessionRepository
from app.main import app
from tests.fakes import SelectivePlaceLookup, make_models


@pytest.fixture
def places():
    return SelectivePlaceLookup()


@pytest.fixture
def models():
    itinerary_model, enrichment_model = make_models(["Paris"])
    return {"itinerary": itinerary_model, "enrichment": enrichment_model}


@pytest.fixture
def api_client(models, places):
    app.dependency_overrides[get_itinerary_model] = lambda: models["itinerary"]
    app.dependency_overrides[get_enrichment_model] = lambda: models["enrichment"]
    app.dependency_overrides[get_place_lookup] = lambda: places
    repo = InMemoryChatSessionRepository()
    app.dependency_overrides[get_session_repo] = lambda: repo

    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
