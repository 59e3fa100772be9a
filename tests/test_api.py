import asyncio

import pytest

from app.ai import planner_graph
from app.core.errors import ModelCallError
from app.dependencies import get_session_repo
from app.domain.repositories import InMemoryChatSessionRepository
from app.domain.services.chat_service import (
    ENRICHMENT_FAILED_MESSAGE,
    GENERATION_FAILED_MESSAGE,
    NO_LOCATIONS_MESSAGE,
    ChatService,
)
from app.domain.services.planner_service import PlannerService
from app.main import app
from tests.fakes import FakeModelClient, SelectivePlaceLookup, make_models

PREFIX = "/api/v1"


def _new_session(client):
    resp = client.post(f"{PREFIX}/sessions")
    assert resp.status_code == 201
    return resp.json()["id"]


def test_health(api_client):
    assert api_client.get("/health").json()["status"] == "ok"


def test_chat_turn_produces_place_cards(api_client):
    session_id = _new_session(api_client)

    resp = api_client.post(f"{PREFIX}/sessions/{session_id}/messages", json={"text": "3 days in Paris"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "done"
    assert body["itinerary"]["items"][0]["location"] == "Paris"
    assert len(body["places"]) == 1
    card = body["places"][0]
    assert card["place"]["name"] == "Paris"
    assert card["mapLink"] == "https://www.google.com/maps/search/?api=1&query=Paris"
    assert body["reply"]["sender"] == "assistant"

    session = api_client.get(f"{PREFIX}/sessions/{session_id}").json()
    assert [m["sender"] for m in session["messages"]] == ["user", "assistant"]
    assert session["places"][0]["place"]["name"] == "Paris"


def test_blank_message_is_rejected_without_touching_transcript(api_client, models):
    session_id = _new_session(api_client)

    resp = api_client.post(f"{PREFIX}/sessions/{session_id}/messages", json={"text": "   "})

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"
    assert api_client.get(f"{PREFIX}/sessions/{session_id}").json()["messages"] == []
    assert models["itinerary"].calls == []


def test_failed_generation_shows_apology(api_client, models):
    def offline(prompt, schema):
        raise ModelCallError("quota exceeded")

    models["itinerary"] = FakeModelClient(offline)
    session_id = _new_session(api_client)

    body = api_client.post(f"{PREFIX}/sessions/{session_id}/messages", json={"text": "Rome"}).json()

    assert body["status"] == "failed"
    assert body["reply"]["text"] == GENERATION_FAILED_MESSAGE
    assert body["places"] == []
    session = api_client.get(f"{PREFIX}/sessions/{session_id}").json()
    assert session["messages"][0]["text"] == "Rome"


def test_empty_itinerary_is_not_a_failure(api_client, models):
    models["itinerary"], models["enrichment"] = make_models([])
    session_id = _new_session(api_client)

    body = api_client.post(f"{PREFIX}/sessions/{session_id}/messages", json={"text": "surprise me"}).json()

    assert body["status"] == "done"
    assert body["places"] == []
    assert body["reply"]["text"] == NO_LOCATIONS_MESSAGE


def test_new_turn_replaces_previous_results_and_keeps_history(api_client, models):
    session_id = _new_session(api_client)
    api_client.post(f"{PREFIX}/sessions/{session_id}/messages", json={"text": "3 days in Paris"})

    models["itinerary"], models["enrichment"] = make_models(["Lyon", "Nice"])
    body = api_client.post(f"{PREFIX}/sessions/{session_id}/messages", json={"text": "add the south"}).json()

    assert [card["place"]["name"] for card in body["places"]] == ["Lyon", "Nice"]
    assert "3 days in Paris\nadd the south" in models["enrichment"].calls[0]["user"]


def test_turn_in_flight_is_rejected(api_client):
    session_id = _new_session(api_client)
    repo = app.dependency_overrides[get_session_repo]()
    session = asyncio.run(repo.get(session_id))
    session.status = "enriching"

    resp = api_client.post(f"{PREFIX}/sessions/{session_id}/messages", json={"text": "Berlin"})

    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "TURN_IN_PROGRESS"


def test_unknown_session_is_404(api_client):
    resp = api_client.post(f"{PREFIX}/sessions/ses_missing/messages", json={"text": "Berlin"})
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


def test_stateless_itinerary_and_enrichment_endpoints(api_client):
    resp = api_client.post(f"{PREFIX}/itineraries", json={"tripDetails": "3 days in Paris"})
    assert resp.status_code == 200
    assert resp.json()["items"][0]["location"] == "Paris"

    resp = api_client.post(f"{PREFIX}/itineraries", json={"tripDetails": ""})
    assert resp.status_code == 400

    place = api_client.get(f"{PREFIX}/places/Paris").json()
    resp = api_client.post(f"{PREFIX}/enrichments", json={"place": place, "tripDetails": "museums"})
    assert resp.status_code == 200
    assert {s["kind"] for s in resp.json()["suggestions"]} <= {"activity", "dining"}


def test_schema_violation_maps_to_bad_gateway(api_client, models):
    models["itinerary"] = FakeModelClient(lambda prompt, schema: {"days": []})

    resp = api_client.post(f"{PREFIX}/itineraries", json={"tripDetails": "Paris"})

    assert resp.status_code == 502
    assert resp.json()["error"]["code"] == "SCHEMA_VIOLATION"


def test_placeholders(api_client):
    cards = api_client.get(f"{PREFIX}/meta/placeholders").json()
    assert len(cards) == 4
    assert cards[0]["suggestions"][0]["kind"] == "activity"


def test_enrichment_phase_failure_clears_places(api_client, monkeypatch):
    def broken_location(**kwargs):
        raise RuntimeError("cannot assemble location")

    monkeypatch.setattr(planner_graph, "EnrichedLocation", broken_location)
    session_id = _new_session(api_client)

    resp = api_client.post(f"{PREFIX}/sessions/{session_id}/messages", json={"text": "3 days in Paris"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "failed"
    assert body["reply"]["text"] == ENRICHMENT_FAILED_MESSAGE
    assert body["reply"]["text"] != GENERATION_FAILED_MESSAGE
    assert body["places"] == []
    assert body["itinerary"]["items"][0]["location"] == "Paris"


class CancelledPlanner:
    async def stream_turn(self, trip_details, chat_history):
        yield "generate_itinerary", {"status": "enriching"}
        raise asyncio.CancelledError()


def test_cancelled_turn_does_not_leave_session_in_flight():
    repo = InMemoryChatSessionRepository()
    service = ChatService(repo=repo, planner=CancelledPlanner())

    async def run():
        session = await service.create_session()
        with pytest.raises(asyncio.CancelledError):
            await service.send_message(session.id, "Berlin")
        cancelled = await repo.get(session.id)
        assert cancelled.status == "failed"
        assert not cancelled.in_flight
        assert cancelled.messages[-1].sender == "assistant"

        service.planner = PlannerService(*make_models(["Berlin"]), SelectivePlaceLookup())
        return await service.send_message(session.id, "Berlin again")

    turn = asyncio.run(run())
    assert turn.status == "done"
    assert [card.place.name for card in turn.places] == ["Berlin"]


def test_malformed_body_reports_field(api_client):
    session_id = _new_session(api_client)

    resp = api_client.post(f"{PREFIX}/sessions/{session_id}/messages", json={"message": "Berlin"})

    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]["field"] == "text"
