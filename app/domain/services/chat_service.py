from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional
from uuid import uuid4

from app.api.models.schemas import ChatMessage, TurnResponse
from app.core.errors import ConflictError, ValidationError
from app.domain.models import ChatSessionEntity, to_place_card
from app.domain.repositories import ChatSessionRepository
from app.domain.services.planner_service import PlannerService

logger = logging.getLogger(__name__)

GENERATION_FAILED_MESSAGE = "Sorry, I couldn't generate an itinerary. Please try again."
ENRICHMENT_FAILED_MESSAGE = "Sorry, something went wrong while adding details to your itinerary. Please try again."
NO_LOCATIONS_MESSAGE = (
    "I put together an itinerary, but couldn't find details for any of its locations. "
    "Try describing your trip differently."
)


def _summary_message(count: int) -> str:
    noun = "stop" if count == 1 else "stops"
    return f"Here's your itinerary with {count} {noun}."


class ChatService:
    def __init__(self, repo: ChatSessionRepository, planner: PlannerService, maps_api_key: Optional[str] = None):
        self.repo = repo
        self.planner = planner
        self.maps_api_key = maps_api_key

    async def create_session(self) -> ChatSessionEntity:
        now = datetime.utcnow()
        session = ChatSessionEntity(id=f"ses_{uuid4().hex[:12]}", created_at=now, updated_at=now)
        return await self.repo.save(session)

    async def get_session(self, session_id: str) -> ChatSessionEntity:
        return await self.repo.get(session_id)

    async def send_message(self, session_id: str, text: str) -> TurnResponse:
        text = (text or "").strip()
        if not text:
            raise ValidationError("Message must not be empty.", {"field": "text"})

        session = await self.repo.get(session_id)
        if session.in_flight:
            raise ConflictError("A trip is already being planned for this session.", {"status": session.status})

        # Previous results are cleared as soon as a new turn starts.
        session.status = "generating"
        session.itinerary = None
        session.locations = []
        session.messages.append(ChatMessage(text=text, sender="user"))
        await self.repo.update(session)

        try:
            async for node, update in self.planner.stream_turn(text, session.user_turns()):
                logger.debug("Session %s: %s -> %s", session.id, node, update.get("status"))
                if "itinerary" in update:
                    session.itinerary = update["itinerary"]
                if "locations" in update:
                    session.locations = update["locations"]
                session.status = update.get("status", session.status)
                await self.repo.update(session)
        except BaseException:
            # CancelledError included, otherwise the session stays in flight and rejects every later turn
            logger.warning("Planning turn aborted for session %s; marking it failed", session.id)
            session.status = "failed"
            session.locations = []
            session.messages.append(ChatMessage(text=self._reply_text(session), sender="assistant"))
            await self.repo.update(session)
            raise

        reply = ChatMessage(text=self._reply_text(session), sender="assistant")
        session.messages.append(reply)
        await self.repo.update(session)
        return TurnResponse(
            status=session.status,
            reply=reply,
            itinerary=session.itinerary,
            places=[to_place_card(loc, self.maps_api_key) for loc in session.locations],
        )

    @staticmethod
    def _reply_text(session: ChatSessionEntity) -> str:
        if session.status == "failed":
            return GENERATION_FAILED_MESSAGE if session.itinerary is None else ENRICHMENT_FAILED_MESSAGE
        if not session.locations:
            return NO_LOCATIONS_MESSAGE
        return _summary_message(len(session.locations))
