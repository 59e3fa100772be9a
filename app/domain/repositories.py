from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict

from .models import ChatSessionEntity


class ChatSessionRepository(ABC):
    @abstractmethod
    async def save(self, session: ChatSessionEntity) -> ChatSessionEntity:
        raise NotImplementedError

    @abstractmethod
    async def get(self, session_id: str) -> ChatSessionEntity:
        raise NotImplementedError

    @abstractmethod
    async def update(self, session: ChatSessionEntity) -> ChatSessionEntity:
        raise NotImplementedError


class InMemoryChatSessionRepository(ChatSessionRepository):
    """Process-local sessions; everything is gone on restart."""

    def __init__(self):
        self._store: Dict[str, ChatSessionEntity] = {}

    async def save(self, session: ChatSessionEntity) -> ChatSessionEntity:
        self._store[session.id] = session
        return session

    async def get(self, session_id: str) -> ChatSessionEntity:
        if session_id not in self._store:
            raise KeyError("Chat session not found")
        return self._store[session_id]

    async def update(self, session: ChatSessionEntity) -> ChatSessionEntity:
        session.updated_at = datetime.utcnow()
        self._store[session.id] = session
        return session
