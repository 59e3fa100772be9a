from fastapi import APIRouter, Depends, status

from app.api.models.schemas import ChatSession, SendMessageRequest, TurnResponse
from app.core.errors import NotFoundError
from app.dependencies import get_chat_service, settings
from app.domain.services.chat_service import ChatService

router = APIRouter(prefix="/sessions", tags=["chat"])


@router.post("", response_model=ChatSession, status_code=status.HTTP_201_CREATED)
async def create_session(svc: ChatService = Depends(get_chat_service)):
    entity = await svc.create_session()
    return entity.to_api_model(settings.google_maps_api_key)


@router.get("/{session_id}", response_model=ChatSession)
async def get_session(session_id: str, svc: ChatService = Depends(get_chat_service)):
    try:
        entity = await svc.get_session(session_id)
    except KeyError:
        raise NotFoundError("Chat session not found")
    return entity.to_api_model(settings.google_maps_api_key)


@router.post("/{session_id}/messages", response_model=TurnResponse)
async def send_message(
    session_id: str,
    body: SendMessageRequest,
    svc: ChatService = Depends(get_chat_service),
):
    try:
        return await svc.send_message(session_id, body.text)
    except KeyError:
        raise NotFoundError("Chat session not found")
