"""Assistant chat, direct messages and the live conversation stream."""

import asyncio
import json
from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from culinary_studio.api.dependencies import (
    get_container,
    optional_session,
    require_session,
)
from culinary_studio.api.schemas import MessageRequest
from culinary_studio.containers import AppContainer
from culinary_studio.domain.messages import conversation_line
from culinary_studio.services.realtime import Subscription
from culinary_studio.services.sessions import StudioSession

router = APIRouter(prefix="/chat", tags=["chat"])

KEEPALIVE_SECONDS = 15.0


@router.post("/ai")
async def ask_ai(
    body: MessageRequest,
    session: StudioSession | None = Depends(optional_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Answer a cooking question; anonymous questions are not stored."""
    line = await container.chat_service.ask_ai(
        body.text, session.user_id if session else None
    )
    return {"message": line}


@router.get("/chefs")
async def chefs(
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return {"chefs": container.chat_service.chefs(session.user_id)}


@router.get("/direct/{chef_id}")
async def history(
    chef_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return {"messages": container.chat_service.history(session.user_id, chef_id)}


@router.post("/direct/{chef_id}")
async def send(
    chef_id: str,
    body: MessageRequest,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return {"message": container.chat_service.send(session.user_id, chef_id, body.text)}


@router.get("/direct/{chef_id}/stream")
async def stream(
    chef_id: str,
    request: Request,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> StreamingResponse:
    """Push messages from ``chef_id`` as server-sent events."""
    inbox = await container.session_manager.inbox(session)
    subscription = inbox.subscribe()
    return StreamingResponse(
        _conversation_events(request, subscription, session.user_id, chef_id),
        media_type="text/event-stream",
    )


async def _conversation_events(
    request: Request, subscription: Subscription, user_id: str, chef_id: str
) -> AsyncIterator[str]:
    try:
        while not subscription.closed and not await request.is_disconnected():
            try:
                message = await asyncio.wait_for(
                    subscription.get(), timeout=KEEPALIVE_SECONDS
                )
            except TimeoutError:
                yield ": keepalive\n\n"
                continue
            if message.sender_id != chef_id:
                continue
            line = conversation_line(message, user_id)
            payload = {"role": line.role, "text": line.text, "sender_id": chef_id}
            yield f"data: {json.dumps(payload)}\n\n"
    finally:
        subscription.close()
