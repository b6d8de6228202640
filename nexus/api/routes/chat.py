"""
nexus.api.routes.chat — Assistant
==================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from nexus.api.deps import CurrentIdentity, get_config, get_engine
from nexus.config import NexusConfig
from nexus.services import chat_service

router = APIRouter(prefix="/chat", tags=["chat"])


class ChatMessage(BaseModel):
    message: str = Field(min_length=1, max_length=2000)


@router.post("")
def send_message(body: ChatMessage, identity: CurrentIdentity, engine=Depends(get_engine)):
    return chat_service.send_message(engine, identity.account_id, body.message)


@router.get("/history")
def history(
    identity: CurrentIdentity,
    cfg: NexusConfig = Depends(get_config),
    engine=Depends(get_engine),
):
    return chat_service.get_history(
        engine, identity.account_id, limit=cfg.chat_history_limit
    )
