"""
nexus.api.routes.achievements — Caller's badges (read-only)
============================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from nexus.api.deps import CurrentIdentity, get_engine
from nexus.services import achievement_service

router = APIRouter(prefix="/achievements", tags=["achievements"])


@router.get("")
def list_achievements(identity: CurrentIdentity, engine=Depends(get_engine)):
    return achievement_service.list_achievements(engine, identity.account_id)
