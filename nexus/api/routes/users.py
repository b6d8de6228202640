"""
nexus.api.routes.users — Caller profile & dashboard
====================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from nexus.api.deps import CurrentIdentity, get_engine
from nexus.services import account_service

router = APIRouter(prefix="/user", tags=["user"])


class SkillsUpdate(BaseModel):
    technical: int | None = Field(default=None, ge=0, le=100)
    communication: int | None = Field(default=None, ge=0, le=100)
    leadership: int | None = Field(default=None, ge=0, le=100)
    design: int | None = Field(default=None, ge=0, le=100)


class ProfileUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    role: str | None = Field(default=None, min_length=1, max_length=100)
    skills: SkillsUpdate | None = None

    @field_validator("name", "role")
    @classmethod
    def _not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("must not be blank")
        return v


@router.get("/profile")
def get_profile(identity: CurrentIdentity, engine=Depends(get_engine)):
    return account_service.get_profile(engine, identity.account_id)


@router.put("/profile")
def update_profile(
    body: ProfileUpdate,
    identity: CurrentIdentity,
    engine=Depends(get_engine),
):
    user = account_service.update_profile(
        engine,
        identity.account_id,
        name=body.name,
        role=body.role,
        skills=body.skills.model_dump(exclude_none=True) if body.skills else None,
    )
    return {"message": "Profile updated", "user": user}


@router.get("/dashboard")
def dashboard(identity: CurrentIdentity, engine=Depends(get_engine)):
    return account_service.get_dashboard(engine, identity.account_id)
