"""
nexus.api.auth — Registration, login & JWT issuance
====================================================

Both routes are ``async`` and push the bcrypt + database work through
:func:`~nexus.database.engine.run_db` so hashing never blocks the loop.
"""

from __future__ import annotations

import logging
import re
from datetime import timedelta

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from nexus.api.deps import JWT_SECRET, get_config, get_engine
from nexus.config import NexusConfig
from nexus.database.engine import run_db
from nexus.security import MAX_PASSWORD_BYTES, Identity, issue_token
from nexus.services import account_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------
class RegisterBody(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=255)
    password: str = Field(min_length=8, max_length=72)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v

    @field_validator("email")
    @classmethod
    def _email_shape(cls, v: str) -> str:
        v = v.strip().lower()
        if not _EMAIL_RE.match(v):
            raise ValueError("Invalid email address")
        return v

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginBody(BaseModel):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=200)


def _token_for(user: dict, cfg: NexusConfig) -> str:
    return issue_token(
        Identity(account_id=user["id"], email=user["email"]),
        JWT_SECRET,
        timedelta(days=cfg.token_ttl_days),
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
@router.post("/register", status_code=201)
async def register(
    body: RegisterBody,
    cfg: NexusConfig = Depends(get_config),
    engine=Depends(get_engine),
):
    user = await run_db(
        account_service.register,
        engine,
        name=body.name,
        email=body.email,
        password=body.password,
    )
    return {
        "message": "User registered successfully",
        "token": _token_for(user, cfg),
        "user": user,
    }


@router.post("/login")
async def login(
    body: LoginBody,
    cfg: NexusConfig = Depends(get_config),
    engine=Depends(get_engine),
):
    user = await run_db(
        account_service.authenticate,
        engine,
        email=body.email,
        password=body.password,
    )
    return {
        "message": "Login successful",
        "token": _token_for(user, cfg),
        "user": user,
    }
