"""
nexus.api.deps — FastAPI dependency injection
==============================================
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Annotated

import jwt
from fastapi import Depends, Header
from sqlalchemy import Engine

from nexus.config import NexusConfig, load_config
from nexus.database.engine import create_db_engine
from nexus.exceptions import AuthenticationError, AuthorizationError
from nexus.security import Identity, decode_token

logger = logging.getLogger(__name__)

_WEAK_SECRETS = frozenset({
    "nexus-dev-secret-change-me",
    "change-me",
    "your_jwt_secret_key",
    "secret",
    "dev",
    "",
})

_MIN_SECRET_LENGTH = 32


def _load_jwt_secret() -> str:
    """Load and validate JWT_SECRET from the environment.

    Raises RuntimeError at import time if the secret is missing, blank,
    too short (< 32 chars), or a known weak default.
    """
    secret = os.getenv("JWT_SECRET", "")
    if not secret:
        raise RuntimeError(
            "JWT_SECRET environment variable is not set. "
            "Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(64))\""
        )
    if secret in _WEAK_SECRETS:
        raise RuntimeError(
            f"JWT_SECRET is set to a known weak default ('{secret}'). "
            "Please set a strong, unique secret."
        )
    if len(secret) < _MIN_SECRET_LENGTH:
        raise RuntimeError(
            f"JWT_SECRET is too short ({len(secret)} chars). "
            f"Minimum length is {_MIN_SECRET_LENGTH} characters."
        )
    return secret


JWT_SECRET: str = _load_jwt_secret()


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return create_db_engine()


@lru_cache(maxsize=1)
def get_config() -> NexusConfig:
    return load_config()


def get_current_identity(
    authorization: Annotated[str | None, Header()] = None,
) -> Identity:
    """Resolve the bearer token into an :class:`Identity`.

    No token → 401 ``Access token required``; a token that fails
    verification → 403 ``Invalid token``.
    """
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Access token required")
    try:
        return decode_token(token.strip(), JWT_SECRET)
    except jwt.InvalidTokenError as exc:
        logger.warning("Rejected bearer token: %s", exc)
        raise AuthorizationError("Invalid token") from exc


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
