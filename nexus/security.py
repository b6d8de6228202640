"""
nexus.security — Password hashing & bearer tokens
==================================================

* Passwords: salted bcrypt hashes.
* Tokens: HS256 JWTs carrying ``sub`` (account id), ``email`` and ``exp``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

JWT_ALGORITHM = "HS256"

# Work factor for new hashes.  Tests lower it to keep the suite fast.
BCRYPT_ROUNDS = 12

# bcrypt ignores (newer releases reject) input beyond 72 bytes.
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True, slots=True)
class Identity:
    """The caller, as decoded from a verified bearer token."""

    account_id: int
    email: str


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------
def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of *password*."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check *password* against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash or over-long input
        return False


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------
def issue_token(identity: Identity, secret: str, ttl: timedelta) -> str:
    """Sign a bearer token for *identity* valid for *ttl*."""
    payload = {
        "sub": str(identity.account_id),
        "email": identity.email,
        "iat": datetime.now(UTC),
        "exp": datetime.now(UTC) + ttl,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_token(token: str, secret: str) -> Identity:
    """Verify signature + expiry and return the embedded :class:`Identity`.

    Raises
    ------
    jwt.InvalidTokenError
        On a bad signature, expiry, or a payload without a usable ``sub``.
    """
    payload = jwt.decode(
        token,
        secret,
        algorithms=[JWT_ALGORITHM],
        options={"require": ["exp", "sub"]},
    )
    try:
        account_id = int(payload["sub"])
    except (TypeError, ValueError) as exc:
        raise jwt.InvalidTokenError("Token subject is not an account id") from exc
    return Identity(account_id=account_id, email=payload.get("email", ""))
