"""Token Verification — extracts and verifies the RS256 access token on each request.

Invariants:
    - Token comes from the `Authentication` cookie first, then `Authorization: Bearer`
    - Only the configured algorithm is accepted (RS256 by default)
    - Missing token, missing key, or bad signature/expiry → AuthenticationError (401)

Design Decisions:
    - PyJWT over hand-rolled verification: handles exp/nbf/iat and algorithm pinning
    - Public key normalized from env form (quoted, escaped newlines) to PEM here,
      so deployment env files can stay single-line
"""

import logging
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

import jwt
from fastapi import Request

from teacher_api.core.errors import AuthenticationError

logger = logging.getLogger(__name__)

TOKEN_COOKIE_NAMES = ("Authentication", "authentication")


@dataclass(frozen=True)
class AuthenticatedUser:
    """Verified token claims."""
    sub: str | None
    rol: str | None = None
    persona_id: str | None = None
    colegio_id: str | None = None
    claims: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "AuthenticatedUser":
        return cls(
            sub=claims.get("sub"),
            rol=claims.get("rol"),
            persona_id=claims.get("personaId"),
            colegio_id=claims.get("colegioId"),
            claims=claims,
        )


def normalize_public_key(raw: str) -> str:
    """Strip one pair of surrounding quotes and turn literal \\n into newlines."""
    key = raw.strip()
    if len(key) >= 2 and key[0] == key[-1] and key[0] in ("'", '"'):
        key = key[1:-1]
    return key.replace("\\n", "\n").strip()


def extract_token(request: Request) -> str | None:
    for name in TOKEN_COOKIE_NAMES:
        value = request.cookies.get(name)
        if value:
            return value
    header = request.headers.get("authorization")
    if header and header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return None


def verify_token(
    token: str | None, public_key: str | None, algorithm: str = "RS256",
) -> AuthenticatedUser:
    """Decode and verify a token, returning its claims."""
    if not token:
        raise AuthenticationError("Missing authentication token")
    if not public_key:
        raise AuthenticationError("JWT public key not configured")
    try:
        claims = jwt.decode(
            token,
            normalize_public_key(public_key),
            algorithms=[algorithm],
            options={"verify_aud": False},
        )
    except jwt.PyJWTError as e:
        logger.warning(f"Token rejected: {e}")
        raise AuthenticationError("Invalid or expired token")
    return AuthenticatedUser.from_claims(claims)


def parse_uuid(value: object) -> UUID | None:
    """UUID from a claim value, None when absent or malformed."""
    if value is None:
        return None
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None
