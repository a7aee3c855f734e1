"""Root conftest — shared test configuration and token signing keys."""

import os
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

_private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)

PRIVATE_KEY_PEM = _private_key.private_bytes(
    serialization.Encoding.PEM,
    serialization.PrivateFormat.PKCS8,
    serialization.NoEncryption(),
).decode()
PUBLIC_KEY_PEM = _private_key.public_key().public_bytes(
    serialization.Encoding.PEM,
    serialization.PublicFormat.SubjectPublicKeyInfo,
).decode()

# Env-file form: quoted, newlines escaped
os.environ["JWT_PUBLIC_KEY"] = '"' + PUBLIC_KEY_PEM.replace("\n", "\\n") + '"'
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")


def sign_token(claims: dict, expires_in: int = 3600) -> str:
    payload = {
        **claims,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, PRIVATE_KEY_PEM, algorithm="RS256")


@pytest.fixture
def make_token():
    return sign_token
