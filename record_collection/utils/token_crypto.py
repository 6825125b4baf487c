"""
Credential helpers for user passwords and API tokens.

Responsibilities:
- Hash and verify passwords with Argon2id
- Generate url-safe API tokens
- Compare presented tokens in constant time
"""
from __future__ import annotations

import hmac
import secrets
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from argon2.low_level import Type

_argon2 = PasswordHasher(time_cost=2, memory_cost=102400, parallelism=8, hash_len=32, type=Type.ID)

API_TOKEN_BYTES = 40


def hash_password(password: str) -> str:
    return _argon2.hash(password)


def verify_password(password: str, encoded_hash: Optional[str]) -> bool:
    if not password or not encoded_hash:
        return False
    try:
        return _argon2.verify(encoded_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def generate_api_token(length: int = API_TOKEN_BYTES) -> str:
    """Return a high-entropy url-safe token string."""
    return secrets.token_urlsafe(length)


def tokens_match(presented: Optional[str], stored: Optional[str]) -> bool:
    if not presented or not stored:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), stored.encode("utf-8"))
