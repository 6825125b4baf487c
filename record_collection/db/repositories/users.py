"""
User repository functions.

Covers account creation, credential checks and API token issuance.
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from record_collection.db import models, schemas
from record_collection.utils import token_crypto

logger = logging.getLogger(__name__)


def _normalize_email(email: Optional[str]) -> Optional[str]:
    if not email:
        return None
    return email.strip().lower()


def get_user(db: Session, user_id: int) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    email = _normalize_email(email)
    if not email:
        return None
    return db.query(models.User).filter(models.User.email == email).first()


def get_user_by_api_token(db: Session, token: Optional[str]) -> Optional[models.User]:
    token = (token or "").strip()
    if not token:
        return None
    user = db.query(models.User).filter(models.User.api_token == token).first()
    if user and token_crypto.tokens_match(token, user.api_token):
        return user
    return None


def create_user(db: Session, user: schemas.UserCreate) -> models.User:
    db_user = models.User(
        name=user.name,
        email=user.email,
        password_hash=token_crypto.hash_password(user.password),
        type=user.type,
    )
    db.add(db_user)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_user)
    return db_user


def authenticate(db: Session, email: str, password: str) -> Optional[models.User]:
    user = get_user_by_email(db, email)
    if not user or not token_crypto.verify_password(password, user.password_hash):
        return None
    return user


def issue_api_token(db: Session, user: models.User, token: Optional[str] = None) -> str:
    """Assign a fresh API token to ``user`` and return it."""
    user.api_token = token or token_crypto.generate_api_token()
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(user)
    logger.info("api_token_issued user_id=%s", user.id)
    return user.api_token