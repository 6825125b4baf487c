"""
API dependency helpers.

Resolves the session user for HTML views and the token user for the JSON API.
"""
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from record_collection.api.permissions import can_manage_records
from record_collection.db import database, models
from record_collection.db.database import get_db
from record_collection.db.repositories import users as user_repo

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


def get_current_user(request: Request, db: Session = Depends(get_db)) -> Optional[models.User]:
    """Return the logged-in user, or None for guests.

    A session pointing at a deleted user is cleared.
    """
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        return None
    user = user_repo.get_user(db, user_id)
    if user is None:
        request.session.pop(SESSION_USER_KEY, None)
    return user


def require_admin(user: Optional[models.User] = Depends(get_current_user)) -> models.User:
    """Admin-only guard. Answers 404 so hidden pages are not revealed."""
    if not can_manage_records(user):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return user


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip()
    return None


def get_api_user(
    db: Session = Depends(get_db),
    api_token: Optional[str] = Query(default=None),
    authorization: Optional[str] = Header(default=None),
) -> models.User:
    """Resolve the API caller from ``?api_token=`` (preferred) or a Bearer header."""
    token = api_token or _bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthenticated.")
    user = user_repo.get_user_by_api_token(db, token)
    if user is None:
        logger.warning("api_auth_failed: unknown token")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthenticated.")
    return user


def session_user(request: Request) -> Optional[models.User]:
    """Resolve the session user outside dependency injection (error pages)."""
    if request.session.get(SESSION_USER_KEY) is None:
        return None
    db = database.SessionLocal()
    try:
        return get_current_user(request, db)
    finally:
        db.close()
