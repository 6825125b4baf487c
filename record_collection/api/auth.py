"""
Session login/logout views.
"""
import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from record_collection.api.deps import SESSION_USER_KEY, get_current_user
from record_collection.api.templating import flash, render
from record_collection.db.database import get_db
from record_collection.db.repositories import users as user_repo

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


@router.get("/login", response_class=HTMLResponse)
def login_form(request: Request, user=Depends(get_current_user)):
    if user is not None:
        return RedirectResponse(url="/records", status_code=status.HTTP_303_SEE_OTHER)
    return render(request, "auth/login.html", user, email="", error=None)


@router.post("/login", response_class=HTMLResponse)
def login(
    request: Request,
    email: str = Form(default=""),
    password: str = Form(default=""),
    db: Session = Depends(get_db),
):
    user = user_repo.authenticate(db, email, password)
    if user is None:
        logger.info("login_failed email=%s", (email or "").strip().lower())
        return render(
            request,
            "auth/login.html",
            None,
            status_code=400,
            email=email,
            error="These credentials do not match our records.",
        )
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id
    logger.info("login_succeeded user_id=%s", user.id)
    return RedirectResponse(url="/records", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    flash(request, "You have been logged out.", "info")
    return RedirectResponse(url="/records", status_code=status.HTTP_303_SEE_OTHER)
