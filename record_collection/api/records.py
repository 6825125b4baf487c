"""
Record HTML views.

Listing, search, detail, and the admin-only create/edit forms.
"""
import logging
import math
from typing import Dict, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from record_collection.api.deps import get_current_user, require_admin
from record_collection.api.templating import flash, render
from record_collection.db import schemas
from record_collection.db.database import get_db
from record_collection.db.repositories import records as record_repo
from record_collection.utils.settings import records_per_page

router = APIRouter(prefix="/records", tags=["records"])
logger = logging.getLogger(__name__)

SEARCH_BY_CHOICES = [
    ("all", "Artist / Title"),
    ("artist", "Artist"),
    ("title", "Title"),
    ("label", "Label"),
    ("catalog_no", "Catalog #"),
]
SORT_CHOICES = [
    ("label", "Label"),
    ("artist", "Artist"),
    ("catalog_no", "Catalog #"),
]

MSG_CREATED = "The record has been created"
MSG_UPDATED = "Your record has been updated!"


def parse_page(page: Optional[str]) -> int:
    """Return a 1-based page number; anything unusable means page 1."""
    try:
        value = int(page) if page is not None else 1
    except ValueError:
        return 1
    return value if value >= 1 else 1


def _listing(
    request: Request,
    user,
    *,
    items,
    total: int,
    page: int,
    sort: str,
    path: str,
    search_term: str = "",
    search_by: str = record_repo.DEFAULT_SEARCH_BY,
):
    per_page = records_per_page()
    total_pages = math.ceil(total / per_page) if per_page > 0 else 0

    def page_url(target_page: int, target_sort: Optional[str] = None) -> str:
        params = {}
        if search_term:
            params["searchTerm"] = search_term
            params["searchBy"] = search_by
        params["sort"] = target_sort or sort
        params["page"] = target_page
        return f"{path}?{urlencode(params)}"

    return render(
        request,
        "records/index.html",
        user,
        records=items,
        total=total,
        page=page,
        total_pages=total_pages,
        sort=sort,
        search_term=search_term,
        search_by=search_by,
        search_by_choices=SEARCH_BY_CHOICES,
        sort_choices=SORT_CHOICES,
        page_url=page_url,
    )


@router.get("", response_class=HTMLResponse)
def list_records_page(
    request: Request,
    sort: Optional[str] = None,
    page: Optional[str] = None,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    sort = record_repo.normalize_sort(sort)
    page_no = parse_page(page)
    items, total = record_repo.list_records(db, sort=sort, page=page_no, per_page=records_per_page())
    return _listing(request, user, items=items, total=total, page=page_no, sort=sort, path="/records")


@router.get("/search", response_class=HTMLResponse)
def search_records_page(
    request: Request,
    search_term: Optional[str] = Query(default=None, alias="searchTerm"),
    search_by: Optional[str] = Query(default=None, alias="searchBy"),
    sort: Optional[str] = None,
    page: Optional[str] = None,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    term = (search_term or "").strip()
    search_by = record_repo.normalize_search_by(search_by)
    sort = record_repo.normalize_sort(sort)
    page_no = parse_page(page)
    items, total = record_repo.search_records(
        db,
        term,
        search_by=search_by,
        sort=sort,
        page=page_no,
        per_page=records_per_page(),
    )
    return _listing(
        request,
        user,
        items=items,
        total=total,
        page=page_no,
        sort=sort,
        path="/records/search",
        search_term=term,
        search_by=search_by,
    )


def _form_values(artist: str, title: str, label: str, new_label: str, catalog_no: str) -> Dict[str, str]:
    chosen_label = (new_label or "").strip() or (label or "").strip()
    return {
        "artist": artist or "",
        "title": title or "",
        "label": chosen_label,
        "catalog_no": catalog_no or "",
    }


def _validation_messages(exc: ValidationError) -> Dict[str, str]:
    messages: Dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err.get("loc") else "form"
        if field in messages:
            continue
        pretty = field.replace("_", " ")
        if err.get("type") in ("missing", "string_too_short"):
            messages[field] = f"The {pretty} field is required."
        elif err.get("type") == "string_too_long":
            limit = (err.get("ctx") or {}).get("max_length")
            messages[field] = f"The {pretty} may not be greater than {limit} characters."
        else:
            messages[field] = err.get("msg", "Invalid value.")
    return messages


def _render_form(request: Request, user, db: Session, *, record_id=None, values=None, errors=None, status_code=200):
    return render(
        request,
        "records/form.html",
        user,
        status_code=status_code,
        record_id=record_id,
        values=values or {"artist": "", "title": "", "label": "", "catalog_no": ""},
        errors=errors or {},
        labels=record_repo.list_labels(db),
    )


@router.get("/create", response_class=HTMLResponse)
def create_record_form(
    request: Request,
    db: Session = Depends(get_db),
    user=Depends(require_admin),
):
    return _render_form(request, user, db)


@router.post("", response_class=HTMLResponse)
def store_record(
    request: Request,
    artist: str = Form(default=""),
    title: str = Form(default=""),
    label: str = Form(default=""),
    new_label: str = Form(default=""),
    catalog_no: str = Form(default=""),
    db: Session = Depends(get_db),
    user=Depends(require_admin),
):
    values = _form_values(artist, title, label, new_label, catalog_no)
    try:
        payload = schemas.RecordCreate(**values)
    except ValidationError as exc:
        logger.info("record_form_invalid fields=%s", sorted(_validation_messages(exc)))
        return _render_form(
            request, user, db,
            values=values,
            errors=_validation_messages(exc),
            status_code=422,
        )
    created = record_repo.create_record(db, payload)
    flash(request, MSG_CREATED)
    return RedirectResponse(url=f"/records/{created.id}", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/{record_id}", response_class=HTMLResponse)
def show_record(
    request: Request,
    record_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    record = record_repo.get_record(db, record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Record not found")
    return render(request, "records/show.html", user, record=record)


@router.get("/{record_id}/edit", response_class=HTMLResponse)
def edit_record_form(
    request: Request,
    record_id: int,
    db: Session = Depends(get_db),
    user=Depends(require_admin),
):
    record = record_repo.get_record(db, record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Record not found")
    values = {
        "artist": record.artist,
        "title": record.title,
        "label": record.label,
        "catalog_no": record.catalog_no or "",
    }
    return _render_form(request, user, db, record_id=record.id, values=values)


@router.post("/{record_id}", response_class=HTMLResponse)
def update_record(
    request: Request,
    record_id: int,
    artist: str = Form(default=""),
    title: str = Form(default=""),
    label: str = Form(default=""),
    new_label: str = Form(default=""),
    catalog_no: str = Form(default=""),
    db: Session = Depends(get_db),
    user=Depends(require_admin),
):
    if not record_repo.get_record(db, record_id):
        raise HTTPException(status_code=404, detail="Record not found")
    values = _form_values(artist, title, label, new_label, catalog_no)
    try:
        payload = schemas.RecordUpdate(**values)
    except ValidationError as exc:
        logger.info("record_form_invalid fields=%s", sorted(_validation_messages(exc)))
        return _render_form(
            request, user, db,
            record_id=record_id,
            values=values,
            errors=_validation_messages(exc),
            status_code=422,
        )
    updated = record_repo.update_record(db, record_id, payload)
    flash(request, MSG_UPDATED)
    return RedirectResponse(url=f"/records/{updated.id}", status_code=status.HTTP_303_SEE_OTHER)
