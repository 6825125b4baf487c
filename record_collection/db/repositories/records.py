"""
Record repository functions.

Implements record CRUD plus the filtered, sorted and paginated listings
used by the HTML views and the JSON search API.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session

from record_collection.db import models, schemas

logger = logging.getLogger(__name__)

SORT_LABEL = "label"
SORT_ARTIST = "artist"
SORT_CATALOG_NO = "catalog_no"
SORT_OPTIONS = (SORT_LABEL, SORT_ARTIST, SORT_CATALOG_NO)
DEFAULT_SORT = SORT_LABEL

SEARCH_ALL = "all"
SEARCH_BY_OPTIONS = (SEARCH_ALL, "artist", "title", "label", "catalog_no")
DEFAULT_SEARCH_BY = SEARCH_ALL

API_FILTER_FIELDS = ("artist", "title", "label", "catalog_no")

_LIKE_ESCAPE = "\\"

# Largest id a signed 64-bit INTEGER column can hold
MAX_RECORD_ID = 2**63 - 1


def normalize_sort(sort: Optional[str]) -> str:
    return sort if sort in SORT_OPTIONS else DEFAULT_SORT


def normalize_search_by(search_by: Optional[str]) -> str:
    return search_by if search_by in SEARCH_BY_OPTIONS else DEFAULT_SEARCH_BY


def _contains_pattern(term: str) -> str:
    """Build a LIKE pattern that matches ``term`` literally anywhere."""
    escaped = (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _contains(column, term: str):
    return column.ilike(_contains_pattern(term), escape=_LIKE_ESCAPE)


def _apply_sort(query: Query, sort: Optional[str]) -> Query:
    Record = models.Record
    sort = normalize_sort(sort)
    if sort == SORT_ARTIST:
        columns = [Record.artist.asc(), Record.label.asc(), Record.title.asc()]
    elif sort == SORT_CATALOG_NO:
        columns = [
            Record.catalog_no.asc().nulls_last(),
            Record.label.asc(),
            Record.artist.asc(),
            Record.title.asc(),
        ]
    else:
        columns = [Record.label.asc(), Record.artist.asc(), Record.title.asc()]
    # id tiebreaker keeps page boundaries stable between requests
    return query.order_by(*columns, Record.id.asc())


def _apply_search(query: Query, term: str, search_by: str) -> Query:
    Record = models.Record
    if search_by == "label":
        return query.filter(func.lower(Record.label) == func.lower(term))
    if search_by in ("artist", "title", "catalog_no"):
        return query.filter(_contains(getattr(Record, search_by), term))
    return query.filter(or_(_contains(Record.artist, term), _contains(Record.title, term)))


def _paginate(query: Query, page: int, per_page: int) -> Tuple[List[models.Record], int]:
    total = query.order_by(None).count()
    offset = (max(page, 1) - 1) * per_page
    if offset >= total:
        # past the last page
        return [], total
    items = query.offset(offset).limit(per_page).all()
    return items, total


def count_records(db: Session) -> int:
    return db.query(func.count(models.Record.id)).scalar() or 0


def get_record(db: Session, record_id: int) -> Optional[models.Record]:
    if not 0 < record_id <= MAX_RECORD_ID:
        return None
    return db.query(models.Record).filter(models.Record.id == record_id).first()


def list_records(
    db: Session,
    *,
    sort: Optional[str] = None,
    page: int = 1,
    per_page: int = 23,
) -> Tuple[List[models.Record], int]:
    """Return one page of the full collection plus the total row count."""
    query = _apply_sort(db.query(models.Record), sort)
    return _paginate(query, page, per_page)


def search_records(
    db: Session,
    term: Optional[str],
    *,
    search_by: Optional[str] = None,
    sort: Optional[str] = None,
    page: int = 1,
    per_page: int = 23,
) -> Tuple[List[models.Record], int]:
    """Search a single field (or artist/title for ``all``) and page the result.

    A blank term yields the unfiltered listing.
    """
    term = (term or "").strip()
    query = db.query(models.Record)
    if term:
        query = _apply_search(query, term, normalize_search_by(search_by))
    query = _apply_sort(query, sort)
    return _paginate(query, page, per_page)


def api_search(
    db: Session,
    *,
    search_term: Optional[str] = None,
    filters: Optional[Dict[str, Optional[str]]] = None,
    sort: Optional[str] = None,
) -> List[models.Record]:
    """Unpaginated search used by the JSON API; all supplied filters are ANDed."""
    Record = models.Record
    query = db.query(Record)
    term = (search_term or "").strip()
    if term:
        query = query.filter(
            or_(
                _contains(Record.artist, term),
                _contains(Record.title, term),
                _contains(Record.label, term),
                _contains(Record.catalog_no, term),
            )
        )
    for field, value in (filters or {}).items():
        if field not in API_FILTER_FIELDS:
            continue
        value = (value or "").strip()
        if value:
            query = query.filter(_contains(getattr(Record, field), value))
    return _apply_sort(query, sort).all()


def list_labels(db: Session) -> List[str]:
    rows = (
        db.query(models.Record.label)
        .distinct()
        .order_by(models.Record.label.asc())
        .all()
    )
    return [label for (label,) in rows]


def create_record(db: Session, record: schemas.RecordCreate) -> models.Record:
    db_record = models.Record(**record.model_dump())
    db.add(db_record)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_record)
    logger.info("record_created id=%s artist=%r title=%r", db_record.id, db_record.artist, db_record.title)
    return db_record


def update_record(db: Session, record_id: int, record: schemas.RecordUpdate) -> Optional[models.Record]:
    db_record = get_record(db, record_id)
    if not db_record:
        return None
    for key, value in record.model_dump().items():
        setattr(db_record, key, value)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_record)
    logger.info("record_updated id=%s", db_record.id)
    return db_record
