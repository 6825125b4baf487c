"""
Read-only JSON search API.

Mirrors the HTML search for token holders: ``GET /api/records?api_token=...``.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from record_collection.api.deps import get_api_user
from record_collection.db import schemas
from record_collection.db.database import get_db
from record_collection.db.repositories import records as record_repo

router = APIRouter(prefix="/api/records", tags=["api"])
logger = logging.getLogger(__name__)


@router.get("", response_model=schemas.RecordSearchResponse)
def api_search_records(
    search_term: Optional[str] = Query(default=None, alias="searchTerm"),
    artist: Optional[str] = None,
    title: Optional[str] = None,
    label: Optional[str] = None,
    catalog_no: Optional[str] = None,
    sort: Optional[str] = None,
    db: Session = Depends(get_db),
    api_user=Depends(get_api_user),
):
    records = record_repo.api_search(
        db,
        search_term=search_term,
        filters={"artist": artist, "title": title, "label": label, "catalog_no": catalog_no},
        sort=sort,
    )
    logger.info("api_search user_id=%s results=%d", api_user.id, len(records))
    if not records:
        return JSONResponse(
            {"error": "No records found.", "results": 0, "records": []},
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return schemas.RecordSearchResponse(
        results=len(records),
        records=[schemas.RecordSummary.model_validate(r) for r in records],
    )
