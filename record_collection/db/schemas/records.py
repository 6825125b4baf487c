from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip(value):
    if isinstance(value, str):
        return value.strip()
    return value


class RecordBase(BaseModel):
    artist: str = Field(min_length=1, max_length=255)
    title: str = Field(min_length=1, max_length=255)
    label: str = Field(min_length=1, max_length=255)
    catalog_no: Optional[str] = Field(default=None, max_length=64)

    @field_validator("artist", "title", "label", mode="before")
    @classmethod
    def _strip_required(cls, v):
        return _strip(v)

    @field_validator("catalog_no", mode="before")
    @classmethod
    def _blank_catalog_no(cls, v):
        v = _strip(v)
        return v or None


class RecordCreate(RecordBase):
    pass


class RecordUpdate(RecordBase):
    pass


class RecordSummary(BaseModel):
    """Public JSON shape used by the search API."""
    id: int
    artist: str
    title: str
    label: str
    catalog_no: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class RecordSearchResponse(BaseModel):
    results: int
    records: List[RecordSummary]
