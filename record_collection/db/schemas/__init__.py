"""
Pydantic schemas re-exported from one import point.
"""

from .users import UserBase, UserCreate
from .records import (
    RecordBase,
    RecordCreate,
    RecordUpdate,
    RecordSummary,
    RecordSearchResponse,
)

__all__ = [
    "UserBase",
    "UserCreate",
    "RecordBase",
    "RecordCreate",
    "RecordUpdate",
    "RecordSummary",
    "RecordSearchResponse",
]
