"""
SQLAlchemy models for the record collection.

Exposes `Base`, `now_utc`, and all ORM classes from one import point.
"""

from .base import Base, now_utc  # re-export

from .users import User, USER_TYPE_REGULAR, USER_TYPE_ADMIN
from .records import Record, RECORDS_TABLE

__all__ = [
    # base
    "Base",
    "now_utc",
    # users
    "User",
    "USER_TYPE_REGULAR",
    "USER_TYPE_ADMIN",
    # records
    "Record",
    "RECORDS_TABLE",
]
