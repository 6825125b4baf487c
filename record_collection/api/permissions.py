"""
Permission checks for record access control.

Three tiers: guests and regular users may browse and search; only admins
(``User.type == 1``) may create or edit records.
"""
from typing import Optional

from record_collection.db import models


def is_admin(user: Optional[models.User]) -> bool:
    if user is None:
        return False
    return getattr(user, "type", None) == models.USER_TYPE_ADMIN


def can_manage_records(user: Optional[models.User]) -> bool:
    return is_admin(user)
