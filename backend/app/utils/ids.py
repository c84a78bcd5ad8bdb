"""
Identifier helpers.
"""

from typing import Optional
from uuid import UUID, uuid4


def new_id() -> str:
    """Generate a new UUID4 string id."""
    return str(uuid4())


def is_valid_uuid(value: Optional[str]) -> bool:
    """
    Check whether value is a well-formed UUID string.

    Ids are always UUID text, so anything else can never match a stored row.
    """
    if not value:
        return False
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True
