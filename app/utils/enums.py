"""Utility functions for handling enum/string values safely."""
from enum import Enum


def enum_to_str(v):
    """
    Safely convert enum or string value to string.

    ORM string columns hand back plain strings while freshly built objects
    still hold the enum member; both compare and serialize the same way after this.

    Examples:
        >>> enum_to_str(LocationStatus.APPROVED)
        'approved'
        >>> enum_to_str('approved')
        'approved'
        >>> enum_to_str(None)
    """
    if v is None:
        return None
    if isinstance(v, Enum):
        return v.value
    return str(v)
