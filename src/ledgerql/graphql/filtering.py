"""
Shared filter and pagination helpers for list resolvers
"""

from typing import Any

from sqlalchemy import ColumnElement, Select, or_

from ..errors import InvalidArgumentError


def contains_any(text: str | None, *columns: Any) -> ColumnElement[bool] | None:
    """
    Build a case-sensitive substring predicate OR-ed across the given columns.

    Returns None when no filter text was supplied so callers can skip the
    WHERE clause entirely. LIKE wildcards in the text match literally.
    """
    if not text:
        return None
    return or_(*(column.contains(text, autoescape=True) for column in columns))


def paginate(stmt: Select, skip: int | None, take: int | None) -> Select:
    """Apply offset/limit to a select, rejecting negative values."""
    if skip is not None:
        if skip < 0:
            raise InvalidArgumentError(f"skip must be non-negative, got {skip}")
        stmt = stmt.offset(skip)
    if take is not None:
        if take < 0:
            raise InvalidArgumentError(f"take must be non-negative, got {take}")
        stmt = stmt.limit(take)
    return stmt
