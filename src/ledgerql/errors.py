"""
Domain errors raised by LedgerQL resolvers.

Strawberry reports any exception raised from a resolver as an entry in the
GraphQL ``errors`` list, so these only need a readable message.
"""

from __future__ import annotations

from typing import Any


class LedgerQLError(Exception):
    """Base class for LedgerQL domain errors."""

    pass


class NotFoundError(LedgerQLError):
    """Raised when a row looked up by identifier does not exist."""

    entity: str = "Entity"

    def __init__(self, key: str, value: Any):
        self.key = key
        self.value = value
        super().__init__(f"{self.entity} with {key} {value} does not exist in the database.")


class PostNotFoundError(NotFoundError):
    entity = "Post"

    def __init__(self, post_id: int):
        self.post_id = post_id
        super().__init__("ID", post_id)


class UserNotFoundError(NotFoundError):
    entity = "User"


class InvalidArgumentError(LedgerQLError, ValueError):
    """Raised when query arguments cannot be turned into a store call."""

    pass
