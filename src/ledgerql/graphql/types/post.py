"""
Post GraphQL type definitions
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Annotated

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Posts
    from .user import User


@strawberry.enum
class SortOrder(Enum):
    """Sort direction."""

    # Lowercase members keep the wire values `asc` / `desc`
    asc = "asc"
    desc = "desc"


@strawberry.type
class Post:
    """Post type for GraphQL API."""

    id: int
    created_at: datetime
    updated_at: datetime
    title: str
    content: str | None
    published: bool
    view_count: int
    author_id: strawberry.Private[int | None]

    @strawberry.field
    async def author(
        self, info: strawberry.Info
    ) -> Annotated["User", strawberry.lazy(".user")] | None:
        """Get the author of this post."""
        if self.author_id is None:
            return None
        from ..resolvers.post import resolve_post_author

        return await resolve_post_author(self, info)

    @classmethod
    def from_row(cls, row: "Posts") -> "Post":
        return cls(
            id=row.id,
            created_at=row.created_at,
            updated_at=row.updated_at,
            title=row.title,
            content=row.content,
            published=row.published,
            view_count=row.view_count,
            author_id=row.author_id,
        )
