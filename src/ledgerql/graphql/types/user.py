"""
User GraphQL type definitions
"""

from typing import TYPE_CHECKING, Annotated

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Users
    from .post import Post


@strawberry.type
class User:
    """User type for GraphQL API."""

    id: int
    name: str | None
    email: str

    @strawberry.field
    async def posts(
        self, info: strawberry.Info
    ) -> list[Annotated["Post", strawberry.lazy(".post")]]:
        """Get posts written by this user."""
        from ..resolvers.user import resolve_user_posts

        return await resolve_user_posts(self, info)

    @classmethod
    def from_row(cls, row: "Users") -> "User":
        return cls(id=row.id, name=row.name, email=row.email)
