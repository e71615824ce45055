"""
Root GraphQL query definitions
"""

import strawberry

from ..types.finance import Account, Category, Transaction
from ..types.post import Post, SortOrder
from ..types.user import User


# Input types for queries
@strawberry.input
class UserUniqueInput:
    """Identifies one user by ID, email, or both."""

    id: int | None = None
    email: str | None = None


@strawberry.input
class PostOrderByUpdatedAtInput:
    """Ordering of posts by their last update."""

    updated_at: SortOrder


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def all_users(
        self,
        info: strawberry.Info,
        name_filter: str | None = None,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[User]:
        """List users, optionally filtered by name."""
        from ..resolvers.user import resolve_all_users

        return await resolve_all_users(info, name_filter, skip, take)

    @strawberry.field
    async def all_transactions(
        self,
        info: strawberry.Info,
        search_all: str | None = None,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[Transaction]:
        """List transactions, optionally searched by account, reference or category."""
        from ..resolvers.finance import resolve_all_transactions

        return await resolve_all_transactions(info, search_all, skip, take)

    @strawberry.field
    async def all_categories(
        self, info: strawberry.Info, skip: int | None = None, take: int | None = None
    ) -> list[Category]:
        """List categories."""
        from ..resolvers.finance import resolve_all_categories

        return await resolve_all_categories(info, skip, take)

    @strawberry.field
    async def all_accounts(
        self, info: strawberry.Info, skip: int | None = None, take: int | None = None
    ) -> list[Account]:
        """List accounts."""
        from ..resolvers.finance import resolve_all_accounts

        return await resolve_all_accounts(info, skip, take)

    @strawberry.field
    async def post_by_id(self, info: strawberry.Info, id: int | None = None) -> Post | None:
        """Get a post by ID."""
        from ..resolvers.post import resolve_post_by_id

        return await resolve_post_by_id(info, id)

    @strawberry.field
    async def feed(
        self,
        info: strawberry.Info,
        search_string: str | None = None,
        skip: int | None = None,
        take: int | None = None,
        order_by: PostOrderByUpdatedAtInput | None = None,
    ) -> list[Post]:
        """Get published posts, optionally searched by title or content."""
        from ..resolvers.post import resolve_feed

        return await resolve_feed(info, search_string, skip, take, order_by)

    @strawberry.field
    async def drafts_by_user(
        self, info: strawberry.Info, user_unique_input: UserUniqueInput
    ) -> list[Post] | None:
        """Get the unpublished posts of a user."""
        from ..resolvers.user import resolve_drafts_by_user

        return await resolve_drafts_by_user(info, user_unique_input)
