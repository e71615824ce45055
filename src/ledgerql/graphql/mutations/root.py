"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.post import Post
from ..types.user import User


# Input types for mutations
@strawberry.input
class PostCreateInput:
    """Input for creating a post."""

    title: str
    content: str | None = None


@strawberry.input
class UserCreateInput:
    """Input for signing up a user, optionally with initial posts."""

    email: str
    name: str | None = None
    posts: list[PostCreateInput] | None = None


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # User mutations
    @strawberry.mutation(name="signupUser")
    async def signup_user(self, info: strawberry.Info, data: UserCreateInput) -> User:
        """Create a user and any posts given with it."""
        from ..resolvers.user import signup_user

        return await signup_user(info, data)

    # Post mutations
    @strawberry.mutation(name="createDraft")
    async def create_draft(
        self, info: strawberry.Info, data: PostCreateInput, author_email: str
    ) -> Post | None:
        """Create an unpublished post for an existing user."""
        from ..resolvers.post import create_draft

        return await create_draft(info, data, author_email)

    @strawberry.mutation(name="togglePublishPost")
    async def toggle_publish_post(self, info: strawberry.Info, id: int) -> Post | None:
        """Publish a draft or unpublish a published post."""
        from ..resolvers.post import toggle_publish_post

        return await toggle_publish_post(info, id)

    @strawberry.mutation(name="incrementPostViewCount")
    async def increment_post_view_count(self, info: strawberry.Info, id: int) -> Post | None:
        """Record one more view of a post."""
        from ..resolvers.post import increment_post_view_count

        return await increment_post_view_count(info, id)

    @strawberry.mutation(name="deletePost")
    async def delete_post(self, info: strawberry.Info, id: int) -> Post | None:
        """Delete a post."""
        from ..resolvers.post import delete_post

        return await delete_post(info, id)
