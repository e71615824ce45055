from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry
from sqlalchemy import delete, not_, select, update
from sqlalchemy.exc import SQLAlchemyError

from ...dbmodels import Posts, Users
from ...errors import PostNotFoundError, UserNotFoundError
from ...logging import get_logger
from ..context import get_database, get_loaders
from ..filtering import contains_any, paginate

if TYPE_CHECKING:
    from ..mutations.root import PostCreateInput
    from ..queries.root import PostOrderByUpdatedAtInput
    from ..types.post import Post
    from ..types.user import User

logger = get_logger(__name__)


# Query resolvers
async def resolve_post_by_id(info: strawberry.Info, id: int | None) -> Post | None:
    """Resolve a post by its ID; None when no ID is given or no row matches."""
    if id is None:
        return None

    db = get_database(info)

    async with db.session() as session:
        result = await session.execute(select(Posts).where(Posts.id == id))
        post = result.scalar_one_or_none()

        if not post:
            logger.info("Post not found", post_id=id)
            return None

        from ..types.post import Post as PostType

        return PostType.from_row(post)


async def resolve_feed(
    info: strawberry.Info,
    search_string: str | None,
    skip: int | None,
    take: int | None,
    order_by: PostOrderByUpdatedAtInput | None,
) -> list[Post]:
    """
    Resolve published posts, optionally matching `search_string` against the
    title or content.

    Results follow `order_by.updated_at` when given, with post ID as the
    tie-breaker.
    """
    from ..types.post import SortOrder

    db = get_database(info)

    stmt = select(Posts).where(Posts.published.is_(True))
    condition = contains_any(search_string, Posts.title, Posts.content)
    if condition is not None:
        stmt = stmt.where(condition)

    if order_by is not None:
        if order_by.updated_at == SortOrder.desc:
            stmt = stmt.order_by(Posts.updated_at.desc())
        else:
            stmt = stmt.order_by(Posts.updated_at.asc())
    stmt = paginate(stmt.order_by(Posts.id), skip, take)

    async with db.session() as session:
        result = await session.execute(stmt)
        posts = result.scalars().all()

        from ..types.post import Post as PostType

        return [PostType.from_row(post) for post in posts]


# Post field resolvers
async def resolve_post_author(post: Post, info: strawberry.Info) -> User | None:
    """Resolve the author of a post, batched per request."""
    if post.author_id is None:
        return None

    author = await get_loaders(info).user_loader.load(post.author_id)
    if author is None:
        return None

    from ..types.user import User as UserType

    return UserType.from_row(author)


# Mutation resolvers
async def create_draft(info: strawberry.Info, data: PostCreateInput, author_email: str) -> Post:
    """Create an unpublished post owned by the user with `author_email`."""
    db = get_database(info)

    async with db.session() as session:
        result = await session.execute(select(Users.id).where(Users.email == author_email))
        author_id = result.scalar_one_or_none()

        if author_id is None:
            raise UserNotFoundError("email", author_email)

        new_post = Posts(title=data.title, content=data.content, author_id=author_id)
        session.add(new_post)
        await session.flush()
        # Pick up server-side defaults (timestamps)
        await session.refresh(new_post)

        logger.info("Draft created", post_id=new_post.id, author_id=author_id)

        from ..types.post import Post as PostType

        return PostType.from_row(new_post)


async def toggle_publish_post(info: strawberry.Info, id: int) -> Post:
    """
    Invert the published flag of a post.

    The inversion happens in a single UPDATE so concurrent togglers never
    lose a flip. Any store failure is reported as the post not existing.
    """
    db = get_database(info)

    try:
        async with db.session() as session:
            stmt = (
                update(Posts)
                .where(Posts.id == id)
                .values(published=not_(Posts.published))
                .returning(Posts)
            )
            result = await session.execute(stmt)
            post = result.scalar_one_or_none()

            if not post:
                raise PostNotFoundError(id)

            logger.info("Post publish toggled", post_id=id, published=post.published)

            from ..types.post import Post as PostType

            return PostType.from_row(post)
    except SQLAlchemyError as e:
        logger.error("Failed to toggle post", post_id=id, error=str(e))
        raise PostNotFoundError(id) from e


async def increment_post_view_count(info: strawberry.Info, id: int) -> Post:
    """Add one to a post's view count in the store."""
    db = get_database(info)

    async with db.session() as session:
        stmt = (
            update(Posts)
            .where(Posts.id == id)
            .values(view_count=Posts.view_count + 1)
            .returning(Posts)
        )
        result = await session.execute(stmt)
        post = result.scalar_one_or_none()

        if not post:
            raise PostNotFoundError(id)

        from ..types.post import Post as PostType

        return PostType.from_row(post)


async def delete_post(info: strawberry.Info, id: int) -> Post:
    """Delete a post and return it as it was before deletion."""
    db = get_database(info)

    async with db.session() as session:
        result = await session.execute(delete(Posts).where(Posts.id == id).returning(Posts))
        post = result.scalar_one_or_none()

        if not post:
            raise PostNotFoundError(id)

        logger.info("Post deleted", post_id=id)

        from ..types.post import Post as PostType

        return PostType.from_row(post)
