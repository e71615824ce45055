from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry
from sqlalchemy import select

from ...dbmodels import Posts, Users
from ...errors import InvalidArgumentError
from ...logging import get_logger
from ..context import get_database, get_loaders
from ..filtering import contains_any, paginate

if TYPE_CHECKING:
    from ..mutations.root import UserCreateInput
    from ..queries.root import UserUniqueInput
    from ..types.post import Post
    from ..types.user import User

logger = get_logger(__name__)


# Query resolvers
async def resolve_all_users(
    info: strawberry.Info, name_filter: str | None, skip: int | None, take: int | None
) -> list[User]:
    """List users, optionally keeping only those whose name contains `name_filter`."""
    db = get_database(info)

    stmt = select(Users)
    condition = contains_any(name_filter, Users.name)
    if condition is not None:
        stmt = stmt.where(condition)
    stmt = paginate(stmt.order_by(Users.id), skip, take)

    async with db.session() as session:
        result = await session.execute(stmt)
        users = result.scalars().all()

        from ..types.user import User as UserType

        return [UserType.from_row(user) for user in users]


async def resolve_drafts_by_user(
    info: strawberry.Info, user_unique_input: UserUniqueInput
) -> list[Post] | None:
    """
    Resolve the unpublished posts of one user.

    The user is matched on every key given in `user_unique_input`. Returns
    None when no such user exists.
    """
    if user_unique_input.id is None and not user_unique_input.email:
        raise InvalidArgumentError("userUniqueInput requires an id or an email")

    db = get_database(info)

    async with db.session() as session:
        user_stmt = select(Users)
        if user_unique_input.id is not None:
            user_stmt = user_stmt.where(Users.id == user_unique_input.id)
        if user_unique_input.email:
            user_stmt = user_stmt.where(Users.email == user_unique_input.email)

        result = await session.execute(user_stmt)
        user = result.scalar_one_or_none()

        if not user:
            logger.info(
                "User not found",
                user_id=user_unique_input.id,
                email=user_unique_input.email,
            )
            return None

        drafts_stmt = (
            select(Posts)
            .where(Posts.author_id == user.id, Posts.published.is_(False))
            .order_by(Posts.id)
        )
        drafts_result = await session.execute(drafts_stmt)
        drafts = drafts_result.scalars().all()

        from ..types.post import Post as PostType

        return [PostType.from_row(post) for post in drafts]


# User field resolvers
async def resolve_user_posts(user: User, info: strawberry.Info) -> list[Post]:
    """Resolve every post written by the user, batched per request."""
    posts = await get_loaders(info).posts_by_author_loader.load(user.id)

    from ..types.post import Post as PostType

    return [PostType.from_row(post) for post in posts]


# Mutation resolvers
async def signup_user(info: strawberry.Info, data: UserCreateInput) -> User:
    """
    Create a user together with any posts given in the input.

    The user and its posts are written in one transaction; a duplicate email
    surfaces as the store's integrity error.
    """
    db = get_database(info)

    async with db.session() as session:
        new_user = Users(
            name=data.name,
            email=data.email,
            posts=[Posts(title=post.title, content=post.content) for post in data.posts or []],
        )
        session.add(new_user)
        await session.flush()

        logger.info(
            "User signed up",
            user_id=new_user.id,
            post_count=len(data.posts or []),
        )

        from ..types.user import User as UserType

        return UserType.from_row(new_user)
