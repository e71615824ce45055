from sqlalchemy import select
from strawberry.dataloader import DataLoader

from ..database.connection import Database
from ..dbmodels import Posts, Users


class Loaders:
    """Per-request batch loaders bound to the injected Database."""

    def __init__(self, db: Database):
        self.db = db
        self.user_loader = DataLoader(load_fn=self.load_users)
        self.posts_by_author_loader = DataLoader(load_fn=self.load_posts_by_author)

    async def load_users(self, keys: list[int]) -> list[Users | None]:
        """Batch load users by ID."""
        async with self.db.session() as session:
            stmt = select(Users).where(Users.id.in_(keys))
            result = await session.execute(stmt)
            users = result.scalars().all()
            users_map = {user.id: user for user in users}
            return [users_map.get(key) for key in keys]

    async def load_posts_by_author(self, keys: list[int]) -> list[list[Posts]]:
        """Batch load every post of each author ID, ordered by post ID."""
        async with self.db.session() as session:
            stmt = select(Posts).where(Posts.author_id.in_(keys)).order_by(Posts.id)
            result = await session.execute(stmt)
            grouped: dict[int, list[Posts]] = {key: [] for key in keys}
            for post in result.scalars().all():
                grouped[post.author_id].append(post)
            return [grouped[key] for key in keys]
