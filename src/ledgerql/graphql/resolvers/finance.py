from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry
from sqlalchemy import select

from ...dbmodels import Accounts, Categories, Transactions
from ..context import get_database
from ..filtering import contains_any, paginate

if TYPE_CHECKING:
    from ..types.finance import Account, Category, Transaction


async def resolve_all_transactions(
    info: strawberry.Info, search_all: str | None, skip: int | None, take: int | None
) -> list[Transaction]:
    """
    List transactions, optionally matching `search_all` against the account
    id, the reference or the category label.
    """
    db = get_database(info)

    stmt = select(Transactions)
    condition = contains_any(
        search_all,
        Transactions.account_id,
        Transactions.reference,
        Transactions.category,
    )
    if condition is not None:
        stmt = stmt.where(condition)
    stmt = paginate(stmt.order_by(Transactions.id), skip, take)

    async with db.session() as session:
        result = await session.execute(stmt)
        rows = result.scalars().all()

        from ..types.finance import Transaction as TransactionType

        return [TransactionType.from_row(row) for row in rows]


async def resolve_all_categories(
    info: strawberry.Info, skip: int | None, take: int | None
) -> list[Category]:
    db = get_database(info)
    stmt = paginate(select(Categories).order_by(Categories.id), skip, take)

    async with db.session() as session:
        result = await session.execute(stmt)
        rows = result.scalars().all()

        from ..types.finance import Category as CategoryType

        return [CategoryType.from_row(row) for row in rows]


async def resolve_all_accounts(
    info: strawberry.Info, skip: int | None, take: int | None
) -> list[Account]:
    db = get_database(info)
    stmt = paginate(select(Accounts).order_by(Accounts.id), skip, take)

    async with db.session() as session:
        result = await session.execute(stmt)
        rows = result.scalars().all()

        from ..types.finance import Account as AccountType

        return [AccountType.from_row(row) for row in rows]
