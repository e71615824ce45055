"""
Account, Category and Transaction GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Accounts, Categories, Transactions


@strawberry.type
class Account:
    """Bank account."""

    id: str
    name: str | None
    bank: str | None

    @classmethod
    def from_row(cls, row: "Accounts") -> "Account":
        return cls(id=row.id, name=row.name, bank=row.bank)


@strawberry.type
class Category:
    """Spending category."""

    id: str
    name: str | None
    color: str | None

    @classmethod
    def from_row(cls, row: "Categories") -> "Category":
        return cls(id=row.id, name=row.name, color=row.color)


@strawberry.type
class Transaction:
    """Single account movement as loaded from a bank export."""

    id: str
    account_id: str | None
    category_id: str | None
    category: str | None
    reference: str | None
    amount: float | None
    currency: str | None
    date: datetime | None

    @classmethod
    def from_row(cls, row: "Transactions") -> "Transaction":
        return cls(
            id=row.id,
            account_id=row.account_id,
            category_id=row.category_id,
            category=row.category,
            reference=row.reference,
            amount=row.amount,
            currency=row.currency,
            date=row.date,
        )
