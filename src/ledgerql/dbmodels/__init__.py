"""
Database models for LedgerQL (authoritative ORM definitions).

This module defines the SQLAlchemy Base with a naming convention for stable
Alembic autogenerate diffs, and exposes `target_metadata` for Alembic.
"""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKeyConstraint,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Naming convention for deterministic constraint/index names in Alembic diffs
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Users(Base):
    __tablename__ = "users"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="users_pkey"),
        UniqueConstraint("email", name="users_email_key"),
    )

    id: Mapped[int] = mapped_column(Integer, autoincrement=True)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str | None] = mapped_column(Text)

    posts: Mapped[list["Posts"]] = relationship(
        "Posts", uselist=True, back_populates="author", order_by="Posts.id"
    )


class Posts(Base):
    __tablename__ = "posts"
    __table_args__ = (
        ForeignKeyConstraint(
            ["author_id"], ["users.id"], ondelete="SET NULL", name="posts_author_id_fkey"
        ),
        PrimaryKeyConstraint("id", name="posts_pkey"),
        Index("idx_posts_author", "author_id"),
        Index("idx_posts_published", "published"),
    )

    id: Mapped[int] = mapped_column(Integer, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(True), nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.now(),
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str | None] = mapped_column(Text)
    published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    view_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )
    author_id: Mapped[int | None] = mapped_column(Integer)

    author: Mapped["Users | None"] = relationship("Users", back_populates="posts")


class Accounts(Base):
    __tablename__ = "accounts"
    __table_args__ = (PrimaryKeyConstraint("id", name="accounts_pkey"),)

    id: Mapped[str] = mapped_column(Text)
    name: Mapped[str | None] = mapped_column(Text)
    bank: Mapped[str | None] = mapped_column(Text)

    transactions: Mapped[list["Transactions"]] = relationship(
        "Transactions", uselist=True, back_populates="account"
    )


class Categories(Base):
    __tablename__ = "categories"
    __table_args__ = (PrimaryKeyConstraint("id", name="categories_pkey"),)

    id: Mapped[str] = mapped_column(Text)
    name: Mapped[str | None] = mapped_column(Text)
    color: Mapped[str | None] = mapped_column(Text)

    transactions: Mapped[list["Transactions"]] = relationship(
        "Transactions", uselist=True, back_populates="category_ref"
    )


class Transactions(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        ForeignKeyConstraint(
            ["account_id"], ["accounts.id"], name="transactions_account_id_fkey"
        ),
        ForeignKeyConstraint(
            ["category_id"], ["categories.id"], name="transactions_category_id_fkey"
        ),
        PrimaryKeyConstraint("id", name="transactions_pkey"),
        Index("idx_transactions_account", "account_id"),
        Index("idx_transactions_category", "category_id"),
    )

    id: Mapped[str] = mapped_column(Text)
    account_id: Mapped[str | None] = mapped_column(Text)
    category_id: Mapped[str | None] = mapped_column(Text)
    # Free-text label as exported by the bank; category_id is the normalized link
    category: Mapped[str | None] = mapped_column(Text)
    reference: Mapped[str | None] = mapped_column(Text)
    amount: Mapped[float | None] = mapped_column(Float)
    currency: Mapped[str | None] = mapped_column(Text)
    date: Mapped[datetime | None] = mapped_column(DateTime(True))

    account: Mapped["Accounts | None"] = relationship("Accounts", back_populates="transactions")
    category_ref: Mapped["Categories | None"] = relationship(
        "Categories", back_populates="transactions"
    )


# Expose for Alembic
target_metadata = Base.metadata
