"""
GraphQL request context: carries the Database handle into every resolver
"""

from typing import Any

import strawberry
from fastapi import Request

from ..database.connection import Database
from .loaders import Loaders


def build_context(db: Database, request: Request | None = None) -> dict[str, Any]:
    """Build the per-request context dict handed to Strawberry."""
    return {
        "request": request,
        "db": db,
        "loaders": Loaders(db),
    }


def get_database(info: strawberry.Info) -> Database:
    """Extract the Database handle from the GraphQL info object."""
    db = info.context.get("db")
    if db is None:
        raise RuntimeError("Database not found in GraphQL context")
    return db


def get_loaders(info: strawberry.Info) -> Loaders:
    """Extract the request's batch loaders, creating them on first use."""
    loaders = info.context.get("loaders")
    if loaders is None:
        loaders = Loaders(get_database(info))
        info.context["loaders"] = loaders
    return loaders
