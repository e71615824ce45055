"""
LedgerQL
GraphQL API over users, posts and bank transactions, with CSV seeding
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
