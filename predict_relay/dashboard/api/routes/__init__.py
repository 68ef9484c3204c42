"""
API routes module.
"""
from .markets import router as markets_router
from .categories import router as categories_router
from .orderbook import router as orderbook_router
from .orders import router as orders_router
from .positions import router as positions_router
from .account import router as account_router
from .auth import router as auth_router
from .system import router as system_router

__all__ = [
    "markets_router",
    "categories_router",
    "orderbook_router",
    "orders_router",
    "positions_router",
    "account_router",
    "auth_router",
    "system_router",
]
