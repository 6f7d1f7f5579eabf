"""Routers package."""

from .admin import router as admin_router
from .auth import router as auth_router
from .cart import router as cart_router
from .credits import router as credits_router
from .genres import router as genres_router
from .movies import router as movies_router
from .people import router as people_router

__all__ = [
    "admin_router",
    "auth_router",
    "cart_router",
    "credits_router",
    "genres_router",
    "movies_router",
    "people_router",
]
