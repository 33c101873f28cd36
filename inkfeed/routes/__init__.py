"""
API route modules.
"""

from .articles import router as articles_router
from .auth import router as auth_router
from .drafts import router as drafts_router
from .misc import router as misc_router
from .uploads import router as uploads_router

__all__ = [
    "articles_router",
    "auth_router",
    "drafts_router",
    "misc_router",
    "uploads_router",
]
