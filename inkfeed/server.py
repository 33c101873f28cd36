"""
Inkfeed API Server

FastAPI application providing endpoints for:
- Accounts (register, login)
- Articles (publish, feed, detail, likes, edit, delete)
- Drafts (one per user)
- Image uploads
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from . import __version__
from .config import config, state
from .database import Database
from .rate_limit import setup_rate_limiting
from .routes import (
    articles_router,
    auth_router,
    drafts_router,
    misc_router,
    uploads_router,
)
from .services.upload_service import UPLOAD_URL_PREFIX

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize application resources."""
    # Startup - skip if already initialized (e.g., by tests)
    if state.db is None:
        state.db = Database(config.DB_PATH)
        logger.info(f"Database ready at {config.DB_PATH}")

    config.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)

    yield


app = FastAPI(
    title="Inkfeed API",
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
setup_rate_limiting(app)

# Include routers
app.include_router(misc_router)
app.include_router(auth_router)
app.include_router(articles_router)
app.include_router(drafts_router)
app.include_router(uploads_router)

app.mount(
    UPLOAD_URL_PREFIX,
    StaticFiles(directory=config.UPLOAD_DIR, check_dir=False),
    name="uploads",
)
