"""
Service layer for business logic.

Services encapsulate business logic, keeping routes as thin HTTP adapters.
Each service receives its dependencies via constructor injection.

Usage in routes:
    from ..services import ArticleServiceDep

    @router.get("/articles")
    async def list_articles(service: ArticleServiceDep):
        return service.list_articles()
"""

from typing import Annotated

from fastapi import Depends

from ..config import config, get_db
from ..database import Database

from .article_service import ArticleService
from .auth_service import AuthService
from .draft_service import DraftService
from .upload_service import UploadService

__all__ = [
    # Services
    "ArticleService",
    "AuthService",
    "DraftService",
    "UploadService",
    # Dependency factories
    "get_article_service",
    "get_auth_service",
    "get_draft_service",
    "get_upload_service",
    # Type aliases for dependency injection
    "ArticleServiceDep",
    "AuthServiceDep",
    "DraftServiceDep",
    "UploadServiceDep",
]


def get_article_service(db: Annotated[Database, Depends(get_db)]) -> ArticleService:
    """Dependency to get ArticleService instance."""
    return ArticleService(db=db)


def get_auth_service(db: Annotated[Database, Depends(get_db)]) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(db=db)


def get_draft_service(db: Annotated[Database, Depends(get_db)]) -> DraftService:
    """Dependency to get DraftService instance."""
    return DraftService(db=db)


def get_upload_service() -> UploadService:
    """Dependency to get UploadService instance."""
    return UploadService(upload_dir=config.UPLOAD_DIR, max_bytes=config.MAX_UPLOAD_BYTES)


ArticleServiceDep = Annotated[ArticleService, Depends(get_article_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
DraftServiceDep = Annotated[DraftService, Depends(get_draft_service)]
UploadServiceDep = Annotated[UploadService, Depends(get_upload_service)]
