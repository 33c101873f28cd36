"""
Client-side pieces of the web app: local storage, API access, draft sync.
"""

from .api import ApiClient, ApiError, RemoteDraft
from .feed import FeedPager
from .storage import DraftStorage, LocalDraft, LocalStore, TokenStorage, UserStorage
from .sync import DraftSynchronizer, PublishError, ReconcileOutcome, SaveStatus

__all__ = [
    "ApiClient",
    "ApiError",
    "RemoteDraft",
    "FeedPager",
    "DraftStorage",
    "LocalDraft",
    "LocalStore",
    "TokenStorage",
    "UserStorage",
    "DraftSynchronizer",
    "PublishError",
    "ReconcileOutcome",
    "SaveStatus",
]
