"""
Draft synchronization between the device and the server.

The editor keeps one draft locally and the server keeps one draft per user.
Conflicts are resolved last-writer-wins on the ``updatedAt`` timestamps
(millisecond resolution): the older copy is discarded, never merged.

Timestamps come from two different clocks (device for local edits, server
for saved drafts), so skew between them can pick the wrong winner.

Remote failures are logged and swallowed; the editor keeps working from the
local copy and the next autosave tick or reconnect tries again.
"""

import asyncio
import logging
from enum import Enum
from typing import Callable

import httpx

from .api import ApiClient, ApiError
from .storage import DraftStorage, LocalDraft, now_ms

logger = logging.getLogger(__name__)

AUTOSAVE_INTERVAL_SECONDS = 30.0

# What an untouched rich-text editor reports as its content
EMPTY_EDITOR_HTML = "<p></p>"


class ReconcileOutcome(Enum):
    PULLED = "pulled"          # Server copy was newer and replaced the local one
    PUSHED = "pushed"          # Unsynced local copy was uploaded
    LOCAL_ONLY = "local_only"  # Offline, logged out, or the server was unreachable
    UNCHANGED = "unchanged"    # Both copies already agree


class SaveStatus(Enum):
    SAVED = "saved"
    OFFLINE = "offline"
    SKIPPED = "skipped"


class PublishError(Exception):
    """Publishing was refused before any request was made."""


class DraftSynchronizer:
    """
    Editor-side draft state and its sync policy.

    Call ``reconcile()`` when the editor opens, ``edit()`` on every change,
    ``set_online()`` on connectivity changes and ``on_exit()`` when leaving.
    ``start()`` runs the periodic autosave.
    """

    def __init__(
        self,
        api: ApiClient,
        drafts: DraftStorage,
        online: bool = True,
        clock: Callable[[], int] = now_ms,
        autosave_interval: float = AUTOSAVE_INTERVAL_SECONDS,
    ):
        self.api = api
        self.drafts = drafts
        self.online = online
        self.clock = clock
        self.autosave_interval = autosave_interval

        self.title = ""
        self.content = ""
        self.has_changes = False

        self._syncing = False
        self._task: asyncio.Task | None = None
        self._running = False

    # ─────────────────────────────────────────────────────────────
    # Reconciliation
    # ─────────────────────────────────────────────────────────────

    async def reconcile(self) -> ReconcileOutcome:
        """Load the local draft, then settle it against the server copy."""
        local = self.drafts.get()
        if local:
            self.title = local.title
            self.content = local.content

        if not (self.online and self.api.is_logged_in()):
            return ReconcileOutcome.LOCAL_ONLY

        try:
            remote = await self.api.get_draft()
        except (ApiError, httpx.HTTPError) as e:
            logger.warning(f"Could not fetch server draft, using local copy: {e}")
            return ReconcileOutcome.LOCAL_ONLY

        local_time = local.updated_at if local else 0
        if remote is not None and remote.updated_at > local_time:
            self.title = remote.title
            self.content = remote.content
            self.has_changes = False
            self.drafts.set(LocalDraft(
                title=remote.title,
                content=remote.content,
                updated_at=remote.updated_at,
                needs_sync=False,
                synced_at=remote.updated_at,
            ))
            return ReconcileOutcome.PULLED

        if local is not None and local.needs_sync:
            if await self._push(local):
                return ReconcileOutcome.PUSHED
            return ReconcileOutcome.LOCAL_ONLY

        return ReconcileOutcome.UNCHANGED

    # ─────────────────────────────────────────────────────────────
    # Editing & saving
    # ─────────────────────────────────────────────────────────────

    def edit(self, title: str | None = None, content: str | None = None):
        """Record an edit and persist it locally as unsynced."""
        if title is not None:
            self.title = title
        if content is not None:
            self.content = content
        self.has_changes = True
        self._save_local()

    async def save(self) -> SaveStatus:
        """Save locally, then push to the server when possible."""
        if not self.title.strip() and not self.content.strip():
            return SaveStatus.SKIPPED

        self._save_local()
        self.has_changes = False

        if self.online and self.api.is_logged_in():
            synced = await self.sync_to_cloud()
            return SaveStatus.SAVED if synced else SaveStatus.OFFLINE
        return SaveStatus.SAVED if self.online else SaveStatus.OFFLINE

    async def sync_to_cloud(self) -> bool:
        """Push the local draft. Returns False on any failure."""
        if not (self.online and self.api.is_logged_in()):
            return False

        local = self.drafts.get()
        if local is None:
            return False
        return await self._push(local)

    async def set_online(self, online: bool) -> bool:
        """
        Track connectivity. Coming back online pushes pending local changes once.

        Returns:
            True if a sync ran and succeeded
        """
        was_online = self.online
        self.online = online
        if not online or was_online:
            return False

        local = self.drafts.get()
        if local is None or not local.needs_sync or not self.api.is_logged_in():
            return False
        return await self.sync_to_cloud()

    def on_exit(self):
        """Final local save when the editor closes. Never touches the network."""
        if self.has_changes:
            self._save_local()

    def _save_local(self):
        self.drafts.set(LocalDraft(
            title=self.title,
            content=self.content,
            updated_at=self.clock(),
            needs_sync=True,
        ))

    async def _push(self, draft: LocalDraft) -> bool:
        # One request at a time; an overlapping trigger is dropped, not queued
        if self._syncing:
            return False

        self._syncing = True
        try:
            saved = await self.api.save_draft(draft.title, draft.content)
        except (ApiError, httpx.HTTPError) as e:
            logger.warning(f"Draft sync failed, keeping local copy: {e}")
            return False
        finally:
            self._syncing = False

        # Edits made while the request was in flight stay pending
        current = self.drafts.get()
        if current is not None and current.updated_at == draft.updated_at:
            self.drafts.mark_synced(saved.updated_at)
        return True

    # ─────────────────────────────────────────────────────────────
    # Autosave loop
    # ─────────────────────────────────────────────────────────────

    async def start(self):
        """Start the periodic autosave."""
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._autosave_loop())
        logger.info(f"Draft autosave started (interval: {self.autosave_interval}s)")

    async def stop(self):
        """Stop the periodic autosave."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def autosave_tick(self) -> SaveStatus | None:
        """Save if anything changed since the last save."""
        if not self.has_changes:
            return None
        return await self.save()

    async def _autosave_loop(self):
        while self._running:
            await asyncio.sleep(self.autosave_interval)
            try:
                await self.autosave_tick()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.exception(f"Error in draft autosave loop: {e}")

    # ─────────────────────────────────────────────────────────────
    # Publishing
    # ─────────────────────────────────────────────────────────────

    async def publish(self, article_id: int | None = None) -> dict:
        """
        Publish the draft as a new article, or update ``article_id``.

        On success both draft copies are discarded and the editor is cleared.

        Raises:
            PublishError: Missing title/content, logged out, or offline
            ApiError: The server rejected the request
        """
        if not self.title.strip():
            raise PublishError("Please enter a title")
        if not self.content.strip() or self.content == EMPTY_EDITOR_HTML:
            raise PublishError("Please enter some content")
        if not self.api.is_logged_in():
            raise PublishError("Please log in before publishing")
        if not self.online:
            raise PublishError("You are offline. Reconnect before publishing")

        if article_id is not None:
            article = await self.api.update_article(article_id, self.title, self.content)
        else:
            article = await self.api.publish_article(self.title, self.content)

        self.drafts.remove()
        try:
            await self.api.delete_draft()
        except (ApiError, httpx.HTTPError) as e:
            logger.warning(f"Could not delete server draft after publishing: {e}")

        self.title = ""
        self.content = ""
        self.has_changes = False
        return article
