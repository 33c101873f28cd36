"""
Draft service: the server copy of a user's unpublished article.
"""

from ..database import Database
from ..database.models import DBDraft
from ..exceptions import require_draft


class DraftService:
    """Service for the single per-user draft."""

    def __init__(self, db: Database):
        self.db = db

    def get(self, user_id: int) -> DBDraft:
        """Get the user's draft. Raises 404 if none is saved."""
        return require_draft(self.db.get_draft(user_id))

    def save(self, user_id: int, title: str, content: str) -> DBDraft:
        """Create or overwrite the user's draft; the server stamps updatedAt."""
        return self.db.save_draft(user_id, title, content)

    def delete(self, user_id: int):
        """Delete the user's draft. Deleting a missing draft is not an error."""
        self.db.delete_draft(user_id)
