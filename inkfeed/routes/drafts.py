"""
Draft routes: the signed-in user's single server-side draft.
"""

from fastapi import APIRouter

from ..auth import CurrentUserId
from ..schemas import DraftResponse, MessageResponse, SaveDraftRequest
from ..services import DraftServiceDep

router = APIRouter(prefix="/draft", tags=["draft"])


@router.get("")
async def get_draft(user_id: CurrentUserId, service: DraftServiceDep) -> DraftResponse:
    """Get the current user's draft. 404 when none is saved."""
    return DraftResponse.from_db(service.get(user_id))


@router.post("")
async def save_draft(
    request: SaveDraftRequest,
    user_id: CurrentUserId,
    service: DraftServiceDep,
) -> DraftResponse:
    """Create or overwrite the current user's draft."""
    draft = service.save(user_id, request.title, request.content)
    return DraftResponse.from_db(draft)


@router.delete("")
async def delete_draft(user_id: CurrentUserId, service: DraftServiceDep) -> MessageResponse:
    """Delete the current user's draft. Succeeds even if there was none."""
    service.delete(user_id)
    return MessageResponse(msg="Draft deleted")
