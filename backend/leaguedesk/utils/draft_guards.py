"""
Draft Safety Guards

Only drafts with status "draft" may be edited; saved drafts are a record of
what was sent to the league API.
"""

from fastapi import HTTPException
from sqlmodel import Session

from leaguedesk.models.schedule_draft import ScheduleDraft


def get_draft_or_404(session: Session, draft_id: int) -> ScheduleDraft:
    draft = session.get(ScheduleDraft, draft_id)
    if not draft:
        raise HTTPException(status_code=404, detail="Schedule draft not found")
    return draft


def require_editable_draft(session: Session, draft_id: int) -> ScheduleDraft:
    """
    Require that a schedule draft exists and is still a draft.

    Raises:
        HTTPException 404: Draft not found
        HTTPException 400: Draft was already saved
    """
    draft = get_draft_or_404(session, draft_id)

    if draft.status != "draft":
        raise HTTPException(
            status_code=400,
            detail=f"SCHEDULE_DRAFT_NOT_EDITABLE: Cannot modify draft with status '{draft.status}'. Only drafts can be modified.",
        )

    return draft
