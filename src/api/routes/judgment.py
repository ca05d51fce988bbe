"""Case judgment API routes.

JUDGED is only reachable through confirmation of resolved votes; every
other result is an administrative override that needs a cause.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from src.api.dependencies.adjudication import get_case_judgment_service
from src.api.models.session import (
    ChangeCaseStatusRequest,
    ConfirmJudgmentRequest,
    SessionCaseResponse,
)
from src.api.routes.sessions import session_case_response
from src.application.services.case_judgment_service import CaseJudgmentService

router = APIRouter(prefix="/v1/session-cases", tags=["judgment"])


@router.post(
    "/{session_case_id}/judgment",
    response_model=SessionCaseResponse,
    summary="Confirm judgment",
)
async def confirm_judgment(
    session_case_id: UUID,
    request_data: ConfirmJudgmentRequest,
    service: CaseJudgmentService = Depends(get_case_judgment_service),
) -> SessionCaseResponse:
    """Confirm the judgment of a case appearance from its votes.

    Raises:
        HTTPException 409: No votes, quorum or agreement missing, or session closed.
    """
    judged = await service.confirm_judgment(
        session_case_id,
        quality_vote_member_id=request_data.quality_vote_member_id,
        minutes_text=request_data.minutes_text,
    )
    return session_case_response(judged)


@router.post(
    "/{session_case_id}/status",
    response_model=SessionCaseResponse,
    summary="Apply a result",
)
async def change_status(
    session_case_id: UUID,
    request_data: ChangeCaseStatusRequest,
    service: CaseJudgmentService = Depends(get_case_judgment_service),
) -> SessionCaseResponse:
    """Apply a result to a case appearance and mirror it into the case.

    Raises:
        HTTPException 400: Missing cause or requester not attending.
        HTTPException 409: Invalid transition or session closed.
    """
    updated = await service.change_status(
        session_case_id,
        request_data.status,
        cause=request_data.cause,
        view_requested_by=request_data.view_requested_by,
        inquiry_deadline_days=request_data.inquiry_deadline_days,
        minutes_text=request_data.minutes_text,
        quality_vote_member_id=request_data.quality_vote_member_id,
    )
    return session_case_response(updated)
