"""Vote API routes.

Votes are recorded by distributed members on open case appearances.
The vote text is composed from the selected templates; the role is
derived from the distribution and never sent by the client.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from src.api.dependencies.adjudication import get_vote_recorder_service
from src.api.models.vote import (
    EditVoteRequest,
    RecordVoteRequest,
    VoteListResponse,
    VoteResolutionResponse,
    VoteResponse,
)
from src.application.services.vote_recorder_service import (
    CastVote,
    VoteRecorderService,
)

router = APIRouter(prefix="/v1", tags=["votes"])


def _vote_response(cast: CastVote) -> VoteResponse:
    vote = cast.vote
    return VoteResponse(
        id=vote.id,
        session_case_id=vote.session_case_id,
        member_id=vote.member_id,
        role=cast.role.value,
        knowledge_type=vote.knowledge_type.value,
        preliminary_outcome=(
            vote.preliminary_outcome.value if vote.preliminary_outcome else None
        ),
        preliminary_template_id=vote.preliminary_template_id,
        merit_template_id=vote.merit_template_id,
        official_template_id=vote.official_template_id,
        vote_text=vote.vote_text,
        created_at=vote.created_at,
        updated_at=vote.updated_at,
    )


@router.post(
    "/session-cases/{session_case_id}/votes",
    response_model=VoteResponse,
    status_code=201,
    summary="Record a vote",
)
async def record_vote(
    session_case_id: UUID,
    request_data: RecordVoteRequest,
    service: VoteRecorderService = Depends(get_vote_recorder_service),
) -> VoteResponse:
    """Record a distributed member's vote.

    Raises:
        HTTPException 400: Member not distributed or incomplete rationale.
        HTTPException 409: Duplicate vote or session closed.
    """
    cast = await service.record_vote(
        session_case_id,
        request_data.member_id,
        request_data.to_vote_input(),
    )
    return _vote_response(cast)


@router.get(
    "/session-cases/{session_case_id}/votes",
    response_model=VoteListResponse,
    summary="List votes",
)
async def list_votes(
    session_case_id: UUID,
    service: VoteRecorderService = Depends(get_vote_recorder_service),
) -> VoteListResponse:
    """List the votes on a case appearance."""
    votes = await service.list_votes(session_case_id)
    return VoteListResponse(
        session_case_id=session_case_id, votes=[_vote_response(v) for v in votes]
    )


@router.get(
    "/session-cases/{session_case_id}/resolution",
    response_model=VoteResolutionResponse,
    summary="Vote resolution",
)
async def get_resolution(
    session_case_id: UUID,
    quality_vote_member_id: UUID | None = Query(default=None),
    service: VoteRecorderService = Depends(get_vote_recorder_service),
) -> VoteResolutionResponse:
    """Current quorum and agreement state of a case appearance."""
    resolution = await service.resolution(session_case_id, quality_vote_member_id)
    outcome = resolution.outcome
    return VoteResolutionResponse(
        session_case_id=session_case_id,
        votes_received=resolution.votes_received,
        votes_required=resolution.votes_required,
        quorum_met=resolution.quorum_met,
        is_resolved=resolution.is_resolved,
        outcome=outcome.value if outcome else None,
        winning_vote_id=resolution.winning_vote_id,
        votes_in_favor=resolution.votes_in_favor,
        votes_against=resolution.votes_against,
        quality_vote_used=resolution.quality_vote_used,
    )


@router.patch("/votes/{vote_id}", response_model=VoteResponse, summary="Edit a vote")
async def edit_vote(
    vote_id: UUID,
    request_data: EditVoteRequest,
    service: VoteRecorderService = Depends(get_vote_recorder_service),
) -> VoteResponse:
    """Edit a vote's choices and/or its text."""
    cast = await service.edit_vote(
        vote_id,
        vote_input=request_data.choices.to_vote_input() if request_data.choices else None,
        vote_text=request_data.vote_text,
    )
    return _vote_response(cast)


@router.delete(
    "/votes/{vote_id}",
    status_code=204,
    response_class=Response,
    summary="Withdraw a vote",
)
async def withdraw_vote(
    vote_id: UUID,
    service: VoteRecorderService = Depends(get_vote_recorder_service),
) -> Response:
    """Withdraw a vote while the case is still on the agenda."""
    await service.withdraw_vote(vote_id)
    return Response(status_code=204)
