"""Session, agenda and distribution API routes.

Developer Golden Rules:
1. VALIDATE FIRST - Services check everything before the first write
2. CLOSED IS CLOSED - Concluded and cancelled sessions reject writes (409)
3. FAIL LOUD - Errors are RFC 7807 problem documents
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from src.api.dependencies.adjudication import (
    get_distribution_service,
    get_session_scheduler_service,
)
from src.api.models.session import (
    AddToAgendaRequest,
    AgendaResponse,
    AttendanceRequest,
    DistributionRequest,
    DistributionResponse,
    ScheduleSessionRequest,
    SessionCaseResponse,
    SessionProgressResponse,
    SessionResponse,
    SessionTransitionRequest,
)
from src.application.services.distribution_service import DistributionService
from src.application.services.session_scheduler_service import (
    AgendaEntry,
    SessionSchedulerService,
)
from src.domain.models.distribution import Distribution
from src.domain.models.session import Session, SessionCase

router = APIRouter(prefix="/v1", tags=["sessions"])


def session_response(session: Session) -> SessionResponse:
    """Render a session."""
    return SessionResponse(
        id=session.id,
        number=str(session.number),
        ordinal_number=session.ordinal_number,
        session_type=session.session_type.value,
        session_date=session.session_date,
        president_id=session.president_id,
        status=session.status.value,
        start_time=session.start_time,
        end_time=session.end_time,
        attending_member_ids=list(session.attending_member_ids),
        cancellation_reason=session.cancellation_reason,
        created_at=session.created_at,
        updated_at=session.updated_at,
    )


def distribution_response(distribution: Distribution) -> DistributionResponse:
    """Render a distribution."""
    return DistributionResponse(
        session_case_id=distribution.session_case_id,
        rapporteur_id=distribution.rapporteur_id,
        reviewer_ids=list(distribution.reviewer_ids),
        assigned_at=distribution.assigned_at,
    )


def session_case_response(
    session_case: SessionCase, distribution: Distribution | None = None
) -> SessionCaseResponse:
    """Render a case appearance."""
    return SessionCaseResponse(
        id=session_case.id,
        session_id=session_case.session_id,
        case_id=session_case.case_id,
        agenda_order=session_case.agenda_order,
        status=session_case.status.value,
        status_cause=session_case.status_cause,
        minutes_text=session_case.minutes_text,
        result_text=session_case.result_text,
        outcome=session_case.outcome.value if session_case.outcome else None,
        winning_vote_id=session_case.winning_vote_id,
        quality_vote_used=session_case.quality_vote_used,
        view_requested_by=session_case.view_requested_by,
        inquiry_deadline_days=session_case.inquiry_deadline_days,
        distribution=distribution_response(distribution) if distribution else None,
    )


def _entry_response(entry: AgendaEntry) -> SessionCaseResponse:
    return session_case_response(entry.session_case, entry.distribution)


# Sessions


@router.post(
    "/sessions",
    response_model=SessionResponse,
    status_code=201,
    summary="Schedule a session",
)
async def schedule_session(
    request_data: ScheduleSessionRequest,
    service: SessionSchedulerService = Depends(get_session_scheduler_service),
) -> SessionResponse:
    """Schedule a session with its yearly number and type ordinal."""
    session = await service.schedule_session(
        session_type=request_data.session_type,
        session_date=request_data.session_date,
        president_id=request_data.president_id,
        start_time=request_data.start_time,
        end_time=request_data.end_time,
        attending_member_ids=request_data.attending_member_ids,
    )
    return session_response(session)


@router.get("/sessions", response_model=list[SessionResponse], summary="List sessions")
async def list_sessions(
    year: int | None = Query(default=None, ge=1000, le=9999),
    service: SessionSchedulerService = Depends(get_session_scheduler_service),
) -> list[SessionResponse]:
    """List sessions ordered by number."""
    return [session_response(s) for s in await service.list_sessions(year)]


@router.get("/sessions/{session_id}", response_model=SessionResponse, summary="Get a session")
async def get_session(
    session_id: UUID,
    service: SessionSchedulerService = Depends(get_session_scheduler_service),
) -> SessionResponse:
    """Get a session by ID."""
    return session_response(await service.get_session(session_id))


@router.put(
    "/sessions/{session_id}/attendance",
    response_model=SessionResponse,
    summary="Set session attendance",
)
async def set_attendance(
    session_id: UUID,
    request_data: AttendanceRequest,
    service: SessionSchedulerService = Depends(get_session_scheduler_service),
) -> SessionResponse:
    """Replace the attendance list of an open session."""
    session = await service.set_attendance(session_id, request_data.member_ids)
    return session_response(session)


@router.post(
    "/sessions/{session_id}/transitions",
    response_model=SessionResponse,
    summary="Change session status",
)
async def transition_session(
    session_id: UUID,
    request_data: SessionTransitionRequest,
    service: SessionSchedulerService = Depends(get_session_scheduler_service),
) -> SessionResponse:
    """Move a session along its status machine.

    Raises:
        HTTPException 409: Invalid transition, or agenda cases still pending.
    """
    session = await service.transition_session(
        session_id,
        request_data.status,
        cancellation_reason=request_data.cancellation_reason,
    )
    return session_response(session)


@router.get(
    "/sessions/{session_id}/progress",
    response_model=SessionProgressResponse,
    summary="Session progress",
)
async def get_session_progress(
    session_id: UUID,
    service: SessionSchedulerService = Depends(get_session_scheduler_service),
) -> SessionProgressResponse:
    """Percentage of agenda cases that already have a result."""
    progress = await service.session_progress(session_id)
    return SessionProgressResponse(session_id=session_id, progress_percent=progress)


# Agenda


@router.get(
    "/sessions/{session_id}/agenda",
    response_model=AgendaResponse,
    summary="Get session agenda",
)
async def get_agenda(
    session_id: UUID,
    service: SessionSchedulerService = Depends(get_session_scheduler_service),
) -> AgendaResponse:
    """List the agenda in order, with distributions."""
    entries = await service.list_agenda(session_id)
    return AgendaResponse(
        session_id=session_id, entries=[_entry_response(e) for e in entries]
    )


@router.post(
    "/sessions/{session_id}/agenda",
    response_model=SessionCaseResponse,
    status_code=201,
    summary="Add a case to the agenda",
)
async def add_case_to_agenda(
    session_id: UUID,
    request_data: AddToAgendaRequest,
    service: SessionSchedulerService = Depends(get_session_scheduler_service),
) -> SessionCaseResponse:
    """Place a case on the agenda, optionally distributing it.

    Raises:
        HTTPException 409: Case unavailable, session closed or authority conflict.
    """
    entry = await service.add_case_to_agenda(
        session_id,
        request_data.case_id,
        rapporteur_id=request_data.rapporteur_id,
        reviewer_ids=request_data.reviewer_ids,
    )
    return _entry_response(entry)


@router.get(
    "/session-cases/{session_case_id}",
    response_model=SessionCaseResponse,
    summary="Get a case appearance",
)
async def get_session_case(
    session_case_id: UUID,
    service: SessionSchedulerService = Depends(get_session_scheduler_service),
) -> SessionCaseResponse:
    """Get one case appearance with its distribution."""
    return _entry_response(await service.get_agenda_entry(session_case_id))


@router.delete(
    "/session-cases/{session_case_id}",
    status_code=204,
    response_class=Response,
    summary="Remove a case from the agenda",
)
async def remove_case_from_agenda(
    session_case_id: UUID,
    service: SessionSchedulerService = Depends(get_session_scheduler_service),
) -> Response:
    """Remove a case that has no votes; it returns to awaiting judgment."""
    await service.remove_case_from_agenda(session_case_id)
    return Response(status_code=204)


# Distribution


@router.put(
    "/session-cases/{session_case_id}/distribution",
    response_model=DistributionResponse,
    summary="Assign rapporteur and reviewers",
)
async def assign_distribution(
    session_case_id: UUID,
    request_data: DistributionRequest,
    service: DistributionService = Depends(get_distribution_service),
) -> DistributionResponse:
    """Create or replace the distribution of a case appearance.

    Raises:
        HTTPException 400: Malformed member list or assignee not attending.
        HTTPException 409: Authority conflict, votes already recorded or closed session.
    """
    distribution = await service.assign(
        session_case_id,
        request_data.rapporteur_id,
        request_data.reviewer_ids,
    )
    return distribution_response(distribution)


@router.get(
    "/session-cases/{session_case_id}/distribution",
    response_model=DistributionResponse,
    summary="Get distribution",
)
async def get_distribution(
    session_case_id: UUID,
    service: DistributionService = Depends(get_distribution_service),
) -> DistributionResponse:
    """Get the distribution of a case appearance."""
    return distribution_response(await service.get_distribution(session_case_id))
