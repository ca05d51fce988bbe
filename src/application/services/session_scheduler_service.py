"""Session Scheduler Service.

Schedules judgment sessions, records attendance, assembles agendas and
drives the session status machine. It is one of the two writers of
Case.status: placing a case on an agenda moves it to IN_AGENDA, and
removing it (or cancelling the session) moves it back to
AWAITING_JUDGMENT.

Developer Golden Rules:
1. VALIDATE FIRST - Every check runs before the first write
2. CLOSED IS CLOSED - Concluded and cancelled sessions never change
3. LOG EVERYTHING - All operations have structured logging
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, time
from uuid import UUID

from uuid6 import uuid7

from src.application.ports.aggregate_lock import AggregateLockProtocol
from src.application.ports.case_repository import CaseRepositoryProtocol
from src.application.ports.directories import MemberDirectoryProtocol
from src.application.ports.distribution_repository import (
    DistributionRepositoryProtocol,
)
from src.application.ports.sequence_allocator import SequenceAllocatorProtocol
from src.application.ports.session_repository import SessionRepositoryProtocol
from src.application.ports.vote_repository import VoteRepositoryProtocol
from src.application.services.base import (
    LoggingMixin,
    hold_appearance,
    retry_on_sequence_conflict,
)
from src.application.services.distribution_service import DistributionService
from src.config.adjudication_config import DEFAULT_ADJUDICATION_CONFIG, AdjudicationConfig
from src.domain.errors import (
    CaseNotInAgendaError,
    CaseUnavailableForAgendaError,
    DistributedMemberAbsentError,
    DistributionLockedError,
    NotFoundError,
    SessionNotConcludableError,
)
from src.domain.models.case import CaseStatus
from src.domain.models.distribution import Distribution
from src.domain.models.sequence_number import SequenceNumber, SequenceScope
from src.domain.models.session import (
    CaseSessionStatus,
    Session,
    SessionCase,
    SessionStatus,
    SessionType,
    session_progress,
)


@dataclass(frozen=True)
class AgendaEntry:
    """A case appearance on an agenda with its distribution.

    Attributes:
        session_case: The case appearance.
        distribution: Its distribution, if the case was distributed.
    """

    session_case: SessionCase
    distribution: Distribution | None = None


class SessionSchedulerService(LoggingMixin):
    """Service for sessions, attendance and agendas.

    Attributes:
        _sessions: Session and agenda repository.
        _cases: Case repository.
        _distributions: Distribution repository.
        _votes: Vote repository.
        _members: Member directory.
        _sequences: Year-scoped sequence allocator.
        _lock: Session, case and case appearance locks.
        _distribution_service: Distribution pre-checks.
        _config: Core configuration.
    """

    def __init__(
        self,
        session_repository: SessionRepositoryProtocol,
        case_repository: CaseRepositoryProtocol,
        distribution_repository: DistributionRepositoryProtocol,
        vote_repository: VoteRepositoryProtocol,
        member_directory: MemberDirectoryProtocol,
        sequence_allocator: SequenceAllocatorProtocol,
        aggregate_lock: AggregateLockProtocol,
        distribution_service: DistributionService,
        config: AdjudicationConfig | None = None,
    ) -> None:
        self._sessions = session_repository
        self._cases = case_repository
        self._distributions = distribution_repository
        self._votes = vote_repository
        self._members = member_directory
        self._sequences = sequence_allocator
        self._lock = aggregate_lock
        self._distribution_service = distribution_service
        self._config = config or DEFAULT_ADJUDICATION_CONFIG
        self._init_logger()

    async def schedule_session(
        self,
        session_type: SessionType,
        session_date: date,
        president_id: UUID | None = None,
        start_time: time | None = None,
        end_time: time | None = None,
        attending_member_ids: Sequence[UUID] = (),
    ) -> Session:
        """Schedule a session, allocating its yearly number and ordinal.

        Args:
            session_type: Ordinary or extraordinary.
            session_date: Date of the sitting; its year scopes the numbers.
            president_id: Presiding member.
            start_time: Scheduled start.
            end_time: Scheduled end.
            attending_member_ids: Initial attendance.

        Returns:
            The new session in AWAITING_PUBLICATION.

        Raises:
            ValueError: If end_time is not after start_time.
            NotFoundError: If a listed member does not exist.
            SequenceConflictError: If numbering kept colliding after retries.
        """
        if start_time and end_time and end_time <= start_time:
            raise ValueError("end_time must be after start_time")
        attendance = tuple(dict.fromkeys(attending_member_ids))
        await self._ensure_members_exist(attendance)
        if president_id is not None:
            await self._ensure_members_exist((president_id,))

        year = session_date.year
        log = self._log_operation(
            "schedule_session", session_type=session_type.value, year=year
        )

        async def attempt() -> Session:
            sequence = await self._sequences.next_value(SequenceScope.SESSION, year)
            ordinal = await self._sequences.next_value(session_type.ordinal_scope, year)
            session = Session(
                id=uuid7(),
                number=SequenceNumber.for_scope(SequenceScope.SESSION, sequence, year),
                ordinal_number=ordinal,
                session_type=session_type,
                session_date=session_date,
                president_id=president_id,
                start_time=start_time,
                end_time=end_time,
                attending_member_ids=attendance,
            )
            await self._sessions.add_session(session)
            return session

        session = await retry_on_sequence_conflict(
            attempt, self._config.sequence_max_retries, log
        )
        log.info(
            "session_scheduled",
            session_id=str(session.id),
            number=str(session.number),
            ordinal_number=session.ordinal_number,
        )
        return session

    async def set_attendance(
        self, session_id: UUID, member_ids: Sequence[UUID]
    ) -> Session:
        """Replace the attendance list of an open session.

        Members distributed on an IN_AGENDA appearance cannot be dropped.

        Raises:
            NotFoundError: Unknown session or member.
            SessionClosedError: The session is concluded or cancelled.
            DistributedMemberAbsentError: A dropped member is distributed.
        """
        log = self._log_operation("set_attendance", session_id=str(session_id))
        await self._ensure_members_exist(member_ids)

        async with self._lock.hold(session_id):
            session = await self.get_session(session_id)
            session.ensure_open()
            attending = set(member_ids)
            for session_case in await self._sessions.list_session_cases(session_id):
                if session_case.status is not CaseSessionStatus.IN_AGENDA:
                    continue
                distribution = await self._distributions.get(session_case.id)
                if distribution is None:
                    continue
                for member_id in distribution.member_ids:
                    if member_id not in attending:
                        log.warning(
                            "attendance_rejected_distributed_member",
                            member_id=str(member_id),
                        )
                        raise DistributedMemberAbsentError(
                            session_id, member_id, session_case.id
                        )

            updated = session.with_attendance(tuple(member_ids))
            await self._sessions.update_session(updated)
        log.info("attendance_set", attending=len(updated.attending_member_ids))
        return updated

    async def add_case_to_agenda(
        self,
        session_id: UUID,
        case_id: UUID,
        rapporteur_id: UUID | None = None,
        reviewer_ids: Sequence[UUID] = (),
    ) -> AgendaEntry:
        """Place a case on an agenda, optionally distributing it.

        The agenda order is appended after the current maximum. When a
        rapporteur is given, the distribution is fully validated before
        anything is written.

        Args:
            session_id: Target session.
            case_id: Case to place.
            rapporteur_id: Optional rapporteur for same-call distribution.
            reviewer_ids: Reviewers for same-call distribution.

        Returns:
            AgendaEntry with the appearance and optional distribution.

        Raises:
            NotFoundError: Unknown session or case.
            SessionClosedError: The session is concluded or cancelled.
            CaseUnavailableForAgendaError: Case is IN_AGENDA or JUDGED.
            Distribution errors: When a same-call distribution is invalid.
        """
        log = self._log_operation(
            "add_case_to_agenda", session_id=str(session_id), case_id=str(case_id)
        )
        if rapporteur_id is None and reviewer_ids:
            raise ValueError("reviewers cannot be distributed without a rapporteur")

        async with self._lock.hold(session_id), self._lock.hold(case_id):
            session = await self.get_session(session_id)
            session.ensure_open()
            case = await self._cases.get(case_id)
            if case is None:
                raise NotFoundError("case", case_id)
            if not case.status.can_enter_agenda():
                raise CaseUnavailableForAgendaError(case_id, case.status.value)

            agenda = await self._sessions.list_session_cases(session_id)
            session_case = SessionCase(
                id=uuid7(),
                session_id=session_id,
                case_id=case_id,
                agenda_order=max((sc.agenda_order for sc in agenda), default=0) + 1,
            )

            distribution: Distribution | None = None
            if rapporteur_id is not None:
                distribution = await self._distribution_service.check_assignment(
                    session, case_id, session_case.id, rapporteur_id, reviewer_ids
                )

            updated_case = case.with_status(CaseStatus.IN_AGENDA)
            await self._sessions.add_session_case(session_case)
            await self._cases.update(updated_case)
            if distribution is not None:
                await self._distributions.save(distribution)

        log.info(
            "case_added_to_agenda",
            session_case_id=str(session_case.id),
            agenda_order=session_case.agenda_order,
            distributed=distribution is not None,
        )
        return AgendaEntry(session_case=session_case, distribution=distribution)

    async def remove_case_from_agenda(self, session_case_id: UUID) -> None:
        """Remove an undecided, unvoted case from its agenda.

        Raises:
            NotFoundError: Unknown appearance.
            SessionClosedError: The session is concluded or cancelled.
            CaseNotInAgendaError: The appearance already has a result.
            DistributionLockedError: Votes were already recorded.
        """
        log = self._log_operation(
            "remove_case_from_agenda", session_case_id=str(session_case_id)
        )
        async with hold_appearance(self._lock, self._sessions, session_case_id):
            session_case = await self._sessions.get_session_case(session_case_id)
            if session_case is None:
                raise NotFoundError("session case", session_case_id)
            session = await self.get_session(session_case.session_id)
            session.ensure_open()
            if session_case.status is not CaseSessionStatus.IN_AGENDA:
                raise CaseNotInAgendaError(session_case_id, session_case.status.value)
            vote_count = await self._votes.count_for_session_case(session_case_id)
            if vote_count > 0:
                raise DistributionLockedError(session_case_id, vote_count)
            case = await self._cases.get(session_case.case_id)
            if case is None:
                raise NotFoundError("case", session_case.case_id)
            updated_case = case.with_status(
                CaseStatus.AWAITING_JUDGMENT, cause="removed from agenda"
            )

            await self._distributions.delete(session_case_id)
            await self._sessions.delete_session_case(session_case_id)
            await self._cases.update(updated_case)

        log.info("case_removed_from_agenda", case_id=str(session_case.case_id))

    async def transition_session(
        self,
        session_id: UUID,
        new_status: SessionStatus,
        cancellation_reason: str | None = None,
    ) -> Session:
        """Move a session through its status machine.

        Concluding requires every agenda case to have a result. The check
        and the write run under the session lock, which every case
        appearance mutation also holds.
        Cancelling requires a reason and returns every IN_AGENDA case to
        AWAITING_JUDGMENT.

        Raises:
            NotFoundError: Unknown session.
            SessionClosedError: The session is already terminal.
            InvalidStateTransitionError: Transition not in the matrix.
            SessionNotConcludableError: Agenda cases still lack a result.
            MissingTransitionCauseError: Cancelling without a reason.
        """
        log = self._log_operation(
            "transition_session", session_id=str(session_id), to=new_status.value
        )
        async with self._lock.hold(session_id):
            session = await self.get_session(session_id)
            updated = session.with_status(new_status, cancellation_reason)
            agenda = await self._sessions.list_session_cases(session_id)
            pending = [sc for sc in agenda if sc.status is CaseSessionStatus.IN_AGENDA]

            if new_status is SessionStatus.CONCLUDED and pending:
                log.warning("session_conclusion_rejected", pending_cases=len(pending))
                raise SessionNotConcludableError(session_id, len(pending))

            returned_cases = []
            if new_status is SessionStatus.CANCELLED:
                for session_case in pending:
                    case = await self._cases.get(session_case.case_id)
                    if case is not None and case.status is CaseStatus.IN_AGENDA:
                        returned_cases.append(
                            case.with_status(
                                CaseStatus.AWAITING_JUDGMENT,
                                cause="session cancelled",
                            )
                        )

            await self._sessions.update_session(updated)
            for case in returned_cases:
                await self._cases.update(case)

        log.info(
            "session_transitioned",
            from_status=session.status.value,
            returned_cases=len(returned_cases),
        )
        return updated

    async def session_progress(self, session_id: UUID) -> float:
        """Percentage of agenda cases with a result (0 for an empty agenda).

        Raises:
            NotFoundError: Unknown session.
        """
        await self.get_session(session_id)
        return session_progress(await self._sessions.list_session_cases(session_id))

    async def get_session(self, session_id: UUID) -> Session:
        """Retrieve a session.

        Raises:
            NotFoundError: If the session does not exist.
        """
        session = await self._sessions.get_session(session_id)
        if session is None:
            raise NotFoundError("session", session_id)
        return session

    async def get_agenda_entry(self, session_case_id: UUID) -> AgendaEntry:
        """Retrieve one case appearance with its distribution.

        Raises:
            NotFoundError: If the appearance does not exist.
        """
        session_case = await self._sessions.get_session_case(session_case_id)
        if session_case is None:
            raise NotFoundError("session case", session_case_id)
        return AgendaEntry(
            session_case=session_case,
            distribution=await self._distributions.get(session_case_id),
        )

    async def list_sessions(self, year: int | None = None) -> list[Session]:
        """List sessions ordered by number, optionally for one year."""
        return await self._sessions.list_sessions(year)

    async def list_agenda(self, session_id: UUID) -> list[AgendaEntry]:
        """List the agenda of a session in agenda order, with distributions.

        Raises:
            NotFoundError: Unknown session.
        """
        await self.get_session(session_id)
        return [
            AgendaEntry(
                session_case=session_case,
                distribution=await self._distributions.get(session_case.id),
            )
            for session_case in await self._sessions.list_session_cases(session_id)
        ]

    async def _ensure_members_exist(self, member_ids: Sequence[UUID]) -> None:
        for member_id in member_ids:
            if await self._members.get_member(member_id) is None:
                raise NotFoundError("member", member_id)
