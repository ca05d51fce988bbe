"""Case Judgment Service.

Applies results to case appearances and mirrors them into the case.
Confirming a judgment requires resolved votes (quorum and agreement);
every other result is an administrative override carrying a cause.

Results:
    JUDGED: From resolved votes; records the winning text and outcome
        and publishes a CaseJudged event after the write.
    SUSPENDED / UNDER_INQUIRY / VIEW_REQUESTED: Override with a cause.
    IN_AGENDA: Correction of an override while the session is open.
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from uuid6 import uuid7

from src.application.ports.aggregate_lock import AggregateLockProtocol
from src.application.ports.case_repository import CaseRepositoryProtocol
from src.application.ports.directories import (
    AuthorityDirectoryProtocol,
    MemberDirectoryProtocol,
)
from src.application.ports.distribution_repository import (
    DistributionRepositoryProtocol,
)
from src.application.ports.judgment_event_publisher import (
    JudgmentEventPublisherProtocol,
)
from src.application.ports.session_repository import SessionRepositoryProtocol
from src.application.ports.vote_repository import VoteRepositoryProtocol
from src.application.services.base import LoggingMixin, hold_appearance
from src.config.adjudication_config import DEFAULT_ADJUDICATION_CONFIG, AdjudicationConfig
from src.domain.errors import MemberNotAttendingError, NotFoundError
from src.domain.events.judgment import CaseJudgedEvent
from src.domain.models.case import Case
from src.domain.models.session import CaseSessionStatus, Session, SessionCase
from src.domain.models.vote import VoteResolution
from src.domain.services.authority_conflict import ensure_no_authority_conflict
from src.domain.services.vote_resolution import resolve_votes


class CaseJudgmentService(LoggingMixin):
    """Service applying results to case appearances.

    Attributes:
        _sessions: Session and agenda repository.
        _cases: Case repository.
        _distributions: Distribution repository.
        _votes: Vote repository.
        _members: Member directory.
        _authorities: Authority directory.
        _lock: Session and case appearance locks.
        _events: Judgment event publisher.
        _config: Core configuration.
    """

    def __init__(
        self,
        session_repository: SessionRepositoryProtocol,
        case_repository: CaseRepositoryProtocol,
        distribution_repository: DistributionRepositoryProtocol,
        vote_repository: VoteRepositoryProtocol,
        member_directory: MemberDirectoryProtocol,
        authority_directory: AuthorityDirectoryProtocol,
        aggregate_lock: AggregateLockProtocol,
        event_publisher: JudgmentEventPublisherProtocol,
        config: AdjudicationConfig | None = None,
    ) -> None:
        self._sessions = session_repository
        self._cases = case_repository
        self._distributions = distribution_repository
        self._votes = vote_repository
        self._members = member_directory
        self._authorities = authority_directory
        self._lock = aggregate_lock
        self._events = event_publisher
        self._config = config or DEFAULT_ADJUDICATION_CONFIG
        self._init_logger()

    async def confirm_judgment(
        self,
        session_case_id: UUID,
        quality_vote_member_id: UUID | None = None,
        minutes_text: str | None = None,
    ) -> SessionCase:
        """Confirm the judgment of a case appearance from its votes.

        Args:
            session_case_id: The appearance to judge.
            quality_vote_member_id: Tie-breaking member (defaults to the
                session president).
            minutes_text: Optional minutes entry.

        Returns:
            The JUDGED appearance.

        Raises:
            NotFoundError: Unknown appearance, session or case.
            SessionClosedError: The session is concluded or cancelled.
            InvalidStateTransitionError: The appearance is not IN_AGENDA.
            NoVotesRecordedError: No vote was recorded.
            VoteNotResolvedError: Quorum or agreement is missing.
        """
        log = self._log_operation(
            "confirm_judgment", session_case_id=str(session_case_id)
        )
        async with hold_appearance(self._lock, self._sessions, session_case_id):
            session_case, session, case = await self._load(session_case_id)
            session.ensure_open()
            resolution = await self._resolve(
                session_case_id, quality_vote_member_id or session.president_id
            )
            result_text = await self._winning_text(resolution)

            judged = session_case.with_status(
                CaseSessionStatus.JUDGED,
                resolution=resolution,
                result_text=result_text,
                minutes_text=minutes_text,
            )
            judged_case = case.with_status(judged.status.case_status)
            await self._sessions.update_session_case(judged)
            await self._cases.update(judged_case)

        assert judged.outcome is not None
        await self._events.case_judged(
            CaseJudgedEvent(
                event_id=uuid7(),
                case_id=case.id,
                session_id=session.id,
                session_case_id=session_case_id,
                outcome=judged.outcome,
                judged_at=datetime.now(timezone.utc),
            )
        )
        log.info(
            "case_judged",
            case_id=str(case.id),
            outcome=judged.outcome.value,
            votes_in_favor=resolution.votes_in_favor,
            votes_against=resolution.votes_against,
            quality_vote_used=resolution.quality_vote_used,
        )
        return judged

    async def change_status(
        self,
        session_case_id: UUID,
        new_status: CaseSessionStatus,
        cause: str | None = None,
        view_requested_by: UUID | None = None,
        inquiry_deadline_days: int | None = None,
        minutes_text: str | None = None,
        quality_vote_member_id: UUID | None = None,
    ) -> SessionCase:
        """Apply a result to a case appearance and mirror it into the case.

        JUDGED is delegated to confirm_judgment().

        Raises:
            NotFoundError: Unknown appearance, session, case or member.
            SessionClosedError: The session is concluded or cancelled.
            InvalidStateTransitionError: Transition not in the matrix.
            MissingTransitionCauseError: Override without a usable cause.
            MemberNotAttendingError: View requester does not attend.
            AuthorityConflictError: View requester is an authority on the case.
        """
        if new_status is CaseSessionStatus.JUDGED:
            return await self.confirm_judgment(
                session_case_id, quality_vote_member_id, minutes_text
            )

        log = self._log_operation(
            "change_status",
            session_case_id=str(session_case_id),
            to=new_status.value,
        )
        async with hold_appearance(self._lock, self._sessions, session_case_id):
            session_case, session, case = await self._load(session_case_id)
            session.ensure_open()
            if new_status is CaseSessionStatus.VIEW_REQUESTED and view_requested_by:
                await self._check_view_requester(session, case, view_requested_by)

            updated = session_case.with_status(
                new_status,
                cause=cause,
                view_requested_by=view_requested_by,
                inquiry_deadline_days=inquiry_deadline_days,
                minutes_text=minutes_text,
            )
            updated_case = case.with_status(updated.status.case_status, cause=cause)
            await self._sessions.update_session_case(updated)
            await self._cases.update(updated_case)

        log.info(
            "case_status_changed",
            case_id=str(case.id),
            from_status=session_case.status.value,
        )
        return updated

    async def _check_view_requester(
        self, session: Session, case: Case, member_id: UUID
    ) -> None:
        if not session.is_attending(member_id):
            raise MemberNotAttendingError(session.id, member_id)
        member = await self._members.get_member(member_id)
        if member is None:
            raise NotFoundError("member", member_id)
        ensure_no_authority_conflict(
            case.id,
            [member],
            await self._authorities.authorities_for_case(case.id),
            name_fallback=self._config.authority_name_fallback,
        )

    async def _resolve(
        self, session_case_id: UUID, quality_vote_member_id: UUID | None
    ) -> VoteResolution:
        votes = await self._votes.list_for_session_case(session_case_id)
        distribution = await self._distributions.get(session_case_id)
        if distribution is None:
            return VoteResolution(
                votes_received=len(votes), votes_required=0, quorum_met=False
            )
        return resolve_votes(distribution, votes, quality_vote_member_id)

    async def _winning_text(self, resolution: VoteResolution) -> str | None:
        if resolution.winning_vote_id is None:
            return None
        vote = await self._votes.get(resolution.winning_vote_id)
        return vote.vote_text if vote else None

    async def _load(self, session_case_id: UUID) -> tuple[SessionCase, Session, Case]:
        session_case = await self._sessions.get_session_case(session_case_id)
        if session_case is None:
            raise NotFoundError("session case", session_case_id)
        session = await self._sessions.get_session(session_case.session_id)
        if session is None:
            raise NotFoundError("session", session_case.session_id)
        case = await self._cases.get(session_case.case_id)
        if case is None:
            raise NotFoundError("case", session_case.case_id)
        return session_case, session, case
