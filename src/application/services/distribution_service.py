"""Distribution Assigner Service.

Assigns the rapporteur and reviewers who judge a case appearance.

Eligibility rules (all checked before any write):
- reviewers are unique and never include the rapporteur
- every assignee attends the session
- no assignee is a registered authority on the case (matched by
  registry id, then by normalized name when the fallback is enabled)
- the session is still open, the appearance is IN_AGENDA and no vote
  has been recorded on it yet

The whole check-then-write runs under the session and case appearance
locks, so attendance cannot change between the check and the write.
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from src.application.ports.aggregate_lock import AggregateLockProtocol
from src.application.ports.directories import (
    AuthorityDirectoryProtocol,
    MemberDirectoryProtocol,
)
from src.application.ports.distribution_repository import (
    DistributionRepositoryProtocol,
)
from src.application.ports.session_repository import SessionRepositoryProtocol
from src.application.ports.vote_repository import VoteRepositoryProtocol
from src.application.services.base import LoggingMixin, hold_appearance
from src.config.adjudication_config import DEFAULT_ADJUDICATION_CONFIG, AdjudicationConfig
from src.domain.errors import (
    AuthorityConflictError,
    CaseNotInAgendaError,
    DistributionLockedError,
    MemberNotAttendingError,
    NotFoundError,
)
from src.domain.models.distribution import Distribution
from src.domain.models.member import Member
from src.domain.models.session import CaseSessionStatus, Session, SessionCase
from src.domain.services.authority_conflict import ensure_no_authority_conflict


class DistributionService(LoggingMixin):
    """Service assigning members to case appearances.

    Attributes:
        _sessions: Session and agenda repository.
        _distributions: Distribution repository.
        _votes: Vote repository (distribution locks once votes exist).
        _members: Member directory.
        _authorities: Authority directory.
        _lock: Session and case appearance locks.
        _config: Core configuration.
    """

    def __init__(
        self,
        session_repository: SessionRepositoryProtocol,
        distribution_repository: DistributionRepositoryProtocol,
        vote_repository: VoteRepositoryProtocol,
        member_directory: MemberDirectoryProtocol,
        authority_directory: AuthorityDirectoryProtocol,
        aggregate_lock: AggregateLockProtocol,
        config: AdjudicationConfig | None = None,
    ) -> None:
        self._sessions = session_repository
        self._distributions = distribution_repository
        self._votes = vote_repository
        self._members = member_directory
        self._authorities = authority_directory
        self._lock = aggregate_lock
        self._config = config or DEFAULT_ADJUDICATION_CONFIG
        self._init_logger()

    async def _load_members(self, member_ids: Sequence[UUID]) -> list[Member]:
        members: list[Member] = []
        for member_id in member_ids:
            member = await self._members.get_member(member_id)
            if member is None:
                raise NotFoundError("member", member_id)
            members.append(member)
        return members

    async def check_assignment(
        self,
        session: Session,
        case_id: UUID,
        session_case_id: UUID,
        rapporteur_id: UUID,
        reviewer_ids: Sequence[UUID] = (),
    ) -> Distribution:
        """Validate a prospective distribution without writing it.

        Also used by the scheduler when a case is distributed in the same
        call that places it on the agenda.

        Args:
            session: Session whose agenda holds the case.
            case_id: The distributed case.
            session_case_id: The (possibly not yet stored) appearance id.
            rapporteur_id: Rapporteur member.
            reviewer_ids: Reviewer members, in order.

        Returns:
            The validated, unsaved distribution.

        Raises:
            InvalidDistributionError: Duplicate reviewers or rapporteur as reviewer.
            MemberNotAttendingError: An assignee does not attend the session.
            NotFoundError: An assignee is not a registered member.
            AuthorityConflictError: An assignee is an authority on the case.
        """
        log = self._log_operation(
            "check_assignment",
            case_id=str(case_id),
            session_case_id=str(session_case_id),
        )
        distribution = Distribution(
            session_case_id=session_case_id,
            rapporteur_id=rapporteur_id,
            reviewer_ids=tuple(reviewer_ids),
        )
        for member_id in distribution.member_ids:
            if not session.is_attending(member_id):
                raise MemberNotAttendingError(session.id, member_id)

        members = await self._load_members(distribution.member_ids)
        authorities = await self._authorities.authorities_for_case(case_id)
        try:
            ensure_no_authority_conflict(
                case_id,
                members,
                authorities,
                name_fallback=self._config.authority_name_fallback,
            )
        except AuthorityConflictError as exc:
            log.warning(
                "distribution_rejected_authority_conflict",
                member_id=str(exc.member_id),
                matched_by=exc.matched_by,
            )
            raise
        return distribution

    async def assign(
        self,
        session_case_id: UUID,
        rapporteur_id: UUID,
        reviewer_ids: Sequence[UUID] = (),
    ) -> Distribution:
        """Create or replace the distribution of a case appearance.

        Args:
            session_case_id: The appearance to distribute.
            rapporteur_id: Rapporteur member.
            reviewer_ids: Reviewer members, in order (may be empty).

        Returns:
            The stored distribution.

        Raises:
            NotFoundError: Unknown appearance, session or member.
            SessionClosedError: The session is concluded or cancelled.
            CaseNotInAgendaError: The appearance already has a result.
            DistributionLockedError: Votes were already recorded.
            InvalidDistributionError: Malformed member list.
            MemberNotAttendingError: An assignee does not attend.
            AuthorityConflictError: An assignee is an authority on the case.
        """
        log = self._log_operation(
            "assign",
            session_case_id=str(session_case_id),
            rapporteur_id=str(rapporteur_id),
        )
        async with hold_appearance(self._lock, self._sessions, session_case_id):
            session_case, session = await self._load_open_appearance(session_case_id)

            vote_count = await self._votes.count_for_session_case(session_case_id)
            if vote_count > 0:
                log.warning("distribution_rejected_locked", vote_count=vote_count)
                raise DistributionLockedError(session_case_id, vote_count)

            distribution = await self.check_assignment(
                session,
                session_case.case_id,
                session_case_id,
                rapporteur_id,
                reviewer_ids,
            )
            await self._distributions.save(distribution)

        log.info(
            "distribution_assigned",
            reviewer_count=len(distribution.reviewer_ids),
        )
        return distribution

    async def get_distribution(self, session_case_id: UUID) -> Distribution:
        """Retrieve the distribution of a case appearance.

        Raises:
            NotFoundError: If the appearance was never distributed.
        """
        distribution = await self._distributions.get(session_case_id)
        if distribution is None:
            raise NotFoundError("distribution", session_case_id)
        return distribution

    async def _load_open_appearance(
        self, session_case_id: UUID
    ) -> tuple[SessionCase, Session]:
        session_case = await self._sessions.get_session_case(session_case_id)
        if session_case is None:
            raise NotFoundError("session case", session_case_id)
        session = await self._sessions.get_session(session_case.session_id)
        if session is None:
            raise NotFoundError("session", session_case.session_id)
        session.ensure_open()
        if session_case.status is not CaseSessionStatus.IN_AGENDA:
            raise CaseNotInAgendaError(session_case_id, session_case.status.value)
        return session_case, session
