"""Vote Recorder Service.

Records, edits and withdraws members' votes on a case appearance and
reports the current vote resolution. Recording a vote never concludes
the case; judgment confirmation is a separate, explicit step.

Recording flow (all under the session and case appearance locks):
1. Load the appearance and its session; the session must be open and
   the appearance IN_AGENDA
2. Derive the member's role from the distribution
3. The member must attend the session
4. Reject a second vote by the same member
5. Resolve and validate the selected templates
6. Compose the vote text; an empty composition is an incomplete rationale
7. Store the vote
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from uuid6 import uuid7

from src.application.ports.aggregate_lock import AggregateLockProtocol
from src.application.ports.directories import VoteTemplateCatalogProtocol
from src.application.ports.distribution_repository import (
    DistributionRepositoryProtocol,
)
from src.application.ports.session_repository import SessionRepositoryProtocol
from src.application.ports.vote_repository import VoteRepositoryProtocol
from src.application.services.base import LoggingMixin, hold_appearance
from src.domain.errors import (
    CaseNotInAgendaError,
    DuplicateVoteError,
    IncompleteVoteRationaleError,
    MemberNotAttendingError,
    NotDistributedError,
    NotFoundError,
)
from src.domain.models.distribution import Distribution
from src.domain.models.session import CaseSessionStatus, Session, SessionCase
from src.domain.models.vote import (
    Vote,
    VoteInput,
    VoteResolution,
    VoteRole,
    VoteTemplate,
)
from src.domain.services.vote_resolution import (
    derive_role,
    resolve_votes,
    validate_vote_rationale,
)
from src.domain.services.vote_text_composer import compose_vote_text


@dataclass(frozen=True)
class CastVote:
    """A vote together with the role derived for its member."""

    vote: Vote
    role: VoteRole


@dataclass(frozen=True)
class _SelectedTemplates:
    preliminary: VoteTemplate | None
    merit: VoteTemplate | None
    official: VoteTemplate | None


class VoteRecorderService(LoggingMixin):
    """Service recording member votes.

    Attributes:
        _sessions: Session and agenda repository.
        _distributions: Distribution repository.
        _votes: Vote repository.
        _templates: Vote template catalog.
        _lock: Session and case appearance locks.
    """

    def __init__(
        self,
        session_repository: SessionRepositoryProtocol,
        distribution_repository: DistributionRepositoryProtocol,
        vote_repository: VoteRepositoryProtocol,
        template_catalog: VoteTemplateCatalogProtocol,
        aggregate_lock: AggregateLockProtocol,
    ) -> None:
        self._sessions = session_repository
        self._distributions = distribution_repository
        self._votes = vote_repository
        self._templates = template_catalog
        self._lock = aggregate_lock
        self._init_logger()

    async def record_vote(
        self,
        session_case_id: UUID,
        member_id: UUID,
        vote_input: VoteInput,
    ) -> CastVote:
        """Record a member's vote.

        Args:
            session_case_id: The case appearance voted on.
            member_id: Voting member.
            vote_input: Structured choices.

        Returns:
            The stored vote with the member's derived role.

        Raises:
            NotFoundError: Unknown appearance, session or template.
            SessionClosedError: The session is concluded or cancelled.
            CaseNotInAgendaError: The appearance already has a result.
            MemberNotAttendingError: The member does not attend the session.
            NotDistributedError: The member is not distributed on the case.
            DuplicateVoteError: The member already voted.
            VoteRationaleError: The choices cannot support a vote.
        """
        log = self._log_operation(
            "record_vote",
            session_case_id=str(session_case_id),
            member_id=str(member_id),
            knowledge_type=vote_input.knowledge_type.value,
        )
        async with hold_appearance(self._lock, self._sessions, session_case_id):
            _, session = await self._load_votable_appearance(session_case_id)
            distribution = await self._distributions.get(session_case_id)
            if distribution is None:
                raise NotDistributedError(session_case_id, member_id)
            role = derive_role(distribution, member_id)
            if not session.is_attending(member_id):
                log.warning("vote_rejected_not_attending")
                raise MemberNotAttendingError(session.id, member_id)

            if await self._votes.get_by_member(session_case_id, member_id) is not None:
                log.warning("vote_rejected_duplicate")
                raise DuplicateVoteError(session_case_id, member_id)

            vote_text = await self._compose(vote_input)
            vote = Vote.from_input(
                vote_id=uuid7(),
                session_case_id=session_case_id,
                member_id=member_id,
                vote_input=vote_input,
                vote_text=vote_text,
            )
            await self._votes.add(vote)

        log.info("vote_recorded", vote_id=str(vote.id), role=role.value)
        return CastVote(vote=vote, role=role)

    async def edit_vote(
        self,
        vote_id: UUID,
        vote_input: VoteInput | None = None,
        vote_text: str | None = None,
    ) -> CastVote:
        """Edit a vote's choices and/or its text.

        New choices re-compose the text; an explicit text then replaces
        the composition verbatim.

        Raises:
            NotFoundError: Unknown vote, appearance, session or template.
            SessionClosedError: The session is concluded or cancelled.
            CaseNotInAgendaError: The appearance already has a result.
            NotDistributedError: The member is no longer distributed.
            VoteRationaleError: New choices or text are unusable.
        """
        if vote_input is None and vote_text is None:
            raise ValueError("either vote_input or vote_text is required")
        log = self._log_operation("edit_vote", vote_id=str(vote_id))

        vote = await self._get_vote(vote_id)
        async with hold_appearance(self._lock, self._sessions, vote.session_case_id):
            vote = await self._get_vote(vote_id)
            await self._load_votable_appearance(vote.session_case_id)
            distribution = await self._require_distribution(vote)
            role = derive_role(distribution, vote.member_id)

            updated = vote
            if vote_input is not None:
                updated = updated.with_choices(vote_input, await self._compose(vote_input))
            if vote_text is not None:
                if not vote_text.strip():
                    raise IncompleteVoteRationaleError("The vote text cannot be empty")
                updated = updated.with_text(vote_text.strip())
            await self._votes.update(updated)

        log.info("vote_edited", rechosen=vote_input is not None)
        return CastVote(vote=updated, role=role)

    async def withdraw_vote(self, vote_id: UUID) -> None:
        """Delete a vote while its appearance is still IN_AGENDA.

        Once the last vote is withdrawn the distribution may change again.

        Raises:
            NotFoundError: Unknown vote, appearance or session.
            SessionClosedError: The session is concluded or cancelled.
            CaseNotInAgendaError: The appearance already has a result.
        """
        log = self._log_operation("withdraw_vote", vote_id=str(vote_id))
        vote = await self._get_vote(vote_id)
        async with hold_appearance(self._lock, self._sessions, vote.session_case_id):
            vote = await self._get_vote(vote_id)
            await self._load_votable_appearance(vote.session_case_id)
            await self._votes.delete(vote_id)
        log.info("vote_withdrawn", session_case_id=str(vote.session_case_id))

    async def list_votes(self, session_case_id: UUID) -> list[CastVote]:
        """List the votes on a case appearance with derived roles.

        Raises:
            NotFoundError: Unknown appearance.
        """
        await self._get_appearance(session_case_id)
        votes = await self._votes.list_for_session_case(session_case_id)
        distribution = await self._distributions.get(session_case_id)
        cast: list[CastVote] = []
        for vote in votes:
            role = distribution.role_of(vote.member_id) if distribution else None
            if role is not None:
                cast.append(CastVote(vote=vote, role=role))
        return cast

    async def resolution(
        self,
        session_case_id: UUID,
        quality_vote_member_id: UUID | None = None,
    ) -> VoteResolution:
        """Current quorum-and-agreement state of a case appearance.

        The session president's quality vote is used when none is given.

        Raises:
            NotFoundError: Unknown appearance or session.
        """
        session_case = await self._get_appearance(session_case_id)
        if quality_vote_member_id is None:
            session = await self._sessions.get_session(session_case.session_id)
            if session is None:
                raise NotFoundError("session", session_case.session_id)
            quality_vote_member_id = session.president_id
        distribution = await self._distributions.get(session_case_id)
        votes = await self._votes.list_for_session_case(session_case_id)
        if distribution is None:
            return VoteResolution(
                votes_received=len(votes), votes_required=0, quorum_met=False
            )
        return resolve_votes(distribution, votes, quality_vote_member_id)

    async def _compose(self, vote_input: VoteInput) -> str:
        selected = await self._select_templates(vote_input)
        validate_vote_rationale(
            vote_input, selected.preliminary, selected.merit, selected.official
        )
        vote_text = compose_vote_text(
            vote_input, selected.preliminary, selected.merit, selected.official
        )
        if not vote_text:
            raise IncompleteVoteRationaleError(
                "The selected templates do not compose a vote text"
            )
        return vote_text

    async def _select_templates(self, vote_input: VoteInput) -> _SelectedTemplates:
        return _SelectedTemplates(
            preliminary=await self._template(vote_input.preliminary_template_id),
            merit=await self._template(vote_input.merit_template_id),
            official=await self._template(vote_input.official_template_id),
        )

    async def _template(self, template_id: UUID | None) -> VoteTemplate | None:
        if template_id is None:
            return None
        template = await self._templates.get_template(template_id)
        if template is None:
            raise NotFoundError("vote template", template_id)
        return template

    async def _get_vote(self, vote_id: UUID) -> Vote:
        vote = await self._votes.get(vote_id)
        if vote is None:
            raise NotFoundError("vote", vote_id)
        return vote

    async def _require_distribution(self, vote: Vote) -> Distribution:
        distribution = await self._distributions.get(vote.session_case_id)
        if distribution is None:
            raise NotDistributedError(vote.session_case_id, vote.member_id)
        return distribution

    async def _get_appearance(self, session_case_id: UUID) -> SessionCase:
        session_case = await self._sessions.get_session_case(session_case_id)
        if session_case is None:
            raise NotFoundError("session case", session_case_id)
        return session_case

    async def _load_votable_appearance(
        self, session_case_id: UUID
    ) -> tuple[SessionCase, Session]:
        session_case = await self._get_appearance(session_case_id)
        session = await self._sessions.get_session(session_case.session_id)
        if session is None:
            raise NotFoundError("session", session_case.session_id)
        session.ensure_open()
        if session_case.status is not CaseSessionStatus.IN_AGENDA:
            raise CaseNotInAgendaError(session_case_id, session_case.status.value)
        return session_case, session
