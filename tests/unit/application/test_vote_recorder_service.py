"""Unit tests for VoteRecorderService.

Tests for recording, editing and withdrawing votes and for the
resolution query.
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from src.domain.errors import (
    CaseNotInAgendaError,
    DuplicateVoteError,
    IncompleteVoteRationaleError,
    MemberNotAttendingError,
    NotDistributedError,
    NotFoundError,
    OfficialDirectiveNotAllowedError,
    SessionClosedError,
    VoteTemplateKindMismatchError,
)
from src.domain.models.member import Member
from src.domain.models.session import SessionStatus
from src.domain.models.vote import (
    JudgmentOutcome,
    KnowledgeType,
    PreliminaryOutcome,
    VoteInput,
    VoteRole,
)
from tests.helpers import Board


@pytest.fixture
async def session_case_id(board: Board):
    """Id of an appearance distributed to Alice (rapporteur), Bob and Carol."""
    session = await board.open_session()
    _, entry = await board.distributed_case(session)
    return entry.session_case.id


class TestRecordVote:
    """Tests for record_vote()."""

    @pytest.mark.asyncio
    async def test_record_vote_composes_text_and_role(
        self, board: Board, session_case_id
    ) -> None:
        """record_vote() composes the text and derives the role."""
        vote_input = VoteInput(
            knowledge_type=KnowledgeType.KNOWLEDGE,
            merit_template_id=board.merit.id,
            official_template_id=board.official.id,
        )

        cast = await board.container.vote_recorder.record_vote(
            session_case_id, board.alice.id, vote_input
        )

        assert cast.role is VoteRole.RAPPORTEUR
        assert cast.vote.vote_text == (
            "Negar provimento ao recurso, mas, de ofício, cancelar a multa aplicada."
        )

    @pytest.mark.asyncio
    async def test_reviewer_role(self, board: Board, session_case_id) -> None:
        cast = await board.container.vote_recorder.record_vote(
            session_case_id, board.carol.id, board.not_heard_vote()
        )

        assert cast.role is VoteRole.REVIEWER
        assert cast.vote.vote_text == "Acolher a preliminar de decadência."

    @pytest.mark.asyncio
    async def test_one_vote_per_member(self, board: Board, session_case_id) -> None:
        """record_vote() rejects a second vote by the same member."""
        recorder = board.container.vote_recorder
        await recorder.record_vote(session_case_id, board.bob.id, board.merit_vote())

        with pytest.raises(DuplicateVoteError):
            await recorder.record_vote(session_case_id, board.bob.id, board.merit_vote())

    @pytest.mark.asyncio
    async def test_undistributed_member_cannot_vote(
        self, board: Board, session_case_id
    ) -> None:
        dora = board.container.members.add(Member(id=uuid4(), name="Dora Lima"))

        with pytest.raises(NotDistributedError):
            await board.container.vote_recorder.record_vote(
                session_case_id, dora.id, board.merit_vote()
            )

    @pytest.mark.asyncio
    async def test_undistributed_appearance_rejects_votes(self, board: Board) -> None:
        session = await board.open_session()
        case = await board.register_case()
        entry = await board.container.scheduler.add_case_to_agenda(session.id, case.id)

        with pytest.raises(NotDistributedError):
            await board.container.vote_recorder.record_vote(
                entry.session_case.id, board.alice.id, board.merit_vote()
            )

    @pytest.mark.asyncio
    async def test_knowledge_vote_needs_merit(self, board: Board, session_case_id) -> None:
        """record_vote() rejects incomplete rationale before writing."""
        with pytest.raises(IncompleteVoteRationaleError):
            await board.container.vote_recorder.record_vote(
                session_case_id,
                board.alice.id,
                VoteInput(knowledge_type=KnowledgeType.KNOWLEDGE),
            )
        assert await board.container.vote_recorder.list_votes(session_case_id) == []

    @pytest.mark.asyncio
    async def test_official_directive_needs_accepted_objection(
        self, board: Board, session_case_id
    ) -> None:
        with pytest.raises(OfficialDirectiveNotAllowedError):
            await board.container.vote_recorder.record_vote(
                session_case_id,
                board.alice.id,
                VoteInput(
                    knowledge_type=KnowledgeType.NON_KNOWLEDGE,
                    preliminary_outcome=PreliminaryOutcome.REJECT,
                    official_template_id=board.official.id,
                ),
            )

    @pytest.mark.asyncio
    async def test_template_kind_must_match(self, board: Board, session_case_id) -> None:
        with pytest.raises(VoteTemplateKindMismatchError):
            await board.container.vote_recorder.record_vote(
                session_case_id,
                board.alice.id,
                VoteInput(
                    knowledge_type=KnowledgeType.KNOWLEDGE,
                    merit_template_id=board.official.id,
                ),
            )

    @pytest.mark.asyncio
    async def test_unknown_template(self, board: Board, session_case_id) -> None:
        with pytest.raises(NotFoundError):
            await board.container.vote_recorder.record_vote(
                session_case_id,
                board.alice.id,
                VoteInput(
                    knowledge_type=KnowledgeType.KNOWLEDGE, merit_template_id=uuid4()
                ),
            )

    @pytest.mark.asyncio
    async def test_judged_appearance_freezes_votes(
        self, board: Board, session_case_id
    ) -> None:
        """Votes of a judged appearance can no longer be withdrawn."""
        await board.judge(session_case_id)
        votes = await board.container.vote_recorder.list_votes(session_case_id)

        with pytest.raises(CaseNotInAgendaError):
            await board.container.vote_recorder.withdraw_vote(votes[0].vote.id)

    @pytest.mark.asyncio
    async def test_absent_member_cannot_vote(self, board: Board, session_case_id) -> None:
        """A distributed member no longer on the attendance list cannot vote."""
        entry = await board.container.scheduler.get_agenda_entry(session_case_id)
        session = await board.container.scheduler.get_session(
            entry.session_case.session_id
        )
        await board.container.sessions.update_session(
            session.with_attendance((board.alice.id, board.bob.id))
        )

        with pytest.raises(MemberNotAttendingError):
            await board.container.vote_recorder.record_vote(
                session_case_id, board.carol.id, board.merit_vote()
            )


class TestEditAndWithdraw:
    """Tests for edit_vote() and withdraw_vote()."""

    @pytest.mark.asyncio
    async def test_edit_text_keeps_conclusion(self, board: Board, session_case_id) -> None:
        """edit_vote() with text only leaves the structured choices alone."""
        recorder = board.container.vote_recorder
        cast = await recorder.record_vote(session_case_id, board.bob.id, board.merit_vote())

        edited = await recorder.edit_vote(
            cast.vote.id, vote_text="  Negar provimento, nos termos do voto.  "
        )

        assert edited.vote.vote_text == "Negar provimento, nos termos do voto."
        assert edited.vote.conclusion == cast.vote.conclusion

    @pytest.mark.asyncio
    async def test_edit_choices_recomposes(self, board: Board, session_case_id) -> None:
        recorder = board.container.vote_recorder
        cast = await recorder.record_vote(session_case_id, board.bob.id, board.merit_vote())

        edited = await recorder.edit_vote(cast.vote.id, vote_input=board.not_heard_vote())

        assert edited.vote.vote_text == "Acolher a preliminar de decadência."
        assert edited.vote.conclusion.outcome is JudgmentOutcome.NOT_HEARD

    @pytest.mark.asyncio
    async def test_edit_rejects_blank_text(self, board: Board, session_case_id) -> None:
        recorder = board.container.vote_recorder
        cast = await recorder.record_vote(session_case_id, board.bob.id, board.merit_vote())

        with pytest.raises(IncompleteVoteRationaleError):
            await recorder.edit_vote(cast.vote.id, vote_text="   ")

    @pytest.mark.asyncio
    async def test_edit_requires_something(self, board: Board) -> None:
        with pytest.raises(ValueError):
            await board.container.vote_recorder.edit_vote(uuid4())

    @pytest.mark.asyncio
    async def test_withdraw_vote(self, board: Board, session_case_id) -> None:
        """withdraw_vote() deletes the vote; the member may vote again."""
        recorder = board.container.vote_recorder
        cast = await recorder.record_vote(session_case_id, board.bob.id, board.merit_vote())

        await recorder.withdraw_vote(cast.vote.id)
        again = await recorder.record_vote(
            session_case_id, board.bob.id, board.merit_vote()
        )

        assert [c.vote.id for c in await recorder.list_votes(session_case_id)] == [
            again.vote.id
        ]


class TestResolution:
    """Tests for resolution()."""

    @pytest.mark.asyncio
    async def test_resolution_tracks_quorum(self, board: Board, session_case_id) -> None:
        """resolution() stays unresolved until every member votes."""
        recorder = board.container.vote_recorder
        await recorder.record_vote(session_case_id, board.alice.id, board.merit_vote())
        await recorder.record_vote(session_case_id, board.bob.id, board.merit_vote())

        partial = await recorder.resolution(session_case_id)
        await recorder.record_vote(session_case_id, board.carol.id, board.not_heard_vote())
        complete = await recorder.resolution(session_case_id)

        assert (partial.votes_received, partial.votes_required) == (2, 3)
        assert not partial.is_resolved
        assert complete.is_resolved
        assert complete.outcome is JudgmentOutcome.MERIT_DECIDED
        assert complete.votes_against == 1

    @pytest.mark.asyncio
    async def test_president_breaks_tie_by_default(self, board: Board) -> None:
        """resolution() uses the session president as quality vote."""
        session = await board.open_session()
        _, entry = await board.distributed_case(session)
        await board.container.distribution.assign(
            entry.session_case.id, board.bob.id, [board.alice.id]
        )
        recorder = board.container.vote_recorder
        await recorder.record_vote(entry.session_case.id, board.bob.id, board.merit_vote())
        await recorder.record_vote(
            entry.session_case.id, board.alice.id, board.not_heard_vote()
        )

        by_president = await recorder.resolution(entry.session_case.id)
        by_bob = await recorder.resolution(
            entry.session_case.id, quality_vote_member_id=board.bob.id
        )

        assert by_president.quality_vote_used
        assert by_president.outcome is JudgmentOutcome.NOT_HEARD
        assert by_bob.outcome is JudgmentOutcome.MERIT_DECIDED


class TestConcludedSession:
    """A concluded session freezes every vote."""

    @pytest.fixture
    async def concluded(self, board: Board):
        """(session_case_id, vote_id) of a judged case in a concluded session."""
        session = await board.open_session()
        _, entry = await board.distributed_case(session)
        await board.judge(entry.session_case.id)
        scheduler = board.container.scheduler
        for status in (
            SessionStatus.AGENDA_PUBLISHED,
            SessionStatus.IN_PROGRESS,
            SessionStatus.CONCLUDED,
        ):
            await scheduler.transition_session(session.id, status)
        votes = await board.container.vote_recorder.list_votes(entry.session_case.id)
        return entry.session_case.id, votes[0].vote.id

    @pytest.mark.asyncio
    async def test_record_vote_rejected(self, board: Board, concluded) -> None:
        session_case_id, _ = concluded
        dora = board.container.members.add(Member(id=uuid4(), name="Dora Lima"))

        with pytest.raises(SessionClosedError):
            await board.container.vote_recorder.record_vote(
                session_case_id, dora.id, board.merit_vote()
            )

    @pytest.mark.asyncio
    async def test_edit_vote_rejected(self, board: Board, concluded) -> None:
        _, vote_id = concluded

        with pytest.raises(SessionClosedError):
            await board.container.vote_recorder.edit_vote(vote_id, vote_text="Outro.")
        with pytest.raises(SessionClosedError):
            await board.container.vote_recorder.edit_vote(
                vote_id, vote_input=board.not_heard_vote()
            )

    @pytest.mark.asyncio
    async def test_withdraw_vote_rejected(self, board: Board, concluded) -> None:
        session_case_id, vote_id = concluded

        with pytest.raises(SessionClosedError):
            await board.container.vote_recorder.withdraw_vote(vote_id)
        assert len(await board.container.vote_recorder.list_votes(session_case_id)) == 3
