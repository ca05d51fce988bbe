"""Unit tests for CaseJudgmentService.

Tests for confirming judgments from votes and for administrative
results (suspension, inquiry, view request), mirrored into the case.
"""

from __future__ import annotations

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.domain.errors import (
    AuthorityConflictError,
    InvalidStateTransitionError,
    MemberNotAttendingError,
    MissingTransitionCauseError,
    NoVotesRecordedError,
    SessionClosedError,
    VoteNotResolvedError,
)
from src.domain.models.case import CaseStatus
from src.domain.models.member import CaseAuthority
from src.domain.models.session import CaseSessionStatus, SessionStatus
from src.domain.models.vote import JudgmentOutcome
from tests.helpers import Board


@pytest.fixture
async def appearance(board: Board):
    """(case, session_case) distributed to Alice, Bob and Carol."""
    session = await board.open_session()
    case, entry = await board.distributed_case(session)
    return case, entry.session_case


class TestConfirmJudgment:
    """Tests for confirm_judgment()."""

    @pytest.mark.asyncio
    async def test_confirm_judgment_mirrors_case(self, board: Board, appearance) -> None:
        """confirm_judgment() judges the appearance and the case together."""
        case, session_case = appearance

        judged = await board.judge(session_case.id)

        assert judged.status is CaseSessionStatus.JUDGED
        assert judged.outcome is JudgmentOutcome.MERIT_DECIDED
        assert judged.result_text == "Negar provimento ao recurso."
        stored_case = await board.container.case_registry.get_case(case.id)
        assert stored_case.status is CaseStatus.JUDGED

    @pytest.mark.asyncio
    async def test_winning_text_is_rapporteurs(self, board: Board, appearance) -> None:
        """The rapporteur's edited text becomes the result."""
        _, session_case = appearance
        recorder = board.container.vote_recorder
        cast = await recorder.record_vote(
            session_case.id, board.alice.id, board.merit_vote()
        )
        await recorder.edit_vote(cast.vote.id, vote_text="Negar provimento, por maioria.")
        await recorder.record_vote(session_case.id, board.bob.id, board.merit_vote())
        await recorder.record_vote(session_case.id, board.carol.id, board.merit_vote())

        judged = await board.container.judgment.confirm_judgment(session_case.id)

        assert judged.winning_vote_id == cast.vote.id
        assert judged.result_text == "Negar provimento, por maioria."

    @pytest.mark.asyncio
    async def test_publishes_case_judged(self, board: Board, appearance) -> None:
        """confirm_judgment() publishes CaseJudged after the write."""
        case, session_case = appearance

        await board.judge(session_case.id, board.not_heard_vote())

        [event] = board.container.events.case_judged_events
        assert event.case_id == case.id
        assert event.session_case_id == session_case.id
        assert event.outcome is JudgmentOutcome.NOT_HEARD

    @pytest.mark.asyncio
    async def test_failing_subscriber_does_not_undo_judgment(
        self, board: Board, appearance
    ) -> None:
        """A failing CaseJudged handler is logged, the judgment stands."""
        case, session_case = appearance
        handler = AsyncMock(side_effect=RuntimeError("mailer down"))
        board.container.events.subscribe(on_case_judged=handler)

        await board.judge(session_case.id)

        handler.assert_awaited_once()
        stored_case = await board.container.case_registry.get_case(case.id)
        assert stored_case.status is CaseStatus.JUDGED

    @pytest.mark.asyncio
    async def test_no_votes(self, board: Board, appearance) -> None:
        _, session_case = appearance

        with pytest.raises(NoVotesRecordedError):
            await board.container.judgment.confirm_judgment(session_case.id)

    @pytest.mark.asyncio
    async def test_missing_quorum(self, board: Board, appearance) -> None:
        """confirm_judgment() refuses while a distributed member has not voted."""
        case, session_case = appearance
        recorder = board.container.vote_recorder
        await recorder.record_vote(session_case.id, board.alice.id, board.merit_vote())
        await recorder.record_vote(session_case.id, board.bob.id, board.merit_vote())

        with pytest.raises(VoteNotResolvedError) as exc_info:
            await board.container.judgment.confirm_judgment(session_case.id)

        assert exc_info.value.votes_required == 3
        stored_case = await board.container.case_registry.get_case(case.id)
        assert stored_case.status is CaseStatus.IN_AGENDA
        assert board.container.events.case_judged_events == []

    @pytest.mark.asyncio
    async def test_judgment_is_final(self, board: Board, appearance) -> None:
        _, session_case = appearance
        await board.judge(session_case.id)

        with pytest.raises(InvalidStateTransitionError):
            await board.container.judgment.confirm_judgment(session_case.id)

    @pytest.mark.asyncio
    async def test_cancelled_session_rejects_judgment(
        self, board: Board, appearance
    ) -> None:
        _, session_case = appearance
        await board.container.scheduler.transition_session(
            session_case.session_id, SessionStatus.CANCELLED, cancellation_reason="chuva"
        )

        with pytest.raises(SessionClosedError):
            await board.container.judgment.confirm_judgment(session_case.id)


class TestChangeStatus:
    """Tests for change_status()."""

    @pytest.mark.asyncio
    async def test_suspend_mirrors_case(self, board: Board, appearance) -> None:
        """change_status() applies an override and mirrors it into the case."""
        case, session_case = appearance

        suspended = await board.container.judgment.change_status(
            session_case.id, CaseSessionStatus.SUSPENDED, cause="pedido da parte"
        )

        assert suspended.status_cause == "pedido da parte"
        stored_case = await board.container.case_registry.get_case(case.id)
        assert stored_case.status is CaseStatus.SUSPENDED
        assert stored_case.status_cause == "pedido da parte"

    @pytest.mark.asyncio
    async def test_override_requires_cause(self, board: Board, appearance) -> None:
        _, session_case = appearance

        with pytest.raises(MissingTransitionCauseError):
            await board.container.judgment.change_status(
                session_case.id, CaseSessionStatus.SUSPENDED, cause="  "
            )

    @pytest.mark.asyncio
    async def test_inquiry_with_deadline(self, board: Board, appearance) -> None:
        _, session_case = appearance

        updated = await board.container.judgment.change_status(
            session_case.id,
            CaseSessionStatus.UNDER_INQUIRY,
            cause="diligência fiscal",
            inquiry_deadline_days=30,
        )

        assert updated.inquiry_deadline_days == 30

    @pytest.mark.asyncio
    async def test_view_request_by_attending_member(
        self, board: Board, appearance
    ) -> None:
        _, session_case = appearance

        updated = await board.container.judgment.change_status(
            session_case.id,
            CaseSessionStatus.VIEW_REQUESTED,
            cause="vista",
            view_requested_by=board.carol.id,
        )

        assert updated.view_requested_by == board.carol.id

    @pytest.mark.asyncio
    async def test_view_requester_must_attend(self, board: Board) -> None:
        scheduler = board.container.scheduler
        session = await board.open_session()
        case = await board.register_case()
        entry = await scheduler.add_case_to_agenda(
            session.id, case.id, board.alice.id, [board.bob.id]
        )
        session_case = entry.session_case
        await scheduler.set_attendance(session.id, [board.alice.id, board.bob.id])

        with pytest.raises(MemberNotAttendingError):
            await board.container.judgment.change_status(
                session_case.id,
                CaseSessionStatus.VIEW_REQUESTED,
                cause="vista",
                view_requested_by=board.carol.id,
            )

    @pytest.mark.asyncio
    async def test_view_requester_cannot_be_authority(
        self, board: Board, appearance
    ) -> None:
        case, session_case = appearance
        board.container.authorities.register(
            case.id, CaseAuthority(registered_id=uuid4(), name="carol nunes")
        )

        with pytest.raises(AuthorityConflictError):
            await board.container.judgment.change_status(
                session_case.id,
                CaseSessionStatus.VIEW_REQUESTED,
                cause="vista",
                view_requested_by=board.carol.id,
            )

    @pytest.mark.asyncio
    async def test_correction_returns_to_agenda(self, board: Board, appearance) -> None:
        """An override can be corrected back to IN_AGENDA in the same session."""
        case, session_case = appearance
        judgment = board.container.judgment
        await judgment.change_status(
            session_case.id, CaseSessionStatus.SUSPENDED, cause="pedido da parte"
        )

        corrected = await judgment.change_status(
            session_case.id, CaseSessionStatus.IN_AGENDA, cause="lançado por engano"
        )

        assert corrected.status is CaseSessionStatus.IN_AGENDA
        stored_case = await board.container.case_registry.get_case(case.id)
        assert stored_case.status is CaseStatus.IN_AGENDA

    @pytest.mark.asyncio
    async def test_judged_delegates_to_confirmation(
        self, board: Board, appearance
    ) -> None:
        _, session_case = appearance
        for member_id in board.member_ids:
            await board.container.vote_recorder.record_vote(
                session_case.id, member_id, board.merit_vote()
            )

        judged = await board.container.judgment.change_status(
            session_case.id, CaseSessionStatus.JUDGED
        )

        assert judged.outcome is JudgmentOutcome.MERIT_DECIDED


class TestContinuance:
    """A continued case gets a fresh appearance in a later session."""

    @pytest.mark.asyncio
    async def test_suspended_case_judged_in_later_session(self, board: Board) -> None:
        first_session = await board.open_session()
        case, first = await board.distributed_case(first_session)
        await board.container.judgment.change_status(
            first.session_case.id, CaseSessionStatus.SUSPENDED, cause="pedido da parte"
        )
        second_session = await board.open_session()

        entry = await board.container.scheduler.add_case_to_agenda(
            second_session.id, case.id, board.alice.id, [board.bob.id, board.carol.id]
        )
        await board.judge(entry.session_case.id)

        earlier = await board.container.scheduler.get_agenda_entry(first.session_case.id)
        assert earlier.session_case.status is CaseSessionStatus.SUSPENDED
        stored_case = await board.container.case_registry.get_case(case.id)
        assert stored_case.status is CaseStatus.JUDGED
