"""Unit tests for SessionSchedulerService.

Tests for session scheduling, attendance, agenda assembly and the
session status machine, including its effects on case status.
"""

from __future__ import annotations

import asyncio
from datetime import date, time
from uuid import uuid4

import pytest

from src.domain.errors import (
    AuthorityConflictError,
    CaseNotInAgendaError,
    CaseUnavailableForAgendaError,
    DistributedMemberAbsentError,
    DistributionLockedError,
    InvalidStateTransitionError,
    MemberNotAttendingError,
    MissingTransitionCauseError,
    NotFoundError,
    SessionClosedError,
    SessionNotConcludableError,
)
from src.domain.models.case import CaseStatus
from src.domain.models.member import CaseAuthority
from src.domain.models.session import CaseSessionStatus, SessionStatus, SessionType
from tests.helpers import Board


async def _conclude(board: Board, session_id) -> None:
    scheduler = board.container.scheduler
    await scheduler.transition_session(session_id, SessionStatus.AGENDA_PUBLISHED)
    await scheduler.transition_session(session_id, SessionStatus.IN_PROGRESS)
    await scheduler.transition_session(session_id, SessionStatus.CONCLUDED)


class TestScheduleSession:
    """Tests for schedule_session()."""

    @pytest.mark.asyncio
    async def test_numbers_and_ordinals(self, board: Board) -> None:
        """schedule_session() counts ordinals per session type."""
        first = await board.open_session()
        extraordinary = await board.open_session(
            session_type=SessionType.EXTRAORDINARY
        )
        second = await board.open_session()

        assert str(first.number) == "0001/2025"
        assert str(extraordinary.number) == "0002/2025"
        assert [first.ordinal_number, second.ordinal_number] == [1, 2]
        assert extraordinary.ordinal_number == 1
        assert first.status is SessionStatus.AWAITING_PUBLICATION

    @pytest.mark.asyncio
    async def test_rejects_inverted_times(self, board: Board) -> None:
        """schedule_session() refuses an end before the start."""
        with pytest.raises(ValueError, match="end_time"):
            await board.container.scheduler.schedule_session(
                SessionType.ORDINARY,
                date(2025, 3, 12),
                start_time=time(14, 0),
                end_time=time(9, 0),
            )

    @pytest.mark.asyncio
    async def test_rejects_unknown_attendee(self, board: Board) -> None:
        with pytest.raises(NotFoundError):
            await board.container.scheduler.schedule_session(
                SessionType.ORDINARY,
                date(2025, 3, 12),
                attending_member_ids=[uuid4()],
            )

    @pytest.mark.asyncio
    async def test_list_sessions_by_year(self, board: Board) -> None:
        """list_sessions() filters by the session year."""
        await board.open_session()
        await board.open_session(session_date=date(2026, 2, 1))

        sessions = await board.container.scheduler.list_sessions(2026)

        assert [s.session_date.year for s in sessions] == [2026]


class TestAttendance:
    """Tests for set_attendance()."""

    @pytest.mark.asyncio
    async def test_set_attendance_replaces_list(self, board: Board) -> None:
        session = await board.open_session()

        updated = await board.container.scheduler.set_attendance(
            session.id, [board.alice.id, board.bob.id, board.alice.id]
        )

        assert updated.attending_member_ids == (board.alice.id, board.bob.id)

    @pytest.mark.asyncio
    async def test_distributed_member_cannot_be_dropped(self, board: Board) -> None:
        """Assignees of an IN_AGENDA appearance keep attending."""
        scheduler = board.container.scheduler
        session = await board.open_session()
        _, entry = await board.distributed_case(session)

        with pytest.raises(DistributedMemberAbsentError) as exc_info:
            await scheduler.set_attendance(session.id, [board.alice.id, board.bob.id])

        assert exc_info.value.member_id == board.carol.id
        assert exc_info.value.session_case_id == entry.session_case.id
        stored = await scheduler.get_session(session.id)
        assert stored.is_attending(board.carol.id)
        resolution = await board.container.vote_recorder.resolution(
            entry.session_case.id
        )
        assert resolution.votes_required == 3

    @pytest.mark.asyncio
    async def test_judged_appearance_releases_attendance(self, board: Board) -> None:
        """Members distributed only on decided cases may leave."""
        session = await board.open_session()
        await board.judged_case(session)

        updated = await board.container.scheduler.set_attendance(
            session.id, [board.alice.id, board.bob.id]
        )

        assert not updated.is_attending(board.carol.id)

    @pytest.mark.asyncio
    async def test_attendance_waits_for_session_lock(self, board: Board) -> None:
        session = await board.open_session()
        scheduler = board.container.scheduler

        async with board.container.lock.hold(session.id):
            task = asyncio.create_task(
                scheduler.set_attendance(session.id, [board.alice.id])
            )
            await asyncio.sleep(0)
            assert not task.done()

        updated = await task
        assert updated.attending_member_ids == (board.alice.id,)


class TestAgenda:
    """Tests for add_case_to_agenda() and remove_case_from_agenda()."""

    @pytest.mark.asyncio
    async def test_add_case_moves_case_into_agenda(self, board: Board) -> None:
        """add_case_to_agenda() appends in order and sets IN_AGENDA."""
        session = await board.open_session()
        first_case, first = await board.distributed_case(session)
        _, second = await board.distributed_case(session)

        case = await board.container.case_registry.get_case(first_case.id)
        assert case.status is CaseStatus.IN_AGENDA
        assert first.session_case.agenda_order == 1
        assert second.session_case.agenda_order == 2
        assert first.distribution.rapporteur_id == board.alice.id

    @pytest.mark.asyncio
    async def test_case_cannot_be_on_two_agendas(self, board: Board) -> None:
        """add_case_to_agenda() rejects a case already IN_AGENDA."""
        session = await board.open_session()
        other = await board.open_session()
        case, _ = await board.distributed_case(session)

        with pytest.raises(CaseUnavailableForAgendaError):
            await board.container.scheduler.add_case_to_agenda(other.id, case.id)

    @pytest.mark.asyncio
    async def test_judged_case_cannot_be_placed(self, board: Board) -> None:
        session = await board.open_session()
        case = await board.judged_case(session)

        with pytest.raises(CaseUnavailableForAgendaError):
            await board.container.scheduler.add_case_to_agenda(session.id, case.id)

    @pytest.mark.asyncio
    async def test_invalid_distribution_writes_nothing(self, board: Board) -> None:
        """add_case_to_agenda() validates the distribution before any write."""
        session = await board.open_session()
        case = await board.register_case()
        board.container.authorities.register(
            case.id, CaseAuthority(registered_id=uuid4(), name="Bob Tavares")
        )

        with pytest.raises(AuthorityConflictError):
            await board.container.scheduler.add_case_to_agenda(
                session.id, case.id, board.alice.id, [board.bob.id]
            )

        unchanged = await board.container.case_registry.get_case(case.id)
        assert unchanged.status is CaseStatus.AWAITING_JUDGMENT
        assert await board.container.scheduler.list_agenda(session.id) == []

    @pytest.mark.asyncio
    async def test_absent_member_cannot_be_distributed(self, board: Board) -> None:
        session = await board.container.scheduler.schedule_session(
            SessionType.ORDINARY,
            date(2025, 3, 12),
            attending_member_ids=[board.alice.id],
        )
        case = await board.register_case()

        with pytest.raises(MemberNotAttendingError):
            await board.container.scheduler.add_case_to_agenda(
                session.id, case.id, board.alice.id, [board.bob.id]
            )

    @pytest.mark.asyncio
    async def test_reviewers_need_rapporteur(self, board: Board) -> None:
        session = await board.open_session()
        case = await board.register_case()

        with pytest.raises(ValueError, match="rapporteur"):
            await board.container.scheduler.add_case_to_agenda(
                session.id, case.id, reviewer_ids=[board.bob.id]
            )

    @pytest.mark.asyncio
    async def test_remove_case_returns_it_to_waiting(self, board: Board) -> None:
        """remove_case_from_agenda() restores AWAITING_JUDGMENT."""
        session = await board.open_session()
        case, entry = await board.distributed_case(session)

        await board.container.scheduler.remove_case_from_agenda(entry.session_case.id)

        restored = await board.container.case_registry.get_case(case.id)
        assert restored.status is CaseStatus.AWAITING_JUDGMENT
        assert await board.container.distributions.get(entry.session_case.id) is None

    @pytest.mark.asyncio
    async def test_remove_case_locked_by_votes(self, board: Board) -> None:
        """remove_case_from_agenda() refuses once votes exist."""
        session = await board.open_session()
        _, entry = await board.distributed_case(session)
        await board.container.vote_recorder.record_vote(
            entry.session_case.id, board.alice.id, board.merit_vote()
        )

        with pytest.raises(DistributionLockedError):
            await board.container.scheduler.remove_case_from_agenda(
                entry.session_case.id
            )

    @pytest.mark.asyncio
    async def test_remove_judged_case_rejected(self, board: Board) -> None:
        session = await board.open_session()
        _, entry = await board.distributed_case(session)
        await board.judge(entry.session_case.id)

        with pytest.raises(CaseNotInAgendaError):
            await board.container.scheduler.remove_case_from_agenda(
                entry.session_case.id
            )


class TestSessionTransitions:
    """Tests for transition_session() and session_progress()."""

    @pytest.mark.asyncio
    async def test_conclusion_requires_results(self, board: Board) -> None:
        """transition_session() refuses to conclude with pending cases."""
        session = await board.open_session()
        await board.distributed_case(session)

        with pytest.raises(SessionNotConcludableError):
            await _conclude(board, session.id)

    @pytest.mark.asyncio
    async def test_conclusion_freezes_session(self, board: Board) -> None:
        """A concluded session rejects agenda and attendance changes."""
        session = await board.open_session()
        await board.judged_case(session)
        await _conclude(board, session.id)
        case = await board.register_case()

        with pytest.raises(SessionClosedError):
            await board.container.scheduler.add_case_to_agenda(session.id, case.id)
        with pytest.raises(SessionClosedError):
            await board.container.scheduler.set_attendance(session.id, [board.bob.id])

    @pytest.mark.asyncio
    async def test_cannot_skip_states(self, board: Board) -> None:
        session = await board.open_session()

        with pytest.raises(InvalidStateTransitionError):
            await board.container.scheduler.transition_session(
                session.id, SessionStatus.CONCLUDED
            )

    @pytest.mark.asyncio
    async def test_cancellation_requires_reason(self, board: Board) -> None:
        session = await board.open_session()

        with pytest.raises(MissingTransitionCauseError):
            await board.container.scheduler.transition_session(
                session.id, SessionStatus.CANCELLED
            )

    @pytest.mark.asyncio
    async def test_cancellation_returns_pending_cases(self, board: Board) -> None:
        """Cancelling returns IN_AGENDA cases to AWAITING_JUDGMENT."""
        session = await board.open_session()
        pending, _ = await board.distributed_case(session)
        judged = await board.judged_case(session)

        cancelled = await board.container.scheduler.transition_session(
            session.id, SessionStatus.CANCELLED, cancellation_reason="falta de quórum"
        )

        assert cancelled.cancellation_reason == "falta de quórum"
        registry = board.container.case_registry
        assert (await registry.get_case(pending.id)).status is CaseStatus.AWAITING_JUDGMENT
        assert (await registry.get_case(judged.id)).status is CaseStatus.JUDGED

    @pytest.mark.asyncio
    async def test_progress_counts_results(self, board: Board) -> None:
        """session_progress() reports the share of cases with a result."""
        session = await board.open_session()
        scheduler = board.container.scheduler
        assert await scheduler.session_progress(session.id) == 0

        await board.judged_case(session)
        _, pending = await board.distributed_case(session)
        await board.container.judgment.change_status(
            pending.session_case.id, CaseSessionStatus.SUSPENDED, cause="pedido da parte"
        )
        await board.distributed_case(session)
        await board.distributed_case(session)

        assert await scheduler.session_progress(session.id) == 50.0

    @pytest.mark.asyncio
    async def test_conclusion_waits_for_appearance_mutations(
        self, board: Board
    ) -> None:
        """A correction back to IN_AGENDA cannot slip past a conclusion."""
        session = await board.open_session()
        _, entry = await board.distributed_case(session)
        await board.container.judgment.change_status(
            entry.session_case.id, CaseSessionStatus.SUSPENDED, cause="pedido da parte"
        )
        scheduler = board.container.scheduler
        await scheduler.transition_session(session.id, SessionStatus.AGENDA_PUBLISHED)
        await scheduler.transition_session(session.id, SessionStatus.IN_PROGRESS)

        async with board.container.lock.hold(session.id):
            correction = asyncio.create_task(
                board.container.judgment.change_status(
                    entry.session_case.id,
                    CaseSessionStatus.IN_AGENDA,
                    cause="lançado por engano",
                )
            )
            await asyncio.sleep(0)
            assert not correction.done()

        await correction
        with pytest.raises(SessionNotConcludableError):
            await scheduler.transition_session(session.id, SessionStatus.CONCLUDED)
