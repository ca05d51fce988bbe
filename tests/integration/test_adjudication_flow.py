"""Integration tests for the adjudication flow.

Runs a case from registration to a notified, published decision over a
container built with the default configuration, and checks numbering
under concurrent callers.
"""

from __future__ import annotations

import asyncio
from datetime import date

import pytest
from uuid6 import uuid7

from src.config.adjudication_config import DEFAULT_ADJUDICATION_CONFIG
from src.domain.errors import AuthorityConflictError, DuplicateVoteError, NotFoundError
from src.domain.models.case import CaseStatus
from src.domain.models.decision import DecisionStatus
from src.domain.models.member import CaseAuthority
from src.domain.models.notification import Channel, ListType
from src.domain.models.session import CaseSessionStatus, SessionStatus
from src.domain.models.vote import (
    JudgmentOutcome,
    KnowledgeType,
    TemplateKind,
    VoteInput,
    VoteRole,
    VoteTemplate,
)
from tests.helpers import Board, build_board


@pytest.fixture
def default_board() -> Board:
    """Board over the default configuration (one automatic retry)."""
    return build_board(DEFAULT_ADJUDICATION_CONFIG)


@pytest.mark.integration
class TestAdjudicationFlow:
    """End-to-end flow over the in-memory container."""

    @pytest.mark.asyncio
    async def test_case_from_registration_to_notification(
        self, default_board: Board
    ) -> None:
        """A majority judgment is emitted, published twice and notified."""
        board = default_board
        c = board.container
        session = await board.open_session()
        case = await board.register_case("ICMS")
        entry = await c.scheduler.add_case_to_agenda(
            session.id, case.id, board.alice.id, [board.bob.id, board.carol.id]
        )
        await c.scheduler.transition_session(session.id, SessionStatus.AGENDA_PUBLISHED)
        await c.scheduler.transition_session(session.id, SessionStatus.IN_PROGRESS)

        rapporteur = await c.vote_recorder.record_vote(
            entry.session_case.id, board.alice.id, board.merit_vote()
        )
        await c.vote_recorder.record_vote(
            entry.session_case.id, board.bob.id, board.merit_vote()
        )
        await c.vote_recorder.record_vote(
            entry.session_case.id, board.carol.id, board.not_heard_vote()
        )
        judged = await c.judgment.confirm_judgment(entry.session_case.id)
        concluded = await c.scheduler.transition_session(
            session.id, SessionStatus.CONCLUDED
        )

        assert rapporteur.role is VoteRole.RAPPORTEUR
        assert judged.status is CaseSessionStatus.JUDGED
        assert judged.outcome is JudgmentOutcome.MERIT_DECIDED
        assert judged.winning_vote_id == rapporteur.vote.id
        assert concluded.status is SessionStatus.CONCLUDED
        assert (await c.case_registry.get_case(case.id)).status is CaseStatus.JUDGED

        decision = await c.decision_emitter.emit_decision(
            case.id, "ICMS. Crédito.", "Recurso improvido por maioria."
        )
        await c.decision_emitter.publish(decision.id, "DOM 101", date(2025, 4, 2))
        republished = await c.decision_emitter.publish(
            decision.id, "DOM 140", date(2025, 5, 9), republish_reason="erro material"
        )

        assert str(decision.number) == "0001/2025"
        assert republished.status is DecisionStatus.REPUBLISHED
        assert [p.publication_order for p in republished.publications] == [1, 2]

        tracker = c.notification_tracker
        assert await tracker.eligible_cases(ListType.DECISION) == [case.id]
        notification_list = await tracker.create_list(ListType.DECISION, year=2025)
        item = await tracker.add_item(notification_list.id, case.id)
        attempt = await tracker.add_attempt(
            notification_list.id, item.id, Channel.EMAIL, sent_to="parte@example.com"
        )
        await tracker.mark_sent(notification_list.id, item.id, attempt.id)
        await tracker.confirm_attempt(notification_list.id, item.id, attempt.id)
        await tracker.finalize_list(notification_list.id)

        assert attempt.deadline is not None
        assert (await tracker.get_item(notification_list.id, item.id)).is_notified
        assert await tracker.eligible_cases(ListType.DECISION) == []

    @pytest.mark.asyncio
    async def test_concurrent_decisions_get_consecutive_numbers(
        self, default_board: Board
    ) -> None:
        """Decisions emitted concurrently take N, N+1, N+2 without gaps."""
        board = default_board
        session = await board.open_session()
        cases = [await board.judged_case(session) for _ in range(3)]

        decisions = await asyncio.gather(
            *(
                board.container.decision_emitter.emit_decision(case.id, "t", "b")
                for case in cases
            )
        )

        assert sorted(str(d.number) for d in decisions) == [
            "0001/2025",
            "0002/2025",
            "0003/2025",
        ]

    @pytest.mark.asyncio
    async def test_concurrent_publications_are_ordered(
        self, default_board: Board
    ) -> None:
        """Two concurrent publications of one decision take orders 1 and 2."""
        board = default_board
        case = await board.judged_case()
        emitter = board.container.decision_emitter
        decision = await emitter.emit_decision(case.id, "t", "b")

        await asyncio.gather(
            emitter.publish(decision.id, "DOM 101", date(2025, 4, 2)),
            emitter.publish(decision.id, "DOM 102", date(2025, 4, 3)),
        )

        stored = await emitter.get_decision(decision.id)
        assert [p.publication_order for p in stored.publications] == [1, 2]
        assert stored.status is DecisionStatus.REPUBLISHED

    @pytest.mark.asyncio
    async def test_concurrent_case_registration(self, default_board: Board) -> None:
        registry = default_board.container.case_registry

        cases = await asyncio.gather(
            *(registry.register_case("ISS", year=2025) for _ in range(5))
        )

        assert len({c.number for c in cases}) == 5

    @pytest.mark.asyncio
    async def test_authority_cannot_sit_on_own_case(self, default_board: Board) -> None:
        """Alice is an authority on the case: she cannot report it, Bob can."""
        board = default_board
        c = board.container
        session = await board.open_session()
        case = await board.register_case()
        entry = await c.scheduler.add_case_to_agenda(session.id, case.id)
        c.authorities.register(
            case.id, CaseAuthority(registered_id=uuid7(), name=" alice prado ")
        )

        with pytest.raises(AuthorityConflictError):
            await c.distribution.assign(entry.session_case.id, board.alice.id)
        with pytest.raises(NotFoundError):
            await c.distribution.get_distribution(entry.session_case.id)

        distribution = await c.distribution.assign(
            entry.session_case.id, board.bob.id, [board.carol.id]
        )
        grant = c.templates.add(
            VoteTemplate(
                id=uuid7(),
                kind=TemplateKind.MERIT,
                identifier="provido",
                text="Dar provimento ao recurso.",
            )
        )
        vote_input = VoteInput(
            knowledge_type=KnowledgeType.KNOWLEDGE, merit_template_id=grant.id
        )
        cast = await c.vote_recorder.record_vote(
            entry.session_case.id, board.bob.id, vote_input
        )

        assert distribution.rapporteur_id == board.bob.id
        assert cast.vote.vote_text == "Dar provimento ao recurso."
        with pytest.raises(DuplicateVoteError):
            await c.vote_recorder.record_vote(
                entry.session_case.id, board.bob.id, vote_input
            )
