"""Unit tests for role derivation, rationale validation and vote resolution."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest

from src.domain.errors import (
    IncompleteVoteRationaleError,
    NotDistributedError,
    OfficialDirectiveNotAllowedError,
    VoteTemplateKindMismatchError,
)
from src.domain.models.distribution import Distribution
from src.domain.models.vote import (
    JudgmentOutcome,
    KnowledgeType,
    PreliminaryOutcome,
    TemplateKind,
    Vote,
    VoteInput,
    VoteRole,
    VoteTemplate,
)
from src.domain.services.vote_resolution import (
    derive_role,
    resolve_votes,
    validate_vote_rationale,
)

T0 = datetime(2025, 3, 12, 14, 0, tzinfo=timezone.utc)
MERIT_A = uuid4()
MERIT_B = uuid4()


def _vote(member_id: UUID, merit_id: UUID, minute: int) -> Vote:
    return Vote(
        id=uuid4(),
        session_case_id=uuid4(),
        member_id=member_id,
        knowledge_type=KnowledgeType.KNOWLEDGE,
        merit_template_id=merit_id,
        vote_text="Texto.",
        created_at=T0 + timedelta(minutes=minute),
    )


@pytest.fixture
def members() -> tuple[UUID, UUID, UUID, UUID]:
    return uuid4(), uuid4(), uuid4(), uuid4()


class TestDeriveRole:
    """Tests for derive_role."""

    def test_roles_come_from_distribution(self, members) -> None:
        rapporteur, reviewer, outsider, _ = members
        distribution = Distribution(uuid4(), rapporteur, (reviewer,))
        assert derive_role(distribution, rapporteur) is VoteRole.RAPPORTEUR
        assert derive_role(distribution, reviewer) is VoteRole.REVIEWER
        with pytest.raises(NotDistributedError):
            derive_role(distribution, outsider)


class TestValidateVoteRationale:
    """Tests for validate_vote_rationale."""

    def test_knowledge_vote_needs_merit(self) -> None:
        with pytest.raises(IncompleteVoteRationaleError):
            validate_vote_rationale(VoteInput(knowledge_type=KnowledgeType.KNOWLEDGE))

    def test_non_knowledge_needs_outcome(self) -> None:
        with pytest.raises(IncompleteVoteRationaleError):
            validate_vote_rationale(
                VoteInput(knowledge_type=KnowledgeType.NON_KNOWLEDGE)
            )

    def test_accepted_objection_needs_a_template(self) -> None:
        with pytest.raises(IncompleteVoteRationaleError):
            validate_vote_rationale(
                VoteInput(
                    knowledge_type=KnowledgeType.NON_KNOWLEDGE,
                    preliminary_outcome=PreliminaryOutcome.ACCEPT,
                )
            )

    def test_rejected_objection_rejects_official_directive(self) -> None:
        with pytest.raises(OfficialDirectiveNotAllowedError):
            validate_vote_rationale(
                VoteInput(
                    knowledge_type=KnowledgeType.NON_KNOWLEDGE,
                    preliminary_outcome=PreliminaryOutcome.REJECT,
                    official_template_id=uuid4(),
                )
            )

    def test_rejected_objection_alone_is_valid(self) -> None:
        validate_vote_rationale(
            VoteInput(
                knowledge_type=KnowledgeType.NON_KNOWLEDGE,
                preliminary_outcome=PreliminaryOutcome.REJECT,
            )
        )

    def test_template_must_fit_its_slot(self) -> None:
        official = VoteTemplate(id=uuid4(), kind=TemplateKind.OFFICIAL, text="x")
        with pytest.raises(VoteTemplateKindMismatchError):
            validate_vote_rationale(
                VoteInput(
                    knowledge_type=KnowledgeType.KNOWLEDGE,
                    merit_template_id=official.id,
                ),
                merit=official,
            )


class TestResolveVotes:
    """Tests for quorum-and-agreement resolution."""

    def test_no_votes_is_unresolved(self, members) -> None:
        rapporteur, reviewer, _, _ = members
        resolution = resolve_votes(Distribution(uuid4(), rapporteur, (reviewer,)), [])
        assert resolution.votes_received == 0
        assert resolution.votes_required == 2
        assert not resolution.quorum_met
        assert not resolution.is_resolved

    def test_missing_member_blocks_quorum(self, members) -> None:
        a, b, c, _ = members
        distribution = Distribution(uuid4(), a, (b, c))
        resolution = resolve_votes(
            distribution, [_vote(a, MERIT_A, 0), _vote(b, MERIT_A, 1)]
        )
        assert resolution.votes_received == 2
        assert not resolution.quorum_met
        assert resolution.outcome is None

    def test_votes_of_undistributed_members_are_ignored(self, members) -> None:
        a, b, outsider, _ = members
        distribution = Distribution(uuid4(), a, (b,))
        resolution = resolve_votes(
            distribution,
            [_vote(a, MERIT_A, 0), _vote(b, MERIT_A, 1), _vote(outsider, MERIT_B, 2)],
        )
        assert resolution.votes_received == 2
        assert resolution.is_resolved

    def test_unanimous_vote_picks_rapporteur(self, members) -> None:
        a, b, c, _ = members
        rapporteur_vote = _vote(a, MERIT_A, 5)
        resolution = resolve_votes(
            Distribution(uuid4(), a, (b, c)),
            [_vote(b, MERIT_A, 0), _vote(c, MERIT_A, 1), rapporteur_vote],
        )
        assert resolution.is_resolved
        assert resolution.outcome is JudgmentOutcome.MERIT_DECIDED
        assert resolution.winning_vote_id == rapporteur_vote.id
        assert resolution.votes_in_favor == 3
        assert resolution.votes_against == 0

    def test_majority_without_rapporteur_picks_earliest(self, members) -> None:
        a, b, c, _ = members
        earliest = _vote(b, MERIT_B, 0)
        resolution = resolve_votes(
            Distribution(uuid4(), a, (b, c)),
            [_vote(a, MERIT_A, 2), _vote(c, MERIT_B, 1), earliest],
        )
        assert resolution.winning_conclusion.merit_template_id == MERIT_B
        assert resolution.winning_vote_id == earliest.id
        assert resolution.votes_against == 1

    def test_tie_without_quality_vote_is_unresolved(self, members) -> None:
        a, b, c, d = members
        resolution = resolve_votes(
            Distribution(uuid4(), a, (b, c, d)),
            [
                _vote(a, MERIT_A, 0),
                _vote(b, MERIT_A, 1),
                _vote(c, MERIT_B, 2),
                _vote(d, MERIT_B, 3),
            ],
        )
        assert resolution.quorum_met
        assert not resolution.is_resolved

    def test_tie_broken_by_quality_vote(self, members) -> None:
        a, b, c, d = members
        resolution = resolve_votes(
            Distribution(uuid4(), a, (b, c, d)),
            [
                _vote(a, MERIT_A, 0),
                _vote(b, MERIT_A, 1),
                _vote(c, MERIT_B, 2),
                _vote(d, MERIT_B, 3),
            ],
            quality_vote_member_id=d,
        )
        assert resolution.is_resolved
        assert resolution.quality_vote_used
        assert resolution.winning_conclusion.merit_template_id == MERIT_B

    def test_quality_vote_of_non_voter_does_not_break_tie(self, members) -> None:
        a, b, c, _ = members
        resolution = resolve_votes(
            Distribution(uuid4(), a, (b,)),
            [_vote(a, MERIT_A, 0), _vote(b, MERIT_B, 1)],
            quality_vote_member_id=c,
        )
        assert not resolution.is_resolved

    def test_official_directive_is_part_of_the_conclusion(self, members) -> None:
        """Merit votes differing only in the ex-officio directive disagree."""
        a, b, c, _ = members
        with_directive = replace(_vote(c, MERIT_A, 2), official_template_id=uuid4())
        resolution = resolve_votes(
            Distribution(uuid4(), a, (b, c)),
            [_vote(a, MERIT_A, 0), _vote(b, MERIT_A, 1), with_directive],
        )
        assert resolution.is_resolved
        assert resolution.winning_conclusion.official_template_id is None
        assert resolution.votes_in_favor == 2
        assert resolution.votes_against == 1
