"""Vote role derivation, rationale validation and resolution.

Roles are derived from the distribution at the moment they are needed;
they are never stored on a vote.

Resolution (quorum-and-agreement):
    - Quorum: every distributed member (rapporteur and reviewers) voted.
    - Votes agree when their structured conclusions are equal.
    - A conclusion wins with a strict majority of the votes.
    - On a tie between the largest conclusions, the presiding member's
      quality vote decides when that member voted for one of them.
    - The winning vote is the rapporteur's when it is in the winning
      conclusion, otherwise the earliest vote of that conclusion.
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from src.domain.errors.distribution import NotDistributedError
from src.domain.errors.vote import (
    IncompleteVoteRationaleError,
    OfficialDirectiveNotAllowedError,
    VoteTemplateKindMismatchError,
)
from src.domain.models.distribution import Distribution
from src.domain.models.vote import (
    KnowledgeType,
    PreliminaryOutcome,
    TemplateKind,
    Vote,
    VoteConclusion,
    VoteInput,
    VoteResolution,
    VoteRole,
    VoteTemplate,
)


def derive_role(distribution: Distribution, member_id: UUID) -> VoteRole:
    """Derive the role of a member from the distribution.

    Raises:
        NotDistributedError: If the member is not distributed on the case.
    """
    role = distribution.role_of(member_id)
    if role is None:
        raise NotDistributedError(distribution.session_case_id, member_id)
    return role


def _check_kind(template: VoteTemplate | None, expected: TemplateKind) -> None:
    if template is not None and template.kind is not expected:
        raise VoteTemplateKindMismatchError(
            template_id=template.id,
            expected=expected.value,
            actual=template.kind.value,
        )


def validate_vote_rationale(
    vote_input: VoteInput,
    preliminary: VoteTemplate | None = None,
    merit: VoteTemplate | None = None,
    official: VoteTemplate | None = None,
) -> None:
    """Check that the structured choices can support a vote.

    Pure pre-check, run before any write.

    Args:
        vote_input: Submitted choices.
        preliminary: Resolved preliminary template, if selected.
        merit: Resolved merit template, if selected.
        official: Resolved ex-officio template, if selected.

    Raises:
        VoteTemplateKindMismatchError: A template fills a slot of another kind.
        IncompleteVoteRationaleError: Required choices are missing or misplaced.
        OfficialDirectiveNotAllowedError: Official directive with a rejected objection.
    """
    _check_kind(preliminary, TemplateKind.PRELIMINARY)
    _check_kind(merit, TemplateKind.MERIT)
    _check_kind(official, TemplateKind.OFFICIAL)

    if vote_input.knowledge_type is KnowledgeType.NON_KNOWLEDGE:
        if vote_input.preliminary_outcome is None:
            raise IncompleteVoteRationaleError(
                "A non-knowledge vote requires a preliminary outcome (ACCEPT or REJECT)"
            )
        if vote_input.merit_template_id is not None:
            raise IncompleteVoteRationaleError(
                "A merit template only applies to knowledge votes"
            )
        if vote_input.preliminary_outcome is PreliminaryOutcome.ACCEPT:
            if (
                vote_input.preliminary_template_id is None
                and vote_input.official_template_id is None
            ):
                raise IncompleteVoteRationaleError(
                    "Accepting the preliminary objection requires a preliminary "
                    "or an ex-officio template"
                )
        elif vote_input.official_template_id is not None:
            raise OfficialDirectiveNotAllowedError()
        return

    if vote_input.merit_template_id is None:
        raise IncompleteVoteRationaleError("A knowledge vote requires a merit template")
    if (
        vote_input.preliminary_outcome is not None
        or vote_input.preliminary_template_id is not None
    ):
        raise IncompleteVoteRationaleError(
            "Preliminary choices only apply to non-knowledge votes"
        )


def resolve_votes(
    distribution: Distribution,
    votes: Sequence[Vote],
    quality_vote_member_id: UUID | None = None,
) -> VoteResolution:
    """Compute the quorum-and-agreement state of a case appearance.

    Args:
        distribution: Current distribution of the appearance.
        votes: Votes recorded on the appearance.
        quality_vote_member_id: Presiding member whose vote breaks ties.

    Returns:
        VoteResolution (unresolved when quorum or agreement is missing).
    """
    required = len(distribution.member_ids)
    counted = [v for v in votes if distribution.role_of(v.member_id) is not None]
    counted.sort(key=lambda v: (v.created_at, str(v.id)))
    voters = {v.member_id for v in counted}
    quorum_met = set(distribution.member_ids) <= voters

    if not quorum_met or not counted:
        return VoteResolution(
            votes_received=len(counted),
            votes_required=required,
            quorum_met=quorum_met and bool(counted),
        )

    groups: dict[VoteConclusion, list[Vote]] = {}
    for vote in counted:
        groups.setdefault(vote.conclusion, []).append(vote)

    total = len(counted)
    largest = max(len(group) for group in groups.values())
    leaders = [c for c, group in groups.items() if len(group) == largest]

    winner: VoteConclusion | None = None
    quality_vote_used = False
    if len(leaders) == 1 and largest * 2 > total:
        winner = leaders[0]
    elif len(leaders) > 1 and quality_vote_member_id is not None:
        quality_vote = next(
            (v for v in counted if v.member_id == quality_vote_member_id), None
        )
        if quality_vote is not None and quality_vote.conclusion in leaders:
            winner = quality_vote.conclusion
            quality_vote_used = True

    if winner is None:
        return VoteResolution(
            votes_received=total,
            votes_required=required,
            quorum_met=True,
        )

    winning_group = groups[winner]
    winning_vote = next(
        (v for v in winning_group if v.member_id == distribution.rapporteur_id),
        winning_group[0],
    )
    return VoteResolution(
        votes_received=total,
        votes_required=required,
        quorum_met=True,
        winning_conclusion=winner,
        winning_vote_id=winning_vote.id,
        votes_in_favor=len(winning_group),
        votes_against=total - len(winning_group),
        quality_vote_used=quality_vote_used,
    )
