"""Vote domain model.

One vote per (case appearance, member). The member's role in the vote
(rapporteur or reviewer) is derived from the distribution every time it
is needed and never stored on the vote, so a vote cannot disagree with
the distribution it was cast under.

Vote choices:
    NON_KNOWLEDGE: the appeal should not be heard. Carries a preliminary
        outcome (ACCEPT or REJECT the preliminary objection), an optional
        preliminary template and, for ACCEPT only, an optional
        ex-officio (official) template.
    KNOWLEDGE: the appeal is heard on its merits. Requires a merit
        template and may carry an official template.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID


class KnowledgeType(Enum):
    """Whether the vote hears the appeal (conhecimento) or not."""

    NON_KNOWLEDGE = "NON_KNOWLEDGE"
    KNOWLEDGE = "KNOWLEDGE"


class PreliminaryOutcome(Enum):
    """Outcome of the preliminary objection in a non-knowledge vote.

    ACCEPT upholds the objection (the appeal is not heard). REJECT
    dismisses it, which is itself the path to substantive review.
    """

    ACCEPT = "ACCEPT"
    REJECT = "REJECT"


class VoteRole(Enum):
    """Derived role of the voting member."""

    RAPPORTEUR = "RAPPORTEUR"
    REVIEWER = "REVIEWER"


class TemplateKind(Enum):
    """Slot a decision template fills in a vote."""

    PRELIMINARY = "PRELIMINARY"
    MERIT = "MERIT"
    OFFICIAL = "OFFICIAL"


class JudgmentOutcome(Enum):
    """Resolved collective outcome of a case appearance.

    Outcomes:
        NOT_HEARD: Preliminary objection accepted; appeal not heard
        HEARD: Preliminary objection rejected; appeal heard
        MERIT_DECIDED: Appeal heard and decided on the merits
    """

    NOT_HEARD = "NOT_HEARD"
    HEARD = "HEARD"
    MERIT_DECIDED = "MERIT_DECIDED"


@dataclass(frozen=True, eq=True)
class VoteTemplate:
    """A pre-registered decision text used to compose votes.

    Preliminary templates carry distinct accept/reject variants; merit
    and official templates carry a single text.

    Attributes:
        id: Template identifier.
        kind: Slot this template fills.
        identifier: Short human label.
        accept_text: Preliminary text used when the objection is accepted.
        reject_text: Preliminary text used when the objection is rejected.
        text: Merit or official text.
    """

    id: UUID
    kind: TemplateKind
    identifier: str = field(default="")
    accept_text: str | None = field(default=None)
    reject_text: str | None = field(default=None)
    text: str | None = field(default=None)

    def text_for(self, outcome: PreliminaryOutcome | None) -> str | None:
        """Return the fragment this template contributes.

        Args:
            outcome: Preliminary outcome; only consulted for preliminary templates.

        Returns:
            The raw (un-normalized) fragment, or None if absent.
        """
        if self.kind is TemplateKind.PRELIMINARY:
            if outcome is PreliminaryOutcome.ACCEPT:
                return self.accept_text
            if outcome is PreliminaryOutcome.REJECT:
                return self.reject_text
            return None
        return self.text


@dataclass(frozen=True, eq=True)
class VoteInput:
    """Structured choices submitted by a member.

    Attributes:
        knowledge_type: Knowledge or non-knowledge.
        preliminary_outcome: ACCEPT/REJECT, for non-knowledge votes.
        preliminary_template_id: Optional preliminary template.
        merit_template_id: Merit template, for knowledge votes.
        official_template_id: Optional ex-officio directive.
    """

    knowledge_type: KnowledgeType
    preliminary_outcome: PreliminaryOutcome | None = field(default=None)
    preliminary_template_id: UUID | None = field(default=None)
    merit_template_id: UUID | None = field(default=None)
    official_template_id: UUID | None = field(default=None)


@dataclass(frozen=True, eq=True)
class VoteConclusion:
    """The structured conclusion of a vote, used to group agreeing votes.

    Two votes agree when their conclusions are equal. Free-text edits of
    the vote text do not change the conclusion.
    """

    knowledge_type: KnowledgeType
    preliminary_outcome: PreliminaryOutcome | None
    preliminary_template_id: UUID | None
    merit_template_id: UUID | None
    official_template_id: UUID | None

    @property
    def outcome(self) -> JudgmentOutcome:
        """Judgment outcome this conclusion leads to."""
        if self.knowledge_type is KnowledgeType.KNOWLEDGE:
            return JudgmentOutcome.MERIT_DECIDED
        if self.preliminary_outcome is PreliminaryOutcome.ACCEPT:
            return JudgmentOutcome.NOT_HEARD
        return JudgmentOutcome.HEARD


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Vote:
    """A member's vote on a case appearance.

    Attributes:
        id: UUIDv7 unique identifier.
        session_case_id: The case appearance voted on.
        member_id: Voting member.
        knowledge_type: Knowledge or non-knowledge.
        preliminary_outcome: ACCEPT/REJECT for non-knowledge votes.
        preliminary_template_id: Selected preliminary template.
        merit_template_id: Selected merit template.
        official_template_id: Selected ex-officio directive.
        vote_text: Final text, composed then optionally edited.
        created_at: Creation timestamp (UTC).
        updated_at: Last edit timestamp (UTC).
    """

    id: UUID
    session_case_id: UUID
    member_id: UUID
    knowledge_type: KnowledgeType
    vote_text: str
    preliminary_outcome: PreliminaryOutcome | None = field(default=None)
    preliminary_template_id: UUID | None = field(default=None)
    merit_template_id: UUID | None = field(default=None)
    official_template_id: UUID | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate vote invariants."""
        if not self.vote_text.strip():
            raise ValueError("vote_text must not be blank")

    @classmethod
    def from_input(
        cls,
        vote_id: UUID,
        session_case_id: UUID,
        member_id: UUID,
        vote_input: VoteInput,
        vote_text: str,
    ) -> Vote:
        """Build a vote from validated structured choices and composed text."""
        return cls(
            id=vote_id,
            session_case_id=session_case_id,
            member_id=member_id,
            knowledge_type=vote_input.knowledge_type,
            preliminary_outcome=vote_input.preliminary_outcome,
            preliminary_template_id=vote_input.preliminary_template_id,
            merit_template_id=vote_input.merit_template_id,
            official_template_id=vote_input.official_template_id,
            vote_text=vote_text,
        )

    @property
    def conclusion(self) -> VoteConclusion:
        """Structured conclusion of this vote."""
        return VoteConclusion(
            knowledge_type=self.knowledge_type,
            preliminary_outcome=self.preliminary_outcome,
            preliminary_template_id=self.preliminary_template_id,
            merit_template_id=self.merit_template_id,
            official_template_id=self.official_template_id,
        )

    def with_choices(self, vote_input: VoteInput, vote_text: str) -> Vote:
        """Create new vote with re-selected choices and re-composed text."""
        return replace(
            self,
            knowledge_type=vote_input.knowledge_type,
            preliminary_outcome=vote_input.preliminary_outcome,
            preliminary_template_id=vote_input.preliminary_template_id,
            merit_template_id=vote_input.merit_template_id,
            official_template_id=vote_input.official_template_id,
            vote_text=vote_text,
            updated_at=_utc_now(),
        )

    def with_text(self, vote_text: str) -> Vote:
        """Create new vote with an edited text; choices are unchanged."""
        return replace(self, vote_text=vote_text, updated_at=_utc_now())


@dataclass(frozen=True, eq=True)
class VoteResolution:
    """Quorum-and-agreement state of the votes on one case appearance.

    Attributes:
        votes_received: Number of votes cast.
        votes_required: Number of distributed members.
        quorum_met: Every distributed member voted.
        winning_conclusion: Conclusion holding the majority, if any.
        winning_vote_id: Representative vote of the winning conclusion.
        votes_in_favor: Votes in the winning conclusion.
        votes_against: Votes outside the winning conclusion.
        quality_vote_used: The president's quality vote broke a tie.
    """

    votes_received: int
    votes_required: int
    quorum_met: bool
    winning_conclusion: VoteConclusion | None = field(default=None)
    winning_vote_id: UUID | None = field(default=None)
    votes_in_favor: int = field(default=0)
    votes_against: int = field(default=0)
    quality_vote_used: bool = field(default=False)

    @property
    def is_resolved(self) -> bool:
        """Quorum reached and one conclusion prevails."""
        return self.quorum_met and self.winning_conclusion is not None

    @property
    def outcome(self) -> JudgmentOutcome | None:
        """Resolved judgment outcome, or None while unresolved."""
        if not self.is_resolved or self.winning_conclusion is None:
            return None
        return self.winning_conclusion.outcome
