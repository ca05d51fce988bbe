"""Judgment domain events.

Emitted by the core when a case is judged and when a decision is
published. Notification tracking consumes them to know which cases are
eligible for SESSION and DECISION lists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any
from uuid import UUID

from src.domain.models.vote import JudgmentOutcome

# =============================================================================
# Event Type Constants
# =============================================================================

CASE_JUDGED_EVENT_TYPE: str = "adjudication.case.judged"
DECISION_PUBLISHED_EVENT_TYPE: str = "adjudication.decision.published"

JUDGMENT_EVENT_SCHEMA_VERSION: int = 1


@dataclass(frozen=True, eq=True)
class CaseJudgedEvent:
    """Event emitted when a case appearance is confirmed as JUDGED.

    Attributes:
        event_id: UUIDv7 for this event.
        case_id: The judged case.
        session_id: Session in which the case was judged.
        session_case_id: The judged appearance.
        outcome: Resolved judgment outcome.
        judged_at: When the judgment was confirmed.
        schema_version: Event schema version.
    """

    event_id: UUID
    case_id: UUID
    session_id: UUID
    session_case_id: UUID
    outcome: JudgmentOutcome
    judged_at: datetime
    schema_version: int = field(default=JUDGMENT_EVENT_SCHEMA_VERSION)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "event_type": CASE_JUDGED_EVENT_TYPE,
            "event_id": str(self.event_id),
            "case_id": str(self.case_id),
            "session_id": str(self.session_id),
            "session_case_id": str(self.session_case_id),
            "outcome": self.outcome.value,
            "judged_at": self.judged_at.isoformat(),
            "schema_version": self.schema_version,
        }


@dataclass(frozen=True, eq=True)
class DecisionPublishedEvent:
    """Event emitted for every publication of a decision.

    Attributes:
        event_id: UUIDv7 for this event.
        case_id: Case the decision belongs to.
        decision_id: The published decision.
        decision_number: Rendered decision number ("0012/2025").
        publication_order: 1 for the first publication, then +1.
        publication_date: Gazette date.
        created_at: Event creation timestamp (UTC).
    """

    event_id: UUID
    case_id: UUID
    decision_id: UUID
    decision_number: str
    publication_order: int
    publication_date: date
    schema_version: int = field(default=JUDGMENT_EVENT_SCHEMA_VERSION)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate event invariants."""
        if self.publication_order < 1:
            raise ValueError(
                f"publication_order must be >= 1, got {self.publication_order}"
            )

    @property
    def is_republication(self) -> bool:
        """Return True for any publication after the first."""
        return self.publication_order > 1

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "event_type": DECISION_PUBLISHED_EVENT_TYPE,
            "event_id": str(self.event_id),
            "case_id": str(self.case_id),
            "decision_id": str(self.decision_id),
            "decision_number": self.decision_number,
            "publication_order": self.publication_order,
            "publication_date": self.publication_date.isoformat(),
            "schema_version": self.schema_version,
            "created_at": self.created_at.isoformat(),
        }
