"""Decision document (acórdão) domain model.

A decision is the collective document synthesized from a judged case.
It is numbered per year, and every publication in the official gazette
is appended to its history with a snapshot of the summary (ementa) as
published. Publications are never removed.

State Machine:
    PENDING -> PUBLISHED (first publication)
    PUBLISHED | REPUBLISHED -> REPUBLISHED (later publication)
    PUBLISHED | REPUBLISHED -> PENDING (ementa changed after publication)
    PENDING -> PUBLISHED | REPUBLISHED (revert to last publication)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID

from src.domain.models.sequence_number import SequenceNumber


class DecisionStatus(Enum):
    """Publication status of a decision document."""

    PENDING = "PENDING"
    PUBLISHED = "PUBLISHED"
    REPUBLISHED = "REPUBLISHED"

    @classmethod
    def for_publication_order(cls, order: int) -> DecisionStatus:
        """Status a decision takes after its publication of the given order."""
        return cls.PUBLISHED if order == 1 else cls.REPUBLISHED


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Publication:
    """One publication of a decision in the official gazette.

    Attributes:
        publication_order: 1 for the first publication, then +1 each time.
        publication_number: Gazette edition number.
        publication_date: Gazette date.
        ementa_title_snapshot: Ementa title as published.
        ementa_body_snapshot: Ementa body as published.
        republish_reason: Reason recorded for a republication.
        created_at: Record timestamp (UTC).
    """

    publication_order: int
    publication_number: str
    publication_date: date
    ementa_title_snapshot: str
    ementa_body_snapshot: str
    republish_reason: str | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate publication invariants."""
        if self.publication_order < 1:
            raise ValueError(
                f"publication_order must be >= 1, got {self.publication_order}"
            )
        if not self.publication_number.strip():
            raise ValueError("publication_number must not be blank")


@dataclass(frozen=True, eq=True)
class DecisionDocument:
    """Decision document emitted for a judged case.

    Attributes:
        id: UUIDv7 unique identifier.
        case_id: Judged case (one decision per case).
        number: Yearly decision number ("0012/2025").
        ementa_title: Summary title.
        ementa_body: Summary body.
        vote_file: Opaque storage handle of the vote document.
        decision_file: Opaque storage handle of the decision document.
        status: Publication status.
        publications: Append-only publication history.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    case_id: UUID
    number: SequenceNumber
    ementa_title: str
    ementa_body: str
    vote_file: str | None = field(default=None)
    decision_file: str | None = field(default=None)
    status: DecisionStatus = field(default=DecisionStatus.PENDING)
    publications: tuple[Publication, ...] = field(default_factory=tuple)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate decision invariants."""
        if not self.ementa_title.strip():
            raise ValueError("ementa_title must not be blank")
        if not self.ementa_body.strip():
            raise ValueError("ementa_body must not be blank")
        orders = [p.publication_order for p in self.publications]
        if orders != list(range(1, len(orders) + 1)):
            raise ValueError(f"publication orders must be 1..n, got {orders}")

    @property
    def last_publication(self) -> Publication | None:
        """Most recent publication, if any."""
        return self.publications[-1] if self.publications else None

    @property
    def next_publication_order(self) -> int:
        """Order the next publication will take."""
        return len(self.publications) + 1

    @property
    def was_published(self) -> bool:
        """Whether the decision was ever published."""
        return bool(self.publications)

    def with_publication(
        self,
        expected_order: int,
        publication_number: str,
        publication_date: date,
        republish_reason: str | None = None,
    ) -> DecisionDocument:
        """Create new decision with a publication appended.

        Args:
            expected_order: Order the caller computed for the publication.
            publication_number: Gazette edition number.
            publication_date: Gazette date.
            republish_reason: Optional reason for a republication.

        Returns:
            New DecisionDocument with the publication and new status.

        Raises:
            SequenceConflictError: If expected_order is no longer next.
        """
        from src.domain.errors.sequence import SequenceConflictError

        if expected_order != self.next_publication_order:
            raise SequenceConflictError("publication", expected_order)

        publication = Publication(
            publication_order=expected_order,
            publication_number=publication_number.strip(),
            publication_date=publication_date,
            ementa_title_snapshot=self.ementa_title,
            ementa_body_snapshot=self.ementa_body,
            republish_reason=republish_reason.strip() if republish_reason else None,
        )
        return replace(
            self,
            publications=(*self.publications, publication),
            status=DecisionStatus.for_publication_order(expected_order),
            updated_at=_utc_now(),
        )

    def with_ementa(self, ementa_title: str, ementa_body: str) -> DecisionDocument:
        """Create new decision with an edited ementa.

        A published decision whose ementa changes returns to PENDING
        until it is republished or reverted.
        """
        changed = (
            ementa_title != self.ementa_title or ementa_body != self.ementa_body
        )
        return replace(
            self,
            ementa_title=ementa_title,
            ementa_body=ementa_body,
            status=DecisionStatus.PENDING if changed else self.status,
            updated_at=_utc_now(),
        )

    def reverted_to_last_publication(self) -> DecisionDocument:
        """Restore the ementa and status of the last publication.

        Raises:
            DecisionNotPendingError: If not PENDING or never published.
        """
        from src.domain.errors.decision import DecisionNotPendingError

        last = self.last_publication
        if self.status is not DecisionStatus.PENDING or last is None:
            raise DecisionNotPendingError(
                self.id, "only a pending decision with publications can be reverted"
            )
        return replace(
            self,
            ementa_title=last.ementa_title_snapshot,
            ementa_body=last.ementa_body_snapshot,
            status=DecisionStatus.for_publication_order(last.publication_order),
            updated_at=_utc_now(),
        )

    def with_decision_file(self, handle: str) -> DecisionDocument:
        """Create new decision with the decision file handle attached."""
        if not handle.strip():
            raise ValueError("decision file handle must not be blank")
        return replace(self, decision_file=handle, updated_at=_utc_now())
