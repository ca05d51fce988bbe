"""Distribution (rapporteur and reviewer assignment) domain model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID

from src.domain.models.vote import VoteRole


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Distribution:
    """Assignment of members to judge one case appearance.

    Invariants:
        - reviewer_ids are unique and never contain the rapporteur
        - order of reviewer_ids is the order given at assignment

    Attributes:
        session_case_id: The case appearance being distributed.
        rapporteur_id: Member who reports the case.
        reviewer_ids: Reviewing members, in assignment order.
        assigned_at: Assignment timestamp (UTC).
    """

    session_case_id: UUID
    rapporteur_id: UUID
    reviewer_ids: tuple[UUID, ...] = field(default_factory=tuple)
    assigned_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate distribution invariants.

        Raises:
            InvalidDistributionError: If reviewers repeat or include the rapporteur.
        """
        from src.domain.errors.distribution import InvalidDistributionError

        if len(set(self.reviewer_ids)) != len(self.reviewer_ids):
            raise InvalidDistributionError("Reviewer list contains duplicates")
        if self.rapporteur_id in self.reviewer_ids:
            raise InvalidDistributionError(
                f"Rapporteur {self.rapporteur_id} cannot also be a reviewer"
            )

    @property
    def member_ids(self) -> tuple[UUID, ...]:
        """All distributed members, rapporteur first."""
        return (self.rapporteur_id, *self.reviewer_ids)

    def role_of(self, member_id: UUID) -> VoteRole | None:
        """Role of a member in this distribution, or None if not distributed."""
        if member_id == self.rapporteur_id:
            return VoteRole.RAPPORTEUR
        if member_id in self.reviewer_ids:
            return VoteRole.REVIEWER
        return None
