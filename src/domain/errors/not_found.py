"""Missing-entity error shared by every aggregate."""

from __future__ import annotations

from uuid import UUID

from src.domain.exceptions import AdjudicationError


class NotFoundError(AdjudicationError):
    """Raised when a referenced entity does not exist.

    Attributes:
        entity: Kind of entity that was looked up (e.g. "session").
        entity_id: Identifier that was not found.
    """

    def __init__(self, entity: str, entity_id: UUID | str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} not found: {entity_id}")
