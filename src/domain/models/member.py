"""Committee members and case authorities as seen by the core.

Both are owned by external directories; the core only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True, eq=True)
class Member:
    """A committee member eligible to attend sessions.

    Attributes:
        id: Member identifier.
        name: Display name.
        active: Whether the member is currently active.
        registered_authority_id: The member's own entry in the authority
            registry, when they ever acted as an authority.
    """

    id: UUID
    name: str
    active: bool = field(default=True)
    registered_authority_id: UUID | None = field(default=None)


@dataclass(frozen=True, eq=True)
class CaseAuthority:
    """An authority linked to a case in its administrative phase.

    Attributes:
        registered_id: Identifier in the authority registry.
        name: Registered display name.
        authority_type: Role the authority played (e.g. assessing official).
        active: Registry active flag.
    """

    registered_id: UUID
    name: str
    authority_type: str = field(default="")
    active: bool = field(default=True)
