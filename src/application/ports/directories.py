"""Read-only directory ports.

Authorities, members and vote templates are maintained elsewhere; the
core only reads them.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.member import CaseAuthority, Member
from src.domain.models.vote import VoteTemplate


class AuthorityDirectoryProtocol(Protocol):
    """Authorities linked to cases in their administrative phase."""

    async def authorities_for_case(self, case_id: UUID) -> list[CaseAuthority]:
        """List the authorities linked to a case (active or not)."""
        ...


class MemberDirectoryProtocol(Protocol):
    """Committee member registry."""

    async def get_member(self, member_id: UUID) -> Member | None:
        """Retrieve a member by ID."""
        ...


class VoteTemplateCatalogProtocol(Protocol):
    """Registered decision texts used to compose votes."""

    async def get_template(self, template_id: UUID) -> VoteTemplate | None:
        """Retrieve a template by ID."""
        ...
