"""In-memory directories: members, case authorities and vote templates.

These stand in for the external registries the core reads from. Tests
and the development API populate them directly.
"""

from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from src.application.ports.directories import (
    AuthorityDirectoryProtocol,
    MemberDirectoryProtocol,
    VoteTemplateCatalogProtocol,
)
from src.domain.models.member import CaseAuthority, Member
from src.domain.models.vote import VoteTemplate


class MemberDirectoryStub(MemberDirectoryProtocol):
    """In-memory member registry."""

    def __init__(self, members: Iterable[Member] = ()) -> None:
        self._members: dict[UUID, Member] = {m.id: m for m in members}

    def add(self, member: Member) -> Member:
        """Register (or replace) a member."""
        self._members[member.id] = member
        return member

    async def get_member(self, member_id: UUID) -> Member | None:
        return self._members.get(member_id)

    def list_members(self) -> list[Member]:
        """All registered members ordered by name."""
        return sorted(self._members.values(), key=lambda m: m.name)

    def clear(self) -> None:
        self._members.clear()


class AuthorityDirectoryStub(AuthorityDirectoryProtocol):
    """In-memory registry of the authorities registered on each case."""

    def __init__(self) -> None:
        self._authorities: dict[UUID, list[CaseAuthority]] = {}

    def register(self, case_id: UUID, authority: CaseAuthority) -> CaseAuthority:
        """Register an authority on a case."""
        self._authorities.setdefault(case_id, []).append(authority)
        return authority

    async def authorities_for_case(self, case_id: UUID) -> list[CaseAuthority]:
        return list(self._authorities.get(case_id, ()))

    def clear(self) -> None:
        self._authorities.clear()


class VoteTemplateCatalogStub(VoteTemplateCatalogProtocol):
    """In-memory catalog of preliminary, merit and ex-officio templates."""

    def __init__(self, templates: Iterable[VoteTemplate] = ()) -> None:
        self._templates: dict[UUID, VoteTemplate] = {t.id: t for t in templates}

    def add(self, template: VoteTemplate) -> VoteTemplate:
        """Add (or replace) a template."""
        self._templates[template.id] = template
        return template

    async def get_template(self, template_id: UUID) -> VoteTemplate | None:
        return self._templates.get(template_id)

    def list_templates(self) -> list[VoteTemplate]:
        """All templates grouped by kind, then by identifier."""
        return sorted(
            self._templates.values(), key=lambda t: (t.kind.value, t.identifier)
        )

    def clear(self) -> None:
        self._templates.clear()
