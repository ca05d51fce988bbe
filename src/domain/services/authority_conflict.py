"""Authority-conflict domain service.

A member who acted as an authority in the administrative phase of a
case (for example the assessing official) cannot judge it. Matching is
by registered-authority id. Name matching (case-insensitive, trimmed)
is kept as a compatibility fallback for members whose registry link was
never recorded; callers can switch it off.

Inactive authorities still conflict: deactivation in the registry does
not erase the act they performed on the case.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from src.domain.errors.distribution import AuthorityConflictError
from src.domain.models.member import CaseAuthority, Member


@dataclass(frozen=True, eq=True)
class AuthorityMatch:
    """A member matched against an authority of the case.

    Attributes:
        member_id: The conflicting member.
        authority: The matched authority.
        matched_by: "id" or "name".
    """

    member_id: UUID
    authority: CaseAuthority
    matched_by: str


def _normalize_name(name: str) -> str:
    return " ".join(name.split()).casefold()


def find_authority_conflict(
    member: Member,
    authorities: Iterable[CaseAuthority],
    name_fallback: bool = True,
) -> AuthorityMatch | None:
    """Find the first authority of the case matching the member.

    Args:
        member: Candidate assignee.
        authorities: Authorities linked to the case.
        name_fallback: Also compare normalized names.

    Returns:
        The match, or None when the member is eligible.
    """
    authorities = list(authorities)
    if member.registered_authority_id is not None:
        for authority in authorities:
            if authority.registered_id == member.registered_authority_id:
                return AuthorityMatch(member.id, authority, "id")

    if name_fallback:
        member_name = _normalize_name(member.name)
        for authority in authorities:
            if member_name and _normalize_name(authority.name) == member_name:
                return AuthorityMatch(member.id, authority, "name")
    return None


def ensure_no_authority_conflict(
    case_id: UUID,
    members: Iterable[Member],
    authorities: Iterable[CaseAuthority],
    name_fallback: bool = True,
) -> None:
    """Raise on the first member who is an authority on the case.

    Raises:
        AuthorityConflictError: If any member matches an authority.
    """
    authorities = list(authorities)
    for member in members:
        match = find_authority_conflict(member, authorities, name_fallback)
        if match is not None:
            raise AuthorityConflictError(
                case_id=case_id,
                member_id=member.id,
                authority_name=match.authority.name,
                matched_by=match.matched_by,
            )
