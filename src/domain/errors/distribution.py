"""Distribution errors (rapporteur/reviewer assignment).

The authority-conflict rule models a real eligibility constraint:
a person who acted in the administrative phase of a case cannot judge
their own act.
"""

from __future__ import annotations

from uuid import UUID

from src.domain.exceptions import AdjudicationError


class AuthorityConflictError(AdjudicationError):
    """Raised when an assignee is a registered authority on the case.

    Attributes:
        case_id: The case being distributed.
        member_id: The conflicting member.
        authority_name: Name of the matched authority.
        matched_by: "id" or "name" (compatibility fallback).
    """

    def __init__(
        self,
        case_id: UUID,
        member_id: UUID,
        authority_name: str,
        matched_by: str,
    ) -> None:
        self.case_id = case_id
        self.member_id = member_id
        self.authority_name = authority_name
        self.matched_by = matched_by
        super().__init__(
            f"Member {member_id} is registered as authority '{authority_name}' "
            f"on case {case_id} (matched by {matched_by}) and cannot judge it"
        )


class DistributionLockedError(AdjudicationError):
    """Raised when re-assigning a distribution that already has votes."""

    def __init__(self, session_case_id: UUID, vote_count: int) -> None:
        self.session_case_id = session_case_id
        self.vote_count = vote_count
        super().__init__(
            f"Distribution for case appearance {session_case_id} is locked: "
            f"{vote_count} vote(s) already recorded"
        )


class InvalidDistributionError(AdjudicationError):
    """Raised when a distribution's member list is malformed."""

    pass


class NotDistributedError(AdjudicationError):
    """Raised when a member is neither rapporteur nor reviewer of the case."""

    def __init__(self, session_case_id: UUID, member_id: UUID) -> None:
        self.session_case_id = session_case_id
        self.member_id = member_id
        super().__init__(
            f"Member {member_id} is not distributed on case appearance "
            f"{session_case_id}"
        )
