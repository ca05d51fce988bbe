"""Vote recording errors.

Rationale errors are pure pre-checks raised before any write. The vote
text composer itself never raises; only its callers validate.
"""

from __future__ import annotations

from uuid import UUID

from src.domain.exceptions import AdjudicationError


class DuplicateVoteError(AdjudicationError):
    """Raised when a member votes twice on the same case appearance.

    Changes to an existing vote go through the explicit edit operation.
    """

    def __init__(self, session_case_id: UUID, member_id: UUID) -> None:
        self.session_case_id = session_case_id
        self.member_id = member_id
        super().__init__(
            f"Member {member_id} already voted on case appearance "
            f"{session_case_id}; edit the existing vote instead"
        )


class VoteRationaleError(AdjudicationError):
    """Base error for structurally invalid vote choices."""

    pass


class IncompleteVoteRationaleError(VoteRationaleError):
    """Raised when the selected choices cannot support a vote text."""

    pass


class OfficialDirectiveNotAllowedError(VoteRationaleError):
    """Raised when an ex-officio directive is chosen where the outcome forbids it."""

    def __init__(self) -> None:
        super().__init__(
            "An ex-officio directive can only accompany a non-knowledge vote "
            "that accepts the preliminary objection, or a knowledge vote"
        )


class VoteTemplateKindMismatchError(VoteRationaleError):
    """Raised when a template is used in a slot of a different kind."""

    def __init__(self, template_id: UUID, expected: str, actual: str) -> None:
        self.template_id = template_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Template {template_id} is a {actual} template; a {expected} "
            "template is required here"
        )
