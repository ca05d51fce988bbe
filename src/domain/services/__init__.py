"""Domain services for the adjudication core.

Domain services contain business logic that doesn't naturally fit in
entities or value objects. They are pure and must NOT depend on
infrastructure.

Available services:
- compose_vote_text: Builds the vote sentence from selected templates
- derive_role / validate_vote_rationale / resolve_votes: Vote rules
- ensure_no_authority_conflict: Distribution eligibility rule
"""

from src.domain.services.authority_conflict import (
    AuthorityMatch,
    ensure_no_authority_conflict,
    find_authority_conflict,
)
from src.domain.services.vote_resolution import (
    derive_role,
    resolve_votes,
    validate_vote_rationale,
)
from src.domain.services.vote_text_composer import (
    compose_vote_text,
    normalize_fragment,
)

__all__ = [
    "AuthorityMatch",
    "compose_vote_text",
    "derive_role",
    "ensure_no_authority_conflict",
    "find_authority_conflict",
    "normalize_fragment",
    "resolve_votes",
    "validate_vote_rationale",
]
