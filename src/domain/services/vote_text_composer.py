"""Vote-text composition domain service.

Builds the decision sentence of a vote from the selected templates.
Pure and deterministic: the same choices always produce the same text,
and composition never raises. Callers validate the choices first
(see vote_resolution.validate_vote_rationale) and treat an empty result
as an incomplete rationale.

Composition rules:
    NON_KNOWLEDGE, preliminary only          -> "{preliminary}."
    NON_KNOWLEDGE/ACCEPT, preliminary + ofc. -> "{preliminary}, mas, de ofício, {official}."
    NON_KNOWLEDGE/ACCEPT, official only      -> "Não conhecer do recurso, mas, de ofício, {official}."
    NON_KNOWLEDGE/REJECT, nothing selected   -> "Conhecer do recurso."
    KNOWLEDGE, merit only                    -> "{merit}."
    KNOWLEDGE, merit + official              -> "{merit}, mas, de ofício, {official}."
    anything else                            -> ""
"""

from __future__ import annotations

from src.domain.models.vote import (
    KnowledgeType,
    PreliminaryOutcome,
    VoteInput,
    VoteTemplate,
)

OFFICIAL_JOINER: str = ", mas, de ofício, "
NOT_HEARD_OPENING: str = "Não conhecer do recurso"
HEARD_SENTENCE: str = "Conhecer do recurso."


def normalize_fragment(text: str | None, opens_sentence: bool) -> str:
    """Normalize a template fragment for composition.

    Trims whitespace, lower-cases the first character unless the fragment
    opens the sentence, and strips one trailing period.

    Args:
        text: Raw template text.
        opens_sentence: Keep the first character as written.

    Returns:
        Normalized fragment ("" when nothing usable remains).
    """
    if not text:
        return ""
    normalized = text.strip()
    if normalized and not opens_sentence:
        normalized = normalized[0].lower() + normalized[1:]
    if normalized.endswith("."):
        normalized = normalized[:-1]
    return normalized


def compose_vote_text(
    vote_input: VoteInput,
    preliminary: VoteTemplate | None = None,
    merit: VoteTemplate | None = None,
    official: VoteTemplate | None = None,
) -> str:
    """Compose the vote text from structured choices.

    Args:
        vote_input: Knowledge type and preliminary outcome.
        preliminary: Selected preliminary template.
        merit: Selected merit template.
        official: Selected ex-officio template.

    Returns:
        The composed sentence, or "" when the choices match no rule.
    """
    official_text = normalize_fragment(
        official.text_for(None) if official else None, opens_sentence=False
    )

    if vote_input.knowledge_type is KnowledgeType.NON_KNOWLEDGE:
        outcome = vote_input.preliminary_outcome
        preliminary_text = normalize_fragment(
            preliminary.text_for(outcome) if preliminary else None,
            opens_sentence=True,
        )
        # Ex-officio directives only accompany an accepted objection.
        if outcome is not PreliminaryOutcome.ACCEPT:
            official_text = ""

        if preliminary_text and not official_text:
            return f"{preliminary_text}."
        if preliminary_text and official_text:
            return f"{preliminary_text}{OFFICIAL_JOINER}{official_text}."
        if official_text:
            return f"{NOT_HEARD_OPENING}{OFFICIAL_JOINER}{official_text}."
        if outcome is PreliminaryOutcome.REJECT:
            return HEARD_SENTENCE
        return ""

    merit_text = normalize_fragment(
        merit.text_for(None) if merit else None, opens_sentence=True
    )
    if merit_text and not official_text:
        return f"{merit_text}."
    if merit_text and official_text:
        return f"{merit_text}{OFFICIAL_JOINER}{official_text}."
    return ""
