"""Judgment event publisher port.

Delivers CaseJudged and DecisionPublished events to downstream
consumers (notification tracking). Publishing happens after the write
that produced the event.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.events.judgment import CaseJudgedEvent, DecisionPublishedEvent


class JudgmentEventPublisherProtocol(Protocol):
    """Protocol for publishing judgment events."""

    async def case_judged(self, event: CaseJudgedEvent) -> None:
        """Publish a CaseJudged event."""
        ...

    async def decision_published(self, event: DecisionPublishedEvent) -> None:
        """Publish a DecisionPublished event."""
        ...
