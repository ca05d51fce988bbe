"""In-memory stub for JudgmentEventPublisherProtocol.

Records every published event and forwards it to registered async
subscribers in registration order. A failing subscriber is logged and
does not stop delivery to the others; the event is already committed
when it is published.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

import structlog

from src.application.ports.judgment_event_publisher import (
    JudgmentEventPublisherProtocol,
)
from src.domain.events.judgment import (
    CASE_JUDGED_EVENT_TYPE,
    DECISION_PUBLISHED_EVENT_TYPE,
    CaseJudgedEvent,
    DecisionPublishedEvent,
)

logger = structlog.get_logger()

CaseJudgedHandler = Callable[[CaseJudgedEvent], Awaitable[None]]
DecisionPublishedHandler = Callable[[DecisionPublishedEvent], Awaitable[None]]


class JudgmentEventPublisherStub(JudgmentEventPublisherProtocol):
    """In-process judgment event bus.

    Attributes:
        case_judged_events: Every CaseJudged event published.
        decision_published_events: Every DecisionPublished event published.
    """

    def __init__(self) -> None:
        self.case_judged_events: list[CaseJudgedEvent] = []
        self.decision_published_events: list[DecisionPublishedEvent] = []
        self._case_judged_handlers: list[CaseJudgedHandler] = []
        self._decision_published_handlers: list[DecisionPublishedHandler] = []

    def subscribe(
        self,
        on_case_judged: CaseJudgedHandler | None = None,
        on_decision_published: DecisionPublishedHandler | None = None,
    ) -> None:
        """Register handlers for either event type."""
        if on_case_judged is not None:
            self._case_judged_handlers.append(on_case_judged)
        if on_decision_published is not None:
            self._decision_published_handlers.append(on_decision_published)

    async def case_judged(self, event: CaseJudgedEvent) -> None:
        self.case_judged_events.append(event)
        for handler in self._case_judged_handlers:
            try:
                await handler(event)
            except Exception:
                logger.exception(
                    "judgment_event_handler_failed",
                    event_type=CASE_JUDGED_EVENT_TYPE,
                    event_id=str(event.event_id),
                )

    async def decision_published(self, event: DecisionPublishedEvent) -> None:
        self.decision_published_events.append(event)
        for handler in self._decision_published_handlers:
            try:
                await handler(event)
            except Exception:
                logger.exception(
                    "judgment_event_handler_failed",
                    event_type=DECISION_PUBLISHED_EVENT_TYPE,
                    event_id=str(event.event_id),
                )

    def clear(self) -> None:
        """Forget recorded events; subscriptions are kept (for testing)."""
        self.case_judged_events.clear()
        self.decision_published_events.clear()
