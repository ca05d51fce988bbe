"""
Domain events for the adjudication core.

Events represent significant state changes that downstream trackers
consume. All events are immutable and timestamped.
"""

from src.domain.events.judgment import (
    CASE_JUDGED_EVENT_TYPE,
    DECISION_PUBLISHED_EVENT_TYPE,
    CaseJudgedEvent,
    DecisionPublishedEvent,
)

__all__: list[str] = [
    "CASE_JUDGED_EVENT_TYPE",
    "DECISION_PUBLISHED_EVENT_TYPE",
    "CaseJudgedEvent",
    "DecisionPublishedEvent",
]
