"""API dependencies for dependency injection."""

from src.api.dependencies.adjudication import (
    get_case_judgment_service,
    get_case_registry_service,
    get_container,
    get_decision_emitter_service,
    get_distribution_service,
    get_notification_tracker_service,
    get_session_scheduler_service,
    get_vote_recorder_service,
)

__all__: list[str] = [
    "get_case_judgment_service",
    "get_case_registry_service",
    "get_container",
    "get_decision_emitter_service",
    "get_distribution_service",
    "get_notification_tracker_service",
    "get_session_scheduler_service",
    "get_vote_recorder_service",
]
