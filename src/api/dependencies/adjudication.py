"""Adjudication API dependencies.

Dependency injection for the adjudication services. Every getter reads
the process-wide container from the bootstrap layer, so tests can swap
the whole core with set_adjudication_container() or FastAPI's
dependency_overrides.

Note: The container is built over in-memory stubs. Production would use
database-backed repositories, a row-lock based AggregateLock and a
durable event publisher behind the same ports.
"""

from src.application.services.case_judgment_service import CaseJudgmentService
from src.application.services.case_registry_service import CaseRegistryService
from src.application.services.decision_emitter_service import DecisionEmitterService
from src.application.services.distribution_service import DistributionService
from src.application.services.notification_tracker_service import (
    NotificationTrackerService,
)
from src.application.services.session_scheduler_service import (
    SessionSchedulerService,
)
from src.application.services.vote_recorder_service import VoteRecorderService
from src.bootstrap.adjudication import (
    AdjudicationContainer,
    get_adjudication_container,
)


def get_container() -> AdjudicationContainer:
    """Get the adjudication container."""
    return get_adjudication_container()


def get_case_registry_service() -> CaseRegistryService:
    """Get case registry service instance."""
    return get_adjudication_container().case_registry


def get_session_scheduler_service() -> SessionSchedulerService:
    """Get session scheduler service instance."""
    return get_adjudication_container().scheduler


def get_distribution_service() -> DistributionService:
    """Get distribution service instance."""
    return get_adjudication_container().distribution


def get_vote_recorder_service() -> VoteRecorderService:
    """Get vote recorder service instance."""
    return get_adjudication_container().vote_recorder


def get_case_judgment_service() -> CaseJudgmentService:
    """Get case judgment service instance."""
    return get_adjudication_container().judgment


def get_decision_emitter_service() -> DecisionEmitterService:
    """Get decision emitter service instance."""
    return get_adjudication_container().decision_emitter


def get_notification_tracker_service() -> NotificationTrackerService:
    """Get notification tracker service instance."""
    return get_adjudication_container().notification_tracker
