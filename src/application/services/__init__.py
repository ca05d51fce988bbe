"""Application services - Use case orchestration.

This module contains application services that orchestrate domain
operations and coordinate with infrastructure adapters.

Available services:
- CaseRegistryService: Case registration and yearly numbering
- SessionSchedulerService: Sessions, attendance and agenda placement
- DistributionService: Rapporteur and reviewer assignment
- VoteRecorderService: Vote recording, editing and resolution
- CaseJudgmentService: Judgment confirmation and result overrides
- DecisionEmitterService: Decision documents and publications
- NotificationTrackerService: Notification lists, items and attempts
"""

from src.application.services.base import LoggingMixin, retry_on_sequence_conflict
from src.application.services.case_judgment_service import CaseJudgmentService
from src.application.services.case_registry_service import CaseRegistryService
from src.application.services.decision_emitter_service import DecisionEmitterService
from src.application.services.distribution_service import DistributionService
from src.application.services.notification_tracker_service import (
    NotificationTrackerService,
)
from src.application.services.session_scheduler_service import (
    AgendaEntry,
    SessionSchedulerService,
)
from src.application.services.vote_recorder_service import (
    CastVote,
    VoteRecorderService,
)

__all__: list[str] = [
    "AgendaEntry",
    "CaseJudgmentService",
    "CaseRegistryService",
    "CastVote",
    "DecisionEmitterService",
    "DistributionService",
    "LoggingMixin",
    "NotificationTrackerService",
    "SessionSchedulerService",
    "VoteRecorderService",
    "retry_on_sequence_conflict",
]
