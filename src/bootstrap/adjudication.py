"""Bootstrap wiring for the adjudication core.

Builds every service over one shared set of adapters and subscribes the
notification tracker to the judgment events. The development build uses
the in-memory stubs; a production build swaps in database adapters that
satisfy the same ports.
"""

from __future__ import annotations

from dataclasses import dataclass

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
from src.config.adjudication_config import AdjudicationConfig
from src.infrastructure.stubs import (
    AggregateLockStub,
    AuthorityDirectoryStub,
    CaseRepositoryStub,
    DecisionRepositoryStub,
    DistributionRepositoryStub,
    JudgmentEventPublisherStub,
    MemberDirectoryStub,
    NotificationRepositoryStub,
    SequenceAllocatorStub,
    SessionRepositoryStub,
    VoteRepositoryStub,
    VoteTemplateCatalogStub,
)


@dataclass(frozen=True)
class AdjudicationContainer:
    """Adapters and services of one adjudication core instance."""

    config: AdjudicationConfig
    cases: CaseRepositoryStub
    sessions: SessionRepositoryStub
    distributions: DistributionRepositoryStub
    votes: VoteRepositoryStub
    decisions: DecisionRepositoryStub
    notifications: NotificationRepositoryStub
    sequences: SequenceAllocatorStub
    lock: AggregateLockStub
    events: JudgmentEventPublisherStub
    members: MemberDirectoryStub
    authorities: AuthorityDirectoryStub
    templates: VoteTemplateCatalogStub
    case_registry: CaseRegistryService
    scheduler: SessionSchedulerService
    distribution: DistributionService
    vote_recorder: VoteRecorderService
    judgment: CaseJudgmentService
    decision_emitter: DecisionEmitterService
    notification_tracker: NotificationTrackerService


def build_adjudication_container(
    config: AdjudicationConfig | None = None,
) -> AdjudicationContainer:
    """Wire the adjudication services over fresh in-memory adapters."""
    config = config or AdjudicationConfig.from_environment()
    cases = CaseRepositoryStub()
    sessions = SessionRepositoryStub()
    distributions = DistributionRepositoryStub()
    votes = VoteRepositoryStub()
    decisions = DecisionRepositoryStub()
    notifications = NotificationRepositoryStub()
    sequences = SequenceAllocatorStub()
    lock = AggregateLockStub()
    events = JudgmentEventPublisherStub()
    members = MemberDirectoryStub()
    authorities = AuthorityDirectoryStub()
    templates = VoteTemplateCatalogStub()

    distribution = DistributionService(
        session_repository=sessions,
        distribution_repository=distributions,
        vote_repository=votes,
        member_directory=members,
        authority_directory=authorities,
        aggregate_lock=lock,
        config=config,
    )
    notification_tracker = NotificationTrackerService(
        notification_repository=notifications,
        sequence_allocator=sequences,
        aggregate_lock=lock,
        config=config,
    )
    events.subscribe(
        on_case_judged=notification_tracker.on_case_judged,
        on_decision_published=notification_tracker.on_decision_published,
    )

    return AdjudicationContainer(
        config=config,
        cases=cases,
        sessions=sessions,
        distributions=distributions,
        votes=votes,
        decisions=decisions,
        notifications=notifications,
        sequences=sequences,
        lock=lock,
        events=events,
        members=members,
        authorities=authorities,
        templates=templates,
        case_registry=CaseRegistryService(
            case_repository=cases,
            sequence_allocator=sequences,
            config=config,
        ),
        scheduler=SessionSchedulerService(
            session_repository=sessions,
            case_repository=cases,
            distribution_repository=distributions,
            vote_repository=votes,
            member_directory=members,
            sequence_allocator=sequences,
            aggregate_lock=lock,
            distribution_service=distribution,
            config=config,
        ),
        distribution=distribution,
        vote_recorder=VoteRecorderService(
            session_repository=sessions,
            distribution_repository=distributions,
            vote_repository=votes,
            template_catalog=templates,
            aggregate_lock=lock,
        ),
        judgment=CaseJudgmentService(
            session_repository=sessions,
            case_repository=cases,
            distribution_repository=distributions,
            vote_repository=votes,
            member_directory=members,
            authority_directory=authorities,
            aggregate_lock=lock,
            event_publisher=events,
            config=config,
        ),
        decision_emitter=DecisionEmitterService(
            decision_repository=decisions,
            case_repository=cases,
            session_repository=sessions,
            sequence_allocator=sequences,
            event_publisher=events,
            aggregate_lock=lock,
            config=config,
        ),
        notification_tracker=notification_tracker,
    )


_container: AdjudicationContainer | None = None


def get_adjudication_container() -> AdjudicationContainer:
    """Get the process-wide adjudication container."""
    global _container
    if _container is None:
        _container = build_adjudication_container()
    return _container


def set_adjudication_container(container: AdjudicationContainer) -> None:
    """Set a custom container for testing."""
    global _container
    _container = container


def reset_adjudication_dependencies() -> None:
    """Reset the singleton container for testing."""
    global _container
    _container = None
