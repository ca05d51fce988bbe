"""Infrastructure stubs for development and testing.

This module provides in-memory implementations of the application
ports for use in development and testing environments.

Available stubs:
- CaseRepositoryStub: Cases with unique yearly numbers
- SessionRepositoryStub: Sessions and agenda appearances
- DistributionRepositoryStub: Distributions per appearance
- VoteRepositoryStub: Votes, one per member and appearance
- DecisionRepositoryStub: Decisions with compare-and-append publications
- NotificationRepositoryStub: Notification lists, items and attempts
- SequenceAllocatorStub: Year-scoped high-water-mark numbering
- AggregateLockStub: Per-aggregate asyncio locks
- JudgmentEventPublisherStub: In-process event bus with subscribers
- MemberDirectoryStub, AuthorityDirectoryStub, VoteTemplateCatalogStub:
  External registries

WARNING: These stubs are NOT for production use.
"""

from src.infrastructure.stubs.aggregate_lock_stub import AggregateLockStub
from src.infrastructure.stubs.case_repository_stub import CaseRepositoryStub
from src.infrastructure.stubs.decision_repository_stub import DecisionRepositoryStub
from src.infrastructure.stubs.directory_stubs import (
    AuthorityDirectoryStub,
    MemberDirectoryStub,
    VoteTemplateCatalogStub,
)
from src.infrastructure.stubs.distribution_repository_stub import (
    DistributionRepositoryStub,
)
from src.infrastructure.stubs.judgment_event_publisher_stub import (
    JudgmentEventPublisherStub,
)
from src.infrastructure.stubs.notification_repository_stub import (
    NotificationRepositoryStub,
)
from src.infrastructure.stubs.sequence_allocator_stub import SequenceAllocatorStub
from src.infrastructure.stubs.session_repository_stub import SessionRepositoryStub
from src.infrastructure.stubs.vote_repository_stub import VoteRepositoryStub

__all__: list[str] = [
    "AggregateLockStub",
    "AuthorityDirectoryStub",
    "CaseRepositoryStub",
    "DecisionRepositoryStub",
    "DistributionRepositoryStub",
    "JudgmentEventPublisherStub",
    "MemberDirectoryStub",
    "NotificationRepositoryStub",
    "SequenceAllocatorStub",
    "SessionRepositoryStub",
    "VoteRepositoryStub",
    "VoteTemplateCatalogStub",
]
