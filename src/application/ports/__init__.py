"""Application ports - Abstract interfaces for infrastructure adapters.

This module defines the contracts that infrastructure adapters must implement.
Ports enable dependency inversion and make the application layer testable.

Available ports:
- Repositories: cases, sessions (with agendas), distributions, votes,
  decisions, notification lists
- Directories: authorities, members, vote templates (read-only)
- SequenceAllocatorProtocol: atomic year-scoped numbering
- AggregateLockProtocol: per case appearance mutual exclusion
- JudgmentEventPublisherProtocol: CaseJudged / DecisionPublished delivery
"""

from src.application.ports.aggregate_lock import AggregateLockProtocol
from src.application.ports.case_repository import CaseRepositoryProtocol
from src.application.ports.decision_repository import DecisionRepositoryProtocol
from src.application.ports.directories import (
    AuthorityDirectoryProtocol,
    MemberDirectoryProtocol,
    VoteTemplateCatalogProtocol,
)
from src.application.ports.distribution_repository import (
    DistributionRepositoryProtocol,
)
from src.application.ports.judgment_event_publisher import (
    JudgmentEventPublisherProtocol,
)
from src.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from src.application.ports.sequence_allocator import SequenceAllocatorProtocol
from src.application.ports.session_repository import SessionRepositoryProtocol
from src.application.ports.vote_repository import VoteRepositoryProtocol

__all__: list[str] = [
    "AggregateLockProtocol",
    "AuthorityDirectoryProtocol",
    "CaseRepositoryProtocol",
    "DecisionRepositoryProtocol",
    "DistributionRepositoryProtocol",
    "JudgmentEventPublisherProtocol",
    "MemberDirectoryProtocol",
    "NotificationRepositoryProtocol",
    "SequenceAllocatorProtocol",
    "SessionRepositoryProtocol",
    "VoteRepositoryProtocol",
    "VoteTemplateCatalogProtocol",
]
