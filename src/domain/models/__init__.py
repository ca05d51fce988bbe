"""Domain models for the adjudication core.

Contains value objects and domain models that represent core
business concepts. These models are immutable and contain no
infrastructure dependencies.
"""

from src.domain.models.case import Case, CaseStatus
from src.domain.models.decision import DecisionDocument, DecisionStatus, Publication
from src.domain.models.distribution import Distribution
from src.domain.models.member import CaseAuthority, Member
from src.domain.models.notification import (
    AttemptStatus,
    Channel,
    ListStatus,
    ListType,
    NotificationAttempt,
    NotificationItem,
    NotificationList,
)
from src.domain.models.sequence_number import SequenceNumber, SequenceScope
from src.domain.models.session import (
    CaseSessionStatus,
    Session,
    SessionCase,
    SessionStatus,
    SessionType,
)
from src.domain.models.vote import (
    JudgmentOutcome,
    KnowledgeType,
    PreliminaryOutcome,
    TemplateKind,
    Vote,
    VoteConclusion,
    VoteInput,
    VoteResolution,
    VoteRole,
    VoteTemplate,
)

__all__: list[str] = [
    "AttemptStatus",
    "Case",
    "CaseAuthority",
    "CaseSessionStatus",
    "CaseStatus",
    "Channel",
    "DecisionDocument",
    "DecisionStatus",
    "Distribution",
    "JudgmentOutcome",
    "KnowledgeType",
    "ListStatus",
    "ListType",
    "Member",
    "NotificationAttempt",
    "NotificationItem",
    "NotificationList",
    "PreliminaryOutcome",
    "Publication",
    "SequenceNumber",
    "SequenceScope",
    "Session",
    "SessionCase",
    "SessionStatus",
    "SessionType",
    "TemplateKind",
    "Vote",
    "VoteConclusion",
    "VoteInput",
    "VoteResolution",
    "VoteRole",
    "VoteTemplate",
]
