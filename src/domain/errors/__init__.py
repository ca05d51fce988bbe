"""Domain errors for the adjudication core.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from AdjudicationError.
"""

from src.domain.errors.decision import (
    CaseNotJudgedError,
    DecisionAlreadyExistsError,
    DecisionNotPendingError,
)
from src.domain.errors.distribution import (
    AuthorityConflictError,
    DistributionLockedError,
    InvalidDistributionError,
    NotDistributedError,
)
from src.domain.errors.not_found import NotFoundError
from src.domain.errors.notification import (
    AttemptAlreadyConfirmedError,
    AttemptExpiredError,
    DuplicateNotificationItemError,
    MissingRecipientError,
    NotificationItemLockedError,
    NotificationListFinalizedError,
    NotificationListNotEmptyError,
)
from src.domain.errors.sequence import SequenceConflictError
from src.domain.errors.session import (
    CaseNotInAgendaError,
    CaseUnavailableForAgendaError,
    DistributedMemberAbsentError,
    MemberNotAttendingError,
    SessionClosedError,
    SessionNotConcludableError,
)
from src.domain.errors.state_transition import (
    InvalidStateTransitionError,
    MissingTransitionCauseError,
    NoVotesRecordedError,
    VoteNotResolvedError,
)
from src.domain.errors.vote import (
    DuplicateVoteError,
    IncompleteVoteRationaleError,
    OfficialDirectiveNotAllowedError,
    VoteRationaleError,
    VoteTemplateKindMismatchError,
)

__all__: list[str] = [
    "AttemptAlreadyConfirmedError",
    "AttemptExpiredError",
    "AuthorityConflictError",
    "CaseNotInAgendaError",
    "CaseNotJudgedError",
    "CaseUnavailableForAgendaError",
    "DecisionAlreadyExistsError",
    "DecisionNotPendingError",
    "DistributedMemberAbsentError",
    "DistributionLockedError",
    "DuplicateNotificationItemError",
    "DuplicateVoteError",
    "IncompleteVoteRationaleError",
    "InvalidDistributionError",
    "InvalidStateTransitionError",
    "MemberNotAttendingError",
    "MissingRecipientError",
    "MissingTransitionCauseError",
    "NoVotesRecordedError",
    "NotDistributedError",
    "NotFoundError",
    "NotificationItemLockedError",
    "NotificationListFinalizedError",
    "NotificationListNotEmptyError",
    "OfficialDirectiveNotAllowedError",
    "SequenceConflictError",
    "SessionClosedError",
    "SessionNotConcludableError",
    "VoteNotResolvedError",
    "VoteRationaleError",
    "VoteTemplateKindMismatchError",
]
