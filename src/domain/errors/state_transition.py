"""State transition errors for the adjudication state machines.

Every aggregate (Case, SessionCase, Session, DecisionDocument,
NotificationAttempt) owns a transition matrix. These errors are raised
by the aggregate's single transition function when a requested move is
not in its matrix or when a transition guard is not satisfied.
"""

from __future__ import annotations

from enum import Enum

from src.domain.exceptions import AdjudicationError


class InvalidStateTransitionError(AdjudicationError):
    """Raised when a transition is not permitted by the transition matrix.

    Attributes:
        entity: Aggregate kind ("case", "session", ...).
        from_state: Current state.
        to_state: Attempted target state.
        allowed_transitions: Valid target states from the current state.
    """

    def __init__(
        self,
        entity: str,
        from_state: Enum,
        to_state: Enum,
        allowed_transitions: list[Enum] | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            entity: Aggregate kind.
            from_state: Current state.
            to_state: Attempted invalid target state.
            allowed_transitions: Valid states from current state (optional).
        """
        self.entity = entity
        self.from_state = from_state
        self.to_state = to_state
        self.allowed_transitions = allowed_transitions or []

        allowed = sorted(s.value for s in self.allowed_transitions)
        allowed_str = f" Valid transitions: {allowed}" if allowed else ""
        super().__init__(
            f"Invalid {entity} transition: {from_state.value} -> {to_state.value}."
            f"{allowed_str}"
        )


class MissingTransitionCauseError(AdjudicationError):
    """Raised when an administrative override has no usable recorded cause.

    Any case transition other than confirming a judgment is an override
    and must carry a cause. Texts still holding the unresolved
    placeholder are rejected as well.
    """

    def __init__(self, target_state: Enum, detail: str | None = None) -> None:
        self.target_state = target_state
        message = f"A recorded cause is required to move to {target_state.value}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class NoVotesRecordedError(AdjudicationError):
    """Raised when a terminal status is requested for a case with zero votes."""

    def __init__(self, session_case_id: object) -> None:
        self.session_case_id = session_case_id
        super().__init__(
            f"Case appearance {session_case_id} has no votes recorded; "
            "it cannot be judged"
        )


class VoteNotResolvedError(AdjudicationError):
    """Raised when votes exist but quorum or agreement was not reached.

    Attributes:
        votes_received: Number of votes cast.
        votes_required: Number of distributed members.
        quorum_met: Whether every distributed member voted.
    """

    def __init__(
        self,
        session_case_id: object,
        votes_received: int,
        votes_required: int,
        quorum_met: bool,
    ) -> None:
        self.session_case_id = session_case_id
        self.votes_received = votes_received
        self.votes_required = votes_required
        self.quorum_met = quorum_met
        reason = (
            "no conclusion holds a majority"
            if quorum_met
            else f"{votes_received} of {votes_required} votes recorded"
        )
        super().__init__(
            f"Votes for case appearance {session_case_id} are not resolved: {reason}"
        )
