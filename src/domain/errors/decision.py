"""Decision (acórdão) errors."""

from __future__ import annotations

from uuid import UUID

from src.domain.exceptions import AdjudicationError


class DecisionAlreadyExistsError(AdjudicationError):
    """Raised when a second decision is emitted for the same case."""

    def __init__(self, case_id: UUID, decision_number: str) -> None:
        self.case_id = case_id
        self.decision_number = decision_number
        super().__init__(
            f"Case {case_id} already has decision {decision_number}"
        )


class CaseNotJudgedError(AdjudicationError):
    """Raised when emitting a decision for a case without a resolved judgment."""

    def __init__(self, case_id: UUID, status: str) -> None:
        self.case_id = case_id
        self.status = status
        super().__init__(
            f"Case {case_id} is {status}; a decision requires a judged case "
            "with a resolved outcome"
        )


class DecisionNotPendingError(AdjudicationError):
    """Raised when an operation requires a PENDING decision (or no publications)."""

    def __init__(self, decision_id: UUID, detail: str) -> None:
        self.decision_id = decision_id
        super().__init__(f"Decision {decision_id}: {detail}")
