"""Case Registry Service.

Registers tax-appeal cases with their yearly number and answers case
lookups. Case status is not written here: the session scheduler and the
case judgment service own every status change.

Developer Golden Rules:
1. VALIDATE FIRST - Every check runs before the first write
2. FAIL LOUD - Raise domain errors, never return partial results
3. LOG EVERYTHING - All operations have structured logging
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from uuid6 import uuid7

from src.application.ports.case_repository import CaseRepositoryProtocol
from src.application.ports.sequence_allocator import SequenceAllocatorProtocol
from src.application.services.base import LoggingMixin, retry_on_sequence_conflict
from src.config.adjudication_config import DEFAULT_ADJUDICATION_CONFIG, AdjudicationConfig
from src.domain.errors import NotFoundError
from src.domain.models.case import Case, CaseStatus
from src.domain.models.sequence_number import SequenceNumber, SequenceScope


class CaseRegistryService(LoggingMixin):
    """Service registering and looking up cases.

    Attributes:
        _cases: Case repository.
        _sequences: Year-scoped sequence allocator.
        _config: Core configuration.
    """

    def __init__(
        self,
        case_repository: CaseRepositoryProtocol,
        sequence_allocator: SequenceAllocatorProtocol,
        config: AdjudicationConfig | None = None,
    ) -> None:
        self._cases = case_repository
        self._sequences = sequence_allocator
        self._config = config or DEFAULT_ADJUDICATION_CONFIG
        self._init_logger()

    async def register_case(self, classification: str, year: int | None = None) -> Case:
        """Register a new case awaiting judgment.

        Args:
            classification: Classification type of the appeal.
            year: Numbering year (defaults to the current UTC year).

        Returns:
            The registered case.

        Raises:
            ValueError: If the classification is blank.
            SequenceConflictError: If numbering kept colliding after retries.
        """
        if not classification or not classification.strip():
            raise ValueError("classification must not be blank")
        year = year or datetime.now(timezone.utc).year
        log = self._log_operation("register_case", year=year)

        async def attempt() -> Case:
            sequence = await self._sequences.next_value(SequenceScope.CASE, year)
            case = Case(
                id=uuid7(),
                number=SequenceNumber.for_scope(SequenceScope.CASE, sequence, year),
                classification=classification.strip(),
            )
            await self._cases.add(case)
            return case

        case = await retry_on_sequence_conflict(
            attempt, self._config.sequence_max_retries, log
        )
        log.info("case_registered", case_id=str(case.id), number=str(case.number))
        return case

    async def get_case(self, case_id: UUID) -> Case:
        """Retrieve a case.

        Raises:
            NotFoundError: If the case does not exist.
        """
        case = await self._cases.get(case_id)
        if case is None:
            raise NotFoundError("case", case_id)
        return case

    async def find_by_number(self, number: str) -> Case:
        """Retrieve a case by its rendered number ("0012/2025").

        Raises:
            ValueError: If the number is malformed.
            NotFoundError: If no case has that number.
        """
        case = await self._cases.get_by_number(SequenceNumber.parse(number))
        if case is None:
            raise NotFoundError("case", number)
        return case

    async def list_cases(self, status: CaseStatus | None = None) -> list[Case]:
        """List cases ordered by number."""
        return await self._cases.list_cases(status)
