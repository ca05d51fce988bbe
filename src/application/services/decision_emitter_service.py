"""Decision Emitter Service.

Emits decision documents for judged cases and records their
publications in the official gazette.

Numbering:
    Decision numbers restart every year, the year being that of the
    session in which the case was judged. Numbers come from the atomic
    sequence allocator and are never reused, even after a pending
    decision is deleted. A collision detected at save time is retried
    SEQUENCE_MAX_RETRIES times and then surfaced. The one-decision-per-case
    check and the allocation run under the case lock, so a losing
    concurrent emission never burns a number.

Publication:
    Each publication is appended with order = previous max + 1 using a
    compare-and-append, snapshots the ementa and publishes a
    DecisionPublished event. Publications are never removed.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from uuid import UUID

from uuid6 import uuid7

from src.application.ports.aggregate_lock import AggregateLockProtocol
from src.application.ports.case_repository import CaseRepositoryProtocol
from src.application.ports.decision_repository import DecisionRepositoryProtocol
from src.application.ports.judgment_event_publisher import (
    JudgmentEventPublisherProtocol,
)
from src.application.ports.sequence_allocator import SequenceAllocatorProtocol
from src.application.ports.session_repository import SessionRepositoryProtocol
from src.application.services.base import LoggingMixin, retry_on_sequence_conflict
from src.config.adjudication_config import DEFAULT_ADJUDICATION_CONFIG, AdjudicationConfig
from src.domain.errors import (
    CaseNotJudgedError,
    DecisionAlreadyExistsError,
    DecisionNotPendingError,
    NotFoundError,
)
from src.domain.events.judgment import DecisionPublishedEvent
from src.domain.models.case import CaseStatus
from src.domain.models.decision import DecisionDocument, DecisionStatus
from src.domain.models.sequence_number import SequenceNumber, SequenceScope
from src.domain.models.session import CaseSessionStatus, SessionCase


class DecisionEmitterService(LoggingMixin):
    """Service emitting and publishing decision documents.

    Attributes:
        _decisions: Decision repository.
        _cases: Case repository.
        _sessions: Session and agenda repository.
        _sequences: Year-scoped sequence allocator.
        _events: Judgment event publisher.
        _lock: Per case lock.
        _config: Core configuration.
    """

    def __init__(
        self,
        decision_repository: DecisionRepositoryProtocol,
        case_repository: CaseRepositoryProtocol,
        session_repository: SessionRepositoryProtocol,
        sequence_allocator: SequenceAllocatorProtocol,
        event_publisher: JudgmentEventPublisherProtocol,
        aggregate_lock: AggregateLockProtocol,
        config: AdjudicationConfig | None = None,
    ) -> None:
        self._decisions = decision_repository
        self._cases = case_repository
        self._sessions = session_repository
        self._sequences = sequence_allocator
        self._events = event_publisher
        self._lock = aggregate_lock
        self._config = config or DEFAULT_ADJUDICATION_CONFIG
        self._init_logger()

    async def emit_decision(
        self,
        case_id: UUID,
        ementa_title: str,
        ementa_body: str,
        vote_file: str | None = None,
    ) -> DecisionDocument:
        """Emit the decision document of a judged case.

        Creation does not publish.

        Args:
            case_id: The judged case.
            ementa_title: Summary title.
            ementa_body: Summary body.
            vote_file: Optional opaque handle of the vote document.

        Returns:
            The PENDING decision with its allocated number.

        Raises:
            ValueError: Blank title or body.
            NotFoundError: Unknown case or judgment session.
            CaseNotJudgedError: The case has no resolved judgment.
            DecisionAlreadyExistsError: The case already has a decision.
            SequenceConflictError: Numbering kept colliding after retries.
        """
        if not ementa_title or not ementa_title.strip():
            raise ValueError("ementa_title is required")
        if not ementa_body or not ementa_body.strip():
            raise ValueError("ementa_body is required")
        log = self._log_operation("emit_decision", case_id=str(case_id))

        async with self._lock.hold(case_id):
            case = await self._cases.get(case_id)
            if case is None:
                raise NotFoundError("case", case_id)
            judged = await self._judged_appearance(case_id)
            if case.status is not CaseStatus.JUDGED or judged is None:
                raise CaseNotJudgedError(case_id, case.status.value)
            existing = await self._decisions.get_by_case(case_id)
            if existing is not None:
                raise DecisionAlreadyExistsError(case_id, str(existing.number))

            session = await self._sessions.get_session(judged.session_id)
            if session is None:
                raise NotFoundError("session", judged.session_id)
            year = session.session_date.year

            async def attempt() -> DecisionDocument:
                sequence = await self._sequences.next_value(
                    SequenceScope.DECISION, year
                )
                decision = DecisionDocument(
                    id=uuid7(),
                    case_id=case_id,
                    number=SequenceNumber.for_scope(
                        SequenceScope.DECISION, sequence, year
                    ),
                    ementa_title=ementa_title.strip(),
                    ementa_body=ementa_body.strip(),
                    vote_file=vote_file,
                )
                await self._decisions.add(decision)
                return decision

            decision = await retry_on_sequence_conflict(
                attempt, self._config.sequence_max_retries, log
            )

        log.info(
            "decision_emitted",
            decision_id=str(decision.id),
            number=str(decision.number),
        )
        return decision

    async def publish(
        self,
        decision_id: UUID,
        publication_number: str,
        publication_date: date,
        republish_reason: str | None = None,
    ) -> DecisionDocument:
        """Append a publication and publish DecisionPublished.

        Publishing is always allowed: a later publication is a
        republication and sets REPUBLISHED.

        Raises:
            NotFoundError: Unknown decision.
            ValueError: Blank publication number.
            SequenceConflictError: Lost the publication-order race after retries.
        """
        if not publication_number or not publication_number.strip():
            raise ValueError("publication_number is required")
        log = self._log_operation("publish", decision_id=str(decision_id))

        async def attempt() -> DecisionDocument:
            decision = await self.get_decision(decision_id)
            order = decision.next_publication_order
            published = decision.with_publication(
                order, publication_number, publication_date, republish_reason
            )
            await self._decisions.append_publication(published, order)
            return published

        published = await retry_on_sequence_conflict(
            attempt, self._config.sequence_max_retries, log
        )
        last = published.publications[-1]
        await self._events.decision_published(
            DecisionPublishedEvent(
                event_id=uuid7(),
                case_id=published.case_id,
                decision_id=published.id,
                decision_number=str(published.number),
                publication_order=last.publication_order,
                publication_date=last.publication_date,
            )
        )
        log.info(
            "decision_published",
            publication_order=last.publication_order,
            status=published.status.value,
        )
        return published

    async def publish_batch(
        self,
        decision_ids: Sequence[UUID],
        publication_number: str,
        publication_date: date,
    ) -> list[DecisionDocument]:
        """Publish several pending decisions in the same gazette edition.

        Every decision is checked before the first publication.

        Raises:
            ValueError: Empty batch or blank publication number.
            NotFoundError: Unknown decision.
            DecisionNotPendingError: A decision is not PENDING.
        """
        if not decision_ids:
            raise ValueError("decision_ids must not be empty")
        if not publication_number or not publication_number.strip():
            raise ValueError("publication_number is required")
        ids = list(dict.fromkeys(decision_ids))
        for decision_id in ids:
            decision = await self.get_decision(decision_id)
            if decision.status is not DecisionStatus.PENDING:
                raise DecisionNotPendingError(
                    decision_id, f"is {decision.status.value}; only pending decisions are batch-published"
                )

        published = [
            await self.publish(decision_id, publication_number, publication_date)
            for decision_id in ids
        ]
        self._log_operation("publish_batch").info(
            "decision_batch_published", count=len(published)
        )
        return published

    async def update_ementa(
        self, decision_id: UUID, ementa_title: str, ementa_body: str
    ) -> DecisionDocument:
        """Edit the ementa; a changed published decision returns to PENDING.

        Raises:
            ValueError: Blank title or body.
            NotFoundError: Unknown decision.
        """
        if not ementa_title or not ementa_title.strip():
            raise ValueError("ementa_title is required")
        if not ementa_body or not ementa_body.strip():
            raise ValueError("ementa_body is required")
        decision = await self.get_decision(decision_id)
        updated = decision.with_ementa(ementa_title.strip(), ementa_body.strip())
        await self._decisions.update(updated)
        self._log_operation("update_ementa", decision_id=str(decision_id)).info(
            "decision_ementa_updated", status=updated.status.value
        )
        return updated

    async def revert_to_last_publication(self, decision_id: UUID) -> DecisionDocument:
        """Restore the ementa and status of the last publication.

        Raises:
            NotFoundError: Unknown decision.
            DecisionNotPendingError: Not PENDING or never published.
        """
        decision = await self.get_decision(decision_id)
        reverted = decision.reverted_to_last_publication()
        await self._decisions.update(reverted)
        self._log_operation("revert_to_last_publication", decision_id=str(decision_id)).info(
            "decision_reverted", status=reverted.status.value
        )
        return reverted

    async def delete_decision(self, decision_id: UUID) -> None:
        """Delete a pending decision that was never published.

        Its number is not released.

        Raises:
            NotFoundError: Unknown decision.
            DecisionNotPendingError: Published at least once.
        """
        decision = await self.get_decision(decision_id)
        if decision.status is not DecisionStatus.PENDING or decision.was_published:
            raise DecisionNotPendingError(
                decision_id, "only a pending, never published decision can be deleted"
            )
        await self._decisions.delete(decision_id)
        self._log_operation("delete_decision", decision_id=str(decision_id)).info(
            "decision_deleted", number=str(decision.number)
        )

    async def attach_decision_file(self, decision_id: UUID, handle: str) -> DecisionDocument:
        """Attach the opaque storage handle of the decision document.

        Raises:
            NotFoundError: Unknown decision.
            ValueError: Blank handle.
        """
        decision = await self.get_decision(decision_id)
        updated = decision.with_decision_file(handle)
        await self._decisions.update(updated)
        self._log_operation("attach_decision_file", decision_id=str(decision_id)).info(
            "decision_file_attached"
        )
        return updated

    async def get_decision(self, decision_id: UUID) -> DecisionDocument:
        """Retrieve a decision.

        Raises:
            NotFoundError: If the decision does not exist.
        """
        decision = await self._decisions.get(decision_id)
        if decision is None:
            raise NotFoundError("decision", decision_id)
        return decision

    async def list_decisions(
        self, status: DecisionStatus | None = None
    ) -> list[DecisionDocument]:
        """List decisions ordered by number."""
        return await self._decisions.list_decisions(status)

    async def _judged_appearance(self, case_id: UUID) -> SessionCase | None:
        appearances = await self._sessions.list_appearances_of_case(case_id)
        judged = [
            sc
            for sc in appearances
            if sc.status is CaseSessionStatus.JUDGED and sc.outcome is not None
        ]
        return judged[-1] if judged else None
