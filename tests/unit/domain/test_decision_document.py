"""Unit tests for the decision document and its publication history."""

from datetime import date
from uuid import uuid4

import pytest

from src.domain.errors import DecisionNotPendingError, SequenceConflictError
from src.domain.models.decision import DecisionDocument, DecisionStatus
from src.domain.models.sequence_number import SequenceNumber


@pytest.fixture
def decision() -> DecisionDocument:
    return DecisionDocument(
        id=uuid4(),
        case_id=uuid4(),
        number=SequenceNumber(year=2025, sequence=12),
        ementa_title="ISS. Decadência.",
        ementa_body="Recurso improvido.",
    )


class TestPublication:
    """Tests for DecisionDocument.with_publication."""

    def test_first_publication_publishes(self, decision: DecisionDocument) -> None:
        published = decision.with_publication(1, " DOM 1234 ", date(2025, 4, 1))
        assert published.status is DecisionStatus.PUBLISHED
        assert published.last_publication.publication_number == "DOM 1234"
        assert published.last_publication.ementa_title_snapshot == "ISS. Decadência."
        assert published.next_publication_order == 2

    def test_later_publication_republishes(self, decision: DecisionDocument) -> None:
        republished = decision.with_publication(1, "DOM 1", date(2025, 4, 1)).with_publication(
            2, "DOM 2", date(2025, 5, 1), republish_reason="erro material"
        )
        assert republished.status is DecisionStatus.REPUBLISHED
        assert [p.publication_order for p in republished.publications] == [1, 2]
        assert republished.last_publication.republish_reason == "erro material"

    def test_stale_order_conflicts(self, decision: DecisionDocument) -> None:
        published = decision.with_publication(1, "DOM 1", date(2025, 4, 1))
        with pytest.raises(SequenceConflictError):
            published.with_publication(1, "DOM 2", date(2025, 5, 1))

    def test_orders_must_be_contiguous(self, decision: DecisionDocument) -> None:
        published = decision.with_publication(1, "DOM 1", date(2025, 4, 1))
        with pytest.raises(ValueError, match="publication orders"):
            DecisionDocument(
                id=uuid4(),
                case_id=uuid4(),
                number=decision.number,
                ementa_title="t",
                ementa_body="b",
                publications=(published.publications[0], published.publications[0]),
            )


class TestEmentaAndRevert:
    """Tests for ementa edits and reverting to the last publication."""

    def test_editing_published_ementa_returns_to_pending(
        self, decision: DecisionDocument
    ) -> None:
        published = decision.with_publication(1, "DOM 1", date(2025, 4, 1))
        edited = published.with_ementa("ISS. Prescrição.", "Recurso provido.")
        assert edited.status is DecisionStatus.PENDING
        assert edited.last_publication.ementa_title_snapshot == "ISS. Decadência."

    def test_unchanged_ementa_keeps_status(self, decision: DecisionDocument) -> None:
        published = decision.with_publication(1, "DOM 1", date(2025, 4, 1))
        same = published.with_ementa(published.ementa_title, published.ementa_body)
        assert same.status is DecisionStatus.PUBLISHED

    def test_revert_restores_last_published_ementa(
        self, decision: DecisionDocument
    ) -> None:
        edited = (
            decision.with_publication(1, "DOM 1", date(2025, 4, 1))
            .with_publication(2, "DOM 2", date(2025, 5, 1))
            .with_ementa("Novo título", "Novo corpo")
        )
        reverted = edited.reverted_to_last_publication()
        assert reverted.status is DecisionStatus.REPUBLISHED
        assert reverted.ementa_title == "ISS. Decadência."
        assert reverted.ementa_body == "Recurso improvido."

    def test_revert_requires_publications(self, decision: DecisionDocument) -> None:
        with pytest.raises(DecisionNotPendingError):
            decision.reverted_to_last_publication()

    def test_revert_requires_pending(self, decision: DecisionDocument) -> None:
        published = decision.with_publication(1, "DOM 1", date(2025, 4, 1))
        with pytest.raises(DecisionNotPendingError):
            published.reverted_to_last_publication()

    def test_blank_ementa_is_rejected(self, decision: DecisionDocument) -> None:
        with pytest.raises(ValueError, match="ementa_title"):
            decision.with_ementa("  ", "corpo")
