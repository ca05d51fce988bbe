"""Unit tests for the adjudication HTTP API.

Requests go through the real application and routers over a seeded
in-memory container; domain errors must come back as RFC 7807 problem
documents.
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from src.api.error_handlers import PROBLEM_CONTENT_TYPE, status_for
from src.api.main import app
from src.bootstrap.adjudication import set_adjudication_container
from src.domain.errors import (
    DuplicateVoteError,
    IncompleteVoteRationaleError,
    NotFoundError,
)
from tests.helpers import Board


@pytest.fixture
def client(board: Board) -> TestClient:
    """Test client over the application, bound to the board's container."""
    set_adjudication_container(board.container)
    return TestClient(app)


def _schedule(client: TestClient, board: Board) -> dict:
    response = client.post(
        "/v1/sessions",
        json={
            "session_type": "ORDINARY",
            "session_date": "2025-03-12",
            "president_id": str(board.alice.id),
            "attending_member_ids": [str(m) for m in board.member_ids],
        },
    )
    assert response.status_code == 201
    return response.json()


def _distributed_case(client: TestClient, board: Board) -> dict:
    """Register a case and put it on a new session's agenda, distributed."""
    session = _schedule(client, board)
    case = client.post(
        "/v1/cases", json={"classification": "ISS", "year": 2025}
    ).json()
    response = client.post(
        f"/v1/sessions/{session['id']}/agenda",
        json={
            "case_id": case["id"],
            "rapporteur_id": str(board.alice.id),
            "reviewer_ids": [str(board.bob.id), str(board.carol.id)],
        },
    )
    assert response.status_code == 201
    return response.json()


def _merit_vote(board: Board, member_id) -> dict:
    return {
        "member_id": str(member_id),
        "knowledge_type": "KNOWLEDGE",
        "merit_template_id": str(board.merit.id),
    }


class TestHealth:
    """Tests for /v1/health."""

    def test_health_reports_version(
        self, client: TestClient, project_version: str
    ) -> None:
        response = client.get("/v1/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "version": project_version,
            "environment": "test",
        }

    def test_correlation_id_is_echoed(self, client: TestClient) -> None:
        """The middleware echoes X-Correlation-ID, generating one if absent."""
        echoed = client.get("/v1/health", headers={"X-Correlation-ID": "req-42"})
        generated = client.get("/v1/health")

        assert echoed.headers["X-Correlation-ID"] == "req-42"
        assert generated.headers["X-Correlation-ID"]


class TestCaseRoutes:
    """Tests for /v1/cases."""

    def test_register_and_get_case(self, client: TestClient) -> None:
        """POST /v1/cases returns the yearly number as text."""
        response = client.post(
            "/v1/cases", json={"classification": " ISS ", "year": 2025}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["number"] == "0001/2025"
        assert body["classification"] == "ISS"
        assert body["status"] == "AWAITING_JUDGMENT"
        assert client.get(f"/v1/cases/{body['id']}").json()["id"] == body["id"]

    def test_find_by_number(self, client: TestClient) -> None:
        client.post("/v1/cases", json={"classification": "ISS", "year": 2025})

        response = client.get("/v1/cases/by-number", params={"number": "0001/2025"})

        assert response.status_code == 200
        assert response.json()["number"] == "0001/2025"

    def test_unknown_case_is_problem_404(self, client: TestClient) -> None:
        """An unknown case id returns a 404 problem document."""
        response = client.get(f"/v1/cases/{uuid4()}")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith(PROBLEM_CONTENT_TYPE)
        body = response.json()
        assert body["type"] == "urn:adjudication:not-found"
        assert body["status"] == 404

    def test_blank_classification_is_rejected(self, client: TestClient) -> None:
        response = client.post("/v1/cases", json={"classification": "   "})

        assert response.status_code == 422


class TestJudgmentFlow:
    """Tests for agenda, votes and judgment over HTTP."""

    def test_vote_and_confirm_judgment(self, client: TestClient, board: Board) -> None:
        """Three matching votes resolve and confirm into a judged case."""
        entry = _distributed_case(client, board)
        for member_id in board.member_ids:
            response = client.post(
                f"/v1/session-cases/{entry['id']}/votes",
                json=_merit_vote(board, member_id),
            )
            assert response.status_code == 201

        resolution = client.get(f"/v1/session-cases/{entry['id']}/resolution").json()
        judged = client.post(f"/v1/session-cases/{entry['id']}/judgment", json={})

        assert resolution["is_resolved"] is True
        assert resolution["votes_received"] == 3
        assert judged.status_code == 200
        assert judged.json()["status"] == "JUDGED"
        assert judged.json()["result_text"] == "Negar provimento ao recurso."
        case = client.get(f"/v1/cases/{entry['case_id']}").json()
        assert case["status"] == "JUDGED"

    def test_vote_reports_role(self, client: TestClient, board: Board) -> None:
        entry = _distributed_case(client, board)

        response = client.post(
            f"/v1/session-cases/{entry['id']}/votes",
            json=_merit_vote(board, board.alice.id),
        )

        assert response.json()["role"] == "RAPPORTEUR"
        assert response.json()["vote_text"] == "Negar provimento ao recurso."

    def test_duplicate_vote_is_problem_409(self, client: TestClient, board: Board) -> None:
        """A second vote by the same member returns 409 duplicate-vote."""
        entry = _distributed_case(client, board)
        url = f"/v1/session-cases/{entry['id']}/votes"
        client.post(url, json=_merit_vote(board, board.bob.id))

        response = client.post(url, json=_merit_vote(board, board.bob.id))

        assert response.status_code == 409
        body = response.json()
        assert body["type"] == "urn:adjudication:duplicate-vote"
        assert body["title"] == "Duplicate Vote"
        assert body["instance"].endswith(url)

    def test_incomplete_rationale_is_problem_400(
        self, client: TestClient, board: Board
    ) -> None:
        entry = _distributed_case(client, board)

        response = client.post(
            f"/v1/session-cases/{entry['id']}/votes",
            json={"member_id": str(board.bob.id), "knowledge_type": "KNOWLEDGE"},
        )

        assert response.status_code == 400
        assert response.json()["type"] == "urn:adjudication:incomplete-vote-rationale"

    def test_confirm_without_quorum_is_problem_409(
        self, client: TestClient, board: Board
    ) -> None:
        entry = _distributed_case(client, board)
        client.post(
            f"/v1/session-cases/{entry['id']}/votes",
            json=_merit_vote(board, board.alice.id),
        )

        response = client.post(f"/v1/session-cases/{entry['id']}/judgment", json={})

        assert response.status_code == 409
        assert response.json()["type"] == "urn:adjudication:vote-not-resolved"

    def test_empty_vote_edit_is_invalid_request(self, client: TestClient) -> None:
        """A domain ValueError becomes a 400 invalid-request problem."""
        response = client.patch(f"/v1/votes/{uuid4()}", json={})

        assert response.status_code == 400
        assert response.json()["type"] == "urn:adjudication:invalid-request"

    def test_dropping_distributed_member_is_problem_409(
        self, client: TestClient, board: Board
    ) -> None:
        entry = _distributed_case(client, board)

        response = client.put(
            f"/v1/sessions/{entry['session_id']}/attendance",
            json={"member_ids": [str(board.alice.id), str(board.bob.id)]},
        )

        assert response.status_code == 409
        assert response.json()["type"] == "urn:adjudication:distributed-member-absent"

    def test_remove_from_agenda(self, client: TestClient, board: Board) -> None:
        entry = _distributed_case(client, board)

        response = client.delete(f"/v1/session-cases/{entry['id']}")

        assert response.status_code == 204
        case = client.get(f"/v1/cases/{entry['case_id']}").json()
        assert case["status"] == "AWAITING_JUDGMENT"


class TestStatusMapping:
    """Tests for status_for()."""

    def test_status_for_error_families(self) -> None:
        """Not-found is 404, conflicts 409, correctable input 400."""
        assert status_for(NotFoundError("Case", uuid4())) == 404
        assert status_for(DuplicateVoteError(uuid4(), uuid4())) == 409
        assert status_for(IncompleteVoteRationaleError("merit missing")) == 400
