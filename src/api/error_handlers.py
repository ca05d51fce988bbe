"""RFC 7807 error responses for the adjudication API.

Every AdjudicationError is translated into a problem document:

    {
        "type": "urn:adjudication:duplicate-vote",
        "title": "Duplicate Vote",
        "status": 409,
        "detail": "<the error message>",
        "instance": "<request url>"
    }

Status mapping:
- NotFoundError -> 404
- state and lock conflicts -> 409
- every other AdjudicationError (correctable input) -> 400

Usage:
    from src.api.error_handlers import register_error_handlers

    register_error_handlers(app)
"""

from __future__ import annotations

import re

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.domain.errors import (
    AttemptAlreadyConfirmedError,
    AttemptExpiredError,
    AuthorityConflictError,
    CaseNotInAgendaError,
    CaseNotJudgedError,
    CaseUnavailableForAgendaError,
    DecisionAlreadyExistsError,
    DecisionNotPendingError,
    DistributedMemberAbsentError,
    DistributionLockedError,
    DuplicateNotificationItemError,
    DuplicateVoteError,
    InvalidStateTransitionError,
    NoVotesRecordedError,
    NotFoundError,
    NotificationItemLockedError,
    NotificationListFinalizedError,
    NotificationListNotEmptyError,
    SequenceConflictError,
    SessionClosedError,
    SessionNotConcludableError,
    VoteNotResolvedError,
)
from src.domain.exceptions import AdjudicationError

logger = structlog.get_logger()

PROBLEM_TYPE_PREFIX = "urn:adjudication:"
PROBLEM_CONTENT_TYPE = "application/problem+json"

_CONFLICT_ERRORS: tuple[type[AdjudicationError], ...] = (
    AttemptAlreadyConfirmedError,
    AttemptExpiredError,
    AuthorityConflictError,
    CaseNotInAgendaError,
    CaseNotJudgedError,
    CaseUnavailableForAgendaError,
    DecisionAlreadyExistsError,
    DecisionNotPendingError,
    DistributedMemberAbsentError,
    DistributionLockedError,
    DuplicateNotificationItemError,
    DuplicateVoteError,
    InvalidStateTransitionError,
    NoVotesRecordedError,
    NotificationItemLockedError,
    NotificationListFinalizedError,
    NotificationListNotEmptyError,
    SequenceConflictError,
    SessionClosedError,
    SessionNotConcludableError,
    VoteNotResolvedError,
)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def status_for(exc: AdjudicationError) -> int:
    """HTTP status code for a domain error."""
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, _CONFLICT_ERRORS):
        return 409
    return 400


def _problem_words(exc: Exception) -> list[str]:
    name = type(exc).__name__
    if name.endswith("Error") and name != "Error":
        name = name[: -len("Error")]
    return _CAMEL_BOUNDARY.split(name)


def problem_detail(
    exc: Exception, status: int, request: Request
) -> dict[str, object]:
    """Build the RFC 7807 body for an error."""
    words = _problem_words(exc)
    return {
        "type": PROBLEM_TYPE_PREFIX + "-".join(w.lower() for w in words),
        "title": " ".join(words),
        "status": status,
        "detail": str(exc),
        "instance": str(request.url),
    }


async def adjudication_error_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Translate an AdjudicationError into a problem response."""
    assert isinstance(exc, AdjudicationError)
    status = status_for(exc)
    logger.info(
        "request_rejected",
        error_type=type(exc).__name__,
        status_code=status,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status,
        content=problem_detail(exc, status, request),
        media_type=PROBLEM_CONTENT_TYPE,
    )


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Translate a domain-level ValueError into a 400 problem response."""
    logger.info(
        "request_rejected",
        error_type=type(exc).__name__,
        status_code=400,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=400,
        content={
            "type": PROBLEM_TYPE_PREFIX + "invalid-request",
            "title": "Invalid Request",
            "status": 400,
            "detail": str(exc),
            "instance": str(request.url),
        },
        media_type=PROBLEM_CONTENT_TYPE,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the problem-document handlers on an application."""
    app.add_exception_handler(AdjudicationError, adjudication_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
