"""Decision (acórdão) API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from src.api.dependencies.adjudication import get_decision_emitter_service
from src.api.models.decision import (
    AttachFileRequest,
    DecisionListResponse,
    DecisionResponse,
    EmitDecisionRequest,
    PublicationResponse,
    PublishBatchRequest,
    PublishDecisionRequest,
    UpdateEmentaRequest,
)
from src.application.services.decision_emitter_service import DecisionEmitterService
from src.domain.models.decision import DecisionDocument, DecisionStatus

router = APIRouter(prefix="/v1/decisions", tags=["decisions"])


def _decision_response(decision: DecisionDocument) -> DecisionResponse:
    return DecisionResponse(
        id=decision.id,
        case_id=decision.case_id,
        number=str(decision.number),
        ementa_title=decision.ementa_title,
        ementa_body=decision.ementa_body,
        vote_file=decision.vote_file,
        decision_file=decision.decision_file,
        status=decision.status.value,
        publications=[
            PublicationResponse(
                publication_order=p.publication_order,
                publication_number=p.publication_number,
                publication_date=p.publication_date,
                ementa_title_snapshot=p.ementa_title_snapshot,
                ementa_body_snapshot=p.ementa_body_snapshot,
                republish_reason=p.republish_reason,
                created_at=p.created_at,
            )
            for p in decision.publications
        ],
        created_at=decision.created_at,
        updated_at=decision.updated_at,
    )


@router.post("", response_model=DecisionResponse, status_code=201, summary="Emit a decision")
async def emit_decision(
    request_data: EmitDecisionRequest,
    service: DecisionEmitterService = Depends(get_decision_emitter_service),
) -> DecisionResponse:
    """Emit the decision of a judged case with the next yearly number.

    Raises:
        HTTPException 409: Case not judged or decision already emitted.
    """
    decision = await service.emit_decision(
        request_data.case_id,
        request_data.ementa_title,
        request_data.ementa_body,
        vote_file=request_data.vote_file,
    )
    return _decision_response(decision)


@router.get("", response_model=DecisionListResponse, summary="List decisions")
async def list_decisions(
    status: DecisionStatus | None = Query(default=None),
    service: DecisionEmitterService = Depends(get_decision_emitter_service),
) -> DecisionListResponse:
    """List decisions ordered by number."""
    decisions = await service.list_decisions(status)
    return DecisionListResponse(
        decisions=[_decision_response(d) for d in decisions], total=len(decisions)
    )


@router.post(
    "/publications/batch",
    response_model=DecisionListResponse,
    summary="Publish pending decisions together",
)
async def publish_batch(
    request_data: PublishBatchRequest,
    service: DecisionEmitterService = Depends(get_decision_emitter_service),
) -> DecisionListResponse:
    """Publish several pending decisions in the same gazette edition."""
    published = await service.publish_batch(
        request_data.decision_ids,
        request_data.publication_number,
        request_data.publication_date,
    )
    return DecisionListResponse(
        decisions=[_decision_response(d) for d in published], total=len(published)
    )


@router.get("/{decision_id}", response_model=DecisionResponse, summary="Get a decision")
async def get_decision(
    decision_id: UUID,
    service: DecisionEmitterService = Depends(get_decision_emitter_service),
) -> DecisionResponse:
    """Get a decision with its publication history."""
    return _decision_response(await service.get_decision(decision_id))


@router.put(
    "/{decision_id}/ementa",
    response_model=DecisionResponse,
    summary="Edit the ementa",
)
async def update_ementa(
    decision_id: UUID,
    request_data: UpdateEmentaRequest,
    service: DecisionEmitterService = Depends(get_decision_emitter_service),
) -> DecisionResponse:
    """Edit the ementa; a changed published decision returns to pending."""
    decision = await service.update_ementa(
        decision_id, request_data.ementa_title, request_data.ementa_body
    )
    return _decision_response(decision)


@router.post(
    "/{decision_id}/publications",
    response_model=DecisionResponse,
    status_code=201,
    summary="Publish a decision",
)
async def publish_decision(
    decision_id: UUID,
    request_data: PublishDecisionRequest,
    service: DecisionEmitterService = Depends(get_decision_emitter_service),
) -> DecisionResponse:
    """Append a gazette publication (order = previous max + 1)."""
    decision = await service.publish(
        decision_id,
        request_data.publication_number,
        request_data.publication_date,
        republish_reason=request_data.republish_reason,
    )
    return _decision_response(decision)


@router.post(
    "/{decision_id}/revert",
    response_model=DecisionResponse,
    summary="Revert to last publication",
)
async def revert_to_last_publication(
    decision_id: UUID,
    service: DecisionEmitterService = Depends(get_decision_emitter_service),
) -> DecisionResponse:
    """Restore the ementa and status of the last publication."""
    return _decision_response(await service.revert_to_last_publication(decision_id))


@router.put(
    "/{decision_id}/decision-file",
    response_model=DecisionResponse,
    summary="Attach decision document",
)
async def attach_decision_file(
    decision_id: UUID,
    request_data: AttachFileRequest,
    service: DecisionEmitterService = Depends(get_decision_emitter_service),
) -> DecisionResponse:
    """Attach the opaque storage handle of the decision document."""
    decision = await service.attach_decision_file(decision_id, request_data.handle)
    return _decision_response(decision)


@router.delete(
    "/{decision_id}",
    status_code=204,
    response_class=Response,
    summary="Delete a pending decision",
)
async def delete_decision(
    decision_id: UUID,
    service: DecisionEmitterService = Depends(get_decision_emitter_service),
) -> Response:
    """Delete a pending, never published decision. Its number is not reused."""
    await service.delete_decision(decision_id)
    return Response(status_code=204)
