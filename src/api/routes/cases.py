"""Case registry API routes.

Cases are registered with a yearly number and then move through their
status machine only by agenda placement and judgment results.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from src.api.dependencies.adjudication import get_case_registry_service
from src.api.models.case import CaseListResponse, CaseResponse, RegisterCaseRequest
from src.application.services.case_registry_service import CaseRegistryService
from src.domain.models.case import Case, CaseStatus

router = APIRouter(prefix="/v1/cases", tags=["cases"])


def case_response(case: Case) -> CaseResponse:
    """Render a case."""
    return CaseResponse(
        id=case.id,
        number=str(case.number),
        classification=case.classification,
        status=case.status.value,
        status_cause=case.status_cause,
        created_at=case.created_at,
        updated_at=case.updated_at,
    )


@router.post(
    "",
    response_model=CaseResponse,
    status_code=201,
    summary="Register a case",
)
async def register_case(
    request_data: RegisterCaseRequest,
    service: CaseRegistryService = Depends(get_case_registry_service),
) -> CaseResponse:
    """Register a case with the next yearly number.

    Raises:
        HTTPException 409: Numbering kept colliding.
    """
    case = await service.register_case(
        classification=request_data.classification,
        year=request_data.year,
    )
    return case_response(case)


@router.get("", response_model=CaseListResponse, summary="List cases")
async def list_cases(
    status: CaseStatus | None = Query(default=None),
    service: CaseRegistryService = Depends(get_case_registry_service),
) -> CaseListResponse:
    """List cases ordered by number, optionally filtered by status."""
    cases = await service.list_cases(status)
    return CaseListResponse(cases=[case_response(c) for c in cases], total=len(cases))


@router.get("/by-number", response_model=CaseResponse, summary="Find a case by number")
async def find_case_by_number(
    number: str = Query(..., description="Yearly number, e.g. 0001/2025"),
    service: CaseRegistryService = Depends(get_case_registry_service),
) -> CaseResponse:
    """Find a case by its yearly number.

    Raises:
        HTTPException 400: Malformed number.
        HTTPException 404: No case has that number.
    """
    return case_response(await service.find_by_number(number))


@router.get("/{case_id}", response_model=CaseResponse, summary="Get a case")
async def get_case(
    case_id: UUID,
    service: CaseRegistryService = Depends(get_case_registry_service),
) -> CaseResponse:
    """Get a case by ID.

    Raises:
        HTTPException 404: Unknown case.
    """
    return case_response(await service.get_case(case_id))
