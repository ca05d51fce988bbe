"""Reference data API routes: members, case authorities and vote templates.

These feed the directories the adjudication services read. In a full
deployment they are owned by other systems; here they are kept in the
container's in-memory directories.
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from uuid6 import uuid7

from src.api.dependencies.adjudication import get_container
from src.api.models.registry import (
    AuthorityRequest,
    AuthorityResponse,
    MemberRequest,
    MemberResponse,
    TemplateRequest,
    TemplateResponse,
)
from src.bootstrap.adjudication import AdjudicationContainer
from src.domain.models.member import CaseAuthority, Member
from src.domain.models.vote import VoteTemplate

router = APIRouter(prefix="/v1", tags=["registry"])


def _member_response(member: Member) -> MemberResponse:
    return MemberResponse(
        id=member.id,
        name=member.name,
        active=member.active,
        registered_authority_id=member.registered_authority_id,
    )


def _authority_response(authority: CaseAuthority) -> AuthorityResponse:
    return AuthorityResponse(
        registered_id=authority.registered_id,
        name=authority.name,
        authority_type=authority.authority_type,
        active=authority.active,
    )


def _template_response(template: VoteTemplate) -> TemplateResponse:
    return TemplateResponse(
        id=template.id,
        kind=template.kind.value,
        identifier=template.identifier,
        accept_text=template.accept_text,
        reject_text=template.reject_text,
        text=template.text,
    )


@router.post("/members", response_model=MemberResponse, status_code=201)
async def add_member(
    request_data: MemberRequest,
    container: AdjudicationContainer = Depends(get_container),
) -> MemberResponse:
    """Register a board member."""
    member = container.members.add(
        Member(
            id=uuid7(),
            name=request_data.name,
            active=request_data.active,
            registered_authority_id=request_data.registered_authority_id,
        )
    )
    return _member_response(member)


@router.get("/members", response_model=list[MemberResponse])
async def list_members(
    container: AdjudicationContainer = Depends(get_container),
) -> list[MemberResponse]:
    """List board members."""
    return [_member_response(m) for m in container.members.list_members()]


@router.post(
    "/cases/{case_id}/authorities",
    response_model=AuthorityResponse,
    status_code=201,
)
async def register_authority(
    case_id: UUID,
    request_data: AuthorityRequest,
    container: AdjudicationContainer = Depends(get_container),
) -> AuthorityResponse:
    """Register an authority involved in a case.

    Raises:
        HTTPException 404: Unknown case.
    """
    await container.case_registry.get_case(case_id)
    authority = container.authorities.register(
        case_id,
        CaseAuthority(
            registered_id=request_data.registered_id,
            name=request_data.name,
            authority_type=request_data.authority_type,
            active=request_data.active,
        ),
    )
    return _authority_response(authority)


@router.get("/cases/{case_id}/authorities", response_model=list[AuthorityResponse])
async def list_authorities(
    case_id: UUID,
    container: AdjudicationContainer = Depends(get_container),
) -> list[AuthorityResponse]:
    """List the authorities involved in a case."""
    await container.case_registry.get_case(case_id)
    authorities = await container.authorities.authorities_for_case(case_id)
    return [_authority_response(a) for a in authorities]


@router.post("/vote-templates", response_model=TemplateResponse, status_code=201)
async def add_template(
    request_data: TemplateRequest,
    container: AdjudicationContainer = Depends(get_container),
) -> TemplateResponse:
    """Register a vote template."""
    template = container.templates.add(
        VoteTemplate(
            id=uuid7(),
            kind=request_data.kind,
            identifier=request_data.identifier,
            accept_text=request_data.accept_text,
            reject_text=request_data.reject_text,
            text=request_data.text,
        )
    )
    return _template_response(template)


@router.get("/vote-templates", response_model=list[TemplateResponse])
async def list_templates(
    container: AdjudicationContainer = Depends(get_container),
) -> list[TemplateResponse]:
    """List vote templates."""
    return [_template_response(t) for t in container.templates.list_templates()]
