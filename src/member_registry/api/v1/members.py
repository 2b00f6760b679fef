"""
/members endpoints: list, lookup by id, register.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import Response

from member_registry.core.dependencies import get_member_repository, get_registration_service
from member_registry.repositories.member_repository import MemberRepository
from member_registry.schemas.member import MemberRead
from member_registry.services.registration_service import RegistrationService
from .response_mapper import to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/members", tags=["members"])


@router.get("", response_model=list[MemberRead])
async def list_members(repository: MemberRepository = Depends(get_member_repository)):
    return await repository.find_all_ordered_by_name()


# `:int` only matches [0-9]+, anything else falls through to a 404
@router.get("/{member_id:int}", response_model=MemberRead)
async def lookup_member(member_id: int, repository: MemberRepository = Depends(get_member_repository)):
    return await repository.get_by_id_or_raise(member_id)


@router.post("")
async def create_member(
    payload: Any = Body(None),
    service: RegistrationService = Depends(get_registration_service),
) -> Response:
    """
    Register a new member. A `null` or empty body reaches FieldValidator as None.

    Returns 200 with an empty body on success. Otherwise returns a map of
    fields to errors: 400 for structural violations and 409 for name/email
    already taken. Any other failure returns 400 `{"error": ...}`.
    """
    outcome = await service.register(payload)
    return to_response(outcome)
