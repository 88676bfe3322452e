"""Collaborator router - FastAPI endpoints for collaborator profile screens"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Actor, require_role
from ...database import get_db
from ..enums import ActorRole
from ..payouts.calculator import normalize_level
from .schemas import CollaboratorResponse, CollaboratorUpdate, PasswordChangeRequest
from .service import CollaboratorService

router = APIRouter(prefix="/collaborators", tags=["Collaborators"])


def get_collaborator_service(db: Session = Depends(get_db)) -> CollaboratorService:
    """Dependency injection for CollaboratorService"""
    return CollaboratorService(db)


def _to_response(collaborator) -> CollaboratorResponse:
    return CollaboratorResponse(
        id=collaborator.id,
        name=collaborator.name,
        email=collaborator.email,
        phone=collaborator.phone,
        photo=collaborator.photo,
        level=normalize_level(collaborator.level),
    )


@router.get("/me", response_model=CollaboratorResponse)
async def get_my_profile(
    actor: Actor = Depends(require_role(ActorRole.COLLABORATOR)),
    service: CollaboratorService = Depends(get_collaborator_service),
):
    """Get the current collaborator's profile"""
    return _to_response(service.get_collaborator(actor.id))


@router.patch("/me", response_model=CollaboratorResponse)
async def update_my_profile(
    data: CollaboratorUpdate,
    actor: Actor = Depends(require_role(ActorRole.COLLABORATOR)),
    service: CollaboratorService = Depends(get_collaborator_service),
):
    """Update the current collaborator's profile"""
    return _to_response(service.update_profile(actor.id, data))


@router.post("/me/password")
async def change_my_password(
    data: PasswordChangeRequest,
    actor: Actor = Depends(require_role(ActorRole.COLLABORATOR)),
    service: CollaboratorService = Depends(get_collaborator_service),
):
    """Change password after verifying the current one"""
    return service.change_password(actor.id, data)
