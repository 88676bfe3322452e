"""Client router - FastAPI endpoints for client profile screens"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Actor, require_role
from ...database import get_db
from ..enums import ActorRole
from .schemas import ClientResponse, ClientUpdate
from .service import ClientService

router = APIRouter(prefix="/clients", tags=["Clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


@router.get("/me", response_model=ClientResponse)
async def get_my_profile(
    actor: Actor = Depends(require_role(ActorRole.CLIENT)),
    service: ClientService = Depends(get_client_service),
):
    """Get the current client's profile"""
    return ClientResponse.model_validate(service.get_client(actor.id))


@router.patch("/me", response_model=ClientResponse)
async def update_my_profile(
    data: ClientUpdate,
    actor: Actor = Depends(require_role(ActorRole.CLIENT)),
    service: ClientService = Depends(get_client_service),
):
    """Update the current client's profile"""
    return ClientResponse.model_validate(service.update_client(actor.id, data))
