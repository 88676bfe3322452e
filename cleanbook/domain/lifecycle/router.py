"""Lifecycle router - FastAPI endpoints for service status changes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Actor, require_role
from ...database import get_db
from ..enums import ActorRole
from .schemas import ServiceResponse, StatusUpdateRequest
from .service import LifecycleService
from .state_machine import coerce_payment_status, coerce_status, get_next_required_action

router = APIRouter(prefix="/services", tags=["Services"])


def get_lifecycle_service(db: Session = Depends(get_db)) -> LifecycleService:
    """Dependency injection for LifecycleService"""
    return LifecycleService(db)


def _to_response(service, payout_booked: bool = False) -> ServiceResponse:
    return ServiceResponse(
        id=service.id,
        client_id=service.client_id,
        collaborator_id=service.collaborator_id,
        type=service.type,
        date=service.date,
        address=service.address,
        duration=service.duration,
        status=coerce_status(service.status),
        payment_status=coerce_payment_status(service.payment_status),
        price=service.price,
        next_action=get_next_required_action(service),
        payout_booked=payout_booked,
    )


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: str,
    actor: Actor = Depends(require_role(ActorRole.COLLABORATOR, ActorRole.ADMIN)),
    service: LifecycleService = Depends(get_lifecycle_service),
):
    """Get a service with its next required action"""
    return _to_response(service.get_service(service_id, actor))


@router.patch("/{service_id}/status", response_model=ServiceResponse)
async def update_service_status(
    service_id: str,
    data: StatusUpdateRequest,
    actor: Actor = Depends(require_role(ActorRole.COLLABORATOR, ActorRole.ADMIN)),
    service: LifecycleService = Depends(get_lifecycle_service),
):
    """Move a service through its lifecycle (start, complete, cancel, schedule)"""
    updated, payout = service.update_status(service_id, data, actor)
    return _to_response(updated, payout_booked=payout is not None)
