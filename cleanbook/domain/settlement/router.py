"""Settlement router - Client payment overview and collaborator payout views"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Actor, require_role
from ...database import get_db
from ..enums import ActorRole
from .schemas import ClientServicePayments, PayoutHistory, PayoutLine
from .service import SettlementService

router = APIRouter(prefix="/settlement", tags=["Settlement"])


def get_settlement_service(db: Session = Depends(get_db)) -> SettlementService:
    """Dependency injection for SettlementService"""
    return SettlementService(db)


@router.get("/client", response_model=list[ClientServicePayments])
async def get_client_payments(
    actor: Actor = Depends(require_role(ActorRole.CLIENT)),
    service: SettlementService = Depends(get_settlement_service),
):
    """Every payable service of the client with its signal and final stage actions"""
    return service.client_payment_overview(actor.id)


@router.get("/payouts", response_model=PayoutHistory)
async def get_payout_history(
    actor: Actor = Depends(require_role(ActorRole.COLLABORATOR)),
    service: SettlementService = Depends(get_settlement_service),
):
    """Completed services and what the collaborator is owed for each"""
    return service.collaborator_payout_history(actor.id)


@router.get("/payouts/{service_id}", response_model=PayoutLine)
async def get_service_payout(
    service_id: str,
    actor: Actor = Depends(require_role(ActorRole.COLLABORATOR)),
    service: SettlementService = Depends(get_settlement_service),
):
    return service.payout_for_service(actor.id, service_id)
