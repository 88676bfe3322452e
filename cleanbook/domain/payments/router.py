"""Payment router - FastAPI endpoints for the client payment flow"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Actor, require_role
from ...database import get_db
from ..enums import ActorRole, PaymentStage
from .schemas import (
    PaymentConfirmationResponse,
    ProofSubmissionRequest,
    ProofSubmissionResponse,
    StageView,
)
from .service import PaymentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["Payments"])


def get_payment_service(db: Session = Depends(get_db)) -> PaymentService:
    """Dependency injection for PaymentService"""
    return PaymentService(db)


@router.get("/services/{service_id}/{stage}/action", response_model=StageView)
async def get_payment_action(
    service_id: str,
    stage: PaymentStage,
    actor: Actor = Depends(require_role(ActorRole.CLIENT, ActorRole.ADMIN)),
    service: PaymentService = Depends(get_payment_service),
):
    """Resolve what paying a stage should do: redirect, collect proof, or blocked"""
    result = service.get_payment_action(service_id, stage, actor)
    return StageView(
        stage=stage,
        amount=result["amount"],
        amount_display=result["amount_display"],
        state=result["state"],
        action=result["action"],
    )


@router.post("/services/{service_id}/{stage}/proof", response_model=ProofSubmissionResponse)
async def submit_proof(
    service_id: str,
    stage: PaymentStage,
    data: ProofSubmissionRequest,
    actor: Actor = Depends(require_role(ActorRole.CLIENT)),
    service: PaymentService = Depends(get_payment_service),
):
    """Attach a proof of payment to a stage (pending admin validation)"""
    return await service.submit_proof(service_id, stage, data.attachment, actor)


@router.post("/services/{service_id}/{stage}/confirm", response_model=PaymentConfirmationResponse)
async def confirm_payment(
    service_id: str,
    stage: PaymentStage,
    actor: Actor = Depends(require_role(ActorRole.ADMIN)),
    service: PaymentService = Depends(get_payment_service),
):
    """Validate a submitted proof and advance the payment status"""
    return service.confirm_payment(service_id, stage, actor)
