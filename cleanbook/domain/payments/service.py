"""Payment service - Proof submission and payment confirmation workflows"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import Actor
from ...models import Service
from ...services.notification_service import notify_payment_reviewer
from ..enums import ActorRole, PaymentStage
from ..errors import SettlementError
from ..lifecycle.repository import ServiceRepository
from ..lifecycle.state_machine import coerce_payment_status
from ..transactions.service import LedgerService
from . import tracker

logger = logging.getLogger(__name__)


class PaymentService:
    """Service layer for the two-stage payment flow"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()
        self.ledger = LedgerService(db)

    def get_service(self, service_id: str, actor: Actor) -> Service:
        """Get a service the actor may pay for (clients only see their own)"""
        service = self.repo.get_service_by_id(self.db, service_id)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        if actor.role == ActorRole.CLIENT and service.client_id != actor.id:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    def get_payment_action(self, service_id: str, stage: PaymentStage, actor: Actor) -> dict:
        """What paying `stage` of a service should do right now"""
        service = self.get_service(service_id, actor)
        action = tracker.resolve_payment_action(service, stage)
        amount = tracker.stage_amount(service, stage)
        return {
            "service_id": service.id,
            "amount": amount,
            "amount_display": tracker.format_amount(amount),
            "state": tracker.stage_state(service, stage),
            "action": action,
        }

    async def submit_proof(
        self, service_id: str, stage: PaymentStage, attachment: str, actor: Actor
    ) -> dict:
        """Record a client proof of payment; payment_status stays unchanged until confirmed"""
        service = self.get_service(service_id, actor)

        try:
            fields = tracker.submit_proof(service, stage, attachment)
        except SettlementError as e:
            logger.warning(f"⚠️ Proof rejected for service {service_id} ({stage.value}): {e.code}")
            raise e.to_http() from e

        service = self.repo.update_service_status(self.db, service, service.status, **fields)
        logger.info(f"✅ {stage.value} proof recorded for service {service.id}, pending validation")

        # Best effort: the submission stands even if the reviewer is not reached
        notification = await notify_payment_reviewer(
            service, stage.value, tracker.stage_amount(service, stage)
        )

        return {
            "service_id": service.id,
            "stage": stage,
            "payment_status": coerce_payment_status(service.payment_status),
            "state": tracker.stage_state(service, stage),
            "submitted_at": fields.get(f"proof_{stage.value.lower()}_submitted_at"),
            "notification_sent": notification["email_sent"],
            "message": "Proof submitted successfully! An administrator will validate the payment.",
        }

    def confirm_payment(self, service_id: str, stage: PaymentStage, actor: Actor) -> dict:
        """Administrative validation of a stage payment"""
        service = self.get_service(service_id, actor)

        try:
            fields = tracker.confirm_payment(service, stage)
        except SettlementError as e:
            logger.warning(f"⚠️ Confirmation rejected for service {service_id} ({stage.value}): {e.code}")
            raise e.to_http() from e

        if fields:
            service = self.repo.update_service_status(self.db, service, service.status, **fields)
            logger.info(f"✅ Service {service.id} payment advanced to {service.payment_status}")
            self.ledger.record_stage_income(service, stage)

        return {
            "service_id": service.id,
            "stage": stage,
            "payment_status": coerce_payment_status(service.payment_status),
            "changed": bool(fields),
        }
