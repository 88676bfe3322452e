"""
Settlement orchestrator

Read-time composition of the lifecycle, payment and payout domains. Owns no
state: everything is derived from the services, the rate table and the
ledger on each request.
"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Collaborator, Service
from ..collaborators.repository import CollaboratorRepository
from ..enums import PaymentStage, ServiceStatus, TransactionStatus, TransactionType
from ..errors import ActionBlockedError
from ..lifecycle.repository import ServiceRepository
from ..lifecycle.state_machine import (
    HIDDEN_FROM_PAYMENTS,
    coerce_payment_status,
    coerce_status,
)
from ..payments import tracker
from ..payments.schemas import StageView
from ..payouts.calculator import compute_service_payout, normalize_level, parse_duration_hours
from ..payouts.repository import SettingsRepository
from ..transactions.repository import TransactionRepository

logger = logging.getLogger(__name__)


def build_stage_view(service: Service, stage: PaymentStage) -> StageView:
    amount = tracker.stage_amount(service, stage)
    return StageView(
        stage=stage,
        amount=amount,
        amount_display=tracker.format_amount(amount),
        state=tracker.stage_state(service, stage),
        action=tracker.resolve_payment_action(service, stage),
    )


class SettlementService:
    """Composes payment actions for clients and payouts for collaborators"""

    def __init__(self, db: Session):
        self.db = db
        self.services = ServiceRepository()
        self.collaborators = CollaboratorRepository()
        self.settings = SettingsRepository()
        self.transactions = TransactionRepository()

    def _rate_table(self) -> dict:
        return self.settings.read_collaborator_settings(self.db)["payouts"]

    def _get_collaborator(self, collaborator_id: str) -> Collaborator:
        collaborator = self.collaborators.get_collaborator_by_id(self.db, collaborator_id)
        if not collaborator:
            raise HTTPException(status_code=404, detail="Collaborator not found")
        return collaborator

    # ------------------------------------------------------------------
    # Client view
    # ------------------------------------------------------------------

    def client_payment_overview(self, client_id: str) -> list[dict]:
        """Signal and final stage actions for every payable service of a client"""
        services = self.services.read_services(
            self.db, client_id=client_id, exclude_statuses=HIDDEN_FROM_PAYMENTS
        )

        overview = []
        for service in services:
            price = service.price or 0
            overview.append(
                {
                    "service_id": service.id,
                    "type": service.type,
                    "date": service.date,
                    "address": service.address,
                    "status": coerce_status(service.status),
                    "payment_status": coerce_payment_status(service.payment_status),
                    "price": price,
                    "price_display": tracker.format_amount(price),
                    "signal": build_stage_view(service, PaymentStage.SIGNAL),
                    "final": build_stage_view(service, PaymentStage.FINAL),
                }
            )
        return overview

    # ------------------------------------------------------------------
    # Collaborator view
    # ------------------------------------------------------------------

    def compute_payout(self, collaborator: Collaborator, service: Service) -> float:
        """computePayout(collaborator, service) against the current rate table"""
        return compute_service_payout(collaborator, service, self._rate_table())

    def payout_for_service(self, collaborator_id: str, service_id: str) -> dict:
        """Payout owed for one of the collaborator's completed services"""
        collaborator = self._get_collaborator(collaborator_id)
        service = self.services.get_service_by_id(self.db, service_id)
        if not service or service.collaborator_id != collaborator.id:
            raise HTTPException(status_code=404, detail="Service not found")

        if coerce_status(service.status) != ServiceStatus.COMPLETED:
            raise ActionBlockedError("Payout is only owed for completed services")

        return self._payout_line(collaborator, service, self._rate_table())

    def collaborator_payout_history(self, collaborator_id: str) -> dict:
        """Payout lines for every completed service assigned to the collaborator, with totals"""
        collaborator = self._get_collaborator(collaborator_id)
        rate_table = self._rate_table()

        completed = self.services.read_services(
            self.db, collaborator_id=collaborator.id, statuses=[ServiceStatus.COMPLETED]
        )
        lines = [self._payout_line(collaborator, service, rate_table) for service in completed]

        total_paid = sum(line["amount"] for line in lines if line["status"] == TransactionStatus.PAID.value)
        total_value = sum(line["amount"] for line in lines)

        logger.debug(f"Collaborator {collaborator.id}: {len(lines)} completed services, {total_value:.2f}")

        return {
            "collaborator_id": collaborator.id,
            "level": normalize_level(collaborator.level),
            "lines": lines,
            "total_services": len(lines),
            "total_hours": sum(line["hours"] for line in lines),
            "total_value": total_value,
            "total_paid": total_paid,
            "total_pending": total_value - total_paid,
        }

    def _payout_line(self, collaborator: Collaborator, service: Service, rate_table: dict) -> dict:
        """One row of the payout history; a booked ledger entry wins over a recomputation"""
        booked = self.transactions.find_for_service(self.db, service.id, TransactionType.EXPENSE.value)
        if booked:
            amount = booked[0].amount
            status = booked[0].status
        else:
            amount = compute_service_payout(collaborator, service, rate_table)
            status = TransactionStatus.PENDING.value

        return {
            "service_id": service.id,
            "date": service.date,
            "client_name": service.client_name,
            "type": service.type,
            "hours": parse_duration_hours(service.duration),
            "amount": amount,
            "status": status,
        }
