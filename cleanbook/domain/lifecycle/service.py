"""Lifecycle service - Status transitions and the work they newly permit"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import Actor
from ...models import Service, Transaction
from ..collaborators.repository import CollaboratorRepository
from ..enums import ActorRole, ServiceStatus, TransactionType
from ..errors import ActionBlockedError, SettlementError
from ..payouts.calculator import compute_service_payout
from ..payouts.repository import SettingsRepository
from ..transactions.repository import TransactionRepository
from ..transactions.service import LedgerService
from . import state_machine
from .repository import ServiceRepository
from .schemas import StatusUpdateRequest

logger = logging.getLogger(__name__)

# Statuses a collaborator may report for their own services
COLLABORATOR_TRIGGERS = {ServiceStatus.IN_PROGRESS, ServiceStatus.COMPLETED}


class LifecycleService:
    """Service layer for the service lifecycle"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()
        self.collaborators = CollaboratorRepository()
        self.settings = SettingsRepository()
        self.ledger = LedgerService(db)

    def get_service(self, service_id: str, actor: Actor) -> Service:
        service = self.repo.get_service_by_id(self.db, service_id)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        if actor.role == ActorRole.COLLABORATOR and service.collaborator_id != actor.id:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    def update_status(
        self, service_id: str, data: StatusUpdateRequest, actor: Actor
    ) -> tuple[Service, Optional[Transaction]]:
        """
        Move a service to a new status.

        Reaching COMPLETED for the first time books the collaborator payout.
        """
        service = self.get_service(service_id, actor)

        if actor.role == ActorRole.COLLABORATOR and data.status not in COLLABORATOR_TRIGGERS:
            raise HTTPException(status_code=403, detail="Collaborators can only start or complete services")

        if (
            data.status == ServiceStatus.CANCELED
            and state_machine.coerce_status(service.status) == ServiceStatus.COMPLETED
            and self._has_ledger_entries(service)
        ):
            logger.warning(f"⚠️ Service {service_id} has booked transactions, cancellation refused")
            raise ActionBlockedError(
                "Completed service has booked transactions; remove them before canceling"
            ).to_http()

        try:
            previous = state_machine.transition(service, data.status)
        except SettlementError as e:
            logger.warning(f"⚠️ Transition rejected for service {service_id}: {e}")
            self.db.rollback()
            raise e.to_http() from e

        fields = {}
        if data.collaborator_id and actor.role == ActorRole.ADMIN:
            collaborator = self.collaborators.get_collaborator_by_id(self.db, data.collaborator_id)
            if not collaborator:
                self.db.rollback()
                raise HTTPException(status_code=404, detail="Collaborator not found")
            fields["collaborator_id"] = collaborator.id
            fields["collaborator_name"] = collaborator.name
        if data.duration:
            fields["duration"] = data.duration

        service = self.repo.update_service_status(self.db, service, service.status, **fields)

        payout = None
        if previous is not None and data.status == ServiceStatus.COMPLETED:
            payout = self._book_payout(service)

        return service, payout

    def _book_payout(self, service: Service) -> Optional[Transaction]:
        """Record what the assigned collaborator is owed for a completed service"""
        if not service.collaborator_id:
            logger.warning(f"⚠️ Service {service.id} completed without a collaborator, no payout")
            return None

        collaborator = self.collaborators.get_collaborator_by_id(self.db, service.collaborator_id)
        if not collaborator:
            logger.warning(f"⚠️ Collaborator {service.collaborator_id} not found, no payout")
            return None

        rate_table = self.settings.read_collaborator_settings(self.db)["payouts"]
        amount = compute_service_payout(collaborator, service, rate_table)
        return self.ledger.record_payout(service, collaborator, amount)

    def _has_ledger_entries(self, service: Service) -> bool:
        """Income or payout already booked against the service"""
        return any(
            TransactionRepository.find_for_service(self.db, service.id, kind.value)
            for kind in TransactionType
        )
