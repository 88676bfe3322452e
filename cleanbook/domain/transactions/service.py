"""Ledger service - Income and payout bookkeeping triggered by settlement events"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Collaborator, Service, Transaction
from ..enums import PaymentStage, TransactionStatus, TransactionType
from ..payments.tracker import stage_amount
from .repository import TransactionRepository

logger = logging.getLogger(__name__)

INCOME_METHOD = "PIX/Link"
PAYOUT_METHOD = "Transferência"


class LedgerService:
    """Service layer for the financial ledger"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TransactionRepository()

    def record_stage_income(self, service: Service, stage: PaymentStage) -> Optional[Transaction]:
        """Book the confirmed half of a service price as paid income"""
        amount = stage_amount(service, stage)
        if amount <= 0:
            logger.debug(f"Service {service.id}: zero {stage.value} amount, no income booked")
            return None

        transaction = self.repo.create_transaction(
            self.db,
            type=TransactionType.INCOME.value,
            service_id=service.id,
            entity=service.client_name,
            service_type=service.type,
            amount=amount,
            status=TransactionStatus.PAID.value,
            method=INCOME_METHOD,
        )
        logger.info(f"✅ Income {transaction.id} booked: {amount:.2f} for service {service.id}")
        return transaction

    def record_payout(
        self, service: Service, collaborator: Collaborator, amount: float
    ) -> Transaction:
        """Book the payout owed to a collaborator for a completed service"""
        existing = self.repo.find_for_service(self.db, service.id, TransactionType.EXPENSE.value)
        if existing:
            logger.info(f"ℹ️ Payout for service {service.id} already booked ({existing[0].id})")
            return existing[0]

        transaction = self.repo.create_transaction(
            self.db,
            type=TransactionType.EXPENSE.value,
            service_id=service.id,
            entity=collaborator.name,
            service_type=f"Repasse: {service.type or 'Serviço'}",
            amount=amount,
            status=TransactionStatus.PENDING.value,
            method=PAYOUT_METHOD,
        )
        logger.info(f"💸 Payout {transaction.id} booked: {amount:.2f} to {collaborator.name}")
        return transaction

    def get_transactions(
        self, transaction_type: Optional[str] = None, search: Optional[str] = None
    ) -> list[Transaction]:
        return self.repo.get_transactions(self.db, transaction_type, search)

    def get_transaction(self, transaction_id: str) -> Transaction:
        transaction = self.repo.get_transaction_by_id(self.db, transaction_id)
        if not transaction:
            raise HTTPException(status_code=404, detail="Transaction not found")
        return transaction

    def mark_transaction_paid(self, transaction_id: str) -> Transaction:
        transaction = self.get_transaction(transaction_id)
        if transaction.status == TransactionStatus.PAID.value:
            return transaction
        logger.info(f"✅ Transaction {transaction.id} marked as paid ({transaction.amount:.2f})")
        return self.repo.update_status(self.db, transaction, TransactionStatus.PAID.value)

    def delete_transaction(self, transaction_id: str) -> dict:
        transaction = self.get_transaction(transaction_id)
        self.repo.delete_transaction(self.db, transaction)
        return {"message": "Transaction deleted"}

    def get_summary(self) -> dict:
        """Confirmed income, transferred payouts and payouts still owed"""
        total_income = self.repo.sum_amount(
            self.db, TransactionType.INCOME.value, TransactionStatus.PAID.value
        )
        total_expense = self.repo.sum_amount(
            self.db, TransactionType.EXPENSE.value, TransactionStatus.PAID.value
        )
        pending_payouts = self.repo.sum_amount(
            self.db, TransactionType.EXPENSE.value, TransactionStatus.PENDING.value
        )
        return {
            "total_income": total_income,
            "total_expense": total_expense,
            "pending_payouts": pending_payouts,
            "balance": total_income - total_expense,
        }
