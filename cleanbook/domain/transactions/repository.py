"""Transaction repository - Database operations for the financial ledger"""

import uuid
from datetime import date
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Transaction


def generate_transaction_id() -> str:
    return f"trx_{uuid.uuid4().hex[:20]}"


class TransactionRepository:
    """Repository for ledger entries"""

    @staticmethod
    def create_transaction(db: Session, **transaction_data) -> Transaction:
        """Create a new ledger entry"""
        transaction_data.setdefault("id", generate_transaction_id())
        transaction_data.setdefault("date", date.today().isoformat())
        transaction = Transaction(**transaction_data)
        db.add(transaction)
        db.commit()
        db.refresh(transaction)
        return transaction

    @staticmethod
    def get_transaction_by_id(db: Session, transaction_id: str) -> Optional[Transaction]:
        return db.query(Transaction).filter(Transaction.id == transaction_id).first()

    @staticmethod
    def get_transactions(
        db: Session,
        transaction_type: Optional[str] = None,
        search: Optional[str] = None,
        entity: Optional[str] = None,
    ) -> list[Transaction]:
        """Search and filter ledger entries"""
        query = db.query(Transaction)

        if transaction_type and transaction_type != "ALL":
            query = query.filter(Transaction.type == transaction_type)

        if entity:
            query = query.filter(Transaction.entity == entity)

        if search:
            search_term = f"%{search.lower()}%"
            query = query.filter(
                (Transaction.service_type.ilike(search_term)) | (Transaction.entity.ilike(search_term))
            )

        return query.order_by(Transaction.date.desc(), Transaction.created_at.desc()).all()

    @staticmethod
    def find_for_service(db: Session, service_id: str, transaction_type: str) -> list[Transaction]:
        return (
            db.query(Transaction)
            .filter(Transaction.service_id == service_id, Transaction.type == transaction_type)
            .all()
        )

    @staticmethod
    def sum_amount(db: Session, transaction_type: str, status: str) -> float:
        total = (
            db.query(func.sum(Transaction.amount))
            .filter(Transaction.type == transaction_type, Transaction.status == status)
            .scalar()
        )
        return float(total or 0)

    @staticmethod
    def update_status(db: Session, transaction: Transaction, status: str) -> Transaction:
        transaction.status = status
        db.commit()
        db.refresh(transaction)
        return transaction

    @staticmethod
    def delete_transaction(db: Session, transaction: Transaction) -> None:
        db.delete(transaction)
        db.commit()
