"""Ledger router - Admin access to income and payout transactions"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import Actor, require_role
from ...database import get_db
from ..enums import ActorRole, TransactionType
from .schemas import LedgerSummary, TransactionResponse
from .service import LedgerService

router = APIRouter(prefix="/transactions", tags=["Transactions"])


def get_ledger_service(db: Session = Depends(get_db)) -> LedgerService:
    """Dependency injection for LedgerService"""
    return LedgerService(db)


@router.get("", response_model=list[TransactionResponse])
async def get_transactions(
    type: Optional[TransactionType] = Query(None, description="INCOME or EXPENSE"),
    search: Optional[str] = Query(None, description="Match on entity or service type"),
    actor: Actor = Depends(require_role(ActorRole.ADMIN)),
    service: LedgerService = Depends(get_ledger_service),
):
    """List ledger entries, most recent first"""
    return service.get_transactions(type.value if type else None, search)


@router.get("/summary", response_model=LedgerSummary)
async def get_summary(
    actor: Actor = Depends(require_role(ActorRole.ADMIN)),
    service: LedgerService = Depends(get_ledger_service),
):
    return service.get_summary()


@router.post("/{transaction_id}/mark-paid", response_model=TransactionResponse)
async def mark_transaction_paid(
    transaction_id: str,
    actor: Actor = Depends(require_role(ActorRole.ADMIN)),
    service: LedgerService = Depends(get_ledger_service),
):
    """Record that a pending payout has been transferred"""
    return service.mark_transaction_paid(transaction_id)


@router.delete("/{transaction_id}")
async def delete_transaction(
    transaction_id: str,
    actor: Actor = Depends(require_role(ActorRole.ADMIN)),
    service: LedgerService = Depends(get_ledger_service),
):
    return service.delete_transaction(transaction_id)
