"""Ledger schemas - Pydantic models for responses"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class TransactionResponse(BaseModel):
    id: str
    type: str
    service_id: Optional[str] = None
    entity: Optional[str] = None
    service_type: Optional[str] = None
    amount: float
    date: str
    status: str
    method: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class LedgerSummary(BaseModel):
    total_income: float  # Confirmed client payments
    total_expense: float  # Payouts already transferred
    pending_payouts: float
    balance: float
