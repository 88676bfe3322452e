"""Settlement schemas - Read-time views for client and collaborator screens"""

from typing import Optional

from pydantic import BaseModel

from ..enums import CollaboratorLevel, PaymentStatus, ServiceStatus
from ..payments.schemas import StageView


class ClientServicePayments(BaseModel):
    """Both payment stages of one service, as the client sees them"""

    service_id: str
    type: Optional[str] = None
    date: Optional[str] = None
    address: Optional[str] = None
    status: ServiceStatus
    payment_status: PaymentStatus
    price: float
    price_display: str
    signal: StageView
    final: StageView


class PayoutLine(BaseModel):
    service_id: str
    date: Optional[str] = None
    client_name: Optional[str] = None
    type: Optional[str] = None
    hours: int
    amount: float
    status: str  # PAID once the payout transfer is marked paid, PENDING otherwise


class PayoutHistory(BaseModel):
    collaborator_id: str
    level: CollaboratorLevel
    lines: list[PayoutLine]
    total_services: int
    total_hours: int
    total_value: float
    total_paid: float
    total_pending: float
