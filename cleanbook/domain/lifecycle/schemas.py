"""Lifecycle schemas - Pydantic models for service status changes"""

from typing import Optional

from pydantic import BaseModel

from ..enums import PaymentStatus, ServiceStatus


class StatusUpdateRequest(BaseModel):
    """Schema for moving a service to a new status"""

    status: ServiceStatus
    collaborator_id: Optional[str] = None  # Assign while scheduling
    duration: Optional[str] = None  # Actual duration reported at completion


class ServiceResponse(BaseModel):
    id: str
    client_id: str
    collaborator_id: Optional[str] = None
    type: Optional[str] = None
    date: Optional[str] = None
    address: Optional[str] = None
    duration: Optional[str] = None
    status: ServiceStatus
    payment_status: PaymentStatus
    price: Optional[float] = None
    next_action: str
    payout_booked: bool = False
