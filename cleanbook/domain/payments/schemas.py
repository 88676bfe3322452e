"""Payment domain schemas - Pydantic models for validation"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator

from ..enums import PaymentStage, PaymentStatus


class ActionKind(str, Enum):
    REDIRECT = "REDIRECT"  # Pay through the external payment link
    COLLECT_PROOF = "COLLECT_PROOF"  # Open the proof-submission flow
    BLOCKED = "BLOCKED"  # Stage not yet permitted


class StageState(str, Enum):
    PAID = "PAID"
    PENDING_VERIFICATION = "PENDING_VERIFICATION"  # Proof recorded, not yet validated
    AWAITING_PAYMENT = "AWAITING_PAYMENT"
    LOCKED = "LOCKED"


class PaymentAction(BaseModel):
    """What the client may do for one payment stage right now"""

    stage: PaymentStage
    kind: ActionKind
    url: Optional[str] = None
    reason: Optional[str] = None


class StageView(BaseModel):
    stage: PaymentStage
    amount: float
    amount_display: str
    state: StageState
    action: PaymentAction


class ProofSubmissionRequest(BaseModel):
    """Schema for a client-submitted proof of payment"""

    attachment: Optional[str] = None  # Data URL / base64 produced by the client

    @field_validator("attachment")
    @classmethod
    def strip_attachment(cls, v):
        if v is not None:
            v = v.strip()
        return v or None


class ProofSubmissionResponse(BaseModel):
    service_id: str
    stage: PaymentStage
    payment_status: PaymentStatus
    state: StageState
    submitted_at: Optional[datetime] = None
    notification_sent: bool = False
    message: str


class PaymentConfirmationResponse(BaseModel):
    service_id: str
    stage: PaymentStage
    payment_status: PaymentStatus
    changed: bool
