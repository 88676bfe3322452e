"""
Payment sub-state tracker

Each service is paid in two stages of exactly half the price: the SIGNAL
(before execution) and the FINAL (after completion). A stage is paid either
through an external payment link or by the client submitting a proof that an
administrator later validates.

Submitting a proof never advances payment_status. The "proof recorded,
pending validation" condition is derived: proof present, stage not yet paid.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from ..enums import PaymentStage, PaymentStatus
from ..errors import ActionBlockedError, MissingAttachmentError, PaymentRegressionError
from ..lifecycle.state_machine import (
    coerce_payment_status,
    is_eligible_for_payment_display,
    is_final_payment_unlocked,
)
from .schemas import ActionKind, PaymentAction, StageState

logger = logging.getLogger(__name__)

PAYMENT_LINK_SCHEMES = ("http://", "https://")

# Payment status reached once each stage is confirmed
STAGE_TARGET = {
    PaymentStage.SIGNAL: PaymentStatus.SIGNAL_PAID,
    PaymentStage.FINAL: PaymentStatus.FULL_PAID,
}


def _proof_field(stage: PaymentStage) -> str:
    return "proof_signal" if stage == PaymentStage.SIGNAL else "proof_final"


def _link_field(stage: PaymentStage) -> str:
    return "payment_link_signal" if stage == PaymentStage.SIGNAL else "payment_link_final"


def stage_amount(service: Any, stage: PaymentStage) -> float:
    """Half of the price for either stage; an absent price is zero"""
    return (service.price or 0) / 2


def format_amount(amount: float) -> str:
    """Presentation-only rounding"""
    return f"{amount:.2f}"


def payment_link(service: Any, stage: PaymentStage) -> Optional[str]:
    """The stage's external payment URL, if present and well-formed"""
    link = getattr(service, _link_field(stage), None)
    if link and link.strip().lower().startswith(PAYMENT_LINK_SCHEMES):
        return link.strip()
    return None


def stage_proof(service: Any, stage: PaymentStage) -> Optional[str]:
    return getattr(service, _proof_field(stage), None) or None


def is_stage_paid(service: Any, stage: PaymentStage) -> bool:
    current = coerce_payment_status(service.payment_status)
    return current.rank >= STAGE_TARGET[stage].rank


def is_stage_unlocked(service: Any, stage: PaymentStage) -> bool:
    """Signal: once the service shows payments. Final: once completed with the signal settled"""
    if stage == PaymentStage.SIGNAL:
        return is_eligible_for_payment_display(service)
    return is_final_payment_unlocked(service)


def _blocked_reason(service: Any, stage: PaymentStage) -> str:
    if not is_eligible_for_payment_display(service):
        return "Service is not open for payment"
    if stage == PaymentStage.FINAL and not is_stage_paid(service, PaymentStage.SIGNAL):
        return "Waiting for signal payment"
    return "Waiting for service completion"


def resolve_payment_action(service: Any, stage: PaymentStage) -> PaymentAction:
    """
    Decide what a payment request for `stage` should do.

    BLOCKED while the stage is locked. Once unlocked, REDIRECT when the stage
    has a well-formed external link, COLLECT_PROOF otherwise.
    """
    stage = PaymentStage(stage)

    if not is_stage_unlocked(service, stage):
        return PaymentAction(
            stage=stage, kind=ActionKind.BLOCKED, reason=_blocked_reason(service, stage)
        )

    link = payment_link(service, stage)
    if link:
        return PaymentAction(stage=stage, kind=ActionKind.REDIRECT, url=link)

    return PaymentAction(stage=stage, kind=ActionKind.COLLECT_PROOF)


def stage_state(service: Any, stage: PaymentStage) -> StageState:
    """Where a stage stands, distinguishing a submitted-but-unverified proof"""
    stage = PaymentStage(stage)
    if is_stage_paid(service, stage):
        return StageState.PAID
    if stage_proof(service, stage):
        return StageState.PENDING_VERIFICATION
    if is_stage_unlocked(service, stage):
        return StageState.AWAITING_PAYMENT
    return StageState.LOCKED


def submit_proof(service: Any, stage: PaymentStage, attachment: Optional[str]) -> dict:
    """
    Validate a proof submission and return the partial fields to persist.

    The service object itself is not modified. A later submission for the same
    stage supersedes the earlier one (last write wins).

    Raises:
        MissingAttachmentError: attachment empty or absent
        ActionBlockedError: stage not yet unlocked
    """
    stage = PaymentStage(stage)

    if not attachment:
        raise MissingAttachmentError("Please attach the proof of payment")

    if not is_stage_unlocked(service, stage):
        raise ActionBlockedError(_blocked_reason(service, stage))

    if stage_proof(service, stage):
        logger.info(f"ℹ️ Service {service.id}: superseding previous {stage.value} proof")

    field = _proof_field(stage)
    return {field: attachment, f"{field}_submitted_at": datetime.now(timezone.utc)}


def advance_payment_status(current: Any, target: Any) -> PaymentStatus:
    """
    Move payment_status forward by at most one step.

    Raises PaymentRegressionError for a backward move or a skipped stage.
    """
    current = coerce_payment_status(current)
    target = PaymentStatus(target)

    if target.rank < current.rank:
        raise PaymentRegressionError(
            f"Payment status cannot move back from {current.value} to {target.value}"
        )
    if target.rank - current.rank > 1:
        raise PaymentRegressionError(
            f"Payment status cannot skip from {current.value} to {target.value}"
        )
    return target


def confirm_payment(service: Any, stage: PaymentStage) -> dict:
    """
    Administrative verification of a stage payment.

    Returns the partial fields to persist, or an empty dict when the stage was
    already confirmed. The stage's proof is required unless the stage is paid
    through an external link or its amount is zero.

    Raises:
        ActionBlockedError: stage not yet unlocked
        MissingAttachmentError: no proof on record for the stage
    """
    stage = PaymentStage(stage)

    if is_stage_paid(service, stage):
        return {}

    if not is_stage_unlocked(service, stage):
        raise ActionBlockedError(_blocked_reason(service, stage))

    proof_waived = payment_link(service, stage) is not None or stage_amount(service, stage) == 0
    if not stage_proof(service, stage) and not proof_waived:
        raise MissingAttachmentError(
            f"No {stage.value.lower()} proof of payment on record for this service"
        )

    new_status = advance_payment_status(service.payment_status, STAGE_TARGET[stage])
    return {"payment_status": new_status.value}
