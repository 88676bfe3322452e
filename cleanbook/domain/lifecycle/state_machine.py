"""
Service lifecycle state machine

Service statuses: PENDING → SCHEDULED → IN_PROGRESS → COMPLETED
CANCELED is reachable from every other state and is terminal

Note:
- COMPLETED and CANCELED are driven by external triggers (collaborator
  confirming the work, administrative cancellation) and are accepted from
  any state except CANCELED. This module only answers what becomes permitted.
"""

import logging
from typing import Any, Optional, Union

from ..enums import PaymentStatus, ServiceStatus
from ..errors import InvalidTransitionError

logger = logging.getLogger(__name__)

# Manual transitions between intermediate states
VALID_TRANSITIONS = {
    ServiceStatus.PENDING: [ServiceStatus.SCHEDULED],
    ServiceStatus.SCHEDULED: [ServiceStatus.IN_PROGRESS],
    ServiceStatus.IN_PROGRESS: [],
    ServiceStatus.COMPLETED: [],  # Only cancellation leaves it
    ServiceStatus.CANCELED: [],  # Terminal state
}

# Reached through external triggers, rejected only out of a terminal state
EXTERNALLY_DRIVEN = {ServiceStatus.COMPLETED, ServiceStatus.CANCELED}

# No status change leaves these
TERMINAL = {ServiceStatus.CANCELED}

# A service in one of these never shows payment UI
HIDDEN_FROM_PAYMENTS = {ServiceStatus.PENDING, ServiceStatus.CANCELED}

SIGNAL_SATISFIED = {PaymentStatus.SIGNAL_PAID, PaymentStatus.FULL_PAID}


def coerce_status(value: Union[str, ServiceStatus, None]) -> ServiceStatus:
    """Read a stored status; unknown or missing values are treated as PENDING"""
    if isinstance(value, ServiceStatus):
        return value
    try:
        return ServiceStatus(str(value).upper())
    except ValueError:
        logger.warning(f"⚠️ Unknown service status {value!r}, treating as PENDING")
        return ServiceStatus.PENDING


def coerce_payment_status(value: Union[str, PaymentStatus, None]) -> PaymentStatus:
    """Read a stored payment status; legacy 'PENDING' and missing values mean UNPAID"""
    if isinstance(value, PaymentStatus):
        return value
    if not value:
        return PaymentStatus.UNPAID
    try:
        return PaymentStatus(str(value).upper())
    except ValueError:
        return PaymentStatus.UNPAID


def is_eligible_for_payment_display(service: Any) -> bool:
    """A service shows payment UI once it has left PENDING and is not CANCELED"""
    return coerce_status(service.status) not in HIDDEN_FROM_PAYMENTS


def is_final_payment_unlocked(service: Any) -> bool:
    """Final payment requires the signal stage settled AND the work completed"""
    return (
        coerce_payment_status(service.payment_status) in SIGNAL_SATISFIED
        and coerce_status(service.status) == ServiceStatus.COMPLETED
    )


def validate_status_transition(
    current_status: Union[str, ServiceStatus], new_status: Union[str, ServiceStatus]
) -> bool:
    """
    Validate if a service status transition is allowed

    Args:
        current_status: Current service status
        new_status: Desired new status

    Returns:
        bool: True if transition is valid, False otherwise
    """
    current = coerce_status(current_status)
    target = ServiceStatus(new_status)

    # Allow same status (no-op)
    if current == target:
        return True

    if current in TERMINAL:
        return False

    if target in EXTERNALLY_DRIVEN:
        return True

    return target in VALID_TRANSITIONS.get(current, [])


def transition(service: Any, new_status: Union[str, ServiceStatus]) -> Optional[ServiceStatus]:
    """
    Apply a status change to a service object in memory.

    Returns the previous status when the status actually changed, None for a no-op.
    Raises InvalidTransitionError for an illegal edge.
    """
    try:
        target = ServiceStatus(new_status)
    except ValueError as e:
        raise InvalidTransitionError(f"Unknown service status: {new_status}") from e

    previous = coerce_status(service.status)
    if not validate_status_transition(previous, target):
        raise InvalidTransitionError(
            f"Cannot move service from {previous.value} to {target.value}"
        )

    if previous == target:
        return None

    service.status = target.value
    logger.info(f"✅ Service {service.id} transitioned: {previous.value} → {target.value}")
    return previous


def get_next_required_action(service: Any) -> str:
    """Describe what has to happen next for a service"""
    status = coerce_status(service.status)
    payment_status = coerce_payment_status(service.payment_status)

    if status == ServiceStatus.PENDING:
        return "Waiting for quote approval"
    elif status == ServiceStatus.CANCELED:
        return "Service was canceled"
    elif payment_status == PaymentStatus.UNPAID:
        return "Waiting for signal payment"
    elif status == ServiceStatus.SCHEDULED:
        return "Service scheduled - waiting for execution"
    elif status == ServiceStatus.IN_PROGRESS:
        return "Service in progress"
    elif payment_status == PaymentStatus.SIGNAL_PAID:
        return "Service completed - waiting for final payment"
    return "Service completed and fully paid"
