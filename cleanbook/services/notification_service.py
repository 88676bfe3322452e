"""
Notification Service
Best-effort notifications for settlement events. A delivery failure is
logged and reported back, never raised to the caller.
"""

import logging
from typing import Optional

from ..email_service import send_payment_proof_review_email
from ..models import Service

logger = logging.getLogger(__name__)


async def notify_payment_reviewer(
    service: Service,
    stage: str,
    amount: float,
    reviewer_email: Optional[str] = None,
) -> dict:
    """
    Tell the payment reviewer that a proof is waiting for validation

    Returns:
        Dict with email_sent status and email_error message
    """
    result = {"email_sent": False, "email_error": None}
    client_name = service.client_name or "Client"

    try:
        logger.info(f"📧 Sending proof review notification for service {service.id} ({stage})")
        await send_payment_proof_review_email(
            service_id=service.id,
            client_name=client_name,
            service_type=service.type or "Service",
            stage=stage,
            amount=amount,
            reviewer_email=reviewer_email,
        )
        result["email_sent"] = True
        logger.info(f"✅ Proof review notification sent for service {service.id}")
    except Exception as e:
        result["email_error"] = str(e)
        logger.error(f"❌ Failed to notify reviewer about service {service.id}: {e}")

    return result
