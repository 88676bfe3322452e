"""
Email Service
Sends transactional emails through Resend using MJML templates
"""

import logging
from typing import Optional, Union

import resend
from mjml import mjml_to_html

from .config import EMAIL_FROM_ADDRESS, PAYMENT_REVIEWER_EMAIL, RESEND_API_KEY
from .email_templates import payment_proof_review_template

logger = logging.getLogger(__name__)

resend.api_key = RESEND_API_KEY


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    try:
        result = mjml_to_html(mjml_content)
        # mjml_to_html returns an object/dict with 'html' and 'errors'
        errors = getattr(result, "errors", None)
        if errors is None and isinstance(result, dict):
            errors = result.get("errors")
        if errors:
            logger.warning(f"MJML compilation warnings: {errors}")
        if isinstance(result, dict):
            return result.get("html", "")
        return getattr(result, "html", str(result))
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise Exception(f"Failed to compile MJML template: {str(e)}") from e


async def send_email(
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    from_address: Optional[str] = None,
) -> dict:
    """
    Send an email using Resend

    Args:
        to: Recipient email(s)
        subject: Email subject line
        mjml_content: MJML template content (will be compiled to HTML)
        from_address: Optional custom from address

    Returns:
        Send response dict
    """
    if not RESEND_API_KEY:
        logger.error("❌ No email service configured - RESEND_API_KEY missing")
        raise Exception("Email service not configured")

    html_content = compile_mjml_to_html(mjml_content)
    recipients = [to] if isinstance(to, str) else to

    try:
        logger.info(f"📧 Sending email via Resend to: {to}")
        response = resend.Emails.send(
            {
                "from": from_address or EMAIL_FROM_ADDRESS,
                "to": recipients,
                "subject": subject,
                "html": html_content,
            }
        )
        logger.info(f"✅ Email sent successfully via Resend: {response}")
        return response
    except Exception as e:
        logger.error(f"❌ Email send error to {recipients}: {e}")
        raise Exception(f"Failed to send email: {str(e)}") from e


async def send_payment_proof_review_email(
    service_id: str,
    client_name: str,
    service_type: str,
    stage: str,
    amount: float,
    reviewer_email: Optional[str] = None,
) -> dict:
    """Ask the payment reviewer to validate a newly submitted proof"""
    to = reviewer_email or PAYMENT_REVIEWER_EMAIL
    if not to:
        raise Exception("No payment reviewer email configured")

    mjml_content = payment_proof_review_template(
        service_id=service_id,
        client_name=client_name,
        service_type=service_type,
        stage=stage,
        amount=amount,
    )
    return await send_email(
        to=to,
        subject=f"Payment proof to review: {client_name} ({stage.lower()})",
        mjml_content=mjml_content,
    )
