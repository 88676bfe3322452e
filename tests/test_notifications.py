"""
Tests for the best-effort reviewer notification and its email template.
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from cleanbook import email_service
from cleanbook.email_templates import payment_proof_review_template
from cleanbook.services.notification_service import notify_payment_reviewer


def _service():
    return SimpleNamespace(id="svc-1", client_name="Ana Souza", type="Limpeza Pesada")


def test_notification_reports_success(reviewer_email):
    result = asyncio.run(notify_payment_reviewer(_service(), "SIGNAL", 100.0, "review@example.com"))

    assert result == {"email_sent": True, "email_error": None}
    reviewer_email.assert_awaited_once_with(
        service_id="svc-1",
        client_name="Ana Souza",
        service_type="Limpeza Pesada",
        stage="SIGNAL",
        amount=100.0,
        reviewer_email="review@example.com",
    )


def test_notification_failure_is_reported_not_raised(reviewer_email):
    reviewer_email.side_effect = Exception("No payment reviewer email configured")

    result = asyncio.run(notify_payment_reviewer(_service(), "FINAL", 50.0))

    assert result["email_sent"] is False
    assert "reviewer" in result["email_error"]


def test_send_without_reviewer_configured_raises():
    with patch("cleanbook.email_service.PAYMENT_REVIEWER_EMAIL", None):
        with pytest.raises(Exception, match="No payment reviewer email configured"):
            asyncio.run(
                email_service.send_payment_proof_review_email(
                    service_id="svc-1",
                    client_name="Ana Souza",
                    service_type="Limpeza Pesada",
                    stage="SIGNAL",
                    amount=100.0,
                )
            )


def test_send_without_resend_key_raises():
    with patch("cleanbook.email_service.RESEND_API_KEY", None):
        with pytest.raises(Exception, match="Email service not configured"):
            asyncio.run(email_service.send_email("review@example.com", "Subject", "<mjml></mjml>"))


def test_review_template_mentions_stage_and_amount():
    mjml = payment_proof_review_template(
        service_id="svc-1",
        client_name="Ana Souza",
        service_type="Limpeza Pesada",
        stage="FINAL",
        amount=75.0,
    )

    assert "<mjml>" in mjml
    assert "Ana Souza" in mjml
    assert "75.00" in mjml
