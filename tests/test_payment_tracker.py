"""
Tests for the two-stage payment tracker.
"""

from types import SimpleNamespace

import pytest

from cleanbook.domain.enums import PaymentStage, PaymentStatus
from cleanbook.domain.errors import (
    ActionBlockedError,
    MissingAttachmentError,
    PaymentRegressionError,
)
from cleanbook.domain.payments import tracker
from cleanbook.domain.payments.schemas import ActionKind, StageState


def _service(**overrides):
    fields = {
        "id": "svc-1",
        "price": 200.0,
        "status": "SCHEDULED",
        "payment_status": "UNPAID",
        "payment_link_signal": None,
        "payment_link_final": None,
        "proof_signal": None,
        "proof_final": None,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


@pytest.mark.parametrize("price", [0, 1, 99.99, 200, 333.33, 1250.5])
def test_stage_amounts_are_half_and_sum_to_price(price):
    service = _service(price=price)
    signal = tracker.stage_amount(service, PaymentStage.SIGNAL)
    final = tracker.stage_amount(service, PaymentStage.FINAL)

    assert signal == price / 2
    assert final == price / 2
    assert signal + final == price


def test_missing_price_is_zero():
    assert tracker.stage_amount(_service(price=None), PaymentStage.SIGNAL) == 0


def test_completed_service_with_signal_paid_collects_final_proof():
    service = _service(status="COMPLETED", payment_status="SIGNAL_PAID", payment_link_final=None)

    amount = tracker.stage_amount(service, PaymentStage.FINAL)
    action = tracker.resolve_payment_action(service, PaymentStage.FINAL)

    assert tracker.format_amount(amount) == "100.00"
    assert action.kind == ActionKind.COLLECT_PROOF


def test_final_blocked_while_in_progress_then_unlocked_by_completion():
    service = _service(status="IN_PROGRESS", payment_status="SIGNAL_PAID")

    blocked = tracker.resolve_payment_action(service, PaymentStage.FINAL)
    assert blocked.kind == ActionKind.BLOCKED
    assert blocked.reason == "Waiting for service completion"

    service.status = "COMPLETED"
    assert tracker.resolve_payment_action(service, PaymentStage.FINAL).kind == ActionKind.COLLECT_PROOF


def test_final_blocked_reason_when_signal_unpaid():
    service = _service(status="COMPLETED", payment_status="UNPAID")
    action = tracker.resolve_payment_action(service, PaymentStage.FINAL)

    assert action.kind == ActionKind.BLOCKED
    assert action.reason == "Waiting for signal payment"


def test_payment_link_redirects():
    service = _service(payment_link_signal=" https://pay.example.com/abc ")
    action = tracker.resolve_payment_action(service, PaymentStage.SIGNAL)

    assert action.kind == ActionKind.REDIRECT
    assert action.url == "https://pay.example.com/abc"


def test_malformed_payment_link_is_ignored():
    service = _service(payment_link_signal="pay.example.com/abc")
    assert tracker.resolve_payment_action(service, PaymentStage.SIGNAL).kind == ActionKind.COLLECT_PROOF


def test_final_link_does_not_bypass_completion_gate():
    service = _service(
        status="IN_PROGRESS",
        payment_status="SIGNAL_PAID",
        payment_link_final="https://pay.example.com/final",
    )
    action = tracker.resolve_payment_action(service, PaymentStage.FINAL)

    assert action.kind == ActionKind.BLOCKED
    assert action.url is None
    assert action.reason == "Waiting for service completion"

    service.status = "COMPLETED"
    action = tracker.resolve_payment_action(service, PaymentStage.FINAL)
    assert action.kind == ActionKind.REDIRECT
    assert action.url == "https://pay.example.com/final"


@pytest.mark.parametrize("status", ["PENDING", "CANCELED"])
@pytest.mark.parametrize("stage", list(PaymentStage))
def test_links_are_ignored_on_services_closed_for_payment(status, stage):
    service = _service(
        status=status,
        payment_link_signal="https://pay.example.com/signal",
        payment_link_final="https://pay.example.com/final",
    )
    action = tracker.resolve_payment_action(service, stage)

    assert action.kind == ActionKind.BLOCKED
    assert action.reason == "Service is not open for payment"


def test_pending_service_is_blocked_for_both_stages():
    service = _service(status="PENDING")
    for stage in PaymentStage:
        action = tracker.resolve_payment_action(service, stage)
        assert action.kind == ActionKind.BLOCKED
        assert action.reason == "Service is not open for payment"


def test_submit_proof_without_attachment_leaves_proof_unchanged():
    service = _service(proof_signal="data:image/png;base64,OLD")

    with pytest.raises(MissingAttachmentError) as exc:
        tracker.submit_proof(service, PaymentStage.SIGNAL, None)

    assert exc.value.code == "MISSING_ATTACHMENT"
    assert service.proof_signal == "data:image/png;base64,OLD"


def test_submit_proof_returns_fields_without_mutating_service():
    service = _service()
    fields = tracker.submit_proof(service, PaymentStage.SIGNAL, "data:image/png;base64,AAA")

    assert fields["proof_signal"] == "data:image/png;base64,AAA"
    assert fields["proof_signal_submitted_at"] is not None
    assert fields["proof_signal_submitted_at"].tzinfo is not None
    assert service.proof_signal is None
    assert service.payment_status == "UNPAID"


def test_submit_proof_for_locked_final_stage_is_blocked():
    service = _service(status="IN_PROGRESS", payment_status="SIGNAL_PAID")
    with pytest.raises(ActionBlockedError):
        tracker.submit_proof(service, PaymentStage.FINAL, "data:image/png;base64,AAA")


def test_stage_state_reports_pending_verification_after_proof():
    service = _service(proof_signal="data:image/png;base64,AAA")

    assert tracker.stage_state(service, PaymentStage.SIGNAL) == StageState.PENDING_VERIFICATION
    assert tracker.stage_state(service, PaymentStage.FINAL) == StageState.LOCKED


def test_stage_state_paid_and_awaiting():
    service = _service(status="COMPLETED", payment_status="SIGNAL_PAID")

    assert tracker.stage_state(service, PaymentStage.SIGNAL) == StageState.PAID
    assert tracker.stage_state(service, PaymentStage.FINAL) == StageState.AWAITING_PAYMENT


def test_confirm_payment_requires_proof():
    with pytest.raises(MissingAttachmentError):
        tracker.confirm_payment(_service(), PaymentStage.SIGNAL)


def test_confirm_payment_advances_one_step():
    service = _service(proof_signal="data:image/png;base64,AAA")
    assert tracker.confirm_payment(service, PaymentStage.SIGNAL) == {
        "payment_status": PaymentStatus.SIGNAL_PAID.value
    }


def test_confirm_payment_waives_proof_for_link_and_zero_price():
    linked = _service(payment_link_signal="https://pay.example.com/x")
    free = _service(price=0)

    assert tracker.confirm_payment(linked, PaymentStage.SIGNAL)["payment_status"] == "SIGNAL_PAID"
    assert tracker.confirm_payment(free, PaymentStage.SIGNAL)["payment_status"] == "SIGNAL_PAID"


def test_confirm_already_paid_stage_is_a_noop():
    service = _service(status="COMPLETED", payment_status="FULL_PAID")
    assert tracker.confirm_payment(service, PaymentStage.SIGNAL) == {}
    assert tracker.confirm_payment(service, PaymentStage.FINAL) == {}


def test_confirm_final_before_completion_is_blocked():
    service = _service(status="IN_PROGRESS", payment_status="SIGNAL_PAID", proof_final="x")
    with pytest.raises(ActionBlockedError):
        tracker.confirm_payment(service, PaymentStage.FINAL)


def test_payment_status_never_moves_backward_or_skips():
    assert tracker.advance_payment_status("UNPAID", "SIGNAL_PAID") == PaymentStatus.SIGNAL_PAID
    assert tracker.advance_payment_status("FULL_PAID", "FULL_PAID") == PaymentStatus.FULL_PAID

    with pytest.raises(PaymentRegressionError):
        tracker.advance_payment_status("FULL_PAID", "SIGNAL_PAID")
    with pytest.raises(PaymentRegressionError):
        tracker.advance_payment_status("UNPAID", "FULL_PAID")


def test_payment_status_is_monotonic_over_a_full_flow():
    service = _service(proof_signal="a")
    seen = [tracker.coerce_payment_status(service.payment_status)]

    service.payment_status = tracker.confirm_payment(service, PaymentStage.SIGNAL)["payment_status"]
    seen.append(tracker.coerce_payment_status(service.payment_status))

    service.status = "COMPLETED"
    service.proof_final = "b"
    service.payment_status = tracker.confirm_payment(service, PaymentStage.FINAL)["payment_status"]
    seen.append(tracker.coerce_payment_status(service.payment_status))

    assert tracker.confirm_payment(service, PaymentStage.SIGNAL) == {}
    assert [s.rank for s in seen] == sorted(s.rank for s in seen)
    assert seen[-1] == PaymentStatus.FULL_PAID
