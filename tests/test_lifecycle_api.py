"""
Tests for service status changes and the payout booked on completion.
"""

from cleanbook.models import Transaction


def _patch_status(api, service_id, headers, **payload):
    return api.patch(f"/services/{service_id}/status", json=payload, headers=headers)


def test_collaborator_starts_and_completes_own_service(
    api, db, make_service, collaborator_record, collaborator_headers
):
    service = make_service(collaborator_id=collaborator_record.id)

    started = _patch_status(api, service.id, collaborator_headers, status="IN_PROGRESS")
    assert started.status_code == 200
    assert started.json()["status"] == "IN_PROGRESS"
    assert started.json()["payout_booked"] is False

    completed = _patch_status(api, service.id, collaborator_headers, status="COMPLETED")
    assert completed.status_code == 200
    assert completed.json()["payout_booked"] is True

    payouts = db.query(Transaction).filter(Transaction.type == "EXPENSE").all()
    assert len(payouts) == 1
    assert payouts[0].amount == 80  # SENIOR, 4h
    assert payouts[0].status == "PENDING"
    assert payouts[0].method == "Transferência"
    assert payouts[0].entity == "Bruno Lima"
    assert payouts[0].service_type == "Repasse: Limpeza Residencial"


def test_completing_twice_books_a_single_payout(
    api, db, make_service, collaborator_record, collaborator_headers
):
    service = make_service(status="IN_PROGRESS", collaborator_id=collaborator_record.id)

    _patch_status(api, service.id, collaborator_headers, status="COMPLETED")
    again = _patch_status(api, service.id, collaborator_headers, status="COMPLETED")

    assert again.status_code == 200
    assert again.json()["payout_booked"] is False
    assert db.query(Transaction).filter(Transaction.type == "EXPENSE").count() == 1


def test_reported_duration_selects_the_bucket(
    api, db, make_service, collaborator_record, collaborator_headers
):
    service = make_service(status="IN_PROGRESS", collaborator_id=collaborator_record.id)

    _patch_status(api, service.id, collaborator_headers, status="COMPLETED", duration="7h")

    payout = db.query(Transaction).filter(Transaction.service_id == service.id).one()
    assert payout.amount == 160  # SENIOR, hours8


def test_completion_without_collaborator_books_nothing(api, db, make_service, admin_headers):
    service = make_service(status="IN_PROGRESS")

    response = _patch_status(api, service.id, admin_headers, status="COMPLETED")

    assert response.status_code == 200
    assert response.json()["payout_booked"] is False
    assert db.query(Transaction).count() == 0


def test_collaborator_cannot_schedule_or_cancel(
    api, make_service, collaborator_record, collaborator_headers
):
    service = make_service(status="PENDING", collaborator_id=collaborator_record.id)

    assert _patch_status(api, service.id, collaborator_headers, status="SCHEDULED").status_code == 403
    assert _patch_status(api, service.id, collaborator_headers, status="CANCELED").status_code == 403


def test_collaborator_cannot_touch_unassigned_service(api, make_service, collaborator_headers):
    service = make_service()

    response = _patch_status(api, service.id, collaborator_headers, status="IN_PROGRESS")

    assert response.status_code == 404


def test_illegal_edge_is_rejected(api, db, make_service, admin_headers):
    service = make_service(status="PENDING")

    response = _patch_status(api, service.id, admin_headers, status="IN_PROGRESS")

    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "INVALID_TRANSITION"
    db.refresh(service)
    assert service.status == "PENDING"


def test_admin_schedules_and_assigns_collaborator(api, db, make_service, collaborator_record, admin_headers):
    service = make_service(status="PENDING")

    response = _patch_status(
        api, service.id, admin_headers, status="SCHEDULED", collaborator_id=collaborator_record.id
    )

    assert response.status_code == 200
    assert response.json()["collaborator_id"] == collaborator_record.id
    assert response.json()["next_action"] == "Waiting for signal payment"
    db.refresh(service)
    assert service.collaborator_name == "Bruno Lima"


def test_admin_cancels_in_progress_service(api, make_service, admin_headers):
    service = make_service(status="IN_PROGRESS")

    response = _patch_status(api, service.id, admin_headers, status="CANCELED")

    assert response.status_code == 200
    assert response.json()["next_action"] == "Service was canceled"


def test_client_cannot_change_status(api, make_service, client_headers):
    service = make_service()
    assert _patch_status(api, service.id, client_headers, status="CANCELED").status_code == 403


def test_get_service_shows_next_action(api, make_service, admin_headers):
    service = make_service(status="COMPLETED", payment_status="SIGNAL_PAID")

    response = api.get(f"/services/{service.id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["next_action"] == "Service completed - waiting for final payment"


def test_canceled_service_cannot_be_completed(
    api, db, make_service, collaborator_record, collaborator_headers
):
    service = make_service(status="CANCELED", collaborator_id=collaborator_record.id)

    response = _patch_status(api, service.id, collaborator_headers, status="COMPLETED")

    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "INVALID_TRANSITION"
    assert db.query(Transaction).filter(Transaction.service_id == service.id).count() == 0
    db.refresh(service)
    assert service.status == "CANCELED"


def test_completed_service_with_booked_payout_cannot_be_canceled(
    api, db, make_service, collaborator_record, collaborator_headers, admin_headers
):
    service = make_service(status="IN_PROGRESS", collaborator_id=collaborator_record.id)
    _patch_status(api, service.id, collaborator_headers, status="COMPLETED")

    response = _patch_status(api, service.id, admin_headers, status="CANCELED")

    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "ACTION_BLOCKED"
    db.refresh(service)
    assert service.status == "COMPLETED"


def test_completed_service_without_ledger_entries_can_be_canceled(api, make_service, admin_headers):
    service = make_service(status="COMPLETED")

    response = _patch_status(api, service.id, admin_headers, status="CANCELED")

    assert response.status_code == 200
    assert response.json()["status"] == "CANCELED"
