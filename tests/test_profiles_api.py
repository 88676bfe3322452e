"""
Tests for client and collaborator profile screens, including password change.
"""

from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from cleanbook.domain.clients.schemas import ClientResponse
from cleanbook.domain.collaborators.schemas import PasswordChangeRequest
from cleanbook.domain.collaborators.service import CollaboratorService
from cleanbook.security_utils import verify_password_bcrypt

from .conftest import COLLABORATOR_PASSWORD


def test_client_reads_and_updates_profile(api, client_headers):
    assert api.get("/clients/me", headers=client_headers).json()["name"] == "Ana Souza"

    response = api.patch(
        "/clients/me",
        json={"phone": "(11) 98765-4321", "email": "Ana.Souza@Example.com"},
        headers=client_headers,
    )

    assert response.status_code == 200
    assert response.json()["phone"] == "+5511987654321"
    assert response.json()["email"] == "ana.souza@example.com"


def test_invalid_phone_is_rejected(api, client_headers):
    assert api.patch("/clients/me", json={"phone": "123"}, headers=client_headers).status_code == 422


def test_collaborator_profile_update_keeps_level(api, collaborator_headers):
    response = api.patch("/collaborators/me", json={"name": "Bruno L."}, headers=collaborator_headers)

    assert response.status_code == 200
    assert response.json()["name"] == "Bruno L."
    assert response.json()["level"] == "SENIOR"


def test_password_change(api, db, collaborator_record, collaborator_headers):
    response = api.post(
        "/collaborators/me/password",
        json={"current": COLLABORATOR_PASSWORD, "new": "novasenha", "confirm": "novasenha"},
        headers=collaborator_headers,
    )

    assert response.status_code == 200
    db.refresh(collaborator_record)
    assert verify_password_bcrypt("novasenha", collaborator_record.password_hash)
    assert not verify_password_bcrypt(COLLABORATOR_PASSWORD, collaborator_record.password_hash)


def test_password_change_with_wrong_current(api, collaborator_headers):
    response = api.post(
        "/collaborators/me/password",
        json={"current": "wrong", "new": "novasenha", "confirm": "novasenha"},
        headers=collaborator_headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "INVALID_CREDENTIALS"


def test_password_change_with_mismatched_confirmation(api, collaborator_headers):
    response = api.post(
        "/collaborators/me/password",
        json={"current": COLLABORATOR_PASSWORD, "new": "novasenha", "confirm": "outra"},
        headers=collaborator_headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"]["message"] == "New passwords do not match"


def test_password_too_short_is_rejected(api, collaborator_headers):
    response = api.post(
        "/collaborators/me/password",
        json={"current": COLLABORATOR_PASSWORD, "new": "abc", "confirm": "abc"},
        headers=collaborator_headers,
    )
    assert response.status_code == 422


def test_password_change_uses_injected_verifier(db, collaborator_record):
    verifier = MagicMock()
    verifier.verify.return_value = True
    verifier.hash.return_value = "hashed-by-verifier"

    service = CollaboratorService(db, verifier=verifier)
    service.change_password(
        collaborator_record.id, PasswordChangeRequest(current="x", new="abcd", confirm="abcd")
    )

    verifier.verify.assert_called_once()
    verifier.hash.assert_called_once_with("abcd")
    db.refresh(collaborator_record)
    assert collaborator_record.password_hash == "hashed-by-verifier"


def test_unknown_collaborator_is_not_found(db):
    with pytest.raises(HTTPException) as exc:
        CollaboratorService(db).get_collaborator("missing")
    assert exc.value.status_code == 404


def test_client_response_reads_model_attributes(client_record):
    response = ClientResponse.model_validate(client_record)

    assert response.id == client_record.id
    assert response.name == "Ana Souza"
