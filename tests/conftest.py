"""
Shared fixtures: in-memory database, API client and bearer tokens.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from unittest.mock import AsyncMock, patch  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from cleanbook.auth import create_access_token  # noqa: E402
from cleanbook.database import Base, engine_options, get_db  # noqa: E402
from cleanbook.domain.enums import ActorRole, PaymentStatus, ServiceStatus  # noqa: E402
from cleanbook.domain.clients.repository import ClientRepository  # noqa: E402
from cleanbook.domain.collaborators.repository import CollaboratorRepository  # noqa: E402
from cleanbook.domain.lifecycle.repository import ServiceRepository  # noqa: E402
from cleanbook.main import app  # noqa: E402
from cleanbook.security_utils import hash_password_bcrypt  # noqa: E402

COLLABORATOR_PASSWORD = "1234"


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", **engine_options("sqlite://"))
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def api(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reviewer_email():
    """No test ever reaches Resend"""
    with patch(
        "cleanbook.services.notification_service.send_payment_proof_review_email",
        new=AsyncMock(return_value={"id": "email_test"}),
    ) as mocked:
        yield mocked


@pytest.fixture
def client_record(db):
    return ClientRepository.create_client(db, name="Ana Souza", email="ana@example.com")


@pytest.fixture
def collaborator_record(db):
    return CollaboratorRepository.create_collaborator(
        db,
        name="Bruno Lima",
        email="bruno@example.com",
        level="SENIOR",
        password_hash=hash_password_bcrypt(COLLABORATOR_PASSWORD),
    )


@pytest.fixture
def make_service(db, client_record):
    def _make(**overrides):
        fields = {
            "client_id": client_record.id,
            "client_name": client_record.name,
            "type": "Limpeza Residencial",
            "date": "2026-10-01",
            "address": "Rua das Flores, 100",
            "duration": "4",
            "status": ServiceStatus.SCHEDULED.value,
            "payment_status": PaymentStatus.UNPAID.value,
            "price": 200.0,
        }
        fields.update(overrides)
        return ServiceRepository.create_service(db, **fields)

    return _make


def bearer(actor_id: str, role: ActorRole) -> dict:
    return {"Authorization": f"Bearer {create_access_token(actor_id, role)}"}


@pytest.fixture
def client_headers(client_record):
    return bearer(client_record.id, ActorRole.CLIENT)


@pytest.fixture
def collaborator_headers(collaborator_record):
    return bearer(collaborator_record.id, ActorRole.COLLABORATOR)


@pytest.fixture
def admin_headers():
    return bearer("admin-1", ActorRole.ADMIN)
