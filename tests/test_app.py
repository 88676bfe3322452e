"""
Tests for application startup and wiring.
"""

from fastapi.testclient import TestClient

from cleanbook.database import engine_options, session_scope
from cleanbook.domain.payouts.rate_table import DEFAULT_PAYOUTS
from cleanbook.domain.payouts.repository import SettingsRepository
from cleanbook.main import app
from cleanbook.models import PlatformSettings


def test_startup_creates_tables_and_seeds_rate_table():
    with TestClient(app) as api:
        assert api.get("/health").json() == {"status": "healthy"}

    with session_scope() as db:
        settings = SettingsRepository.get_settings(db)
        assert settings.payouts == DEFAULT_PAYOUTS
        assert SettingsRepository.ensure_defaults(db).id == settings.id


def test_settings_row_only_stores_the_rate_table():
    assert set(PlatformSettings.__table__.columns.keys()) == {"id", "payouts", "updated_at"}


def test_sqlite_engines_skip_pool_sizing():
    in_memory = engine_options("sqlite://")
    on_disk = engine_options("sqlite:///./cleanbook.db")
    server = engine_options("postgresql://user:pw@localhost/cleanbook")

    assert "poolclass" in in_memory
    assert "poolclass" not in on_disk
    assert "pool_size" not in on_disk
    assert server["pool_pre_ping"] is True
    assert "pool_size" in server


def test_every_domain_router_is_mounted():
    paths = {route.path for route in app.routes}

    assert "/settlement/client" in paths
    assert "/settlement/payouts" in paths
    assert "/payments/services/{service_id}/{stage}/proof" in paths
    assert "/services/{service_id}/status" in paths
    assert "/settings/payouts" in paths
    assert "/transactions/{transaction_id}/mark-paid" in paths
    assert "/collaborators/me/password" in paths
    assert "/clients/me" in paths


def test_expired_token_is_rejected():
    from datetime import timedelta

    from cleanbook.security_utils import create_jwt_token

    token = create_jwt_token({"sub": "admin-1", "role": "ADMIN"}, expires_delta=timedelta(minutes=-5))
    response = TestClient(app).get("/transactions", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_token_with_unknown_role_is_rejected():
    from cleanbook.security_utils import create_jwt_token

    token = create_jwt_token({"sub": "someone", "role": "OWNER"})
    response = TestClient(app).get("/transactions", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_token_expiry_is_in_the_future():
    from datetime import datetime, timedelta, timezone

    from cleanbook.security_utils import create_jwt_token, verify_jwt_token

    claims = verify_jwt_token(create_jwt_token({"sub": "admin-1"}, expires_delta=timedelta(minutes=10)))
    remaining = claims["exp"] - datetime.now(timezone.utc).timestamp()

    assert 0 < remaining <= 600
