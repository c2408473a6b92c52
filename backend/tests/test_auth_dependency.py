"""Tests for the admin auth dependency."""

from datetime import timedelta

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from gemvault.database import get_db
from gemvault.dependencies.auth import get_current_admin
from gemvault.models.admin import Admin
from gemvault.services.auth_service import AuthService


@pytest.fixture
def test_app(session_maker):
    """Create test app with protected route."""
    app = FastAPI()

    def override_get_db():
        db = session_maker()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    @app.get("/protected")
    def protected_route(admin: Admin = Depends(get_current_admin)):
        return {"admin_id": admin.id, "username": admin.username}

    db = session_maker()
    admin = Admin(username="curator", password_hash="hash")
    db.add(admin)
    db.commit()
    admin_id = admin.id
    db.close()

    return TestClient(app), admin_id


def test_protected_route_with_valid_token(test_app):
    client, admin_id = test_app
    token = AuthService.create_access_token(admin_id, "curator")

    response = client.get("/protected", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json() == {"admin_id": admin_id, "username": "curator"}


def test_protected_route_without_token(test_app):
    client, _ = test_app
    response = client.get("/protected")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_protected_route_with_expired_token(test_app):
    client, admin_id = test_app
    token = AuthService.create_access_token(admin_id, "curator", expires_delta=timedelta(minutes=-5))

    response = client.get("/protected", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired token"


def test_protected_route_for_missing_admin(test_app):
    client, admin_id = test_app
    token = AuthService.create_access_token(admin_id + 100, "ghost")

    response = client.get("/protected", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Admin not found"
