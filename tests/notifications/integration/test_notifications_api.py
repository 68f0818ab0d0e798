"""Integration tests for the WhatsApp settings endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from notifications.api.routes import router


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(router)
    return TestClient(app)


def _configure(client, store_id="store-001", **overrides):
    body = {"store_name": "Kala Threads", "auth_key": "msg91-secret-9876", "whatsapp_number": "919999999999"}
    body.update(overrides)
    return client.put(f"/notifications/stores/{store_id}/whatsapp", json=body)


class TestConfigureEndpoint:
    def test_configure_and_read_back_masked(self, client):
        response = _configure(client)
        assert response.status_code == 200
        assert "profile_id" in response.json()

        data = client.get("/notifications/stores/store-001/whatsapp").json()
        assert data["auth_key"] == "••••••••9876"
        assert data["whatsapp_number"] == "919999999999"
        assert data["credentials_verified"] is False
        assert data["whatsapp_notifications_enabled"] is True

    def test_invalid_number_rejected(self, client):
        assert _configure(client, whatsapp_number="98-76").status_code == 422

    def test_unknown_store(self, client):
        assert client.get("/notifications/stores/nope/whatsapp").status_code == 404


class TestVerifyAndToggleEndpoints:
    def test_verify(self, client):
        _configure(client)
        assert client.post("/notifications/stores/store-001/whatsapp/verify").status_code == 200
        assert client.get("/notifications/stores/store-001/whatsapp").json()["credentials_verified"] is True

    def test_verify_unknown_store(self, client):
        assert client.post("/notifications/stores/nope/whatsapp/verify").status_code == 404

    def test_toggle(self, client):
        _configure(client)
        response = client.put("/notifications/stores/store-001/whatsapp/enabled", json={"enabled": False})
        assert response.json() == {"status": "ok"}
        assert client.get("/notifications/stores/store-001/whatsapp").json()["whatsapp_notifications_enabled"] is False
