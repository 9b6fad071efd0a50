"""Health, vendor catalogue and chat-config CRUD routes."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from mugin_providers.config.app_config import get_app_config
from mugin_providers.persistence.memory import InMemoryChatConfigStore
from mugin_providers.service.app import create_app, get_app_config_dep


@pytest.fixture()
def client():
    app = create_app(store=InMemoryChatConfigStore())
    app.dependency_overrides[get_app_config_dep] = lambda: get_app_config(
        {"OPENAI_API_KEY_PROJECT_DEFAULT": "sk-real", "OPENAI_API_KEY_PROJECT_TEAM": "sk-team"}
    )
    return TestClient(app)


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200 and res.json() == {"ok": True}  # nosec B101


def test_vendors_lists_only_enabled(client):
    data = client.get("/api/vendors").json()
    assert data["ok"] is True and data["name"] == "Mugin"  # nosec B101
    assert list(data["vendors"]) == ["OPENAI"]  # nosec B101
    openai = data["vendors"]["OPENAI"]
    assert openai["projects"] == ["DEFAULT", "TEAM"]  # nosec B101
    assert {"id": "gpt-4.1"} in openai["models"]  # nosec B101


def test_seeded_configs_are_listed(client):
    ids = [c["_id"] for c in client.get("/api/chatconfigs").json()]
    assert ids == ["1000", "2000", "3000"]  # nosec B101


def test_config_crud_round(client):
    body = {"name": "Lokal", "vendorId": "ollama", "model": "llama3.2", "instructions": "Svar kort."}
    created = client.post("/api/chatconfigs", json=body).json()
    config_id = created["_id"]
    assert config_id and created["vendorId"] == "OLLAMA"  # nosec B101

    fetched = client.get(f"/api/chatconfigs/{config_id}").json()
    assert fetched["instructions"] == "Svar kort."  # nosec B101

    body["name"] = "Lokal 2"
    replaced = client.put(f"/api/chatconfigs/{config_id}", json=body).json()
    assert replaced["_id"] == config_id and replaced["name"] == "Lokal 2"  # nosec B101

    assert client.delete(f"/api/chatconfigs/{config_id}").json() == {"ok": True, "deleted": config_id}  # nosec B101
    assert client.get(f"/api/chatconfigs/{config_id}").status_code == 404  # nosec B101


def test_replace_unknown_config_is_404(client):
    body = {"vendorId": "OPENAI", "model": "gpt-4.1"}
    assert client.put("/api/chatconfigs/nope", json=body).status_code == 404  # nosec B101


def test_config_without_model_or_agent_is_400(client):
    res = client.post("/api/chatconfigs", json={"vendorId": "OPENAI"})
    assert res.status_code == 400  # nosec B101


def test_agent_config_is_accepted(client):
    res = client.post("/api/chatconfigs", json={"vendorId": "MISTRAL", "vendorAgent": {"id": "ag_123"}})
    assert res.status_code == 200  # nosec B101
    assert res.json()["vendorAgent"] == {"id": "ag_123"}  # nosec B101
