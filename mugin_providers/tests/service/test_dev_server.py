"""Dev server entry point reads host, port and reload from the environment."""

from __future__ import annotations

from mugin_providers.service import dev_server


def test_main_passes_env_settings_to_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(dev_server.uvicorn, "run", lambda app, **kw: calls.append((app, kw)))
    monkeypatch.setenv("MUGIN_SERVICE_HOST", "0.0.0.0")
    monkeypatch.setenv("MUGIN_SERVICE_PORT", "not-a-port")
    monkeypatch.setenv("MUGIN_SERVICE_RELOAD", "false")
    dev_server.main()
    assert calls == [("mugin_providers.service.app:app", {"host": "0.0.0.0", "port": 8091, "reload": False})]  # nosec B101


def test_defaults(monkeypatch):
    calls = []
    monkeypatch.setattr(dev_server.uvicorn, "run", lambda app, **kw: calls.append(kw))
    for name in ("MUGIN_SERVICE_HOST", "MUGIN_SERVICE_PORT", "MUGIN_SERVICE_RELOAD"):
        monkeypatch.delenv(name, raising=False)
    dev_server.main()
    assert calls == [{"host": "127.0.0.1", "port": 8091, "reload": True}]  # nosec B101
