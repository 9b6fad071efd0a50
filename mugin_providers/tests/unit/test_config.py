"""Vendor config merge, project keys and the vendor catalogue."""

from __future__ import annotations

import pytest

from mugin_providers.config import get_model, get_vendor_config, reset_config_cache
from mugin_providers.config.app_config import get_app_config
from mugin_providers.config.env import (
    is_placeholder,
    list_vendor_projects,
    resolve_vendor_key,
    vendor_key_env_name,
)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("MUGIN_CONFIG_FILE", "DOTENV_FILE"):
        monkeypatch.delenv(name, raising=False)
    for vendor in ("OPENAI", "MISTRAL", "OLLAMA"):
        for suffix in ("MODEL", "BASE_URL", "HOST"):
            monkeypatch.delenv(f"{vendor}_{suffix}", raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, False),
        ("sk-live", False),
        ("PLACEHOLDER", True),
        ("changeme", True),
        ("sk-example-key", True),
        (" test_key", True),
    ],
)
def test_is_placeholder(value, expected):
    assert is_placeholder(value) is expected  # nosec B101


def test_project_keys():
    env = {
        "OPENAI_API_KEY_PROJECT_DEFAULT": "sk-1",
        "OPENAI_API_KEY_PROJECT_RESEARCH": "sk-2",
        "OPENAI_API_KEY_PROJECT_EMPTY": "",
        "MISTRAL_API_KEY_PROJECT_DEFAULT": "changeme",
    }
    assert vendor_key_env_name("openai", "research") == "OPENAI_API_KEY_PROJECT_RESEARCH"  # nosec B101
    assert resolve_vendor_key("OPENAI", None, env) == "sk-1"  # nosec B101
    assert resolve_vendor_key("MISTRAL", "DEFAULT", env) is None  # nosec B101
    assert list_vendor_projects("OPENAI", env) == ["DEFAULT", "RESEARCH"]  # nosec B101


def test_app_config_enables_vendors_from_environment():
    config = get_app_config({"MISTRAL_API_KEY_PROJECT_DEFAULT": "key", "OLLAMA_HOST": "http://gpu:11434", "OLLAMA_MODEL": "qwen3"})
    assert set(config.enabled_vendors()) == {"MISTRAL", "OLLAMA"}  # nosec B101
    assert config.vendor("openai").enabled is False  # nosec B101
    assert [m.id for m in config.vendor("OLLAMA").models] == ["qwen3"]  # nosec B101
    assert config.to_dict()["name"] == "Mugin"  # nosec B101


def test_defaults_env_and_overrides(monkeypatch):
    assert get_model("openai") == "gpt-4.1"  # nosec B101
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o")
    assert get_vendor_config("OPENAI")["model"] == "gpt-4o"  # nosec B101
    cfg = get_vendor_config("openai", {"model": "gpt-5.2", "base_url": None})
    assert cfg["model"] == "gpt-5.2" and "base_url" not in cfg  # nosec B101


def test_external_yaml_file(monkeypatch, tmp_path):
    path = tmp_path / "mugin.yaml"
    path.write_text("ollama:\n  host: http://gpu-box:11434\n  model: qwen3\n", encoding="utf-8")
    monkeypatch.setenv("MUGIN_CONFIG_FILE", str(path))
    cfg = get_vendor_config("ollama")
    assert cfg == {"model": "qwen3", "host": "http://gpu-box:11434"}  # nosec B101


def test_env_beats_external_file(monkeypatch, tmp_path):
    path = tmp_path / "mugin.json"
    path.write_text('{"mistral": {"base_url": "https://file.example"}}', encoding="utf-8")
    monkeypatch.setenv("MUGIN_CONFIG_FILE", str(path))
    monkeypatch.setenv("MISTRAL_BASE_URL", "https://env.example")
    assert get_vendor_config("mistral")["base_url"] == "https://env.example"  # nosec B101


def test_dotenv_file_is_loaded(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("# comment\nOPENAI_MODEL='gpt-4o'\n", encoding="utf-8")
    try:
        assert get_model("openai") == "gpt-4o"  # nosec B101
    finally:
        monkeypatch.delenv("OPENAI_MODEL", raising=False)
