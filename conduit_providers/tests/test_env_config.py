from __future__ import annotations

import json

import pytest

from conduit_providers.base.errors import ConfigurationError
from conduit_providers.config import DEFAULTS, get_model, get_provider_config, reset_config_cache
from conduit_providers.config.env import (
    ENV_ALIASES,
    ENV_MAP,
    get_env_var_candidates,
    get_env_var_name,
    is_placeholder,
    resolve_provider_key,
)


def test_env_map_contains_expected_keys():
    assert ENV_MAP == {"nousresearch": "NOUSRESEARCH_API_KEY", "deepseek": "DEEPSEEK_API_KEY"}  # nosec B101
    assert get_env_var_name("NousResearch") == "NOUSRESEARCH_API_KEY"  # nosec B101
    assert get_env_var_name("unknown") is None  # nosec B101


def test_candidates_list_canonical_first_without_duplicates():
    assert list(get_env_var_candidates("nousresearch")) == list(ENV_ALIASES["nousresearch"])  # nosec B101
    assert list(get_env_var_candidates("deepseek")) == ["DEEPSEEK_API_KEY"]  # nosec B101
    assert list(get_env_var_candidates("nope")) == []  # nosec B101


def test_is_placeholder():
    assert is_placeholder("your-key-placeholder")  # nosec B101
    assert is_placeholder("CHANGEME")  # nosec B101
    assert is_placeholder("test_123")  # nosec B101
    assert not is_placeholder("sk-live-123")  # nosec B101
    assert not is_placeholder(None)  # nosec B101


def test_resolve_provider_key_skips_placeholders_and_uses_alias():
    env = {"NOUSRESEARCH_API_KEY": "changeme", "NOUS_API_KEY": "sk-nous"}
    assert resolve_provider_key("nousresearch", env) == ("sk-nous", "NOUS_API_KEY")  # nosec B101
    assert resolve_provider_key("deepseek", env) == (None, None)  # nosec B101


def test_defaults_are_returned_as_copies():
    cfg = get_provider_config("nousresearch")
    cfg["retry"]["max_attempts"] = 99
    assert get_provider_config("nousresearch")["retry"]["max_attempts"] == 3  # nosec B101
    assert DEFAULTS["nousresearch"]["retry"]["max_attempts"] == 3  # nosec B101
    assert cfg["base_url"] == "https://inference-api.nousresearch.com/v1"  # nosec B101


def test_env_overrides_defaults(monkeypatch):
    monkeypatch.setenv("DEEPSEEK_MODEL", "deepseek-reasoner")
    monkeypatch.setenv("DEEPSEEK_BASE_URL", "https://gateway.internal/v1")
    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-ds")

    cfg = get_provider_config("deepseek")

    assert cfg["model"] == "deepseek-reasoner"  # nosec B101
    assert cfg["base_url"] == "https://gateway.internal/v1"  # nosec B101
    assert cfg["api_key"] == "sk-ds"  # nosec B101
    assert get_model("deepseek") == "deepseek-reasoner"  # nosec B101


def test_alias_key_is_used_when_canonical_missing(monkeypatch):
    monkeypatch.setenv("NOUS_API_KEY", "sk-alias")
    assert get_provider_config("nousresearch")["api_key"] == "sk-alias"  # nosec B101


def test_json_file_then_env_then_overrides(monkeypatch, tmp_path):
    path = tmp_path / "providers.json"
    path.write_text(
        json.dumps({"nousresearch": {"model": "Hermes-4-70B", "api_key": "sk-file", "retry": {"max_attempts": 5}}})
    )
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))
    monkeypatch.setenv("NOUSRESEARCH_API_KEY", "sk-env")

    cfg = get_provider_config("nousresearch", {"model": "Hermes-4-405B", "base_url": None})

    assert cfg["model"] == "Hermes-4-405B"  # nosec B101
    assert cfg["api_key"] == "sk-env"  # nosec B101
    assert cfg["retry"] == {"max_attempts": 5, "delay_base": 1.0, "max_delay": 10.0}  # nosec B101
    assert cfg["base_url"] == "https://inference-api.nousresearch.com/v1"  # nosec B101


def test_yaml_file_is_supported(monkeypatch, tmp_path):
    pytest.importorskip("yaml")
    path = tmp_path / "providers.yaml"
    path.write_text("deepseek:\n  model: deepseek-reasoner\n  retry:\n    delay_base: 0.25\n")
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))

    cfg = get_provider_config("deepseek")

    assert cfg["model"] == "deepseek-reasoner"  # nosec B101
    assert cfg["retry"]["delay_base"] == 0.25  # nosec B101
    assert cfg["retry"]["max_attempts"] == 3  # nosec B101


def test_missing_config_file_is_ignored(monkeypatch, tmp_path):
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(tmp_path / "nope.json"))
    assert "model" not in get_provider_config("deepseek")  # nosec B101


@pytest.mark.parametrize("content", ["[1, 2, 3]", "nousresearch: [unclosed"])
def test_unusable_config_file_is_a_configuration_error(monkeypatch, tmp_path, content):
    pytest.importorskip("yaml")
    path = tmp_path / "providers.yaml"
    path.write_text(content)
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))

    with pytest.raises(ConfigurationError):
        get_provider_config("nousresearch")


def test_dotenv_file_replaces_placeholder_values(monkeypatch, tmp_path):
    dotenv = tmp_path / ".env"
    dotenv.write_text("# keys\nexport DEEPSEEK_API_KEY='sk-dotenv'\nNOUSRESEARCH_API_KEY=sk-nous\n")
    monkeypatch.setenv("DOTENV_FILE", str(dotenv))
    monkeypatch.setenv("NOUSRESEARCH_API_KEY", "placeholder")
    monkeypatch.setenv("DEEPSEEK_API_KEY", "placeholder")
    reset_config_cache()

    assert get_provider_config("deepseek")["api_key"] == "sk-dotenv"  # nosec B101
    assert get_provider_config("nousresearch")["api_key"] == "sk-nous"  # nosec B101
