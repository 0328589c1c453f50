"""
Tests for `config.load_settings` and `config.required_presence`.
"""

import pytest
from pydantic import ValidationError

from config import REQUIRED_ENV_VARS, load_settings, required_presence
from core.errors import ConfigMissingError


def test_load_settings_defaults(env):
    settings = load_settings(env)
    assert settings.openai_api_key == "sk-test"
    assert settings.openai_assistant_id == "asst_test"
    assert settings.openai_vector_store_id == "vs_test"
    assert settings.port == 3000
    assert settings.openai_timeout_s == 30.0
    assert settings.status_probe_cache_s == 0.0
    assert settings.cors_allow_origins == ("*",)
    assert settings.kb_provider == "openai"


@pytest.mark.parametrize("name", REQUIRED_ENV_VARS)
def test_missing_required_variable(name, env):
    env = dict(env)
    del env[name]
    with pytest.raises(ConfigMissingError) as excinfo:
        load_settings(env)
    assert excinfo.value.missing == [name]
    assert name in str(excinfo.value)


def test_empty_values_count_as_missing_and_all_are_reported():
    with pytest.raises(ConfigMissingError) as excinfo:
        load_settings({"OPENAI_API_KEY": "  "})
    assert excinfo.value.missing == list(REQUIRED_ENV_VARS)


def test_optional_values_are_parsed(env):
    env = dict(
        env,
        PORT="8081",
        OPENAI_TIMEOUT_S="12.5",
        STATUS_PROBE_CACHE_S="10",
        CORS_ALLOW_ORIGINS="https://shop.example.com, https://admin.example.com",
        KB_PROVIDER="Mock",
        LOG_LEVEL="debug",
    )
    settings = load_settings(env)
    assert settings.port == 8081
    assert settings.openai_timeout_s == 12.5
    assert settings.status_probe_cache_s == 10.0
    assert settings.cors_allow_origins == ("https://shop.example.com", "https://admin.example.com")
    assert settings.kb_provider == "mock"
    assert settings.log_config["level"] == "debug"


def test_invalid_port_falls_back_to_default(env):
    settings = load_settings(dict(env, PORT="not-a-port"))
    assert settings.port == 3000


def test_settings_are_immutable(env):
    settings = load_settings(env)
    with pytest.raises(ValidationError):
        settings.openai_vector_store_id = "vs_other"


def test_required_presence(env):
    settings = load_settings(env)
    assert required_presence(settings) == {
        "OPENAI_API_KEY": True,
        "OPENAI_ASSISTANT_ID": True,
        "OPENAI_VECTOR_STORE_ID": True,
    }
