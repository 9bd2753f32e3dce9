from __future__ import annotations

import logging

import pytest

from todo_api.config import Settings
from todo_api.errors import ConfigError


def test_defaults() -> None:
    settings = Settings.from_env({})

    assert settings == Settings()
    assert settings.host == "127.0.0.1"
    assert settings.port == 8000
    assert settings.log_level_number == logging.INFO
    assert settings.log_file is None
    assert settings.rewrite_redirect_status is None


def test_reads_prefixed_variables() -> None:
    settings = Settings.from_env(
        {
            "TODO_API_HOST": "0.0.0.0",
            "TODO_API_PORT": "9090",
            "TODO_API_LOG_LEVEL": "warning",
            "TODO_API_LOG_FILE": "/tmp/todo-api.log",
            "TODO_API_REWRITE_REDIRECT": "302",
        }
    )

    assert settings == Settings(
        host="0.0.0.0",
        port=9090,
        log_level="WARNING",
        log_file="/tmp/todo-api.log",
        rewrite_redirect_status=302,
    )


def test_debug_forces_debug_level() -> None:
    settings = Settings.from_env({"TODO_API_LOG_LEVEL": "ERROR", "TODO_API_DEBUG": "1"})
    assert settings.log_level == "DEBUG"


def test_blank_values_use_defaults() -> None:
    assert Settings.from_env({"TODO_API_PORT": "  ", "TODO_API_HOST": ""}) == Settings()


@pytest.mark.parametrize(
    "env",
    [
        {"TODO_API_PORT": "eighty"},
        {"TODO_API_PORT": "0"},
        {"TODO_API_PORT": "70000"},
        {"TODO_API_LOG_LEVEL": "LOUD"},
        {"TODO_API_REWRITE_REDIRECT": "200"},
        {"TODO_API_REWRITE_REDIRECT": "soon"},
    ],
)
def test_invalid_values_raise(env: dict) -> None:
    with pytest.raises(ConfigError):
        Settings.from_env(env)
