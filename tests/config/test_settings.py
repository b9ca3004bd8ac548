from __future__ import annotations

import logging

import pytest

from hotzone.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_actor_config,
    get_log_level,
    parse_user_id,
)


def test_log_level_defaults_to_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("HOTZONE_LOG_LEVEL", raising=False)

    assert get_log_level() == logging.INFO


def test_log_level_is_case_insensitive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOTZONE_LOG_LEVEL", " debug ")

    assert get_log_level() == logging.DEBUG


def test_unknown_log_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOTZONE_LOG_LEVEL", "chatty")

    with pytest.raises(ConfigurationError, match="chatty"):
        get_log_level()


def test_explicit_user_id_wins_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOTZONE_USER_ID", "7")

    assert get_actor_config("3").user_id == 3


def test_user_id_falls_back_to_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOTZONE_USER_ID", "7")

    assert get_actor_config().user_id == 7


def test_missing_user_id_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("HOTZONE_USER_ID", raising=False)

    with pytest.raises(MissingConfigurationError):
        get_actor_config()


@pytest.mark.parametrize("value", ["abc", "0", "-4", "1.5"])
def test_invalid_user_ids_are_rejected(value: str) -> None:
    with pytest.raises(ConfigurationError, match="Invalid user id"):
        parse_user_id(value)
