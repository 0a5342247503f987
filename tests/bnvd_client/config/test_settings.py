from __future__ import annotations

import pytest
from pydantic import ValidationError

from bnvd_client.config.settings import AppConfig


def test_defaults():
    config = AppConfig(base_url="https://bnvd.example.org")
    assert config.base_url == "https://bnvd.example.org"
    assert config.timeout_seconds == 30
    assert config.headers == {"Content-Type": "application/json"}


def test_extra_headers_are_merged_over_default():
    config = AppConfig(base_url="http://h", headers={"Authorization": "Bearer t"})
    assert config.headers == {"Content-Type": "application/json", "Authorization": "Bearer t"}


def test_caller_header_wins_on_collision():
    config = AppConfig(base_url="http://h", headers={"Content-Type": "text/plain"})
    assert config.headers == {"Content-Type": "text/plain"}


def test_base_url_is_kept_verbatim():
    assert AppConfig(base_url="http://h/").base_url == "http://h/"


def test_base_url_is_required():
    with pytest.raises(ValidationError):
        AppConfig()


@pytest.mark.parametrize("timeout", [0, -5])
def test_timeout_must_be_positive(timeout):
    with pytest.raises(ValidationError):
        AppConfig(base_url="http://h", timeout_seconds=timeout)


def test_unknown_field_is_rejected():
    with pytest.raises(ValidationError):
        AppConfig(base_url="http://h", retries=3)


def test_config_is_frozen():
    config = AppConfig(base_url="http://h")
    with pytest.raises(ValidationError):
        config.timeout_seconds = 5


def test_loads_from_environment(monkeypatch):
    monkeypatch.setenv("BNVD_BASE_URL", "http://env-host")
    monkeypatch.setenv("BNVD_TIMEOUT_SECONDS", "12")
    monkeypatch.setenv("BNVD_HEADERS", '{"X-Api-Key": "k"}')
    config = AppConfig()
    assert config.base_url == "http://env-host"
    assert config.timeout_seconds == 12
    assert config.headers == {"Content-Type": "application/json", "X-Api-Key": "k"}


def test_constructor_wins_over_environment(monkeypatch):
    monkeypatch.setenv("BNVD_BASE_URL", "http://env-host")
    assert AppConfig(base_url="http://arg-host").base_url == "http://arg-host"


def test_caller_header_wins_regardless_of_case():
    config = AppConfig(base_url="http://h", headers={"content-type": "text/plain", "X-Trace": "1"})
    assert config.headers == {"content-type": "text/plain", "X-Trace": "1"}
