"""Unit tests for the RedmineConfig class."""

import dataclasses
import os
from unittest.mock import patch

import pytest

from mcp_redmine.redmine.config import RedmineConfig


def test_from_env_success():
    """Test that from_env successfully creates a config from environment variables."""
    with patch.dict(
        os.environ,
        {
            "REDMINE_URL": "https://redmine.example.com",
            "REDMINE_API_KEY": "secret",
            "REDMINE_TIMEOUT": "12.5",
            "REDMINE_DEFAULT_PROJECT_ID": "7",
        },
        clear=True,
    ):
        config = RedmineConfig.from_env()

    assert config.url == "https://redmine.example.com"
    assert config.api_key == "secret"
    assert config.timeout == 12.5
    assert config.ssl_verify is True
    assert config.default_project_id == 7
    assert config.http_proxy is None
    assert config.https_proxy is None


def test_from_env_defaults(mock_env_vars):
    config = RedmineConfig.from_env()

    assert config.timeout == 30.0
    assert config.default_project_id is None


@pytest.mark.parametrize(
    "env",
    [
        {"REDMINE_URL": "https://redmine.example.com"},
        {"REDMINE_API_KEY": "secret"},
        {},
    ],
)
def test_from_env_missing_required(env):
    """Test that from_env raises ValueError when URL or API key is missing."""
    with patch.dict(os.environ, env, clear=True):
        with pytest.raises(
            ValueError,
            match="Missing required REDMINE_URL or REDMINE_API_KEY environment variable",
        ):
            RedmineConfig.from_env()


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ("abc", "REDMINE_DEFAULT_PROJECT_ID must be a valid number if provided"),
        ("0", "REDMINE_DEFAULT_PROJECT_ID must be a positive integer"),
        ("-3", "REDMINE_DEFAULT_PROJECT_ID must be a positive integer"),
    ],
)
def test_from_env_invalid_default_project(mock_env_vars, raw, message):
    with patch.dict(os.environ, {"REDMINE_DEFAULT_PROJECT_ID": raw}):
        with pytest.raises(ValueError, match=message):
            RedmineConfig.from_env()


def test_from_env_empty_default_project_is_unset(mock_env_vars):
    with patch.dict(os.environ, {"REDMINE_DEFAULT_PROJECT_ID": "  "}):
        assert RedmineConfig.from_env().default_project_id is None


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ("soon", "REDMINE_TIMEOUT must be a number of seconds"),
        ("0", "REDMINE_TIMEOUT must be greater than zero"),
    ],
)
def test_from_env_invalid_timeout(mock_env_vars, raw, message):
    with patch.dict(os.environ, {"REDMINE_TIMEOUT": raw}):
        with pytest.raises(ValueError, match=message):
            RedmineConfig.from_env()


@pytest.mark.parametrize("value", ["false", "0", "no", "FALSE"])
def test_from_env_ssl_verify_disabled(mock_env_vars, value):
    with patch.dict(os.environ, {"REDMINE_SSL_VERIFY": value}):
        assert RedmineConfig.from_env().ssl_verify is False


def test_from_env_proxies(mock_env_vars):
    """Redmine-specific proxy variables win over the generic ones."""
    with patch.dict(
        os.environ,
        {
            "HTTP_PROXY": "http://generic:8080",
            "HTTPS_PROXY": "https://generic:8443",
            "REDMINE_HTTPS_PROXY": "https://redmine-proxy:8443",
        },
    ):
        config = RedmineConfig.from_env()

    assert config.http_proxy == "http://generic:8080"
    assert config.https_proxy == "https://redmine-proxy:8443"


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://redmine.example.com", "https://redmine.example.com/"),
        ("https://redmine.example.com/", "https://redmine.example.com/"),
        ("https://example.com/redmine", "https://example.com/redmine/"),
    ],
)
def test_base_url_has_single_trailing_slash(url, expected):
    assert RedmineConfig(url=url, api_key="k").base_url == expected


def test_is_auth_configured():
    assert RedmineConfig(url="https://r.example.com", api_key="k").is_auth_configured()
    assert not RedmineConfig(url="https://r.example.com", api_key="").is_auth_configured()


def test_config_is_frozen():
    config = RedmineConfig(url="https://r.example.com", api_key="k")
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.api_key = "other"  # type: ignore[misc]
