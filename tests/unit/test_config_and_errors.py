# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
import socket
import ssl
from pathlib import Path

import httpx

from clairguard import config
from clairguard.config import DEFAULT_CLAIRCTL_URL, DEFAULT_USER_AGENT
from clairguard.errors import (
    CommandError,
    ErrorCategory,
    ResourceConflictError,
    categorize_exception,
    error_category_to_reason,
)
from clairguard.log import setup_logging
from clairguard.models import CommandResult


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("CLAIRGUARD_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("CLAIRGUARD_HTTP_RETRIES", "4")
    monkeypatch.setenv("CLAIRGUARD_HTTP_BACKOFF", "1.5")
    monkeypatch.setenv("CLAIRGUARD_HTTP_INITIAL_DELAY", "0.1")
    monkeypatch.setenv("CLAIRGUARD_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("CLAIRGUARD_HTTP_VERIFY_SSL", "0")

    settings = config.load_http_settings()

    assert settings.timeout == 5.5
    assert settings.max_retries == 4
    assert settings.backoff_factor == 1.5
    assert settings.initial_delay == 0.1
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.verify_ssl is False


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("CLAIRGUARD_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("CLAIRGUARD_HTTP_RETRIES", "ten")
    monkeypatch.delenv("CLAIRGUARD_USER_AGENT", raising=False)

    settings = config.load_http_settings()

    assert settings.timeout == config.HttpSettings.timeout
    assert settings.max_retries == config.HttpSettings.max_retries
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_clair_settings_defaults(monkeypatch):
    for name in ("CLAIRGUARD_WORKDIR", "CLAIRGUARD_CLAIRCTL_URL", "CLAIRGUARD_SCANNER_IP", "CLAIRGUARD_DB_NAME"):
        monkeypatch.delenv(name, raising=False)
    settings = config.load_clair_settings()
    assert settings.db_name == "db"
    assert settings.clair_name == "clair"
    assert settings.clairctl_url == DEFAULT_CLAIRCTL_URL
    assert settings.scanner_ip is None
    assert settings.threshold == "High"


def test_clair_settings_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("CLAIRGUARD_WORKDIR", str(tmp_path))
    monkeypatch.setenv("CLAIRGUARD_DB_NAME", "clair-db")
    monkeypatch.setenv("CLAIRGUARD_SETTLE_SECONDS", "2.5")
    monkeypatch.setenv("CLAIRGUARD_SCANNER_IP", "10.0.0.5")
    monkeypatch.setenv("CLAIRGUARD_LOCAL_IMAGES", "no")

    settings = config.load_clair_settings()

    assert settings.work_path == Path(tmp_path).resolve()
    assert settings.db_name == "clair-db"
    assert settings.settle_seconds == 2.5
    assert settings.scanner_ip == "10.0.0.5"
    assert settings.local_images is False


def test_clair_settings_negative_settle_falls_back(monkeypatch):
    monkeypatch.setenv("CLAIRGUARD_SETTLE_SECONDS", "-3")
    assert config.load_clair_settings().settle_seconds == config.ClairSettings.settle_seconds


def test_work_path_follows_cwd_when_unset(monkeypatch, tmp_path):
    settings = config.ClairSettings()
    monkeypatch.chdir(tmp_path)
    assert settings.work_path == Path(tmp_path).resolve()


def test_categorize_exception_variants():
    request = httpx.Request("GET", "https://example.invalid/bin")
    response = httpx.Response(404, request=request)

    assert categorize_exception(httpx.ReadTimeout("slow")) == ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused")) == ErrorCategory.CONNECTION_ERROR
    assert (
        categorize_exception(httpx.HTTPStatusError("not found", request=request, response=response))
        == ErrorCategory.HTTP_ERROR
    )
    assert categorize_exception(ssl.SSLError("bad cert")) == ErrorCategory.SSL_ERROR
    assert categorize_exception(socket.gaierror("no such host")) == ErrorCategory.DNS_ERROR
    assert categorize_exception(ConnectionResetError()) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ValueError("odd")) == ErrorCategory.UNKNOWN_ERROR


def test_error_category_to_reason():
    assert error_category_to_reason(ErrorCategory.TIMEOUT) == "Network timeout during download"
    assert error_category_to_reason(ErrorCategory.NONE) == ""
    assert error_category_to_reason(None) == ""


def test_command_error_includes_raw_output():
    result = CommandResult(["docker", "run", "x"], 125, stderr="Unable to find image 'x:latest' locally\n")
    err = CommandError(result)
    assert err.returncode == 125
    assert "exit code 125" in str(err)
    assert "Unable to find image" in str(err)


def test_conflict_error_is_actionable(tmp_path):
    err = ResourceConflictError("clairctl", tmp_path / "clairctl")
    assert "directory" in str(err)
    assert "remove or rename" in str(err)
    assert err.name == "clairctl"


def test_relative_workdir_resolves_to_absolute(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    settings = config.ClairSettings(workdir="rel")
    assert settings.work_path.is_absolute()
    assert settings.work_path == Path(tmp_path).resolve() / "rel"


def test_setup_logging_reads_env_at_call_time(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    monkeypatch.setenv("CLAIRGUARD_LOG_LEVEL", "debug")
    setup_logging()
    monkeypatch.setenv("CLAIRGUARD_LOG_LEVEL", "error")
    setup_logging()
    setup_logging("info")
    monkeypatch.delenv("CLAIRGUARD_LOG_LEVEL")
    setup_logging()

    assert [call["level"] for call in calls] == [logging.DEBUG, logging.ERROR, logging.INFO, logging.WARNING]
