"""
Pytest tests for settings loading: defaults, env, CLI precedence and validation.
"""

from __future__ import annotations

import pytest

from subgraph_monitor.config.env import DEFAULT_RPC_ENDPOINT, DEFAULT_SUBGRAPH_ENDPOINT
from subgraph_monitor.config.settings import Settings, get_settings
from subgraph_monitor.core.exceptions import ConfigError

ENV_VARS = (
    "SUBGRAPH_ENDPOINT",
    "RPC_ENDPOINT",
    "API_HOST",
    "API_PORT",
    "CHECK_INTERVAL_SEC",
    "REQUEST_TIMEOUT_SEC",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """No ambient env or .env file leaks into these tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("subgraph_monitor.config.settings.load_monitor_env", lambda: None)


def test_defaults():
    s = get_settings([])
    assert s.subgraph_url == DEFAULT_SUBGRAPH_ENDPOINT
    assert s.rpc_url == DEFAULT_RPC_ENDPOINT
    assert s.api_port == 3000
    assert s.api_host == "0.0.0.0"
    assert s.interval_sec == 60.0
    assert s.request_timeout_sec is None
    assert s.effective_request_timeout_sec == 60.0


def test_env_overrides_defaults(monkeypatch):
    monkeypatch.setenv("SUBGRAPH_ENDPOINT", "http://sg.local/q")
    monkeypatch.setenv("RPC_ENDPOINT", "http://rpc.local")
    monkeypatch.setenv("API_PORT", "8080")
    monkeypatch.setenv("CHECK_INTERVAL_SEC", "15")
    monkeypatch.setenv("REQUEST_TIMEOUT_SEC", "4.5")
    s = get_settings([])
    assert s.subgraph_url == "http://sg.local/q"
    assert s.rpc_url == "http://rpc.local"
    assert s.api_port == 8080
    assert s.interval_sec == 15.0
    assert s.effective_request_timeout_sec == 4.5


def test_cli_overrides_env(monkeypatch):
    monkeypatch.setenv("API_PORT", "8080")
    monkeypatch.setenv("RPC_ENDPOINT", "http://rpc.env")
    s = get_settings(["-p", "9000", "-e", "http://sg.cli", "-i", "30"])
    assert s.api_port == 9000
    assert s.subgraph_url == "http://sg.cli"
    assert s.rpc_url == "http://rpc.env"
    assert s.interval_sec == 30.0
    assert s.effective_request_timeout_sec == 30.0


def test_long_flags():
    s = get_settings(["--endpoint", "http://a", "--rpc", "http://b", "--port", "1234", "--request-timeout", "2"])
    assert (s.subgraph_url, s.rpc_url, s.api_port, s.request_timeout_sec) == ("http://a", "http://b", 1234, 2.0)


@pytest.mark.parametrize(
    "name,value",
    [
        ("API_PORT", "http"),
        ("API_PORT", "70000"),
        ("CHECK_INTERVAL_SEC", "0"),
        ("CHECK_INTERVAL_SEC", "soon"),
        ("CHECK_INTERVAL_SEC", "nan"),
        ("CHECK_INTERVAL_SEC", "inf"),
        ("REQUEST_TIMEOUT_SEC", "-1"),
        ("REQUEST_TIMEOUT_SEC", "nan"),
        ("REQUEST_TIMEOUT_SEC", "inf"),
        ("LOG_LEVEL", "verbose"),
    ],
)
def test_invalid_env_raises_config_error(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError):
        get_settings([])


def test_validate_rejects_empty_endpoint():
    with pytest.raises(ConfigError):
        Settings(subgraph_url="").validate()


def test_main_exits_on_config_error(monkeypatch):
    """Invalid configuration aborts startup with exit status 1."""
    from subgraph_monitor import main as main_mod

    monkeypatch.setenv("API_PORT", "not-a-port")
    with pytest.raises(SystemExit) as exc:
        main_mod.main([])
    assert exc.value.code == 1


@pytest.mark.parametrize("argv", [["-i", "nan"], ["-i", "inf"], ["--request-timeout", "nan"]])
def test_non_finite_cli_values_rejected(argv):
    with pytest.raises(ConfigError, match="finite"):
        get_settings(argv)


def test_log_level_from_env_and_cli(monkeypatch):
    assert get_settings([]).log_level == "info"
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    assert get_settings([]).log_level == "warning"
    assert get_settings(["--log-level", "DEBUG"]).log_level == "debug"


def test_main_passes_validated_log_level_to_server(monkeypatch):
    """uvicorn receives the settings' log level, never the raw environment value."""
    import uvicorn

    from subgraph_monitor import main as main_mod

    seen = {}
    monkeypatch.setenv("LOG_LEVEL", "Warning")
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: seen.update(kwargs))
    monkeypatch.setattr(main_mod, "configure_structlog", lambda level=None, fmt=None: seen.setdefault("structlog", level))
    main_mod.main(["-p", "3100"])
    assert seen["log_level"] == "warning"
    assert seen["structlog"] == "warning"
    assert seen["port"] == 3100


def test_main_exits_on_invalid_log_level(monkeypatch):
    from subgraph_monitor import main as main_mod

    monkeypatch.setenv("LOG_LEVEL", "verbose")
    with pytest.raises(SystemExit) as exc:
        main_mod.main([])
    assert exc.value.code == 1
