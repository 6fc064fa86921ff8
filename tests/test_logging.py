"""
Pytest tests for monitor_logging: JSON line shape, stream routing and level filtering.
"""

from __future__ import annotations

import json

import pytest

from subgraph_monitor.monitor_logging import configure_structlog, get_logger


@pytest.fixture
def json_logs():
    """Debug-level JSON logging for the test; restore the import-time configuration after."""
    configure_structlog(level="debug", fmt="json")
    yield
    configure_structlog()


def _lines(text: str) -> list[dict]:
    return [json.loads(line) for line in text.splitlines() if line.strip()]


def test_info_event_renders_json_on_stdout(json_logs, capsys):
    get_logger("subgraph_monitor.poller.runner").info("subgraph_check", healthy=True, blocks_behind=0)
    out, err = capsys.readouterr()
    assert err == ""
    [line] = _lines(out)
    assert line["event_type"] == "subgraph_check"
    assert line["logger"] == "subgraph_monitor.poller.runner"
    assert line["level"] == "info"
    assert line["service"] == "subgraph-monitor"
    assert line["healthy"] is True
    assert "event" not in line
    assert line["timestamp"].endswith("+00:00")


def test_warnings_and_errors_go_to_stderr(json_logs, capsys):
    logger = get_logger("subgraph_monitor.upstream.client")
    logger.warning("chain_head_query_failed", error_kind="UpstreamTransportError")
    logger.error("poll_cycle_failed", error="boom")
    out, err = capsys.readouterr()
    assert out == ""
    assert [(line["event_type"], line["level"]) for line in _lines(err)] == [
        ("chain_head_query_failed", "warning"),
        ("poll_cycle_failed", "error"),
    ]


def test_reconfigure_applies_to_existing_loggers(json_logs, capsys):
    """A module-level logger created before main() reconfigures follows the new level."""
    logger = get_logger("main")
    configure_structlog(level="warning", fmt="json")
    logger.info("monitor_starting")
    logger.warning("still_shown")
    out, err = capsys.readouterr()
    assert out == ""
    assert [line["event_type"] for line in _lines(err)] == ["still_shown"]


def test_trace_level_maps_to_debug():
    import logging

    from subgraph_monitor.monitor_logging.logger import resolve_level

    assert resolve_level("trace") == logging.DEBUG
    assert resolve_level("WARNING") == logging.WARNING
    assert resolve_level("nonsense") == logging.INFO
