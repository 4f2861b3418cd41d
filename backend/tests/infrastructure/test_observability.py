"""Observability — JSON log format, request counter, metrics snapshot."""

import json
import logging
import sys
import threading

import pytest

from records_api.infrastructure.observability import (
    JSONFormatter, ProcessMetrics, RequestCounter,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "records_api.test", logging.INFO, __file__, 1, "GET /health - 200", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "records_api.test"
    assert log["message"] == "GET /health - 200"
    assert "timestamp" in log


def test_json_formatter_surfaces_request_extras():
    log = json.loads(JSONFormatter().format(
        _record(method="GET", status_code=200, duration_ms=1.5, password="x"),
    ))
    assert log["method"] == "GET"
    assert log["status_code"] == 200
    assert log["duration_ms"] == 1.5
    assert "password" not in log


def test_counter_is_monotonic():
    counter = RequestCounter()
    assert [counter.increment() for _ in range(3)] == [1, 2, 3]
    assert counter.value == 3


def test_counter_is_thread_safe():
    counter = RequestCounter()

    def bump():
        for _ in range(1000):
            counter.increment()

    threads = [threading.Thread(target=bump) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert counter.value == 8000


def test_snapshot_reports_state_passed_in():
    metrics = ProcessMetrics()
    metrics.requests.increment()
    snap = metrics.snapshot("disconnected")
    assert snap["database"] == "disconnected"
    assert snap["requests"] == 1
    assert snap["uptime"] >= 0
    assert set(snap["memory"]) == {"rssBytes", "maxRssBytes", "gcGenerationCounts"}
    assert len(snap["memory"]["gcGenerationCounts"]) == 3


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="reads /proc")
def test_current_rss_is_reported_on_linux():
    memory = ProcessMetrics().memory()
    assert memory["rssBytes"] > 0
