"""
TaskRunner against real QThreads.
"""

import gc
import time

import pytest
from PyQt6.QtTest import QTest

from reelview.core.api_client import TaskRunner


def _wait_until(condition, timeout_ms=3000):
    waited = 0
    while not condition() and waited < timeout_ms:
        QTest.qWait(20)
        waited += 20
    return condition()


@pytest.fixture(autouse=True)
def _drain_runners(qapp, monkeypatch):
    """Keep each test's runners alive until their threads finish, so no
    QThread outlives the test that started it."""
    runners = []
    original_init = TaskRunner.__init__

    def tracking_init(self, *args, **kwargs):
        original_init(self, *args, **kwargs)
        runners.append(self)

    monkeypatch.setattr(TaskRunner, "__init__", tracking_init)
    yield
    _wait_until(lambda: all(r.active_count == 0 for r in runners), timeout_ms=5000)


def test_result_is_delivered(qapp):
    runner = TaskRunner()
    results = []

    runner.run(lambda x: x * 2, lambda result, error: results.append((result, error)), 21)

    assert _wait_until(lambda: results and runner.active_count == 0)
    assert results == [(42, None)]


def test_error_is_delivered(qapp):
    runner = TaskRunner()
    results = []

    def fail():
        raise ValueError("boom")

    runner.run(fail, lambda result, error: results.append((result, error)))

    assert _wait_until(lambda: results)
    result, error = results[0]
    assert result is None
    assert isinstance(error, ValueError)


def test_shutdown_keeps_threads_that_are_still_running(qapp):
    runner = TaskRunner()
    results = []

    def slow():
        time.sleep(0.5)
        return "done"

    runner.run(slow, lambda result, error: results.append(result))

    assert runner.shutdown(wait_ms=20) == 1
    assert runner.active_count == 1
    gc.collect()

    assert _wait_until(lambda: results and runner.active_count == 0)
    assert results == ["done"]


def test_shutdown_after_completion_leaves_nothing(qapp):
    runner = TaskRunner()
    results = []

    runner.run(lambda: "ok", lambda result, error: results.append(result))
    assert _wait_until(lambda: results)

    assert runner.shutdown(wait_ms=500) == 0
    assert runner.active_count == 0
