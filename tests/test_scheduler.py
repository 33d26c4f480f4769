"""
DebounceTimer against a real Qt event loop.
"""

from PyQt6.QtTest import QTest

from reelview.core.scheduler import DebounceTimer


def test_only_last_scheduled_callback_runs(qapp):
    timer = DebounceTimer()
    calls = []

    for value in ["a", "ab", "abc"]:
        timer.schedule(150, lambda value=value: calls.append(value))
        QTest.qWait(10)

    assert calls == []
    QTest.qWait(400)

    assert calls == ["abc"]
    assert not timer.is_pending


def test_cancel_drops_pending_callback(qapp):
    timer = DebounceTimer()
    calls = []

    timer.schedule(30, lambda: calls.append("fired"))
    assert timer.is_pending
    timer.cancel()
    QTest.qWait(100)

    assert calls == []


def test_quiet_windows_each_fire_once(qapp):
    timer = DebounceTimer()
    calls = []

    timer.schedule(20, lambda: calls.append(1))
    QTest.qWait(100)
    timer.schedule(20, lambda: calls.append(2))
    QTest.qWait(100)

    assert calls == [1, 2]
