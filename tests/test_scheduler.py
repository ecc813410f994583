import threading

import pytest

from quizcraft.services.quiz.scheduler import RepeatingTask


def test_task_fires_until_cancelled():
    fired = threading.Event()
    calls = []

    def callback():
        calls.append(1)
        if len(calls) >= 3:
            fired.set()

    task = RepeatingTask('test', 0.01, callback).start()
    assert fired.wait(2.0)
    task.cancel()
    assert task.cancelled
    task.handle.join(timeout=2.0)
    assert not task.handle.is_alive()
    count = len(calls)
    assert count >= 3


def test_callback_errors_do_not_stop_the_task():
    fired = threading.Event()
    calls = []

    def callback():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError('boom')
        fired.set()

    task = RepeatingTask('flaky', 0.01, callback).start()
    assert fired.wait(2.0)
    task.cancel()


def test_cancel_before_first_firing(starter):
    calls = []
    task = RepeatingTask('never', 60, lambda: calls.append(1), start_task=starter).start()
    task.cancel()
    # run the worker body in this thread: it must return immediately
    starter.targets[0]()
    assert calls == []


def test_task_starts_only_once(starter):
    task = RepeatingTask('once', 1, lambda: None, start_task=starter).start()
    with pytest.raises(RuntimeError):
        task.start()


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        RepeatingTask('bad', 0, lambda: None)
