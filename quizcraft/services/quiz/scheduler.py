"""Cancellable periodic background tasks.

Tasks are started through a ``start_task`` callable, normally
``socketio.start_background_task`` so they run on whatever async mode the
Socket.IO server uses. Each task owns its cancel flag; cancelling stops the
loop before its next firing, so a replaced timer never fires again.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

logger = logging.getLogger(__name__)

TaskStarter = Callable[..., Any]


def _thread_starter(target):
    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    return thread


class RepeatingTask:
    """Run ``callback`` every ``interval`` seconds until cancelled.

    The first run happens one ``interval`` after :meth:`start` unless
    ``delay`` says otherwise.
    """

    def __init__(
        self,
        name: str,
        interval: float,
        callback: Callable[[], Any],
        *,
        delay: float | None = None,
        start_task: TaskStarter | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.name = name
        self.interval = interval
        self.delay = interval if delay is None else delay
        self._callback = callback
        self._start_task = start_task or _thread_starter
        self._cancelled = threading.Event()
        self._started = False
        self.handle: Any = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def running(self) -> bool:
        return self._started and not self._cancelled.is_set()

    def start(self) -> "RepeatingTask":
        if self._started:
            raise RuntimeError(f"Task {self.name} already started")
        self._started = True
        self.handle = self._start_task(self._run)
        logger.info(f"[timer-set] task={self.name} interval={self.interval}s")
        return self

    def cancel(self) -> None:
        if not self._cancelled.is_set():
            self._cancelled.set()
            logger.info(f"[timer-cancel] task={self.name}")

    def run_once(self):
        try:
            self._callback()
        except Exception:
            logger.exception(f"[timer-error] task={self.name}")

    def _run(self):
        wait = self.delay
        while not self._cancelled.wait(wait):
            self.run_once()
            wait = self.interval
