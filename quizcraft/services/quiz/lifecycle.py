"""Round lifecycle: at most one open question at any time.

States cycle ``IDLE -> ACTIVE -> (ANSWERED | EXPIRED) -> IDLE``. Starting a
round while another is open simply replaces it. Every state change happens
under ``QuestionLifecycle.lock``; the answer arbiter holds the same lock for
its check-and-close so an answer and a timeout can never both close a round.
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field
from threading import RLock
from typing import AbstractSet, Callable, Protocol

from .banks import Question

logger = logging.getLogger(__name__)

# Timeout checks run at most once per accumulated second of ticks
CHECK_INTERVAL_SEC = 1.0
_TICK_EPSILON = 1e-9


class BroadcastPort(Protocol):
    def send(self, text: str) -> None: ...


class RoundState(str, enum.Enum):
    IDLE = "idle"
    ACTIVE = "active"
    ANSWERED = "answered"
    EXPIRED = "expired"


@dataclass(slots=True)
class ActiveQuestion:
    question: Question
    start_time: float
    answered_by: AbstractSet[int] = field(default_factory=set)


class QuestionLifecycle:
    """Owns the single active round, its start time and its answerers."""

    def __init__(
        self,
        broadcaster: BroadcastPort,
        *,
        timeout_seconds: float = 60,
        question_message: str = "%question%",
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.lock = RLock()
        self._broadcaster = broadcaster
        self._clock = clock
        self._timeout_seconds = timeout_seconds
        self._question_message = question_message
        self._active: ActiveQuestion | None = None
        self._answered_by: set[int] = set()
        self._last_outcome: RoundState | None = None
        self._tick_accumulator = 0.0

    def configure(self, *, timeout_seconds: float, question_message: str) -> None:
        with self.lock:
            self._timeout_seconds = timeout_seconds
            self._question_message = question_message

    @property
    def timeout_seconds(self):
        return self._timeout_seconds

    @property
    def state(self) -> RoundState:
        with self.lock:
            return RoundState.ACTIVE if self._active is not None else RoundState.IDLE

    @property
    def last_outcome(self) -> RoundState | None:
        """How the most recent round closed: ANSWERED, EXPIRED or IDLE when discarded."""
        return self._last_outcome

    def start_round(self, question: Question) -> ActiveQuestion:
        with self.lock:
            if self._active is not None:
                logger.info(f"[round-discard] replacing open question: {self._active.question.text}")
                self._last_outcome = RoundState.IDLE
            self._answered_by = set()
            self._active = ActiveQuestion(question=question, start_time=self._clock(), answered_by=self._answered_by)
            message = self._question_message.replace("%question%", question.text)
            self._broadcaster.send(message)
            logger.info(f"[round-open] {question.text}")
            return self._snapshot()

    def close_round(self, reason: RoundState = RoundState.IDLE) -> bool:
        """Close the open round, if any. Returns False when nothing was open."""
        with self.lock:
            was_open = self._active is not None
            self._active = None
            self._answered_by = set()
            if was_open:
                self._last_outcome = reason
            return was_open

    def is_open(self):
        with self.lock:
            return self._active is not None

    def has_answered(self, participant_id):
        with self.lock:
            return participant_id in self._answered_by

    def mark_answered(self, participant_id):
        with self.lock:
            if self._active is None:
                raise RuntimeError("No open round to record an answer for.")
            self._answered_by.add(participant_id)

    def check_timeout(self, now: float | None = None) -> bool:
        """Expire the open round once ``timeout_seconds`` have elapsed. No broadcast."""
        with self.lock:
            if self._active is None:
                return False
            if now is None:
                now = self._clock()
            elapsed = now - self._active.start_time
            if elapsed < self._timeout_seconds:
                return False
            question = self._active.question
            self.close_round(RoundState.EXPIRED)
            logger.info(f"[round-expired] after {elapsed:.1f}s: {question.text}")
            return True

    def tick(self, delta_seconds: float) -> bool:
        """Feed elapsed time from the tick driver; checks the timeout once per second."""
        with self.lock:
            if self._active is None:
                return False
            self._tick_accumulator += delta_seconds
            if self._tick_accumulator + _TICK_EPSILON < CHECK_INTERVAL_SEC:
                return False
            self._tick_accumulator = 0.0
            return self.check_timeout(self._clock())

    def get_active(self) -> ActiveQuestion | None:
        with self.lock:
            return self._snapshot()

    def _snapshot(self):
        if self._active is None:
            return None
        return ActiveQuestion(
            question=self._active.question,
            start_time=self._active.start_time,
            answered_by=frozenset(self._answered_by),
        )
