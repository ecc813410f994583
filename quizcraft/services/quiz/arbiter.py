"""First-correct-answer arbitration for the open round."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from .banks import Question
from .lifecycle import QuestionLifecycle, RoundState

logger = logging.getLogger(__name__)


class MatchOutcome(str, enum.Enum):
    NONE = "none"
    CORRECT = "correct"


@dataclass(frozen=True, slots=True)
class MatchResult:
    outcome: MatchOutcome
    participant_id: int | None = None
    question: Question | None = None

    @property
    def correct(self):
        return self.outcome is MatchOutcome.CORRECT


NO_MATCH = MatchResult(MatchOutcome.NONE)


def matches_answer(message: str, answer: str) -> bool:
    """Loose match: the message contains the answer anywhere, ignoring case."""
    return answer.lower() in message.lower()


class AnswerArbiter:
    """Decides the single winner of each round.

    The check-and-close runs under the lifecycle lock, so of several
    concurrent correct submissions only the first one to acquire it wins;
    the rest find the round already closed.
    """

    def __init__(self, lifecycle: QuestionLifecycle) -> None:
        self._lifecycle = lifecycle

    def submit(self, participant_id: int, message: str) -> MatchResult:
        with self._lifecycle.lock:
            active = self._lifecycle.get_active()
            if active is None or participant_id in active.answered_by:
                return NO_MATCH
            if not matches_answer(message, active.question.answer):
                return NO_MATCH
            self._lifecycle.mark_answered(participant_id)
            self._lifecycle.close_round(RoundState.ANSWERED)
        logger.info(f"[round-answered] participant={participant_id} question={active.question.text}")
        return MatchResult(MatchOutcome.CORRECT, participant_id=participant_id, question=active.question)
