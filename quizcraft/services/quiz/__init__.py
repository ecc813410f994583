"""Quiz domain services: round lifecycle, answer arbitration and rewards.

The core in this package knows nothing about Flask. The application factory
wires it to Socket.IO broadcasts, the SQL inventory and the JSON store
through :class:`QuizService`.
"""

from .banks import Question, QuestionBank, Reward, RewardBank
from .errors import (
    NoQuestionsAvailable,
    NoRewardsAvailable,
    PersistenceFailure,
    QuizError,
    UnknownRewardItem,
)
from .service import QuizService

__all__ = [
    "NoQuestionsAvailable",
    "NoRewardsAvailable",
    "PersistenceFailure",
    "Question",
    "QuestionBank",
    "QuizError",
    "QuizService",
    "Reward",
    "RewardBank",
    "UnknownRewardItem",
]
