"""Failure kinds raised by the quiz core.

None of these is fatal to the server: callers log them and carry on.
"""


class QuizError(Exception):
    """Base class for quiz failures."""


class NoQuestionsAvailable(QuizError):
    pass


class NoRewardsAvailable(QuizError):
    pass


class UnknownRewardItem(QuizError):
    """A reward references an item the registry cannot resolve."""

    def __init__(self, item_id):
        super().__init__(f"Unknown reward item: {item_id!r}")
        self.item_id = item_id


class PersistenceFailure(QuizError):
    """Reading or writing one of the JSON data files failed."""
