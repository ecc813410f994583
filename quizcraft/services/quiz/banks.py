"""Question and reward definitions and the banks that hold them."""

from __future__ import annotations

import random
from dataclasses import dataclass
from threading import Lock
from typing import Generic, Iterable, TypeVar


@dataclass(frozen=True, slots=True)
class Question:
    """A trivia question. Any chat line containing ``answer`` wins."""

    text: str
    answer: str

    def __post_init__(self):
        if not isinstance(self.text, str) or not self.text.strip():
            raise ValueError("Question text must not be empty.")
        if not isinstance(self.answer, str) or not self.answer.strip():
            raise ValueError("Answer must not be empty.")

    def to_dict(self) -> dict:
        return {"question": self.text, "answer": self.answer}

    @classmethod
    def from_dict(cls, data: dict) -> "Question":
        return cls(text=data["question"], answer=data["answer"])


@dataclass(frozen=True, slots=True)
class Reward:
    """An item reward; the granted quantity is drawn from ``[1, max_amount]``."""

    item_id: str
    max_amount: int

    def __post_init__(self):
        if not isinstance(self.item_id, str) or not self.item_id.strip():
            raise ValueError("Reward item id must not be empty.")
        if isinstance(self.max_amount, bool) or not isinstance(self.max_amount, int):
            raise ValueError("Max amount must be an integer.")
        if self.max_amount < 1:
            raise ValueError("Max amount must be at least 1.")

    def to_dict(self) -> dict:
        return {"itemId": self.item_id, "maxAmount": self.max_amount}

    @classmethod
    def from_dict(cls, data: dict) -> "Reward":
        return cls(item_id=data["itemId"], max_amount=data["maxAmount"])


T = TypeVar("T")


class _Bank(Generic[T]):
    """Ordered, thread-safe collection handed out as tuple snapshots."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._lock = Lock()
        self._items: list[T] = list(items)

    def snapshot(self) -> tuple[T, ...]:
        with self._lock:
            return tuple(self._items)

    def replace(self, items: Iterable[T]) -> None:
        new_items = list(items)
        with self._lock:
            self._items = new_items

    def append(self, item: T) -> tuple[T, ...]:
        with self._lock:
            self._items.append(item)
            return tuple(self._items)

    def pick(self, rng: random.Random) -> T | None:
        with self._lock:
            if not self._items:
                return None
            return self._items[rng.randrange(len(self._items))]

    def __len__(self):
        with self._lock:
            return len(self._items)


class QuestionBank(_Bank[Question]):
    pass


class RewardBank(_Bank[Reward]):
    pass
