"""Random reward selection and item display names."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence

from .banks import Reward
from .errors import NoRewardsAvailable


def display_name(item_id: str) -> str:
    """``minecraft:iron_ingot`` -> ``Iron Ingot``; ids without a namespace are used whole."""
    parts = item_id.split(":")
    name = parts[1] if len(parts) > 1 else item_id
    words = [word[0].upper() + word[1:] for word in name.replace("_", " ").split(" ") if word]
    return " ".join(words)


@dataclass(frozen=True, slots=True)
class RewardPick:
    reward: Reward
    quantity: int
    display_name: str

    def describe(self):
        return f"{self.quantity}x {self.display_name}"


class RewardSelector:
    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def select(self, rewards: Sequence[Reward]) -> RewardPick:
        """Pick a reward uniformly, then a quantity uniformly in ``[1, max_amount]``."""
        if not rewards:
            raise NoRewardsAvailable("No rewards available")
        reward = rewards[self._rng.randrange(len(rewards))]
        quantity = self._rng.randint(1, reward.max_amount)
        return RewardPick(reward=reward, quantity=quantity, display_name=display_name(reward.item_id))
