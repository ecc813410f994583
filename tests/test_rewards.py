import random

import pytest

from quizcraft.services.quiz import NoRewardsAvailable, Reward
from quizcraft.services.quiz.rewards import RewardSelector, display_name


def test_display_name_transform():
    assert display_name('minecraft:iron_ingot') == 'Iron Ingot'
    assert display_name('emerald') == 'Emerald'
    assert display_name('mymod:golden_apple_pie') == 'Golden Apple Pie'
    # only the first letter of each word changes
    assert display_name('minecraft:tnt_MINECART') == 'Tnt MINECART'
    assert display_name('minecraft:double__under') == 'Double Under'


def test_select_empty_bank_fails():
    with pytest.raises(NoRewardsAvailable):
        RewardSelector(random.Random(0)).select([])


def test_quantity_stays_within_bounds():
    selector = RewardSelector(random.Random(42))
    rewards = [Reward('minecraft:diamond', 3), Reward('minecraft:emerald', 5)]
    for _ in range(500):
        pick = selector.select(rewards)
        assert 1 <= pick.quantity <= pick.reward.max_amount


def test_max_amount_one_always_grants_one():
    selector = RewardSelector(random.Random(3))
    for _ in range(100):
        assert selector.select([Reward('minecraft:apple', 1)]).quantity == 1


def test_seeded_selection_is_deterministic():
    rewards = [Reward('minecraft:diamond', 3), Reward('minecraft:emerald', 5), Reward('minecraft:iron_ingot', 10)]
    first = RewardSelector(random.Random(99))
    again = RewardSelector(random.Random(99))
    assert [first.select(rewards) for _ in range(20)] == [again.select(rewards) for _ in range(20)]


def test_every_reward_can_be_picked():
    rewards = [Reward('minecraft:diamond', 3), Reward('minecraft:emerald', 5), Reward('minecraft:iron_ingot', 10)]
    selector = RewardSelector(random.Random(5))
    seen = {selector.select(rewards).reward.item_id for _ in range(300)}
    assert seen == {r.item_id for r in rewards}


def test_describe_uses_display_name():
    pick = RewardSelector(random.Random(0)).select([Reward('minecraft:iron_ingot', 1)])
    assert pick.describe() == '1x Iron Ingot'


@pytest.mark.parametrize('item_id,max_amount', [('', 1), ('minecraft:apple', 0), ('minecraft:apple', '3'), ('minecraft:apple', True)])
def test_invalid_rewards_are_rejected(item_id, max_amount):
    with pytest.raises(ValueError):
        Reward(item_id, max_amount)
