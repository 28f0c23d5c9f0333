from __future__ import annotations

import random

from autochess.config import get_headless_config
from autochess.core.shop import ShopGenerator, ShopSlot
from autochess.core.state import GameState
from autochess.engine.economy import EconomyEngine
from autochess.utils.constants import BattleOutcome, CommandStatus
from unit_data import UnitDataLoader


def _make_economy(seed: int = 1) -> EconomyEngine:
    config = get_headless_config(seed=seed)
    return EconomyEngine(config, ShopGenerator(UnitDataLoader(), random.Random(seed)))


def test_round_reward_breakdown_for_a_win_streak() -> None:
    economy = _make_economy()

    reward = economy.compute_round_reward(BattleOutcome.WIN, 1, current_gold=20, win_streak=2)

    assert (reward.base, reward.interest, reward.streak_bonus) == (3, 2, 2)
    assert reward.total == 7
    assert 20 + reward.total == 27


def test_interest_is_capped() -> None:
    economy = _make_economy()

    assert economy.compute_interest(9) == 0
    assert economy.compute_interest(49) == 4
    assert economy.compute_interest(80) == 5


def test_streak_bonus_caps_at_three_steps() -> None:
    economy = _make_economy()

    reward = economy.compute_round_reward(BattleOutcome.WIN, 1, current_gold=0, win_streak=7)

    assert reward.streak_bonus == 3


def test_non_wins_pay_the_lose_reward_without_streak_bonus() -> None:
    economy = _make_economy()

    loss = economy.compute_round_reward(BattleOutcome.LOSS, 4, current_gold=10, win_streak=2)
    draw = economy.compute_round_reward(BattleOutcome.DRAW, 4, current_gold=10, win_streak=2)

    assert loss.to_dict() == {"base": 2, "interest": 1, "streak_bonus": 0, "total": 3}
    assert draw == loss


def test_rounds_past_the_table_use_the_last_row() -> None:
    economy = _make_economy()

    reward = economy.compute_round_reward(BattleOutcome.WIN, 50, current_gold=0, win_streak=0)

    assert reward.base == 8


def test_generated_shop_copies_catalog_costs() -> None:
    economy = _make_economy()
    loader = UnitDataLoader()

    shop = economy.generate_shop()

    assert len(shop) == 5
    for slot in shop:
        assert slot.cost == loader.get_unit_by_id(slot.unit_id).cost


def test_can_afford_compares_gold_to_cost() -> None:
    slot = ShopSlot("mage", 3)

    assert EconomyEngine.can_afford(slot, 3)
    assert not EconomyEngine.can_afford(slot, 2)


def test_paid_refresh_deducts_cost() -> None:
    economy = _make_economy()
    state = GameState(economy.config)

    assert economy.refresh_shop(state) == CommandStatus.SUCCESS
    assert state.gold == 8
    assert len(state.shop) == 5


def test_free_refresh_keeps_gold() -> None:
    economy = _make_economy()
    state = GameState(economy.config)

    economy.refresh_shop(state, free=True)

    assert state.gold == 10


def test_refresh_without_funds_keeps_old_shop() -> None:
    economy = _make_economy()
    state = GameState(economy.config)
    state.gold = 1
    old_shop = [ShopSlot("warrior", 1)]
    state.shop = old_shop

    status = economy.refresh_shop(state)

    assert status == CommandStatus.INSUFFICIENT_FUNDS
    assert state.shop is old_shop
    assert state.gold == 1
