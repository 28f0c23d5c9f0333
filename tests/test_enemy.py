from __future__ import annotations

import math
import random

import pytest

from autochess.config import get_headless_config
from autochess.engine.enemy import EnemyGenerator
from unit_data import UnitDataLoader


class _FixedDraw:
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


def _make_generator(seed: int = 3) -> EnemyGenerator:
    return EnemyGenerator(get_headless_config(seed=seed), UnitDataLoader(), random.Random(seed))


def test_enemy_count_follows_difficulty_table() -> None:
    generator = _make_generator()

    assert generator.generate(1).count_units() == 2
    assert generator.generate(6).count_units() == 5
    assert generator.generate(42).count_units() == 7


def test_enemy_positions_are_distinct() -> None:
    generator = _make_generator()

    for _ in range(20):
        positions = generator.pick_positions(7, 16)
        assert len(set(positions)) == 7
        assert all(0 <= position < 16 for position in positions)


def test_generate_clears_previous_roster() -> None:
    generator = _make_generator()
    board = generator.generate(10)

    generator.generate(1, board)

    assert board.count_units() == 2


def test_round_scaling_is_capped() -> None:
    generator = _make_generator()

    assert generator.round_scaling(1) == 1.0
    assert generator.round_scaling(5) == pytest.approx(1.4)
    assert generator.round_scaling(100) == 3.0


def test_enemy_stats_are_scaled_and_floored() -> None:
    generator = _make_generator()
    loader = generator.data_loader
    scaling = generator.round_scaling(5)

    board = generator.generate(5)

    for unit in board.get_all_units():
        stats = loader.stats_for(unit.unit_id, unit.star)
        assert unit.attack == math.floor(stats.attack * 1.5 * 1.0 * scaling)
        assert unit.health == math.floor(stats.health * 1.5 * 1.0 * scaling)
        assert unit.max_health == unit.health


def test_first_round_enemies_are_one_star() -> None:
    generator = _make_generator()

    for _ in range(10):
        assert {unit.star for unit in generator.generate(1).get_all_units()} == {1}


def test_roll_star_walks_cumulative_probabilities() -> None:
    generator = _make_generator()
    distribution = {1: 0.5, 2: 0.3, 3: 0.2}

    generator.rng = _FixedDraw(0.5)
    assert generator.roll_star(distribution) == 1
    generator.rng = _FixedDraw(0.7)
    assert generator.roll_star(distribution) == 2
    generator.rng = _FixedDraw(0.95)
    assert generator.roll_star(distribution) == 3


def test_roll_star_falls_back_to_one_star() -> None:
    generator = _make_generator()
    generator.rng = _FixedDraw(0.95)

    assert generator.roll_star({1: 0.5, 2: 0.4}) == 1


def test_same_seed_same_roster() -> None:
    first = _make_generator(seed=11).generate(7)
    second = _make_generator(seed=11).generate(7)

    assert [u.to_dict() if u else None for u in first.cells] == [u.to_dict() if u else None for u in second.cells]
