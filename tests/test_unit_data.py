from __future__ import annotations

import json
import math

import pytest

from unit_data import UnitDataLoader, calculate_unit_stats, get_unit_power_score


def test_bundled_catalog_loads_all_archetypes() -> None:
    loader = UnitDataLoader()

    assert loader.get_unit_ids() == ["warrior", "archer", "mage", "knight", "assassin", "priest"]
    assert loader.max_star == 3
    assert loader.get_stats() == {"units": 6, "star_levels": 3, "roles": 6}


def test_indices_group_by_role_and_cost() -> None:
    loader = UnitDataLoader()

    assert {unit.unit_id for unit in loader.get_units_by_cost(2)} == {"archer", "knight", "priest"}
    assert [unit.unit_id for unit in loader.get_units_by_role("support")] == ["priest"]
    assert loader.get_units_by_cost(9) == []


def test_star_scaling_floors_every_attribute() -> None:
    loader = UnitDataLoader()

    for archetype in loader.get_all_units():
        for star, multiplier in loader.star_multipliers.items():
            stats = loader.stats_for(archetype.unit_id, star)
            assert stats.attack == math.floor(archetype.base_attack * multiplier.attack)
            assert stats.health == math.floor(archetype.base_health * multiplier.health)
            assert stats.health == stats.max_health


def test_known_star_values() -> None:
    loader = UnitDataLoader()

    warrior = loader.stats_for("warrior", 2)
    assert (warrior.attack, warrior.max_health) == (27, 180)

    # 12 * 1.8 = 21.6
    assert loader.stats_for("knight", 2).attack == 21
    assert loader.stats_for("warrior", 3).max_health == 320
    assert loader.stats_for("priest", 1).heal_power == 5


def test_unknown_unit_or_star_is_rejected() -> None:
    loader = UnitDataLoader()

    with pytest.raises(ValueError):
        loader.stats_for("dragon", 1)
    with pytest.raises(ValueError):
        calculate_unit_stats(loader.get_unit_by_id("warrior"), 4, loader.star_multipliers)


def test_custom_catalog_with_unknown_role_fails(tmp_path) -> None:
    catalog = {"units": [{"id": "golem", "baseAttack": 5, "baseHealth": 50, "cost": 1, "role": "siege"}]}
    (tmp_path / "units.json").write_text(json.dumps(catalog), encoding="utf-8")

    with pytest.raises(ValueError):
        UnitDataLoader(tmp_path)


def test_custom_catalog_without_multipliers_defaults_to_one_star(tmp_path) -> None:
    catalog = {"units": [{"id": "golem", "baseAttack": 5, "baseHealth": 50, "cost": 1, "role": "tank"}]}
    (tmp_path / "units.json").write_text(json.dumps(catalog), encoding="utf-8")

    loader = UnitDataLoader(tmp_path)

    assert loader.max_star == 1
    assert loader.stats_for("golem", 1).attack == 5


def test_power_score_rewards_healing() -> None:
    loader = UnitDataLoader()
    warrior = loader.stats_for("warrior", 1)
    priest = loader.stats_for("priest", 1)

    assert get_unit_power_score(warrior) == 15 * 2.0 + 100 * 0.5
    assert get_unit_power_score(priest) == 8 * 2.0 + 80 * 0.5 + 5 * 3.0
