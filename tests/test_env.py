from __future__ import annotations

import asyncio

import numpy as np
import pytest

from autochess.config import get_headless_config
from autochess.core.shop import ShopSlot
from autochess.engine.game_round import RoundController
from autochess.env.action import ActionSpace, create_action_space
from autochess.env.observation import build_lookup_tables, create_observation_encoder
from autochess.env.runner import play_game
from autochess.utils.constants import CommandType


def _make_controller(seed: int = 4) -> RoundController:
    return RoundController(get_headless_config(seed=seed))


def test_initial_mask_allows_only_sensible_commands() -> None:
    controller = _make_controller()
    controller.state.shop = [ShopSlot("warrior", 1), ShopSlot("mage", 3)]
    controller.state.gold = 2

    mask = ActionSpace(controller).get_action_mask()

    assert mask["command_type"][CommandType.PASS]
    assert mask["command_type"][CommandType.START_BATTLE]
    assert mask["command_type"][CommandType.REFRESH_SHOP]
    assert not mask["command_type"][CommandType.SWAP]
    assert not mask["command_type"][CommandType.DEPLOY_RESERVE]
    assert mask["shop_slot"].tolist() == [True, False, False, False, False]


def test_mask_tracks_reserve_commands() -> None:
    controller = _make_controller()
    controller.state.add_to_reserve("priest", 3)
    action_space = ActionSpace(controller)
    priest_index = action_space.unit_ids.index("priest")

    mask = action_space.get_action_mask()

    assert mask["merge_unit"][priest_index]
    assert mask["deploy_unit"][priest_index]
    assert mask["merge_unit"].sum() == 1


def test_everything_is_masked_after_defeat() -> None:
    controller = _make_controller()
    asyncio.run(controller.start_battle())

    mask = ActionSpace(controller).get_action_mask()

    assert not mask["command_type"].any()
    assert not mask["shop_slot"].any()
    assert not mask["swap_to"].any()


def test_sampled_commands_are_never_rejected() -> None:
    controller = _make_controller()
    controller.state.gold = 60
    action_space = create_action_space(controller)
    rng = np.random.default_rng(0)

    for _ in range(40):
        action = action_space.sample_valid_action(rng)
        if action["command_type"] == CommandType.START_BATTLE:
            continue
        assert action_space.execute_action(**action).ok


def test_start_battle_is_not_executed_synchronously() -> None:
    action_space = ActionSpace(_make_controller())

    with pytest.raises(ValueError):
        action_space.execute_action(CommandType.START_BATTLE)


def test_action_space_sizes() -> None:
    sizes = ActionSpace(_make_controller()).get_action_space_sizes()

    assert sizes == {"command_type": 7, "shop_slot": 5, "position": 16, "unit": 6}


def test_lookup_tables_are_deterministic() -> None:
    controller = _make_controller()

    tables = build_lookup_tables(controller.data_loader)

    assert tables.num_units == 6
    assert tables.unit_to_idx["archer"] == 1
    assert tables.unit_to_idx["warrior"] == 6
    assert tables.role_to_idx["melee"] == 1


def test_observation_shapes() -> None:
    controller = _make_controller()
    encoder = create_observation_encoder(controller.data_loader, controller.config)

    obs = encoder.encode(controller.state)

    assert obs["global"].shape == (12,)
    assert obs["board"].shape == (16, 10)
    assert obs["enemy"].shape == (16, 10)
    assert obs["shop"].shape == (5, 4)
    assert obs["reserve"].shape == (6,)
    flat = encoder.to_flat(controller.state)
    assert flat.shape == (encoder.flat_size(),)
    assert flat.dtype == np.float32


def test_observation_encodes_board_cells_and_reserve() -> None:
    controller = _make_controller()
    controller.roster.place_on_board("knight", 2)
    controller.state.add_to_reserve("mage", 2)
    encoder = create_observation_encoder(controller.data_loader, controller.config)
    tables = encoder.obs_config

    obs = encoder.encode(controller.state)

    row = obs["board"][0]
    assert row[0] == tables.unit_to_idx["knight"]
    assert row[1] == 2
    assert row[4] == 1.0
    assert not obs["board"][1:].any()
    assert obs["reserve"][tables.unit_to_idx["mage"] - 1] == 2
    assert obs["global"][5] == pytest.approx(1 / 16)


def test_random_policy_plays_until_cap_or_defeat() -> None:
    controller = _make_controller(seed=8)

    summary = asyncio.run(play_game(controller, np.random.default_rng(8), max_rounds=3))

    assert 1 <= summary["battles"] <= 3
    assert sum(summary["outcomes"].values()) == summary["battles"]
    assert summary["game_over"] == controller.is_game_over()


def test_runner_drains_events_after_each_battle() -> None:
    controller = _make_controller(seed=8)

    asyncio.run(play_game(controller, np.random.default_rng(8), max_rounds=2))

    assert len(controller.events) == 0
