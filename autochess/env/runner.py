"""Headless auto-play.

Plays full games with a random valid-command policy: a handful of sampled
placement commands per round, then a battle, until defeat or a round cap.
Useful for smoke-testing balance changes to the configuration tables.
"""
from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Any, Dict, Optional

import numpy as np

from autochess.config import GameConfig, configure_logging, get_headless_config
from autochess.engine.game_round import RoundController
from autochess.env.action import ActionSpace
from autochess.utils.constants import CommandType

logger = logging.getLogger(__name__)


async def play_game(
    controller: RoundController,
    rng: np.random.Generator,
    max_actions_per_round: int = 10,
    max_rounds: int = 30,
) -> Dict[str, Any]:
    """
    Play one game to defeat or `max_rounds` battles.

    Returns:
        Summary with rounds played, final gold/health and outcome counts
    """
    action_space = ActionSpace(controller)
    outcomes: Dict[str, int] = {"win": 0, "loss": 0, "draw": 0}
    battles = 0

    while not controller.is_game_over() and battles < max_rounds:
        for _ in range(max_actions_per_round):
            action = action_space.sample_valid_action(rng)
            if action["command_type"] in (CommandType.PASS, CommandType.START_BATTLE):
                break
            status = action_space.execute_action(**action)
            logger.debug("%s -> %s", CommandType(action["command_type"]).name, status.value)

        report = await controller.start_battle()
        outcomes[report.outcome.value] += 1
        battles += 1
        logger.debug("Battle %d: %d events", battles, len(controller.events.drain()))

    return {
        "battles": battles,
        "round": controller.state.round_number,
        "gold": controller.state.gold,
        "health": controller.state.health,
        "game_over": controller.is_game_over(),
        "outcomes": outcomes,
    }


def run(config: GameConfig, games: int, max_actions_per_round: int, max_rounds: int,
        policy_seed: Optional[int] = None) -> list:
    rng = np.random.default_rng(policy_seed)
    controller = RoundController(config)
    summaries = []
    for game in range(games):
        if game > 0:
            controller.restart()
        summary = asyncio.run(play_game(controller, rng, max_actions_per_round, max_rounds))
        logger.info("Game %d: %s", game + 1, summary)
        summaries.append(summary)
    return summaries


def main() -> None:
    parser = argparse.ArgumentParser(description="Play auto-chess games with a random policy.")
    parser.add_argument("--games", type=int, default=1, help="Number of games to play.")
    parser.add_argument("--seed", type=int, default=None, help="Game RNG seed.")
    parser.add_argument("--policy-seed", type=int, default=None, help="Policy RNG seed.")
    parser.add_argument("--actions", type=int, default=10, help="Max placement commands per round.")
    parser.add_argument("--max-rounds", type=int, default=30, help="Stop a game after this many battles.")
    parser.add_argument("--layout", choices=("stacked", "side_by_side"), default="stacked")
    parser.add_argument("--debug", action="store_true", help="Log every command and event.")
    args = parser.parse_args()

    config = get_headless_config(seed=args.seed)
    config.battle_layout = args.layout
    config.debug_mode = args.debug
    configure_logging(config)

    run(config, args.games, args.actions, args.max_rounds, args.policy_seed)


if __name__ == "__main__":
    main()
