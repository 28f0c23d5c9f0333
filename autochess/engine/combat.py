"""
Combat Resolver.

Turn-based battle between the player board and the enemy board:
- every turn, all living units act once in a freshly shuffled order
- each attacker hits the front-most living enemy for its attack stat
- support units heal their side after every allied attack
- the battle ends when a side is wiped out or the turn cap is reached
"""
import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Tuple

from autochess.config import GameConfig, GameConstants
from autochess.core.board import Board
from autochess.core.unit import Unit
from autochess.engine.events import EventQueue, EventType
from autochess.utils.constants import BattleOutcome, CombatState

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class BattleResult:
    """What a finished battle looked like."""
    outcome: BattleOutcome
    turns: int
    player_survivors: int
    enemy_survivors: int


class CombatResolver:
    """
    Resolves one battle at a time.

    The only suspension points are the pacing delays, awaited through the
    injected `sleep` coroutine; pass a no-op (or zero delays) for headless
    runs. Every random choice comes from the injected RNG, so a fixed seed
    reproduces the exact turn order and outcome.
    """

    def __init__(
        self,
        config: GameConfig,
        rng: Optional[random.Random] = None,
        events: Optional[EventQueue] = None,
        sleep: Optional[Sleep] = None,
    ):
        """
        Args:
            config: Game configuration
            rng: Random source for turn order
            events: Event sink for attacks, heals and deaths
            sleep: Async pacing function, asyncio.sleep by default
        """
        if config.battle_layout not in GameConstants.BATTLE_LAYOUTS:
            raise ValueError(f"Unknown battle layout: {config.battle_layout}")

        self.config = config
        self.rng = rng or random.Random()
        self.events = events or EventQueue()
        self.sleep = sleep or asyncio.sleep
        self.state = CombatState.IDLE

    async def _pause(self, seconds: float):
        await self.sleep(max(0.0, seconds))

    async def resolve_combat(self, player_board: Board, enemy_board: Board) -> BattleResult:
        """
        Run a battle to completion.

        Player units are revived before the first turn and again after the
        outcome is decided, so death never carries over between rounds.

        Args:
            player_board: The player's units
            enemy_board: This round's enemies

        Returns:
            BattleResult with the outcome from the player's point of view
        """
        self.state = CombatState.FIGHTING
        player_board.reset_for_combat()

        turn = 0
        while (
            player_board.has_alive_units()
            and enemy_board.has_alive_units()
            and turn < self.config.max_battle_turns
        ):
            turn += 1
            self.events.emit(EventType.TURN_STARTED, turn=turn)
            await self.execute_turn(player_board, enemy_board)
            await self._pause(self.config.attack_delay)

        outcome = self.determine_outcome(player_board, enemy_board)
        result = BattleResult(
            outcome=outcome,
            turns=turn,
            player_survivors=len(player_board.get_alive_units()),
            enemy_survivors=len(enemy_board.get_alive_units()),
        )

        player_board.reset_for_combat()
        self.state = CombatState.RESOLVED
        logger.info("Battle resolved after %d turns: %s", turn, outcome.value)
        return result

    def turn_order(self, player_board: Board, enemy_board: Board) -> List[Tuple[Unit, bool]]:
        """
        Living units of both sides, shuffled.

        Returns:
            (unit, is_player) pairs in acting order
        """
        pool = [(unit, True) for unit in player_board.get_alive_units()]
        pool += [(unit, False) for unit in enemy_board.get_alive_units()]
        self.rng.shuffle(pool)
        return pool

    async def execute_turn(self, player_board: Board, enemy_board: Board):
        """
        One pass in which every living unit acts at most once.

        Stops right after the attack that eliminates a side.
        """
        for unit, is_player in self.turn_order(player_board, enemy_board):
            if not unit.is_alive:
                continue

            allies, enemies = (player_board, enemy_board) if is_player else (enemy_board, player_board)
            target = self.find_target(enemies, is_player)
            if target is None:
                continue

            await self.execute_attack(unit, target, is_player, allies)

            if not player_board.has_alive_units() or not enemy_board.has_alive_units():
                break

    def find_target(self, enemies: Board, is_player_attacking: bool) -> Optional[Unit]:
        """
        First living enemy, scanning from the front line backwards.

        Stacked layout: the enemy board sits above the player board, so the
        player scans enemy rows bottom-up and the enemy scans player rows
        top-down, columns left to right.

        Side-by-side layout: the player board is on the left, so the player
        scans enemy columns left to right and the enemy scans player columns
        right to left, rows top to bottom.
        """
        if self.config.battle_layout == "stacked":
            rows = range(enemies.rows - 1, -1, -1) if is_player_attacking else range(enemies.rows)
            for row in rows:
                for col in range(enemies.cols):
                    target = enemies.get(enemies.to_position(row, col))
                    if target is not None and target.is_alive:
                        return target
            return None

        cols = range(enemies.cols) if is_player_attacking else range(enemies.cols - 1, -1, -1)
        for col in cols:
            for row in range(enemies.rows):
                target = enemies.get(enemies.to_position(row, col))
                if target is not None and target.is_alive:
                    return target
        return None

    async def execute_attack(self, attacker: Unit, target: Unit, is_player_attacking: bool, allies: Board):
        """
        Resolve one attack: flat damage, then the attacker's team heal.
        """
        damage = attacker.attack
        await self._pause(self.config.hit_delay)

        target.take_damage(damage)
        self.events.emit(
            EventType.ATTACK_RESOLVED,
            attacker_pos=attacker.position,
            target_pos=target.position,
            damage=damage,
            is_player_attacking=is_player_attacking,
            target_health=target.health,
        )

        if not target.is_alive:
            self.events.emit(EventType.UNIT_DEFEATED, position=target.position, is_player_side=not is_player_attacking)

        if self.config.enable_team_heal:
            self.trigger_team_heal(allies, is_player_attacking)

        await self._pause(self.config.hit_delay)

    def trigger_team_heal(self, allies: Board, is_player_side: bool) -> int:
        """
        Heal every living ally by the summed heal power of living supports.

        Returns:
            Total health restored
        """
        total_heal = sum(
            unit.heal_power for unit in allies.get_alive_units()
            if unit.is_support and unit.heal_power > 0
        )
        if total_heal <= 0:
            return 0

        restored = 0
        for position, unit in allies.occupied():
            gained = unit.heal(total_heal)
            if gained > 0:
                restored += gained
                self.events.emit(EventType.HEAL_APPLIED, position=position, amount=gained, is_player_side=is_player_side)
        return restored

    @staticmethod
    def determine_outcome(player_board: Board, enemy_board: Board) -> BattleOutcome:
        """Win if only the player has living units, loss if only the enemy does, else draw."""
        player_alive = player_board.has_alive_units()
        enemy_alive = enemy_board.has_alive_units()

        if player_alive and not enemy_alive:
            return BattleOutcome.WIN
        if enemy_alive and not player_alive:
            return BattleOutcome.LOSS
        return BattleOutcome.DRAW
