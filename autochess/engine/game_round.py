"""
Round Controller.

Orchestrates the game lifecycle:
- Placement phase (shop, purchases, swaps, reserve)
- Battle phase (enemy roster vs player board)
- Rewards and round transitions
- Terminal defeat and restart
"""
import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, Optional

from autochess.config import GameConfig, get_default_config
from autochess.core.roster import RosterManager
from autochess.core.shop import ShopGenerator
from autochess.core.state import GameState
from autochess.engine.combat import BattleResult, CombatResolver, Sleep
from autochess.engine.economy import EconomyEngine, RoundReward
from autochess.engine.enemy import EnemyGenerator
from autochess.engine.events import EventQueue, EventType
from autochess.errors import CommandRejectedError
from autochess.utils.constants import BattleOutcome, CommandStatus, GamePhase
from unit_data import UnitDataLoader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BattleReport:
    """Everything a presentation layer needs after a battle."""
    round_number: int
    result: BattleResult
    reward: RoundReward
    gold: int
    health: int
    win_streak: int
    game_over: bool

    @property
    def outcome(self) -> BattleOutcome:
        return self.result.outcome


class RoundController:
    """
    Owns the GameState and is the only entry point for mutating it.

    Placement commands return a CommandStatus; `start_battle` is a
    coroutine returning a BattleReport.

    Usage:
        controller = RoundController(get_headless_config(seed=7))
        controller.purchase(0)
        report = asyncio.run(controller.start_battle())
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        data_loader: Optional[UnitDataLoader] = None,
        events: Optional[EventQueue] = None,
        sleep: Optional[Sleep] = None,
    ):
        """
        Args:
            config: Game configuration (default: get_default_config())
            data_loader: Unit catalog. If None, loads config.data_dir
            events: Event sink shared by every component
            sleep: Async pacing function handed to the combat resolver
        """
        self.config = config or get_default_config()
        self.data_loader = data_loader or UnitDataLoader(self.config.data_dir)
        self.events = events or EventQueue()
        self.rng = random.Random(self.config.seed)

        self.economy = EconomyEngine(self.config, ShopGenerator(self.data_loader, self.rng))
        self.enemy_generator = EnemyGenerator(self.config, self.data_loader, self.rng)
        self.combat = CombatResolver(self.config, rng=self.rng, events=self.events, sleep=sleep)

        self.state = GameState(self.config)
        self.roster = RosterManager(self.state, self.data_loader, self.events)
        self._start_game()

    def _start_game(self):
        """Free shop and first enemy roster."""
        self.economy.refresh_shop(self.state, free=True)
        self.events.emit(EventType.SHOP_REFRESHED, free=True)
        self.enemy_generator.generate(self.state.round_number, self.state.enemy_board)

    # ===== Command gating =====

    def _placement_status(self) -> CommandStatus:
        if self.state.in_battle:
            return CommandStatus.OPERATION_DURING_BATTLE
        if self.state.phase == GamePhase.DEFEAT:
            return CommandStatus.GAME_OVER
        return CommandStatus.SUCCESS

    def _rejected(self, command: str, status: CommandStatus) -> CommandStatus:
        logger.info("%s rejected: %s", command, status.value)
        return status

    # ===== Placement commands =====

    def refresh_shop(self, free: bool = False) -> CommandStatus:
        """Reroll the shop, paying the refresh cost unless free."""
        status = self._placement_status()
        if not status.ok:
            return self._rejected("Shop refresh", status)

        status = self.economy.refresh_shop(self.state, free=free)
        if status.ok:
            self.events.emit(EventType.SHOP_REFRESHED, free=free)
        return status

    def purchase(self, shop_index: int) -> CommandStatus:
        """Buy a shop slot onto the first empty cell (or the reserve)."""
        status = self._placement_status()
        if not status.ok:
            return self._rejected("Purchase", status)
        return self.roster.purchase(shop_index)

    def purchase_at(self, shop_index: int, position: int) -> CommandStatus:
        """Buy a shop slot into a chosen cell."""
        status = self._placement_status()
        if not status.ok:
            return self._rejected("Purchase", status)
        return self.roster.purchase_at(shop_index, position)

    def swap(self, pos_a: int, pos_b: int) -> CommandStatus:
        """Move or swap board units, then merge the moved archetype."""
        status = self._placement_status()
        if not status.ok:
            return self._rejected("Swap", status)
        return self.roster.swap(pos_a, pos_b)

    def merge_reserve(self, unit_id: str) -> CommandStatus:
        """Merge reserve copies with star-1 board copies into a star-2 unit."""
        status = self._placement_status()
        if not status.ok:
            return self._rejected("Reserve merge", status)
        if not self.roster.merge_with_reserve(unit_id):
            return self._rejected("Reserve merge", CommandStatus.NOTHING_TO_MERGE)
        return CommandStatus.SUCCESS

    def deploy_reserve(self, unit_id: str) -> CommandStatus:
        """Place one reserve copy on the first empty cell."""
        status = self._placement_status()
        if not status.ok:
            return self._rejected("Reserve deploy", status)
        return self.roster.deploy_from_reserve(unit_id)

    # ===== Battle =====

    async def start_battle(self) -> BattleReport:
        """
        Fight this round's enemies and settle the round.

        Raises:
            CommandRejectedError: a battle is already running, or the game is over
        """
        if self.state.in_battle:
            raise CommandRejectedError(CommandStatus.OPERATION_DURING_BATTLE, "A battle is already in progress")
        if self.state.phase == GamePhase.DEFEAT:
            raise CommandRejectedError(CommandStatus.GAME_OVER, "The game is over, restart to play again")

        self.state.in_battle = True
        self.state.phase = GamePhase.BATTLE
        self.events.emit(EventType.BATTLE_STARTED, round=self.state.round_number)
        logger.info("Round %d battle starts", self.state.round_number)

        try:
            result = await self.combat.resolve_combat(self.state.board, self.state.enemy_board)
            report = self._settle_round(result)
        finally:
            self.state.in_battle = False
            if self.state.phase == GamePhase.BATTLE:
                self.state.phase = GamePhase.PLACEMENT

        return report

    def _settle_round(self, result: BattleResult) -> BattleReport:
        """Apply streak, life loss and rewards, then advance or end the game."""
        state = self.state
        round_number = state.round_number
        outcome = result.outcome

        if outcome == BattleOutcome.WIN:
            state.win_streak += 1
        elif outcome == BattleOutcome.LOSS:
            state.health = max(0, state.health - self.config.defeat_health_loss)
            state.win_streak = 0
        else:
            state.win_streak = 0

        reward = self.economy.compute_round_reward(outcome, round_number, state.gold, state.win_streak)
        state.gold += reward.total
        state.last_outcome = outcome

        self.events.emit(EventType.BATTLE_OUTCOME, outcome=outcome, reward=reward.to_dict(), round=round_number)
        logger.info(
            "Round %d %s: %d gold + %d interest + %d streak bonus = %d",
            round_number, outcome.value, reward.base, reward.interest, reward.streak_bonus, reward.total,
        )

        game_over = outcome == BattleOutcome.LOSS or state.health <= 0
        if game_over:
            state.phase = GamePhase.DEFEAT
            self.events.emit(EventType.GAME_OVER, round=round_number)
            logger.info("Game over in round %d", round_number)
        else:
            self._advance_round()

        return BattleReport(
            round_number=round_number,
            result=result,
            reward=reward,
            gold=state.gold,
            health=state.health,
            win_streak=state.win_streak,
            game_over=game_over,
        )

    def _advance_round(self):
        """Next round: new enemies, free shop, back to placement."""
        state = self.state
        state.round_number += 1
        self.enemy_generator.generate(state.round_number, state.enemy_board)
        self.economy.refresh_shop(state, free=True)
        self.events.emit(EventType.SHOP_REFRESHED, free=True)
        state.phase = GamePhase.PLACEMENT
        self.events.emit(EventType.ROUND_ADVANCED, new_round=state.round_number)

    # ===== Lifecycle =====

    def restart(self) -> CommandStatus:
        """Reset the game to its initial values. Rejected during a battle."""
        if self.state.in_battle:
            return self._rejected("Restart", CommandStatus.OPERATION_DURING_BATTLE)

        # Shop, enemies and combat share this generator
        self.rng.seed(self.config.seed)
        self.state = GameState(self.config)
        self.roster = RosterManager(self.state, self.data_loader, self.events)
        self.events.clear()
        self.events.emit(EventType.GAME_RESTARTED)
        self._start_game()
        logger.info("Game restarted")
        return CommandStatus.SUCCESS

    def is_game_over(self) -> bool:
        return self.state.phase == GamePhase.DEFEAT

    def snapshot(self) -> Dict[str, Any]:
        """Read-only view of the game for presentation."""
        return self.state.get_state_dict()
