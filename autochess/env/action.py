"""
Command space definition and execution for headless play.

Implements hierarchical commands with masking:
- Level 1: Command type (7 options)
- Level 2: Command parameters (conditional on type)
"""
from typing import Dict, Optional

import numpy as np

from autochess.config import GameConstants
from autochess.engine.game_round import RoundController
from autochess.utils.constants import CommandStatus, CommandType, GamePhase


class ActionSpace:
    """
    Defines the command space and provides masking.

    The space is hierarchical:
    1. Choose command type (0-6)
    2. Choose parameters based on command type:
       - PURCHASE: shop_slot (0-4)
       - SWAP: swap_from (0-15), swap_to (0-15)
       - MERGE_RESERVE / DEPLOY_RESERVE: unit_index (catalog order)

    Masks mirror the checks the controller performs, so a masked-in
    command never comes back rejected.
    """

    def __init__(self, controller: RoundController):
        """
        Args:
            controller: Game whose commands are masked and executed
        """
        self.controller = controller
        self.unit_ids = controller.data_loader.get_unit_ids()

        self.num_command_types = len(CommandType)
        self.num_shop_slots = controller.config.shop_size
        self.num_positions = GameConstants.BOARD_SIZE
        self.num_units = len(self.unit_ids)

    def get_action_mask(self) -> Dict[str, np.ndarray]:
        """
        Generate command masks for the current state.

        Returns:
            Dictionary of boolean masks:
            - 'command_type': [num_command_types]
            - 'shop_slot': [num_shop_slots] - slots that can be bought
            - 'swap_from': [num_positions] - occupied cells
            - 'swap_to': [num_positions] - any cell
            - 'merge_unit': [num_units] - units with enough copies to merge
            - 'deploy_unit': [num_units] - reserve units that fit on the board
        """
        state = self.controller.state
        mask = {
            'command_type': np.zeros(self.num_command_types, dtype=bool),
            'shop_slot': self._get_shop_mask(),
            'swap_from': np.zeros(self.num_positions, dtype=bool),
            'swap_to': np.ones(self.num_positions, dtype=bool),
            'merge_unit': np.zeros(self.num_units, dtype=bool),
            'deploy_unit': np.zeros(self.num_units, dtype=bool),
        }

        if state.in_battle or state.phase == GamePhase.DEFEAT:
            mask['shop_slot'][:] = False
            mask['swap_to'][:] = False
            return mask

        for position, _ in state.board.occupied():
            mask['swap_from'][position] = True

        board_full = state.board.is_full()
        for i, unit_id in enumerate(self.unit_ids):
            in_reserve = state.reserve_count(unit_id)
            field_copies = len(state.board.find_units(unit_id, 1))
            from_field = GameConstants.MERGE_COUNT - min(GameConstants.MERGE_COUNT, in_reserve)
            has_room = from_field > 0 or not board_full
            mask['merge_unit'][i] = in_reserve + field_copies >= GameConstants.MERGE_COUNT and has_room
            mask['deploy_unit'][i] = in_reserve > 0 and not board_full

        command_mask = mask['command_type']
        command_mask[CommandType.PASS] = True
        command_mask[CommandType.REFRESH_SHOP] = state.gold >= self.controller.config.shop_refresh_cost
        command_mask[CommandType.PURCHASE] = mask['shop_slot'].any()
        command_mask[CommandType.SWAP] = mask['swap_from'].any()
        command_mask[CommandType.MERGE_RESERVE] = mask['merge_unit'].any()
        command_mask[CommandType.DEPLOY_RESERVE] = mask['deploy_unit'].any()
        command_mask[CommandType.START_BATTLE] = True

        return mask

    def _get_shop_mask(self) -> np.ndarray:
        """
        A slot is valid if it still exists and the player can afford it.

        Returns:
            Boolean array of shape [num_shop_slots]
        """
        state = self.controller.state
        mask = np.zeros(self.num_shop_slots, dtype=bool)
        for i, slot in enumerate(state.shop[:self.num_shop_slots]):
            mask[i] = self.controller.economy.can_afford(slot, state.gold)
        return mask

    def execute_action(
        self,
        command_type: int,
        shop_slot: int = 0,
        swap_from: int = 0,
        swap_to: int = 0,
        unit_index: int = 0,
    ) -> CommandStatus:
        """
        Execute a placement command.

        START_BATTLE is a coroutine on the controller and is not handled
        here; await RoundController.start_battle() instead.

        Returns:
            Status reported by the controller
        """
        command_type = CommandType(command_type)

        if command_type == CommandType.PASS:
            return CommandStatus.SUCCESS

        elif command_type == CommandType.REFRESH_SHOP:
            return self.controller.refresh_shop()

        elif command_type == CommandType.PURCHASE:
            return self.controller.purchase(shop_slot)

        elif command_type == CommandType.SWAP:
            return self.controller.swap(swap_from, swap_to)

        elif command_type == CommandType.MERGE_RESERVE:
            return self.controller.merge_reserve(self.unit_ids[unit_index])

        elif command_type == CommandType.DEPLOY_RESERVE:
            return self.controller.deploy_reserve(self.unit_ids[unit_index])

        else:
            raise ValueError(f"{command_type.name} must be awaited on the controller")

    def get_action_space_sizes(self) -> Dict[str, int]:
        """
        Get the size of each command component.
        """
        return {
            'command_type': self.num_command_types,
            'shop_slot': self.num_shop_slots,
            'position': self.num_positions,
            'unit': self.num_units,
        }

    def sample_valid_action(self, rng: Optional[np.random.Generator] = None) -> Dict[str, int]:
        """
        Sample a random valid command.

        Args:
            rng: numpy Generator; a fresh unseeded one if None

        Returns:
            Dictionary with sampled command components
        """
        rng = rng or np.random.default_rng()
        mask = self.get_action_mask()

        valid_commands = np.flatnonzero(mask['command_type'])
        if len(valid_commands) == 0:
            return {'command_type': int(CommandType.PASS)}

        command_type = CommandType(int(rng.choice(valid_commands)))
        action = {'command_type': int(command_type)}

        if command_type == CommandType.PURCHASE:
            action['shop_slot'] = int(rng.choice(np.flatnonzero(mask['shop_slot'])))

        elif command_type == CommandType.SWAP:
            swap_from = int(rng.choice(np.flatnonzero(mask['swap_from'])))
            targets = np.flatnonzero(mask['swap_to'])
            targets = targets[targets != swap_from]
            action['swap_from'] = swap_from
            action['swap_to'] = int(rng.choice(targets))

        elif command_type == CommandType.MERGE_RESERVE:
            action['unit_index'] = int(rng.choice(np.flatnonzero(mask['merge_unit'])))

        elif command_type == CommandType.DEPLOY_RESERVE:
            action['unit_index'] = int(rng.choice(np.flatnonzero(mask['deploy_unit'])))

        return action


def create_action_space(controller: RoundController) -> ActionSpace:
    """
    Factory function to create ActionSpace.
    """
    return ActionSpace(controller)
