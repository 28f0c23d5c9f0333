"""
Roster and merge management.

Manages the player's units:
- Placement on the board and overflow into the reserve
- Purchases, including the purchase-time merge lookahead
- Swaps and the 3-of-a-kind merge chain
- Reserve merges and deployment
"""
import logging
from typing import Optional

from autochess.config import GameConstants
from autochess.core.shop import ShopSlot
from autochess.core.state import GameState
from autochess.core.unit import Unit, create_unit
from autochess.engine.events import EventQueue, EventType
from autochess.utils.constants import CommandStatus
from unit_data import UnitDataLoader

logger = logging.getLogger(__name__)


class RosterManager:
    """
    Owns every mutation of the player board and reserve.

    Commands validate first and only then touch the state, so a rejected
    command is always a no-op.
    """

    def __init__(self, state: GameState, data_loader: UnitDataLoader, events: Optional[EventQueue] = None):
        """
        Args:
            state: Game state whose board and reserve are managed
            data_loader: Unit catalog
            events: Event sink for merges and purchases
        """
        self.state = state
        self.data_loader = data_loader
        self.events = events or EventQueue()

    @property
    def board(self):
        return self.state.board

    # ===== Placement =====

    def _new_unit(self, unit_id: str, star: int) -> Unit:
        return create_unit(self.data_loader.stats_for(unit_id, star))

    def place_on_board(self, unit_id: str, star: int = 1) -> Optional[int]:
        """
        Put a new unit in the first empty cell (index order 0..15).

        Returns:
            The cell used, or None if the board is full
        """
        position = self.board.first_empty()
        if position is None:
            return None

        self.board.place(self._new_unit(unit_id, star), position)
        return position

    def landing_star(self, unit_id: str) -> int:
        """
        Star level a purchased copy lands at.

        Two star-2 copies plus two star-1 copies on the board -> star 3;
        two star-1 copies -> star 2; otherwise star 1.
        """
        count1 = len(self.board.find_units(unit_id, 1))
        count2 = len(self.board.find_units(unit_id, 2))

        if count2 >= 2 and count1 >= 2:
            return 3
        if count1 >= 2:
            return 2
        return 1

    def _remove_other_copies(self, unit_id: str, keep_position: Optional[int] = None) -> int:
        """Remove every board copy of unit_id except the one at keep_position."""
        removed = 0
        for position, unit in list(self.board.occupied()):
            if unit.unit_id == unit_id and position != keep_position:
                self.board.remove(position)
                removed += 1
        return removed

    def _take_slot(self, shop_index: int) -> ShopSlot:
        slot = self.state.shop.pop(shop_index)
        self.state.gold -= slot.cost
        return slot

    def _validate_slot(self, shop_index: int) -> CommandStatus:
        if not isinstance(shop_index, int) or not (0 <= shop_index < len(self.state.shop)):
            return CommandStatus.INVALID_SLOT_INDEX
        if self.state.gold < self.state.shop[shop_index].cost:
            return CommandStatus.INSUFFICIENT_FUNDS
        return CommandStatus.SUCCESS

    # ===== Purchases =====

    def purchase(self, shop_index: int) -> CommandStatus:
        """
        Buy a shop slot onto the first empty cell.

        A copy landing at star 2 or 3 through the lookahead removes every
        other board copy of that unit, however many there were. When the
        board is full the lookahead removal happens first so the upgraded
        copy has a cell; a star-1 copy that finds no cell goes to the
        reserve.

        Returns:
            SUCCESS, INVALID_SLOT_INDEX or INSUFFICIENT_FUNDS
        """
        status = self._validate_slot(shop_index)
        if not status.ok:
            logger.info("Purchase of slot %s rejected: %s", shop_index, status.value)
            return status

        slot = self._take_slot(shop_index)
        unit_id = slot.unit_id
        star = self.landing_star(unit_id)

        if star > 1 and self.board.is_full():
            self._remove_other_copies(unit_id)

        position = self.place_on_board(unit_id, star)

        if position is None:
            self.state.add_to_reserve(unit_id)
            logger.debug("Board full, %s sent to reserve", unit_id)
        elif star > 1:
            self._remove_other_copies(unit_id, keep_position=position)
            self.events.emit(EventType.UNIT_MERGED, unit_id=unit_id, new_star=star, position=position)

        self.events.emit(EventType.UNIT_PURCHASED, unit_id=unit_id, star=star if position is not None else 1,
                         position=position, cost=slot.cost)

        if position is not None:
            self.check_auto_merge_chain(unit_id)

        return CommandStatus.SUCCESS

    def purchase_at(self, shop_index: int, position: int) -> CommandStatus:
        """
        Buy a shop slot straight into a chosen cell.

        An occupant moves to the first other empty cell, or into the reserve
        as a star-1 copy when the board has no other empty cell.

        Returns:
            SUCCESS, INVALID_SLOT_INDEX, INVALID_POSITION or INSUFFICIENT_FUNDS
        """
        if not self.board.is_valid_position(position):
            logger.info("Purchase into cell %s rejected: invalid position", position)
            return CommandStatus.INVALID_POSITION

        status = self._validate_slot(shop_index)
        if not status.ok:
            logger.info("Purchase of slot %s rejected: %s", shop_index, status.value)
            return status

        slot = self._take_slot(shop_index)
        unit_id = slot.unit_id
        star = self.landing_star(unit_id)

        occupant = self.board.remove(position)
        if occupant is not None:
            new_position = self.board.first_empty(exclude=position)
            if new_position is not None:
                self.board.place(occupant, new_position)
            else:
                self.state.add_to_reserve(occupant.unit_id)
                logger.debug("No room for displaced %s, sent to reserve", occupant.unit_id)

        self.board.place(self._new_unit(unit_id, star), position)

        if star > 1:
            self._remove_other_copies(unit_id, keep_position=position)
            self.events.emit(EventType.UNIT_MERGED, unit_id=unit_id, new_star=star, position=position)

        self.events.emit(EventType.UNIT_PURCHASED, unit_id=unit_id, star=star, position=position, cost=slot.cost)
        self.check_auto_merge_chain(unit_id)
        return CommandStatus.SUCCESS

    # ===== Merges =====

    def check_auto_merge(self, unit_id: str, star: int) -> bool:
        """
        Merge three copies of (unit_id, star) into one of star + 1.

        The first copy in scan order is upgraded in place; the second and
        third are removed.

        Returns:
            True if a merge occurred
        """
        if star >= GameConstants.MAX_STAR:
            return False

        same = self.board.find_units(unit_id, star)
        if len(same) < GameConstants.MERGE_COUNT:
            return False

        keep = same[0]
        keep.apply_stats(self.data_loader.stats_for(unit_id, star + 1))
        for consumed in same[1:GameConstants.MERGE_COUNT]:
            self.board.remove(consumed.position)

        logger.debug("%s merged to %d stars at cell %d", unit_id, keep.star, keep.position)
        self.events.emit(EventType.UNIT_MERGED, unit_id=unit_id, new_star=keep.star, position=keep.position)
        return True

    def check_auto_merge_chain(self, unit_id: str) -> int:
        """
        Merge star 1 then star 2 repeatedly until a full pass changes nothing.

        Each merge removes two units, so the loop ends after at most
        board-size / 2 merges.

        Returns:
            Number of merges performed
        """
        merges = 0
        while True:
            merged = False
            for star in range(GameConstants.MIN_STAR, GameConstants.MAX_STAR):
                if self.check_auto_merge(unit_id, star):
                    merged = True
                    merges += 1
            if not merged:
                return merges

    def merge_with_reserve(self, unit_id: str) -> bool:
        """
        Combine reserve copies with star-1 board copies into a star-2 unit.

        Reserve copies are consumed first, then board copies in scan order.
        The star-2 unit takes the first consumed board cell, else the first
        empty cell. With no cell available the reserve copies are returned
        and nothing changes.

        Returns:
            True if the merge happened
        """
        in_reserve = self.state.reserve_count(unit_id)
        field_copies = self.board.find_units(unit_id, 1)
        if in_reserve + len(field_copies) < GameConstants.MERGE_COUNT:
            return False

        from_reserve = min(GameConstants.MERGE_COUNT, in_reserve)
        from_field = GameConstants.MERGE_COUNT - from_reserve

        target = None
        if from_field > 0:
            target = field_copies[0].position
        elif self.board.is_full():
            logger.info("No cell for a merged %s, reserve left untouched", unit_id)
            return False

        self.state.take_from_reserve(unit_id, from_reserve)
        for unit in field_copies[:from_field]:
            self.board.remove(unit.position)

        if target is None:
            target = self.board.first_empty()

        self.board.place(self._new_unit(unit_id, 2), target)
        self.events.emit(EventType.UNIT_MERGED, unit_id=unit_id, new_star=2, position=target)
        self.check_auto_merge_chain(unit_id)
        return True

    def deploy_from_reserve(self, unit_id: str) -> CommandStatus:
        """
        Move one reserve copy onto the first empty cell as a star-1 unit.

        Returns:
            SUCCESS, RESERVE_EMPTY or BOARD_FULL
        """
        if self.state.reserve_count(unit_id) <= 0:
            status = CommandStatus.RESERVE_EMPTY
        elif self.board.is_full():
            status = CommandStatus.BOARD_FULL
        else:
            status = CommandStatus.SUCCESS
        if not status.ok:
            logger.info("Deploy of %s rejected: %s", unit_id, status.value)
            return status

        self.state.take_from_reserve(unit_id)
        self.place_on_board(unit_id, 1)
        self.check_auto_merge_chain(unit_id)
        return CommandStatus.SUCCESS

    # ===== Movement =====

    def swap(self, pos_a: int, pos_b: int) -> CommandStatus:
        """
        Move the unit at pos_a to pos_b, swapping with any occupant.

        Runs the merge chain for the moved unit afterwards.

        Returns:
            SUCCESS or INVALID_POSITION (out of range, same cell, or empty source)
        """
        moving = self.board.get(pos_a)
        if moving is None or pos_a == pos_b or not self.board.is_valid_position(pos_b):
            logger.info("Swap %s -> %s rejected: invalid position", pos_a, pos_b)
            return CommandStatus.INVALID_POSITION

        self.board.swap(pos_a, pos_b)
        self.check_auto_merge_chain(moving.unit_id)
        return CommandStatus.SUCCESS

    def get_total_unit_count(self) -> int:
        """Units on the board plus reserve copies."""
        return self.board.count_units() + sum(self.state.reserve.values())
