"""Item registry and the SQL-backed player inventory used to grant rewards."""

from __future__ import annotations

import logging
import math
import re
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError

from quizcraft import db
from quizcraft.models import InventoryItem, Player
from .errors import UnknownRewardItem

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = 'minecraft'
_ITEM_ID = re.compile(r'^[a-z0-9_.-]+:[a-z0-9_./-]+$')


class ItemRegistry:
    """Resolves reward item ids to canonical ``namespace:path`` form."""

    def __init__(self, known_items: Iterable[str] = ()) -> None:
        self._known = {self.canonical(item) for item in known_items}

    @staticmethod
    def canonical(item_id: str) -> str:
        item_id = item_id.strip()
        if ':' not in item_id:
            item_id = f"{DEFAULT_NAMESPACE}:{item_id}"
        return item_id

    def resolve(self, item_id: str) -> str:
        canonical = self.canonical(item_id)
        if not _ITEM_ID.match(canonical):
            raise UnknownRewardItem(item_id)
        if self._known and canonical not in self._known:
            raise UnknownRewardItem(item_id)
        return canonical


class SqlInventory:
    """Player inventories stored as one row per (player, item).

    A player has ``slots`` slots holding up to ``stack_size`` of one item
    each. Must be called inside an application context.
    """

    def __init__(self, slots: int = 36, stack_size: int = 64) -> None:
        self.slots = slots
        self.stack_size = stack_size

    def _slots_for(self, quantity):
        return math.ceil(quantity / self.stack_size)

    def grant(self, participant_id: int, item_id: str, quantity: int) -> bool:
        try:
            return self._grant(participant_id, item_id, quantity)
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.error(f"[grant-failed] player id={participant_id} item={item_id} qty={quantity}: {exc}")
            return False

    def _grant(self, participant_id, item_id, quantity):
        player = db.session.get(Player, participant_id)
        if player is None:
            logger.warning(f"[grant-failed] unknown player id={participant_id}")
            return False
        rows = InventoryItem.query.filter_by(player_id=player.id).all()
        used = sum(self._slots_for(row.quantity) for row in rows if row.item_id != item_id)
        current = next((row for row in rows if row.item_id == item_id), None)
        new_total = (current.quantity if current else 0) + quantity
        if used + self._slots_for(new_total) > self.slots:
            logger.info(f"[grant-failed] inventory full player={player.name} item={item_id} qty={quantity}")
            return False
        if current is None:
            current = InventoryItem(player_id=player.id, item_id=item_id, quantity=0)
        current.quantity = new_total
        db.session.add(current)
        db.session.commit()
        return True

    def contents(self, participant_id: int) -> dict[str, int]:
        rows = InventoryItem.query.filter_by(player_id=participant_id).all()
        return {row.item_id: row.quantity for row in rows}
