"""Inventory — per-owner set of discovered elements.

Invariants:
    - record_discovery is idempotent: an already-known element returns False, no writes
    - Entries are append-only; an owner's inventory never shrinks
    - list_inventory orders by discovered_at, then insertion order
"""

import logging
from uuid import UUID

from sqlalchemy import select

from mixit.core.domain_types import ElementId, OwnerId
from mixit.core.errors import CombinationConflictError
from mixit.infrastructure.database import DatabaseSessionManager
from mixit.models.element import Element
from mixit.models.inventory_entry import InventoryEntry

logger = logging.getLogger(__name__)


class SqlInventory:
    """Inventory table behind the InventoryStore protocol."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    async def record_discovery(
        self, owner_id: OwnerId | str, element_id: ElementId | UUID,
    ) -> bool:
        """Record that `owner_id` obtained `element_id`. True only the first time."""
        try:
            async with self._db.session() as db:
                existing = await db.execute(
                    select(InventoryEntry.id).where(
                        InventoryEntry.owner_id == owner_id,
                        InventoryEntry.element_id == element_id,
                    ),
                )
                if existing.scalar_one_or_none() is not None:
                    return False
                db.add(InventoryEntry(owner_id=owner_id, element_id=element_id))
                await db.commit()
        except CombinationConflictError:
            # same owner discovered the same element in a parallel request
            return False
        logger.info(
            "Element discovered",
            extra={"owner_id": owner_id, "element_id": str(element_id)},
        )
        return True

    async def list_inventory(self, owner_id: OwnerId | str) -> list[Element]:
        async with self._db.session() as db:
            result = await db.execute(
                select(Element)
                .join(InventoryEntry, InventoryEntry.element_id == Element.id)
                .where(InventoryEntry.owner_id == owner_id)
                .order_by(InventoryEntry.discovered_at, InventoryEntry.id),
            )
            return list(result.scalars().all())
