"""Element Store — SQL persistence for Elements and Combinations.

Invariants:
    - Lookups raise ResourceNotFoundError, never return None
    - create_element_and_combination is one transaction: both rows or neither
    - An existing Element with the same normalized name is reused, never duplicated
    - Unique-key races surface as CombinationConflictError with debug_info["conflict"]
      set to "element_name" or "combination_key"
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from mixit.core.domain_types import CanonicalKey, ElementId
from mixit.core.errors import (
    CombinationConflictError, ErrorContext, ResourceNotFoundError,
)
from mixit.infrastructure.database import DatabaseSessionManager
from mixit.models.combination import Combination
from mixit.models.element import Element, normalize_name

logger = logging.getLogger(__name__)


class SqlElementStore:
    """Element + Combination tables behind the ElementStore protocol."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    async def get_element(self, element_id: ElementId | UUID) -> Element:
        async with self._db.session() as db:
            element = await db.get(Element, element_id)
        if element is None:
            raise ResourceNotFoundError("Element", str(element_id))
        return element

    async def find_element_by_name(self, name: str) -> Element:
        """Case-insensitive lookup by display name."""
        async with self._db.session() as db:
            element = await self._find_by_name(db, name)
        if element is None:
            raise ResourceNotFoundError("Element", name)
        return element

    async def get_combination(self, key: CanonicalKey) -> Combination:
        async with self._db.session() as db:
            combination = await db.get(Combination, key)
        if combination is None:
            raise ResourceNotFoundError("Combination", key)
        return combination

    async def create_element_and_combination(
        self, key: CanonicalKey, name: str, icon: str,
    ) -> tuple[Element, Combination]:
        """Persist the outcome of `key`, reusing an Element with the same name."""
        context = ErrorContext(pair_key=key)
        async with self._db.session() as db:
            element = await self._find_by_name(db, name)
            if element is None:
                element = Element(
                    name=name, normalized_name=normalize_name(name), icon=icon,
                )
                db.add(element)
                try:
                    await db.flush()
                except IntegrityError:
                    await db.rollback()
                    context.debug_info = {"conflict": "element_name", "name": name}
                    raise CombinationConflictError(
                        f"Element '{name}' inserted concurrently", context,
                    )
                logger.info(
                    f"New element: {icon} {name}",
                    extra={"pair_key": key, "element_id": str(element.id)},
                )

            combination = Combination(key=key, result_element_id=element.id)
            db.add(combination)
            try:
                await db.commit()
            except IntegrityError:
                await db.rollback()
                context.debug_info = {"conflict": "combination_key"}
                raise CombinationConflictError(
                    f"Combination '{key}' inserted concurrently", context,
                )
        combination.result_element = element
        return element, combination

    async def list_elements(self) -> list[Element]:
        async with self._db.session() as db:
            result = await db.execute(
                select(Element).order_by(Element.created_at, Element.name),
            )
            return list(result.scalars().all())

    async def seed_elements(
        self, specs: Sequence[tuple[str, str]],
    ) -> list[Element]:
        """Insert (name, icon) pairs that are not present yet; return all of them."""
        seeded: list[Element] = []
        async with self._db.session() as db:
            for name, icon in specs:
                element = await self._find_by_name(db, name)
                if element is None:
                    element = Element(
                        name=name, normalized_name=normalize_name(name), icon=icon,
                    )
                    db.add(element)
                    logger.info(f"Seeded starter element: {icon} {name}")
                seeded.append(element)
            await db.commit()
        return seeded

    @staticmethod
    async def _find_by_name(db: AsyncSession, name: str) -> Element | None:
        result = await db.execute(
            select(Element).where(Element.normalized_name == normalize_name(name)),
        )
        return result.scalar_one_or_none()
