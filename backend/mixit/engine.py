"""Mixit Engine — library entry point consumed by the UI layer.

Invariants:
    - start() creates the schema and seeds starter elements before any resolution
    - Every public call is scoped to one owner/pair; no error stops the engine
    - open_engine() configures logging, starts, and always closes the engine
    - close() cancels in-flight resolutions before the pool is disposed

Design Decisions:
    - Collaborators built from Settings unless injected (tests inject the oracle)
    - No module-level engine singleton; the caller owns the instance
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Sequence
from uuid import UUID

from mixit.config import Settings, get_settings
from mixit.core.domain_types import STARTER_ELEMENTS, OwnerId
from mixit.core.repository_protocols import OracleClientLike
from mixit.core.retry_policy import RetryPolicy
from mixit.infrastructure.database import DatabaseSessionManager
from mixit.infrastructure.observability import setup_logging
from mixit.infrastructure.oracle_client import AnthropicOracleClient
from mixit.schemas.element import ElementView, ResolvedElement
from mixit.services.arcade_goal import ArcadeGoal, ArcadeGoalService
from mixit.services.element_store import SqlElementStore
from mixit.services.inventory import SqlInventory
from mixit.services.resolution_coordinator import ResolutionCoordinator

logger = logging.getLogger(__name__)


class MixitEngine:
    """Wires store, inventory, oracle and coordinator together."""

    def __init__(
        self,
        settings: Settings | None = None,
        oracle: OracleClientLike | None = None,
        retry_policy: RetryPolicy | None = None,
    ):
        self.settings = settings or get_settings()
        self.db = DatabaseSessionManager(
            self.settings.database_url,
            pool_size=self.settings.database_pool_size,
            max_overflow=self.settings.database_max_overflow,
        )
        self.oracle = oracle or AnthropicOracleClient(
            api_key=self.settings.anthropic_api_key,
            model=self.settings.oracle_model,
            max_tokens=self.settings.oracle_max_tokens,
            timeout_seconds=self.settings.oracle_timeout_seconds,
            max_name_length=self.settings.max_element_name_length,
            max_icon_length=self.settings.max_icon_length,
        )
        self.store = SqlElementStore(self.db)
        self.inventory = SqlInventory(self.db)
        self.coordinator = ResolutionCoordinator(
            self.store,
            self.inventory,
            self.oracle,
            retry_policy or RetryPolicy(
                max_attempts=self.settings.oracle_max_attempts,
                base_delay_ms=self.settings.oracle_base_delay_ms,
                max_delay_ms=self.settings.oracle_max_delay_ms,
            ),
        )
        self.arcade = ArcadeGoalService(self.oracle)

    async def start(self) -> None:
        await self.db.create_schema()
        if self.settings.seed_starter_elements:
            await self.store.seed_elements(STARTER_ELEMENTS)
        logger.info("Mixit engine started")

    async def close(self) -> None:
        await self.coordinator.shutdown()
        await self.db.dispose()
        logger.info("Mixit engine closed")

    async def resolve_combination(
        self, owner_id: OwnerId | str, element_id_a: UUID, element_id_b: UUID,
    ) -> ResolvedElement:
        """Mix two known elements for `owner_id`.

        Raises ResourceNotFoundError for unknown element ids, OracleTransportError /
        OracleValidationError when synthesis fails, StoreUnavailableError when the
        database is down.
        """
        return await self.coordinator.resolve(owner_id, element_id_a, element_id_b)

    async def list_inventory(self, owner_id: OwnerId | str) -> list[ElementView]:
        """Elements discovered by `owner_id`, oldest discovery first."""
        elements = await self.inventory.list_inventory(owner_id)
        return [ElementView.model_validate(e) for e in elements]

    async def grant_starter_elements(self, owner_id: OwnerId | str) -> list[ElementView]:
        """Give a new owner the starter elements; returns their full inventory.

        Starters missing from the store (seeding disabled) are created first.
        """
        for element in await self.store.seed_elements(STARTER_ELEMENTS):
            await self.inventory.record_discovery(owner_id, element.id)
        return await self.list_inventory(owner_id)

    async def list_elements(self) -> list[ElementView]:
        return [ElementView.model_validate(e) for e in await self.store.list_elements()]

    async def new_arcade_goal(self, recent_targets: Sequence[str] = ()) -> ArcadeGoal:
        return await self.arcade.new_goal(recent_targets)

    def is_goal_reached(self, goal: ArcadeGoal, element: ElementView) -> bool:
        return self.arcade.is_goal_reached(goal, element)

    async def health_check(self) -> bool:
        return await self.db.health_check()


@asynccontextmanager
async def open_engine(
    settings: Settings | None = None,
    oracle: OracleClientLike | None = None,
    configure_logging: bool = True,
) -> AsyncGenerator[MixitEngine, None]:
    """Startup/shutdown lifecycle for a MixitEngine."""
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings.log_level, settings.log_format)
    engine = MixitEngine(settings, oracle=oracle)
    await engine.start()
    try:
        yield engine
    finally:
        await engine.close()
