"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Store and oracle access goes through Protocol types
    - Implementations provided by shell via dependency injection
    - Store lookups raise ResourceNotFoundError instead of returning None

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass plain fakes
    - ElementLike/CombinationLike keep the coordinator off the ORM classes
"""

from datetime import datetime
from typing import Protocol, Sequence
from uuid import UUID

from mixit.core.domain_types import CanonicalKey, ElementId, OwnerId
from mixit.core.oracle_outcome import OracleOutcome


class ElementLike(Protocol):
    """Structural contract for Element rows passed across the boundary."""
    id: UUID
    name: str
    icon: str
    created_at: datetime


class CombinationLike(Protocol):
    key: str
    result_element_id: UUID
    created_at: datetime


class ElementStore(Protocol):
    """Contract for Element + Combination persistence — implemented by shell."""
    async def get_element(self, element_id: ElementId) -> ElementLike: ...
    async def find_element_by_name(self, name: str) -> ElementLike: ...
    async def get_combination(self, key: CanonicalKey) -> CombinationLike: ...
    async def create_element_and_combination(
        self, key: CanonicalKey, name: str, icon: str,
    ) -> tuple[ElementLike, CombinationLike]: ...
    async def list_elements(self) -> list[ElementLike]: ...
    async def seed_elements(
        self, specs: Sequence[tuple[str, str]],
    ) -> list[ElementLike]: ...


class InventoryStore(Protocol):
    """Contract for per-owner discovery records — implemented by shell."""
    async def record_discovery(
        self, owner_id: OwnerId, element_id: ElementId,
    ) -> bool: ...
    async def list_inventory(self, owner_id: OwnerId) -> list[ElementLike]: ...


class OracleClientLike(Protocol):
    """Contract for the remote generative model — no caching, no retries."""
    async def synthesize(
        self, element_a: ElementLike, element_b: ElementLike,
    ) -> OracleOutcome: ...
    async def generate_goal_words(self, excluded: Sequence[str]) -> list[str]: ...
