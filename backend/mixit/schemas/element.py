"""Element Schemas — results handed back to the UI layer.

Invariants:
    - Built from ORM rows via from_attributes; never expose normalized_name
    - ResolvedElement carries whether the pair came from the cache and whether
      the owner discovered the element for the first time
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ElementView(BaseModel):
    """Public view of one element."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    name: str
    icon: str
    created_at: datetime

    @property
    def label(self) -> str:
        return f"{self.icon} {self.name}"


class ResolvedElement(ElementView):
    """Outcome of resolve_combination for one caller."""
    pair_key: str
    from_cache: bool
    newly_discovered: bool
