"""InventoryEntry ORM — one element discovered by one owner.

Invariants:
    - (owner_id, element_id) is unique: an owner discovers an element once
    - Append-only; id increases with insertion order (tie-break for discovered_at)
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from mixit.db.base import Base
from mixit.db.types import UTCDateTime, utc_now


class InventoryEntry(Base):
    """Per-owner discovery record."""
    __tablename__ = "inventory_entries"
    __table_args__ = (
        UniqueConstraint("owner_id", "element_id", name="uq_inventory_owner_element"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    element_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("elements.id"), nullable=False,
    )
    discovered_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utc_now,
    )
