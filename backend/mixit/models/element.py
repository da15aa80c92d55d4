"""Element ORM — a discovered game element.

Invariants:
    - id is UUID primary key
    - normalized_name is unique: one Element per case-insensitive name
    - Immutable once inserted; never deleted (referenced by combinations and inventories)
"""

import uuid
from datetime import datetime

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from mixit.db.base import Base
from mixit.db.types import UTCDateTime, utc_now


def normalize_name(name: str) -> str:
    """Case- and whitespace-insensitive form used for the uniqueness check."""
    return " ".join(name.split()).casefold()


class Element(Base):
    """Element entity — name + icon, shared by all owners."""
    __tablename__ = "elements"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    normalized_name: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True, index=True,
    )
    icon: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"Element({self.icon} {self.name})"
