"""Combination ORM — the stored outcome of mixing one unordered pair.

Invariants:
    - key (canonical pair key) is the primary key: exactly one outcome per pair
    - result_element_id references elements.id
    - Never mutated or deleted once inserted
"""

import uuid
from datetime import datetime

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from mixit.db.base import Base
from mixit.db.types import UTCDateTime, utc_now


class Combination(Base):
    __tablename__ = "combinations"

    key: Mapped[str] = mapped_column(String(80), primary_key=True)
    result_element_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("elements.id"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utc_now,
    )

    result_element: Mapped["Element"] = relationship(
        "Element", lazy="joined",
    )
