"""ORM Models — SQLAlchemy declarative models for Element, Combination, InventoryEntry.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so string-based relationship() references resolve
      and Base.metadata is complete before create_all
"""

from mixit.models.element import Element  # noqa: F401
from mixit.models.combination import Combination  # noqa: F401
from mixit.models.inventory_entry import InventoryEntry  # noqa: F401
