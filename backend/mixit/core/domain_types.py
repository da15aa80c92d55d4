"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ElementId wraps UUID, OwnerId wraps str, CanonicalKey wraps str
    - CanonicalKey is only ever built by core/canonical_key.normalize()
    - All resolution states encoded as Enum; no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON log fields without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

ElementId = NewType("ElementId", UUID)
OwnerId = NewType("OwnerId", str)
CanonicalKey = NewType("CanonicalKey", str)


# ─── Enums ───────────────────────────────────────────────────────

class ResolutionState(str, Enum):
    """Per-key states of one resolution request.

    PERSISTED and FAILED are terminal and never stored; only their effects are.
    """
    IDLE = "idle"
    LOOKUP = "lookup"
    HIT_DONE = "hit_done"
    MISS_PENDING = "miss_pending"
    SYNTHESIZING = "synthesizing"
    PERSISTED = "persisted"
    FAILED = "failed"


class OracleFailureKind(str, Enum):
    """Why an oracle attempt did not produce a usable element."""
    TRANSPORT = "transport"
    VALIDATION = "validation"


# ─── Starter Elements ────────────────────────────────────────────

# (name, icon): seeded into a fresh store and granted to new owners
STARTER_ELEMENTS: tuple[tuple[str, str], ...] = (
    ("Water", "💧"),
    ("Earth", "🌍"),
    ("Fire", "🔥"),
    ("Air", "🌬️"),
)
