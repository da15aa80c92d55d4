"""Key Normalizer — order-independent canonical key for a pair of element ids.

Invariants:
    - normalize(a, b) == normalize(b, a) for all ids
    - normalize(a, a) is a valid key (self-combination)
    - Pure, total, deterministic: no IO, no failure modes
"""

from uuid import UUID

from mixit.core.domain_types import CanonicalKey

KEY_SEPARATOR = "+"


def normalize(id_a: UUID | str, id_b: UUID | str) -> CanonicalKey:
    """Build the canonical key by sorting the string forms lexicographically."""
    low, high = sorted((str(id_a), str(id_b)))
    return CanonicalKey(f"{low}{KEY_SEPARATOR}{high}")


def split_key(key: CanonicalKey) -> tuple[str, str]:
    """Inverse of normalize(): the two id strings in canonical order."""
    low, _, high = key.partition(KEY_SEPARATOR)
    return low, high
