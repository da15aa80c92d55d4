"""Core Layer — pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, infrastructure/, models/, or db/
    - All functions are pure and deterministic (retry jitter uses an injectable rng)
"""
