"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - All external calls wrapped with timeout and error mapping
    - Oracle client never retries; retry policy lives in the coordinator
"""
