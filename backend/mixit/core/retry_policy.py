"""Retry Policy — bounded retry decisions for oracle attempts, no IO.

Invariants:
    - At most max_attempts oracle calls per resolution (attempts are 1-based)
    - Transport and validation failures share the same attempt budget
    - Backoff is exponential with ±25% jitter, capped at max_delay_ms
    - A server-provided retry_after_ms overrides the computed backoff

Design Decisions:
    - decide() is a pure transition (attempt, outcome) -> RetryDecision; the
      coordinator owns the sleeping and the loop
    - rng injectable so tests can pin the jitter
"""

import random
from dataclasses import dataclass, field
from enum import Enum

from mixit.core.oracle_outcome import (
    OracleOutcome, OracleSuccess, OracleTransportFailure,
)


class RetryAction(str, Enum):
    ACCEPT = "accept"
    RETRY = "retry"
    GIVE_UP = "give_up"


@dataclass(frozen=True)
class RetryDecision:
    action: RetryAction
    delay_ms: int = 0


@dataclass
class RetryPolicy:
    """Bounded exponential backoff over oracle attempts."""
    max_attempts: int = 3
    base_delay_ms: int = 500
    max_delay_ms: int = 8_000
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    def decide(self, attempt: int, outcome: OracleOutcome) -> RetryDecision:
        """Next step after `attempt` (1-based) produced `outcome`."""
        match outcome:
            case OracleSuccess():
                return RetryDecision(RetryAction.ACCEPT)
            case _ if attempt >= self.max_attempts:
                return RetryDecision(RetryAction.GIVE_UP)
            case OracleTransportFailure(retry_after_ms=int() as retry_after):
                return RetryDecision(
                    RetryAction.RETRY, min(retry_after, self.max_delay_ms),
                )
            case _:
                return RetryDecision(RetryAction.RETRY, self.backoff(attempt))

    def backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter for the wait after `attempt`."""
        delay = min(self.max_delay_ms, (2 ** (attempt - 1)) * self.base_delay_ms)
        return int(delay * self.rng.uniform(0.75, 1.25))  # nosec B311
