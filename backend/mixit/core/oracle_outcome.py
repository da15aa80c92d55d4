"""Oracle Outcome — tagged result of one oracle attempt.

Invariants:
    - Exactly three variants: OracleSuccess | OracleTransportFailure | OracleValidationFailure
    - Variants are frozen; an outcome never changes after the attempt ends
    - to_error() maps each failure variant to its distinct MixitError kind

Design Decisions:
    - Union of frozen dataclasses matched with `match`: every caller handles all three
"""

from dataclasses import dataclass
from typing import Union

from mixit.core.domain_types import OracleFailureKind
from mixit.core.errors import (
    ErrorContext, OracleTransportError, OracleValidationError,
)


@dataclass(frozen=True)
class OracleSuccess:
    """Validated element proposal from the oracle."""
    name: str
    icon: str


@dataclass(frozen=True)
class OracleTransportFailure:
    """Timeout, connection failure, rate limit, or API rejection."""
    reason: str
    error_type: str = "connection_error"
    retry_after_ms: int | None = None

    kind = OracleFailureKind.TRANSPORT

    def to_error(self, context: ErrorContext | None = None) -> OracleTransportError:
        return OracleTransportError(
            self.reason, self.error_type,
            retry_after_ms=self.retry_after_ms, context=context,
        )


@dataclass(frozen=True)
class OracleValidationFailure:
    """Oracle answered, but the answer failed validation."""
    reason: str
    raw: str | None = None

    kind = OracleFailureKind.VALIDATION

    def to_error(self, context: ErrorContext | None = None) -> OracleValidationError:
        return OracleValidationError(self.reason, raw=self.raw, context=context)


OracleFailure = Union[OracleTransportFailure, OracleValidationFailure]
OracleOutcome = Union[OracleSuccess, OracleTransportFailure, OracleValidationFailure]
