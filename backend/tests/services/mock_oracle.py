"""Mock Oracle Client — scripted stand-in for AnthropicOracleClient.

Invariants:
    - Responses are consumed in order, one per synthesize() call
    - The last response repeats once the script runs out
    - An Exception instance in the script is raised instead of returned
    - `started` is set on the first call; `gate` (if given) blocks every call until set
"""

import asyncio

from mixit.core.oracle_outcome import (
    OracleSuccess, OracleTransportFailure, OracleValidationFailure,
)


class MockOracleClient:
    """Replaces AnthropicOracleClient. Records calls, sequences outcomes."""

    def __init__(self, responses=None, goal_words=None, delay=0.0, gate=None):
        self._responses = list(responses or [])
        self._goal_words = list(goal_words or [])
        self._idx = 0
        self.delay = delay
        self.gate = gate
        self.started = asyncio.Event()
        self.calls = []
        self.goal_calls = []

    async def synthesize(self, element_a, element_b):
        self.calls.append((element_a.name, element_b.name))
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if self.delay:
            await asyncio.sleep(self.delay)
        if not self._responses:
            raise RuntimeError("MockOracleClient: no responses configured")
        response = self._responses[min(self._idx, len(self._responses) - 1)]
        self._idx += 1
        if isinstance(response, Exception):
            raise response
        return response

    async def generate_goal_words(self, excluded):
        self.goal_calls.append(list(excluded))
        response = self._goal_words.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


# -- Builder helpers -----------------------------------------------------------


def success(name, icon="✨"):
    return OracleSuccess(name=name, icon=icon)


def transport_failure(reason="connection reset", error_type="connection_error"):
    return OracleTransportFailure(reason, error_type)


def validation_failure(reason="name is empty", raw=""):
    return OracleValidationFailure(reason, raw=raw)
