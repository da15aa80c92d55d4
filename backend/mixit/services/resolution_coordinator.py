"""Resolution Coordinator — cache lookup, in-flight dedup, oracle synthesis, persistence.

Invariants:
    - At most one oracle call in flight per CanonicalKey (in-flight registry)
    - Registry check-and-insert has no await between them: atomic on the event loop
    - Attached callers await the elector task through asyncio.shield and never poll
      the store; a cancelled caller never cancels the elector
    - The oracle call holds no DB session; the store is touched only after validation
    - Registry entry removed on every terminal transition (PERSISTED, FAILED or
      cancelled by shutdown()), before any attached caller is woken
    - Unique-key races resolve to the winner's row; no duplicate Combination rows

Design Decisions:
    - Retry is a loop over RetryPolicy.decide() decisions, not exception handling
    - Elector re-checks the store before its first oracle call: a caller that missed
      the cache just as a previous elector finished does not trigger a second call
    - Failure is fanned out as the task's exception; every attached caller sees the
      same error instance
"""

import asyncio
import logging
from uuid import UUID

from mixit.core.canonical_key import normalize
from mixit.core.domain_types import CanonicalKey, OwnerId, ResolutionState
from mixit.core.errors import (
    CombinationConflictError, ErrorContext, ResourceNotFoundError,
)
from mixit.core.oracle_outcome import OracleSuccess
from mixit.core.repository_protocols import (
    ElementLike, ElementStore, InventoryStore, OracleClientLike,
)
from mixit.core.retry_policy import RetryAction, RetryPolicy
from mixit.schemas.element import ElementView, ResolvedElement

logger = logging.getLogger(__name__)

# create_element_and_combination attempts when losing an element-name race
_PERSIST_ATTEMPTS = 2


class ResolutionCoordinator:
    """Resolves element pairs for many concurrent callers."""

    def __init__(
        self,
        store: ElementStore,
        inventory: InventoryStore,
        oracle: OracleClientLike,
        retry_policy: RetryPolicy | None = None,
    ):
        self._store = store
        self._inventory = inventory
        self._oracle = oracle
        self._retry = retry_policy or RetryPolicy()
        self._in_flight: dict[CanonicalKey, asyncio.Task] = {}

    @property
    def in_flight_keys(self) -> frozenset[CanonicalKey]:
        return frozenset(self._in_flight)

    async def resolve(
        self, owner_id: OwnerId | str, element_id_a: UUID, element_id_b: UUID,
    ) -> ResolvedElement:
        """Return the element produced by mixing a and b, and record it for the owner."""
        element_a = await self._store.get_element(element_id_a)
        element_b = await self._store.get_element(element_id_b)
        key = normalize(element_a.id, element_b.id)
        self._log_state(key, ResolutionState.LOOKUP, owner_id=owner_id)

        try:
            combination = await self._store.get_combination(key)
        except ResourceNotFoundError:
            self._log_state(key, ResolutionState.MISS_PENDING, owner_id=owner_id)
            element = await self._await_resolution(key, element_a, element_b)
            from_cache = False
        else:
            element = combination.result_element
            from_cache = True
            self._log_state(key, ResolutionState.HIT_DONE, owner_id=owner_id)

        newly_discovered = await self._inventory.record_discovery(owner_id, element.id)
        return ResolvedElement(
            **ElementView.model_validate(element).model_dump(),
            pair_key=key,
            from_cache=from_cache,
            newly_discovered=newly_discovered,
        )

    async def _await_resolution(
        self, key: CanonicalKey, element_a: ElementLike, element_b: ElementLike,
    ) -> ElementLike:
        """Attach to the in-flight task for `key`, electing one if none exists."""
        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.create_task(
                self._synthesize_and_persist(key, element_a, element_b),
                name=f"resolve:{key}",
            )
            task.add_done_callback(_consume_outcome)
            self._in_flight[key] = task
            logger.debug("Elected resolver", extra={"pair_key": key})
        else:
            logger.debug("Attached to in-flight resolution", extra={"pair_key": key})
        return await asyncio.shield(task)

    async def _synthesize_and_persist(
        self, key: CanonicalKey, element_a: ElementLike, element_b: ElementLike,
    ) -> ElementLike:
        try:
            try:
                combination = await self._store.get_combination(key)
            except ResourceNotFoundError:
                pass
            else:
                self._log_state(key, ResolutionState.HIT_DONE)
                return combination.result_element

            attempt = 0
            while True:
                attempt += 1
                self._log_state(key, ResolutionState.SYNTHESIZING, attempt=attempt)
                outcome = await self._oracle.synthesize(element_a, element_b)
                decision = self._retry.decide(attempt, outcome)

                if isinstance(outcome, OracleSuccess):
                    return await self._persist(key, outcome)

                if decision.action is RetryAction.GIVE_UP:
                    error = outcome.to_error(ErrorContext(pair_key=key, attempt=attempt))
                    logger.error(
                        f"Resolution failed after {attempt} attempt(s): {outcome.reason}",
                        extra={
                            "pair_key": key, "attempt": attempt,
                            "state": ResolutionState.FAILED.value,
                            "error_code": error.code,
                        },
                    )
                    raise error

                logger.warning(
                    f"Oracle {outcome.kind.value} failure, retry in "
                    f"{decision.delay_ms}ms: {outcome.reason}",
                    extra={"pair_key": key, "attempt": attempt},
                )
                await asyncio.sleep(decision.delay_ms / 1000)
        finally:
            if self._in_flight.get(key) is asyncio.current_task():
                del self._in_flight[key]

    async def _persist(self, key: CanonicalKey, outcome: OracleSuccess) -> ElementLike:
        """Write Element + Combination; on a lost race return the winner's element."""
        for _ in range(_PERSIST_ATTEMPTS):
            try:
                element, _combination = await self._store.create_element_and_combination(
                    key, outcome.name, outcome.icon,
                )
            except CombinationConflictError as e:
                try:
                    winner = await self._store.get_combination(key)
                except ResourceNotFoundError:
                    # element-name race: the name exists now, next attempt reuses it
                    logger.info(
                        f"Retrying persist after conflict: {e.message}",
                        extra={"pair_key": key},
                    )
                    continue
                logger.info("Lost persist race, using winner", extra={"pair_key": key})
                return winner.result_element
            self._log_state(key, ResolutionState.PERSISTED, element_id=str(element.id))
            return element
        raise CombinationConflictError(
            f"Could not persist combination '{key}'", ErrorContext(pair_key=key),
        )

    async def shutdown(self) -> None:
        """Cancel in-flight resolutions and wait until every task has finished."""
        tasks = list(self._in_flight.values())
        if not tasks:
            return
        logger.info(f"Cancelling {len(tasks)} in-flight resolution(s)")
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    @staticmethod
    def _log_state(key: CanonicalKey, state: ResolutionState, **extra) -> None:
        logger.debug(
            f"{key} -> {state.value}",
            extra={"pair_key": key, "state": state.value, **extra},
        )


def _consume_outcome(task: asyncio.Task) -> None:
    """Mark the task's exception as retrieved even if every caller went away."""
    if not task.cancelled():
        task.exception()
