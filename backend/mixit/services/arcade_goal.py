"""Arcade Goals — target words the player must craft in arcade mode.

Invariants:
    - A goal's target is words[0]; the rest are accepted variants
    - A new target never repeats one of the recent targets (case-insensitive)
    - Goal reached iff the element name matches the target or a variant
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from mixit.core.errors import OracleValidationError
from mixit.core.goal_matching import matches_goal
from mixit.core.repository_protocols import ElementLike, OracleClientLike

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArcadeGoal:
    words: tuple[str, ...]

    @property
    def target(self) -> str:
        return self.words[0]


class ArcadeGoalService:
    def __init__(self, oracle: OracleClientLike, history_size: int = 10):
        self._oracle = oracle
        self._history_size = history_size

    async def new_goal(self, recent_targets: Sequence[str] = ()) -> ArcadeGoal:
        """Ask the oracle for a fresh target word not among `recent_targets`."""
        recent = list(recent_targets)[-self._history_size:]
        words = await self._oracle.generate_goal_words(recent)
        if recent and matches_goal(recent, words[0]):
            raise OracleValidationError(
                f"target '{words[0]}' was used recently", raw=", ".join(words),
            )
        logger.info(f"New arcade goal: {words[0]}")
        return ArcadeGoal(tuple(words))

    @staticmethod
    def is_goal_reached(goal: ArcadeGoal, element: ElementLike) -> bool:
        return matches_goal(list(goal.words), element.name)
