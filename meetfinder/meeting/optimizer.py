"""
Optional attendee optimizer.

Searches subsets of a request's optional attendees, smallest first, for the
largest subset that still leaves room for the meeting. Within one subset size
the subset leaving the most total free minutes wins; a larger subset always
beats a smaller one, however much free time the smaller one leaves.

Cost is exponential in the number of optional attendees. Deployments that
accept arbitrary requests should cap it through FinderConfig.
"""
import logging
from dataclasses import dataclass, field
from itertools import combinations
from typing import FrozenSet, List, Sequence

from meetfinder.calendar.types import Event, MeetingRequest, TimeRange
from meetfinder.core.config import PRUNE_CUMULATIVE, PRUNE_PER_SIZE
from meetfinder.meeting.conflicts import find_free_ranges, total_minutes

logger = logging.getLogger(__name__)

# With the cumulative policy, fewer successes than this ends the search.
MIN_CUMULATIVE_SUCCESSES = 2


@dataclass
class OptimizerResult:
    """Best free ranges found and which optional attendees they include."""
    ranges: List[TimeRange] = field(default_factory=list)
    attendees: FrozenSet[str] = frozenset()
    combinations_evaluated: int = 0
    successes: int = 0
    levels_explored: int = 0

    @property
    def improved(self) -> bool:
        return bool(self.ranges)


class OptionalAttendeeOptimizer:
    """
    Exhaustive search over optional attendee subsets, pruned between sizes.

    prune_policy "cumulative" stops once fewer than two subsets have succeeded
    across all sizes tried so far. "per_size" stops only when a size has no
    successful subset at all.
    """

    def __init__(self, prune_policy: str = PRUNE_CUMULATIVE):
        if prune_policy not in (PRUNE_CUMULATIVE, PRUNE_PER_SIZE):
            raise ValueError(f"Unsupported prune policy: {prune_policy}")
        self.prune_policy = prune_policy

    def optimize(self, events: Sequence[Event], request: MeetingRequest) -> OptimizerResult:
        required = request.required_attendees
        # Sorted so that enumeration order, and therefore tie-breaking, is stable.
        candidates = sorted(request.optional_attendees - required)
        result = OptimizerResult()

        total_successes = 0
        for size in range(1, len(candidates) + 1):
            level_successes = 0
            level_best_minutes = 0
            level_best: List[TimeRange] = []
            level_best_attendees: FrozenSet[str] = frozenset()

            for combo in combinations(candidates, size):
                result.combinations_evaluated += 1
                ranges = find_free_ranges(events, required | frozenset(combo), request.duration)
                if not ranges:
                    continue
                level_successes += 1
                minutes = total_minutes(ranges)
                if minutes > level_best_minutes:
                    level_best_minutes = minutes
                    level_best = ranges
                    level_best_attendees = frozenset(combo)

            total_successes += level_successes
            result.levels_explored = size

            if level_best:
                result.ranges = level_best
                result.attendees = level_best_attendees

            logger.debug(
                f"optimizer size={size} successes={level_successes} "
                f"total_successes={total_successes} best_minutes={level_best_minutes}"
            )

            if self._should_stop(level_successes, total_successes):
                break

        result.successes = total_successes
        return result

    def _should_stop(self, level_successes: int, total_successes: int) -> bool:
        if self.prune_policy == PRUNE_PER_SIZE:
            return level_successes == 0
        return total_successes < MIN_CUMULATIVE_SUCCESSES


def best_with_optional(
    events: Sequence[Event],
    request: MeetingRequest,
    prune_policy: str = PRUNE_CUMULATIVE,
) -> List[TimeRange]:
    """Best free ranges including optional attendees, or [] when none improve."""
    return OptionalAttendeeOptimizer(prune_policy).optimize(events, request).ranges
