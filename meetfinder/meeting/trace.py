"""
QueryTrace: non-PII observability for meeting queries.

Logged once per query. Do not include attendee names, event names or the
ranges themselves; counts only.
"""
from enum import Enum
from typing import Any, Dict, Optional


class QueryOutcome(str, Enum):
    TOO_LONG = "too_long"
    NO_SLOTS = "no_slots"
    REQUIRED_ONLY = "required_only"
    NO_IMPROVEMENT = "no_improvement"
    OPTIMIZER_CAPPED = "optimizer_capped"
    OPTIMIZED = "optimized"


def build_query_trace(
    *,
    outcome: str,
    duration: int,
    events_count: int,
    required_count: int,
    optional_count: int,
    ranges_count: int,
    optional_included: Optional[int] = None,
    combinations_evaluated: Optional[int] = None,
    levels_explored: Optional[int] = None,
    prune_policy: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a QueryTrace dict for logging. All fields are non-PII."""
    trace: Dict[str, Any] = {
        "outcome": outcome,
        "duration": duration,
        "events_count": events_count,
        "required_count": required_count,
        "optional_count": optional_count,
        "ranges_count": ranges_count,
    }
    if optional_included is not None:
        trace["optional_included"] = optional_included
    if combinations_evaluated is not None:
        trace["combinations_evaluated"] = combinations_evaluated
    if levels_explored is not None:
        trace["levels_explored"] = levels_explored
    if prune_policy is not None:
        trace["prune_policy"] = prune_policy
    return trace
