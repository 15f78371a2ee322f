"""
Meeting query entry point.

FindMeetingQuery.query() answers: given everyone's events for the day, when
can this meeting be held? Required attendees must all be free. Optional
attendees are added when some subset of them still leaves room.
"""
from typing import Any, Dict, Iterable, List, Optional, Tuple

from meetfinder.calendar.types import WHOLE_DAY, Event, MeetingRequest, TimeRange
from meetfinder.core.config import FinderConfig, load_config
from meetfinder.meeting.conflicts import find_free_ranges
from meetfinder.meeting.optimizer import OptionalAttendeeOptimizer
from meetfinder.meeting.trace import QueryOutcome, build_query_trace
from meetfinder.observability.logger import log_event, log_warning, timing


class FindMeetingQuery:
    """Stateless apart from its config; safe to share between threads."""

    def __init__(self, config: Optional[FinderConfig] = None):
        self.config = config or load_config()
        self._optimizer = OptionalAttendeeOptimizer(self.config.prune_policy)

    def query(self, events: Iterable[Event], request: MeetingRequest) -> List[TimeRange]:
        """
        Free ranges for the meeting, in start order.

        Returns [] when the duration is longer than a day or the required
        attendees share no long enough gap.
        """
        if not isinstance(request, MeetingRequest):
            raise TypeError(f"request must be a MeetingRequest, got {type(request).__name__}")
        events = list(events)
        for event in events:
            if not isinstance(event, Event):
                raise TypeError(f"events must contain Event items, got {type(event).__name__}")

        with timing("meeting_query") as t:
            ranges, trace = self._resolve(events, request)

        if self.config.log_queries:
            log_event("meeting_query", duration_ms=t.get_duration_ms(), **trace)
        return ranges

    def _resolve(
        self, events: List[Event], request: MeetingRequest
    ) -> Tuple[List[TimeRange], Dict[str, Any]]:
        optional = request.optional_attendees - request.required_attendees

        def trace(outcome: QueryOutcome, ranges: List[TimeRange], **extra) -> Dict[str, Any]:
            return build_query_trace(
                outcome=outcome.value,
                duration=request.duration,
                events_count=len(events),
                required_count=len(request.required_attendees),
                optional_count=len(optional),
                ranges_count=len(ranges),
                **extra,
            )

        if request.duration > WHOLE_DAY.duration:
            return [], trace(QueryOutcome.TOO_LONG, [])

        required = find_free_ranges(events, request.required_attendees, request.duration)
        if not required:
            return required, trace(QueryOutcome.NO_SLOTS, required)
        if not optional:
            return required, trace(QueryOutcome.REQUIRED_ONLY, required)

        cap = self.config.max_optional_attendees
        if cap is not None and len(optional) > cap:
            log_warning(
                "Too many optional attendees; skipping optimizer",
                {"optional_count": len(optional), "max_optional_attendees": cap},
            )
            return required, trace(QueryOutcome.OPTIMIZER_CAPPED, required)

        result = self._optimizer.optimize(events, request)
        stats = {
            "combinations_evaluated": result.combinations_evaluated,
            "levels_explored": result.levels_explored,
            "prune_policy": self._optimizer.prune_policy,
        }
        if not result.improved:
            return required, trace(QueryOutcome.NO_IMPROVEMENT, required, **stats)

        return result.ranges, trace(
            QueryOutcome.OPTIMIZED,
            result.ranges,
            optional_included=len(result.attendees),
            **stats,
        )


def query(
    events: Iterable[Event],
    request: MeetingRequest,
    config: Optional[FinderConfig] = None,
) -> List[TimeRange]:
    """Module-level shortcut for FindMeetingQuery(config).query(events, request)."""
    return FindMeetingQuery(config).query(events, request)
