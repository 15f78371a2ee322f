"""
Conflict merging: turn the events of a set of attendees into the free ranges
of a day long enough to hold a meeting.

Pure functions, no I/O. Callers are expected to have rejected durations
longer than a whole day before calling find_free_ranges().
"""
from typing import AbstractSet, Iterable, List, Sequence

from meetfinder.calendar.types import END_OF_DAY, START_OF_DAY, Event, TimeRange


def conflicting_ranges(events: Iterable[Event], attendees: AbstractSet[str]) -> List[TimeRange]:
    """
    Time ranges of every event shared with at least one of `attendees`,
    sorted by start. One shared attendee is enough to make an event a conflict.
    Zero-length events block no minute and are skipped.
    """
    conflicts = [
        event.when
        for event in events
        if event.when.duration > 0 and not event.attendees.isdisjoint(attendees)
    ]
    # sorted() is stable, so equal ranges keep event order.
    return sorted(conflicts, key=TimeRange.sort_key)


def find_free_ranges(
    events: Iterable[Event],
    attendees: AbstractSet[str],
    duration: int,
) -> List[TimeRange]:
    """
    Maximal ranges of the day, in start order, during which none of
    `attendees` is busy and that are at least `duration` minutes long.
    """
    free: List[TimeRange] = []
    frontier = START_OF_DAY

    for conflict in conflicting_ranges(events, attendees):
        if conflict.start - frontier >= duration:
            free.append(TimeRange.from_start_end(frontier, conflict.start, False))
        # Never move backward: nested and overlapping conflicts are absorbed here.
        frontier = max(frontier, conflict.end)

    if END_OF_DAY - frontier >= duration:
        free.append(TimeRange.from_start_end(frontier, END_OF_DAY, True))

    return free


def total_minutes(ranges: Sequence[TimeRange]) -> int:
    return sum(r.duration for r in ranges)
