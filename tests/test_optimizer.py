"""Tests for OptionalAttendeeOptimizer: subset search, tie-breaking and pruning."""
import pytest

from meetfinder.calendar.types import END_OF_DAY, WHOLE_DAY, Event, MeetingRequest, TimeRange
from meetfinder.meeting.optimizer import OptionalAttendeeOptimizer, best_with_optional


def _event(start, end, *attendees):
    return Event(name="busy", when=TimeRange.from_start_end(start, end, False), attendees=attendees)


def _request(required, optional, duration=30):
    return MeetingRequest(required_attendees=required, duration=duration).with_optional_attendees(optional)


def test_no_optional_attendees_means_no_improvement():
    result = OptionalAttendeeOptimizer().optimize([], _request(["A"], []))
    assert result.ranges == []
    assert not result.improved
    assert result.combinations_evaluated == 0


def test_optional_attendees_also_required_are_not_searched():
    result = OptionalAttendeeOptimizer().optimize([], _request(["A"], ["A"]))
    assert result.combinations_evaluated == 0


def test_single_optional_attendee_included_when_possible():
    events = [_event(600, 660, "B")]
    result = OptionalAttendeeOptimizer().optimize(events, _request(["A"], ["B"]))
    assert result.attendees == frozenset({"B"})
    assert result.ranges == [TimeRange(start=0, end=600), TimeRange(start=660, end=END_OF_DAY)]


def test_larger_subset_beats_more_free_time():
    # B alone leaves 23 hours; C+D together leave only one hour.
    events = [
        _event(0, 60, "B"),
        _event(60, 1440, "C", "D"),
    ]
    result = OptionalAttendeeOptimizer().optimize(events, _request([], ["B", "C", "D"]))
    assert result.attendees == frozenset({"C", "D"})
    assert result.ranges == [TimeRange(start=0, end=60)]


def test_most_free_time_wins_within_a_size():
    # B alone leaves 840 minutes, C alone 900; together too little for 301.
    events = [_event(0, 600, "B"), _event(900, 1440, "C")]
    result = OptionalAttendeeOptimizer().optimize(events, _request([], ["B", "C"], duration=301))
    assert result.attendees == frozenset({"C"})
    assert result.ranges == [TimeRange(start=0, end=900)]
    assert result.levels_explored == 2


def test_ties_keep_first_in_name_order():
    # B and C each leave 1340 minutes on their own; together only 1240.
    events = [_event(0, 100, "B"), _event(1340, 1440, "C")]
    result = OptionalAttendeeOptimizer().optimize(events, _request([], ["C", "B"], duration=1300))
    assert result.attendees == frozenset({"B"})
    assert result.ranges == [TimeRange(start=100, end=END_OF_DAY)]


def test_cumulative_policy_stops_after_single_success():
    # Only B fits at size 1, so size 2 is never tried.
    events = [_event(0, 1440, "C"), _event(0, 1440, "D")]
    result = OptionalAttendeeOptimizer("cumulative").optimize(events, _request([], ["B", "C", "D"]))
    assert result.attendees == frozenset({"B"})
    assert result.levels_explored == 1
    assert result.combinations_evaluated == 3
    assert result.successes == 1


def test_cumulative_counter_carries_across_sizes():
    # Size 1: B, C succeed (2). Size 2: nothing. Size 3 still explored
    # because the running count is not reset.
    events = [_event(0, 1440, "D"), _event(0, 720, "B"), _event(720, 1440, "C")]
    result = OptionalAttendeeOptimizer("cumulative").optimize(events, _request([], ["B", "C", "D"]))
    assert result.levels_explored == 3
    assert result.combinations_evaluated == 3 + 3 + 1
    assert result.attendees == frozenset({"B"})
    assert result.ranges == [TimeRange(start=720, end=END_OF_DAY)]


def test_per_size_policy_keeps_going_after_single_success():
    # Only B fits on its own. per_size still tries the B+D pair, cumulative
    # stops after size 1.
    events = [_event(0, 600, "B"), _event(0, 1440, "D")]
    request = _request([], ["B", "D"])
    cumulative = OptionalAttendeeOptimizer("cumulative").optimize(events, request)
    per_size = OptionalAttendeeOptimizer("per_size").optimize(events, request)

    assert cumulative.levels_explored == 1
    assert per_size.levels_explored == 2
    assert cumulative.attendees == per_size.attendees == frozenset({"B"})


def test_per_size_policy_stops_on_empty_level():
    events = [_event(0, 720, "B"), _event(720, 1440, "C"), _event(0, 1440, "D")]
    result = OptionalAttendeeOptimizer("per_size").optimize(events, _request([], ["B", "C", "D"]))
    assert result.levels_explored == 2
    assert result.attendees == frozenset({"B"})


def test_nothing_fits_returns_empty():
    events = [_event(0, 1440, "B"), _event(0, 1440, "C")]
    result = OptionalAttendeeOptimizer().optimize(events, _request(["A"], ["B", "C"]))
    assert result.ranges == []
    assert result.attendees == frozenset()
    assert result.levels_explored == 1


def test_unknown_policy_rejected():
    with pytest.raises(ValueError):
        OptionalAttendeeOptimizer("greedy")


def test_best_with_optional_returns_ranges():
    events = [_event(600, 660, "B")]
    assert best_with_optional(events, _request([], ["B"])) == [
        TimeRange(start=0, end=600),
        TimeRange(start=660, end=END_OF_DAY),
    ]
    assert best_with_optional([Event(name="x", when=WHOLE_DAY, attendees=["B"])], _request([], ["B"])) == []
