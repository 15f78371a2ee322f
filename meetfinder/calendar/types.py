from typing import FrozenSet, Iterable

from pydantic import BaseModel, ConfigDict, Field, model_validator

START_OF_DAY = 0
END_OF_DAY = 24 * 60  # minutes; ranges are half-open so this is never a start


def get_time_in_minutes(hours: int, minutes: int) -> int:
    """Minutes since midnight for a wall-clock time in the same day."""
    if not 0 <= hours <= 23:
        raise ValueError(f"hours out of range: {hours}")
    if not 0 <= minutes <= 59:
        raise ValueError(f"minutes out of range: {minutes}")
    return hours * 60 + minutes


class TimeRange(BaseModel):
    """
    Half-open span of minutes within a single day: [start, end).

    Compared by value. Sorting orders ranges by start, then end.
    """

    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    @model_validator(mode="after")
    def check_bounds(self) -> "TimeRange":
        if not START_OF_DAY <= self.start < END_OF_DAY:
            raise ValueError(f"start outside the day: {self.start}")
        if self.end > END_OF_DAY:
            raise ValueError(f"end after end of day: {self.end}")
        if self.end < self.start:
            raise ValueError(f"end {self.end} is before start {self.start}")
        return self

    @classmethod
    def from_start_duration(cls, start: int, duration: int) -> "TimeRange":
        return cls(start=start, end=start + duration)

    @classmethod
    def from_start_end(cls, start: int, end: int, inclusive: bool) -> "TimeRange":
        """
        Build a range from two boundaries.

        With inclusive=True the end minute itself belongs to the range. Ranges
        that run to midnight may pass either 23:59 or END_OF_DAY as the end.
        """
        if inclusive:
            end = min(end + 1, END_OF_DAY)
        return cls(start=start, end=end)

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def reaches_end_of_day(self) -> bool:
        return self.end == END_OF_DAY

    def overlaps(self, other: "TimeRange") -> bool:
        # Empty ranges have no points to share.
        if self.duration == 0 or other.duration == 0:
            return False
        return self.start < other.end and other.start < self.end

    def contains(self, other: "TimeRange") -> bool:
        return self.start <= other.start and other.end <= self.end

    def contains_minute(self, minute: int) -> bool:
        return self.start <= minute < self.end

    def sort_key(self):
        return (self.start, self.end)

    def __lt__(self, other: "TimeRange") -> bool:
        if not isinstance(other, TimeRange):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __repr__(self) -> str:
        return f"TimeRange[{self.start}, {self.end})"


WHOLE_DAY = TimeRange(start=START_OF_DAY, end=END_OF_DAY)


class Event(BaseModel):
    """A named block of time and the people attending it."""

    model_config = ConfigDict(frozen=True)

    name: str
    when: TimeRange
    attendees: FrozenSet[str] = frozenset()


class MeetingRequest(BaseModel):
    """
    A proposed meeting: who must come, who may come, and for how long.

    Requests are frozen. Use with_optional_attendee() to build up the optional
    set; it returns a new request each time.
    """

    model_config = ConfigDict(frozen=True)

    required_attendees: FrozenSet[str] = frozenset()
    duration: int = Field(gt=0)
    optional_attendees: FrozenSet[str] = frozenset()

    @property
    def attendees(self) -> FrozenSet[str]:
        return self.required_attendees | self.optional_attendees

    def with_optional_attendee(self, attendee: str) -> "MeetingRequest":
        return self.with_optional_attendees([attendee])

    def with_optional_attendees(self, attendees: Iterable[str]) -> "MeetingRequest":
        merged = self.optional_attendees | frozenset(attendees)
        return MeetingRequest(
            required_attendees=self.required_attendees,
            duration=self.duration,
            optional_attendees=merged,
        )
