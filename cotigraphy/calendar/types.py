"""Contribution calendar records as delivered by the data source."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, slots=True)
class ContributionDay:
    """One day of activity.

    ``color`` is the source's own colour string for the day when it
    provides one (GitHub does), otherwise None.
    """

    date: date
    count: int
    color: str | None = None

    @property
    def weekday_row(self) -> int:
        """Row index with Sunday on top, as contribution calendars draw it."""
        return (self.date.weekday() + 1) % 7


@dataclass(frozen=True, slots=True)
class ContributionCalendar:
    """A user's calendar, oldest week first; weeks may be short at either end."""

    login: str
    weeks: tuple[tuple[ContributionDay, ...], ...]
    total_contributions: int = 0
    fetched_at: str = ""  # ISO-8601 timestamp, empty when loaded from a file

    @property
    def week_count(self) -> int:
        return len(self.weeks)

    def days(self) -> list[ContributionDay]:
        return [day for week in self.weeks for day in week]
