"""Calendar source module: GitHub client, file loader, and on-disk cache."""

from cotigraphy.calendar.cache import (
    calendar_cache_key,
    fetch_or_load_calendar,
    load_calendar,
    save_calendar,
)
from cotigraphy.calendar.github import (
    CalendarFetchError,
    calendar_to_payload,
    fetch_contribution_calendar,
    load_calendar_file,
    parse_calendar_response,
)
from cotigraphy.calendar.types import ContributionCalendar, ContributionDay

__all__ = [
    "CalendarFetchError",
    "ContributionCalendar",
    "ContributionDay",
    "calendar_cache_key",
    "calendar_to_payload",
    "fetch_contribution_calendar",
    "fetch_or_load_calendar",
    "load_calendar",
    "load_calendar_file",
    "parse_calendar_response",
    "save_calendar",
]
