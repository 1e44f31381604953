"""GitHub contribution calendar client (GraphQL API).

Fetches a user's contribution calendar and parses it into a
ContributionCalendar. The same response shape is accepted from JSON files,
so a saved API response can drive an offline run.
"""

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

import requests

from cotigraphy import __version__
from cotigraphy.calendar.types import ContributionCalendar, ContributionDay

log = logging.getLogger(__name__)

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"

CALENDAR_QUERY = """
query ($login: String!) {
  user(login: $login) {
    contributionsCollection {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            date
            contributionCount
            color
          }
        }
      }
    }
  }
}
"""


class CalendarFetchError(Exception):
    """Raised when the calendar cannot be fetched or the response is malformed."""


def fetch_contribution_calendar(
    login: str,
    token: str,
    api_url: str = GITHUB_GRAPHQL_URL,
    timeout: float = 30.0,
    session: requests.Session | None = None,
) -> ContributionCalendar:
    """Fetch ``login``'s contribution calendar.

    Args:
        login: GitHub user name.
        token: Personal access token sent as a Bearer token.
        api_url: GraphQL endpoint.
        timeout: Request timeout in seconds.
        session: Optional session to reuse (tests pass a stub).

    Returns:
        Parsed ContributionCalendar.

    Raises:
        CalendarFetchError: On transport failure, a non-2xx status, GraphQL
            errors, or an unexpected payload shape. No retries are made.
    """
    if not login:
        raise CalendarFetchError("a GitHub login is required")
    if not token:
        raise CalendarFetchError("a GitHub access token is required")

    headers = {
        "Authorization": f"Bearer {token}",
        "User-Agent": f"cotigraphy/{__version__}",
        "Content-Type": "application/json",
    }
    body = {"query": CALENDAR_QUERY, "variables": {"login": login}}
    post = session.post if session is not None else requests.post

    log.info("Fetching contribution calendar for %s from %s", login, api_url)
    try:
        response = post(api_url, json=body, headers=headers, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as e:
        raise CalendarFetchError(f"request for {login!r} failed: {e}") from e
    except ValueError as e:
        raise CalendarFetchError(f"response for {login!r} is not JSON: {e}") from e

    calendar = parse_calendar_response(payload, login)
    calendar = ContributionCalendar(
        login=calendar.login,
        weeks=calendar.weeks,
        total_contributions=calendar.total_contributions,
        fetched_at=datetime.now(timezone.utc).isoformat(),
    )
    log.info(
        "Fetched %d weeks, %d contributions for %s",
        calendar.week_count,
        calendar.total_contributions,
        login,
    )
    return calendar


def parse_calendar_response(payload: dict[str, Any], login: str = "") -> ContributionCalendar:
    """Parse a GraphQL response body into a ContributionCalendar.

    Raises:
        CalendarFetchError: If the payload carries GraphQL errors, the user
            does not exist, or fields are missing or mistyped.
    """
    errors = payload.get("errors")
    if errors:
        messages = "; ".join(str(e.get("message", e)) for e in errors)
        raise CalendarFetchError(f"GraphQL errors for {login!r}: {messages}")

    try:
        user = payload["data"]["user"]
        if user is None:
            raise CalendarFetchError(f"GitHub user {login!r} not found")
        calendar = user["contributionsCollection"]["contributionCalendar"]
        weeks = tuple(
            tuple(_parse_day(day) for day in week["contributionDays"])
            for week in calendar["weeks"]
        )
    except (KeyError, TypeError, ValueError) as e:
        raise CalendarFetchError(
            f"unexpected calendar payload for {login!r}: {e!r}"
        ) from e

    total = calendar.get("totalContributions")
    if total is None:
        total = sum(day.count for week in weeks for day in week)

    return ContributionCalendar(
        login=login,
        weeks=weeks,
        total_contributions=int(total),
    )


def _parse_day(day: dict[str, Any]) -> ContributionDay:
    count = int(day["contributionCount"])
    if count < 0:
        raise ValueError(f"negative contributionCount {count} on {day['date']}")
    return ContributionDay(
        date=date.fromisoformat(day["date"]),
        count=count,
        color=day.get("color"),
    )


def load_calendar_file(path: str | Path, login: str = "") -> ContributionCalendar:
    """Load a calendar from a JSON file holding a saved GraphQL response.

    ``login`` defaults to the file stem.
    """
    path = Path(path)
    with open(path) as f:
        payload = json.load(f)
    calendar = parse_calendar_response(payload, login or path.stem)
    log.info("Calendar loaded from %s (%d weeks)", path, calendar.week_count)
    return calendar


def calendar_to_payload(calendar: ContributionCalendar) -> dict[str, Any]:
    """Inverse of parse_calendar_response, used for caching and fixtures."""
    return {
        "data": {
            "user": {
                "contributionsCollection": {
                    "contributionCalendar": {
                        "totalContributions": calendar.total_contributions,
                        "weeks": [
                            {
                                "contributionDays": [
                                    {
                                        "date": day.date.isoformat(),
                                        "contributionCount": day.count,
                                        "color": day.color,
                                    }
                                    for day in week
                                ]
                            }
                            for week in calendar.weeks
                        ],
                    }
                }
            }
        }
    }
