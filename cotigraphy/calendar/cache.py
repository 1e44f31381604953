"""Calendar caching keyed by login and day, stored as JSON.

Follows the same pattern as the config-hash caches: the key is derived from
the parameters that determine the content, and a miss falls through to the
API. Calendars change daily, so the date is part of the key.
"""

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path

from cotigraphy.calendar.github import (
    calendar_to_payload,
    fetch_contribution_calendar,
    parse_calendar_response,
)
from cotigraphy.calendar.types import ContributionCalendar
from cotigraphy.config.hashing import hash_payload
from cotigraphy.config.settings import SourceConfig

log = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path(".cache/calendars")


def calendar_cache_key(login: str, as_of: date, api_url: str = "") -> str:
    """Compute the cache key for a login on a given day.

    Returns:
        Key string like "a1b2c3d4e5f6g7h8_20261019".
    """
    key_dict = {
        "login": login.lower(),
        "api_url": api_url,
    }
    return f"{hash_payload(key_dict)}_{as_of.strftime('%Y%m%d')}"


def _cache_path(login: str, as_of: date, api_url: str, cache_dir: Path) -> Path:
    return cache_dir / calendar_cache_key(login, as_of, api_url)


def save_calendar(
    calendar: ContributionCalendar,
    as_of: date,
    api_url: str = "",
    cache_dir: Path = DEFAULT_CACHE_DIR,
) -> Path:
    """Store the calendar as ``<cache_dir>/<key>/calendar.json``.

    Returns:
        Path to the cache directory for this calendar.
    """
    cache_path = _cache_path(calendar.login, as_of, api_url, cache_dir)
    cache_path.mkdir(parents=True, exist_ok=True)

    record = {
        "login": calendar.login,
        "fetched_at": calendar.fetched_at,
        "cached_at": datetime.now(timezone.utc).isoformat(),
        "response": calendar_to_payload(calendar),
    }
    with open(cache_path / "calendar.json", "w") as f:
        json.dump(record, f, indent=2)

    log.info("Calendar cached at %s", cache_path)
    return cache_path


def load_calendar(
    login: str,
    as_of: date,
    api_url: str = "",
    cache_dir: Path = DEFAULT_CACHE_DIR,
) -> ContributionCalendar | None:
    """Load a cached calendar.

    Returns:
        ContributionCalendar on a cache hit, None on a miss.
    """
    cache_file = _cache_path(login, as_of, api_url, cache_dir) / "calendar.json"
    if not cache_file.exists():
        return None

    with open(cache_file) as f:
        record = json.load(f)

    parsed = parse_calendar_response(record["response"], record["login"])
    log.info("Calendar loaded from cache: %s", cache_file.parent)
    return ContributionCalendar(
        login=parsed.login,
        weeks=parsed.weeks,
        total_contributions=parsed.total_contributions,
        fetched_at=record.get("fetched_at", ""),
    )


def fetch_or_load_calendar(
    source: SourceConfig,
    token: str,
    as_of: date | None = None,
    cache_dir: Path = DEFAULT_CACHE_DIR,
    use_cache: bool = True,
) -> ContributionCalendar:
    """Return today's calendar for ``source.login``, from cache when possible.

    On a miss the calendar is fetched from the API and written to the cache.
    """
    as_of = as_of or date.today()
    key = calendar_cache_key(source.login, as_of, source.api_url)

    if use_cache:
        cached = load_calendar(source.login, as_of, source.api_url, cache_dir)
        if cached is not None:
            log.info("Cache hit for %s", key)
            return cached
        log.info("Cache miss for %s, fetching...", key)

    calendar = fetch_contribution_calendar(
        source.login,
        token,
        api_url=source.api_url,
        timeout=source.timeout_s,
    )
    if use_cache:
        save_calendar(calendar, as_of, source.api_url, cache_dir)
    return calendar
