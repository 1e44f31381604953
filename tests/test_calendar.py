"""Tests for the GitHub calendar client and the JSON file loader."""

import json
from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from cotigraphy.calendar import (
    CalendarFetchError,
    ContributionDay,
    calendar_to_payload,
    fetch_contribution_calendar,
    load_calendar_file,
    parse_calendar_response,
)


def _payload(days_per_week=((("2026-10-11", 0, "#161b22"), ("2026-10-12", 3, "#39d353")),
                            (("2026-10-18", 1, "#0e4429"),)),
             total=4) -> dict:
    calendar = {
        "weeks": [
            {
                "contributionDays": [
                    {"date": d, "contributionCount": c, "color": color}
                    for d, c, color in week
                ]
            }
            for week in days_per_week
        ]
    }
    if total is not None:
        calendar["totalContributions"] = total
    return {"data": {"user": {"contributionsCollection": {"contributionCalendar": calendar}}}}


def _session(payload=None, status_error=None, json_error=None) -> MagicMock:
    response = MagicMock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    session = MagicMock()
    session.post.return_value = response
    return session


class TestContributionDay:
    @pytest.mark.parametrize(
        "day,row",
        [(date(2026, 10, 11), 0), (date(2026, 10, 12), 1), (date(2026, 10, 17), 6)],
    )
    def test_weekday_row_sunday_first(self, day: date, row: int) -> None:
        assert ContributionDay(date=day, count=0).weekday_row == row


class TestParseResponse:
    def test_parses_weeks_and_days(self) -> None:
        cal = parse_calendar_response(_payload(), "octocat")
        assert cal.login == "octocat"
        assert cal.week_count == 2
        assert cal.total_contributions == 4
        day = cal.weeks[0][1]
        assert day.date == date(2026, 10, 12)
        assert day.count == 3
        assert day.color == "#39d353"
        assert len(cal.days()) == 3

    def test_missing_total_summed(self) -> None:
        cal = parse_calendar_response(_payload(total=None), "octocat")
        assert cal.total_contributions == 4

    def test_graphql_errors(self) -> None:
        payload = {"errors": [{"message": "Bad credentials"}]}
        with pytest.raises(CalendarFetchError, match="Bad credentials"):
            parse_calendar_response(payload, "octocat")

    def test_unknown_user(self) -> None:
        with pytest.raises(CalendarFetchError, match="not found"):
            parse_calendar_response({"data": {"user": None}}, "ghost")

    def test_malformed_payload(self) -> None:
        with pytest.raises(CalendarFetchError, match="unexpected"):
            parse_calendar_response({"data": {}}, "octocat")

    def test_negative_count_rejected(self) -> None:
        payload = _payload(days_per_week=((("2026-10-11", -1, None),),))
        with pytest.raises(CalendarFetchError):
            parse_calendar_response(payload, "octocat")

    def test_round_trip_through_payload(self) -> None:
        cal = parse_calendar_response(_payload(), "octocat")
        again = parse_calendar_response(calendar_to_payload(cal), "octocat")
        assert again == cal


class TestFetch:
    def test_fetch_sends_query_and_token(self) -> None:
        session = _session(_payload())
        cal = fetch_contribution_calendar("octocat", "tok123", session=session)

        assert cal.week_count == 2
        assert cal.fetched_at
        args, kwargs = session.post.call_args
        assert args[0] == "https://api.github.com/graphql"
        assert kwargs["headers"]["Authorization"] == "Bearer tok123"
        assert kwargs["json"]["variables"] == {"login": "octocat"}
        assert kwargs["timeout"] == 30.0

    def test_missing_login_or_token(self) -> None:
        with pytest.raises(CalendarFetchError, match="login"):
            fetch_contribution_calendar("", "tok", session=_session(_payload()))
        with pytest.raises(CalendarFetchError, match="token"):
            fetch_contribution_calendar("octocat", "", session=_session(_payload()))

    def test_http_error_wrapped(self) -> None:
        session = _session(status_error=requests.HTTPError("401 Unauthorized"))
        with pytest.raises(CalendarFetchError, match="401"):
            fetch_contribution_calendar("octocat", "tok", session=session)

    def test_connection_error_wrapped(self) -> None:
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("refused")
        with pytest.raises(CalendarFetchError, match="refused"):
            fetch_contribution_calendar("octocat", "tok", session=session)

    def test_non_json_body(self) -> None:
        session = _session(json_error=ValueError("Expecting value"))
        with pytest.raises(CalendarFetchError, match="not JSON"):
            fetch_contribution_calendar("octocat", "tok", session=session)


class TestLoadFile:
    def test_login_defaults_to_stem(self, tmp_path) -> None:
        path = tmp_path / "octocat.json"
        path.write_text(json.dumps(_payload()))
        cal = load_calendar_file(path)
        assert cal.login == "octocat"
        assert cal.fetched_at == ""
        assert cal.total_contributions == 4

    def test_explicit_login(self, tmp_path) -> None:
        path = tmp_path / "saved.json"
        path.write_text(json.dumps(_payload()))
        assert load_calendar_file(path, login="monalisa").login == "monalisa"
