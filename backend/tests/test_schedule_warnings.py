"""Structural checks and warnings over a working schedule."""
from leaguedesk.api.types import ScheduleMatch, ScheduleWarning, ScheduleWeek, Venue
from leaguedesk.services.schedule_warnings import (
    compute_warnings,
    format_warning,
    structural_errors,
    warnings_headline,
)


def _match(home, away, venue_id=10, date="2026-03-02", **kwargs):
    return ScheduleMatch(
        home_team_id=home,
        home_team_name=f"T{home}" if home else None,
        away_team_id=away,
        away_team_name=f"T{away}" if away else None,
        venue_id=venue_id,
        venue_name=f"V{venue_id}" if venue_id else None,
        date=date,
        **kwargs,
    )


def _bye(team_id, date="2026-03-02"):
    return ScheduleMatch(is_bye=True, bye_team_id=team_id, bye_team_name=f"T{team_id}", date=date)


VENUES = [Venue(id=10, name="V10", table_count=1), Venue(id=11, name="V11", table_count=2)]


def test_clean_schedule_has_no_errors_or_warnings():
    weeks = [
        ScheduleWeek(week_number=1, date="2026-03-02", matches=[_match(1, 2, 10), _match(3, 4, 11)]),
        ScheduleWeek(week_number=2, date="2026-03-09", is_break_week=True),
        ScheduleWeek(week_number=3, date="2026-03-16", matches=[_match(1, 3, 10, "2026-03-18"), _bye(2, "2026-03-16")]),
    ]

    assert structural_errors(weeks) == []
    assert compute_warnings(weeks, VENUES, "2026-06-29") == []


def test_structural_errors():
    weeks = [
        ScheduleWeek(week_number=1, date="2026-03-02", matches=[_match(1, 1)]),
        ScheduleWeek(week_number=1, date="2026-03-02", matches=[_match(2, None)]),
        ScheduleWeek(week_number=2, date="2026-03-09", is_break_week=True, matches=[_match(1, 2)]),
        ScheduleWeek(
            week_number=3,
            date="2026-03-16",
            matches=[ScheduleMatch(is_bye=True, venue_id=10, home_team_id=1, date="2026-03-16")],
        ),
    ]

    errors = structural_errors(weeks)

    assert errors[0] == "Week 1 appears 2 times"
    assert "Week 1: T1 vs T1 has the same team on both sides" in errors
    assert "Week 1: T2 vs TBD needs both a home and an away team" in errors
    assert "Week 2: break week has 1 match(es)" in errors
    assert "Week 3: bye has no team" in errors
    assert "Week 3: bye cannot have home or away teams" in errors
    assert "Week 3: bye cannot have a venue" in errors


def test_regular_match_without_venue_is_structural_error():
    weeks = [ScheduleWeek(week_number=1, date="2026-03-02", matches=[_match(1, 2, None), _match(3, 3, None)])]

    errors = structural_errors(weeks)

    assert errors == [
        "Week 1: T1 vs T2 has no venue",
        "Week 1: T3 vs T3 has the same team on both sides",
        "Week 1: T3 vs T3 has no venue",
    ]
    assert [w.type for w in compute_warnings(weeks, VENUES)].count("missing_venue") == 2


def test_venue_conflict_when_matches_exceed_tables():
    weeks = [ScheduleWeek(week_number=1, date="2026-03-02", matches=[_match(1, 2, 10), _match(3, 4, 10)])]

    warnings = compute_warnings(weeks, VENUES)

    assert warnings == [
        ScheduleWarning(type="venue_conflict", message="V10 has 2 matches but only 1 table(s)", week_number=1)
    ]


def test_team_conflict_includes_byes():
    weeks = [ScheduleWeek(week_number=1, date="2026-03-02", matches=[_match(1, 2, 11), _bye(1)])]

    warnings = compute_warnings(weeks, VENUES)

    assert [w.type for w in warnings] == ["team_conflict"]
    assert warnings[0].message == "T1 is scheduled 2 times"


def test_missing_venue():
    weeks = [ScheduleWeek(week_number=1, date="2026-03-02", matches=[_match(1, 2, None)])]

    warnings = compute_warnings(weeks, VENUES)

    assert [w.type for w in warnings] == ["missing_venue"]
    assert warnings[0].message == "T1 vs T2 has no venue"


def test_date_conflicts():
    weeks = [
        ScheduleWeek(week_number=1, date="2026-03-02", matches=[_match(1, 2, 11, "2026-03-09")]),
        ScheduleWeek(week_number=2, date="2026-03-09", is_break_week=True, matches=[_match(3, 4, 11, "2026-03-09")]),
    ]

    warnings = compute_warnings(weeks, VENUES)

    assert [(w.week_number, w.type) for w in warnings] == [(1, "date_conflict"), (2, "date_conflict")]
    assert warnings[1].message == "1 match(es) scheduled during a break week"


def test_season_overflow():
    weeks = [
        ScheduleWeek(week_number=1, date="2026-06-22", matches=[_match(1, 2, 11, "2026-06-22")]),
        ScheduleWeek(week_number=2, date="2026-06-29", matches=[_match(3, 4, 11, "2026-06-29")]),
        ScheduleWeek(week_number=3, date="2026-07-06", matches=[_match(1, 3, 11, "2026-07-06")]),
    ]

    warnings = compute_warnings(weeks, VENUES, "2026-06-29")

    assert [(w.week_number, w.type) for w in warnings] == [(3, "season_overflow")]


def test_warning_order_is_by_week_then_type():
    weeks = [
        ScheduleWeek(week_number=2, date="2026-03-09", matches=[_match(1, 2, None, "2026-03-09")]),
        ScheduleWeek(
            week_number=1,
            date="2026-03-02",
            matches=[_match(1, 2, None), _match(1, 3, 10), _match(2, 4, 10)],
        ),
    ]

    warnings = compute_warnings(weeks, VENUES)

    assert [(w.week_number, w.type) for w in warnings] == [
        (1, "venue_conflict"),
        (1, "team_conflict"),
        (1, "team_conflict"),
        (1, "missing_venue"),
        (2, "missing_venue"),
    ]
    assert compute_warnings(weeks, VENUES) == warnings


def test_format_warning_and_headline():
    warning = ScheduleWarning(type="missing_venue", message="T1 vs T2 has no venue", week_number=3)
    assert format_warning(warning) == "Week 3: T1 vs T2 has no venue"
    assert format_warning(ScheduleWarning(type="season_overflow", message="Too long")) == "Too long"
    assert warnings_headline(1) == "1 Warning"
    assert warnings_headline(3) == "3 Warnings"
