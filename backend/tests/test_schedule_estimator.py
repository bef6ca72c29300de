"""Schedule estimates, parameter labels and configuration validation."""
import pytest

from leaguedesk.api.types import ScheduleConfiguration, Venue
from leaguedesk.services.schedule_estimator import (
    DEFAULT_SEASON_WEEKS_ESTIMATE,
    ScheduleConfigurationError,
    calendar_weeks,
    default_matches_per_week,
    estimate_schedule,
    estimate_season_weeks,
    max_matches_per_week,
    parameter_grid,
    projected_end_date,
    require_valid_configuration,
    round_robin_label,
    total_matches,
    total_tables,
    validate_configuration,
    venue_capacity,
)

from tests.conftest import make_participation


def test_total_matches_round_robin():
    assert total_matches(8, 1) == 28
    assert total_matches(8, 2) == 56
    assert total_matches(5, 1) == 10


def test_total_matches_fewer_than_two_teams():
    assert total_matches(0) == 0
    assert total_matches(1) == 0


def test_season_weeks_rounds_up():
    """8 teams, single round robin, 4 per week -> 28 / 4 = 7 weeks."""
    assert estimate_season_weeks(8, 1, 4) == 7
    assert estimate_season_weeks(5, 1, 2) == 5


def test_season_weeks_zero_matches_per_week_counts_as_one():
    assert estimate_season_weeks(4, 1, 0) == 6


def test_season_weeks_unknown_teams_uses_default():
    assert estimate_season_weeks(None) == DEFAULT_SEASON_WEEKS_ESTIMATE == 14


def test_max_and_default_matches_per_week():
    assert max_matches_per_week(8) == 4
    assert max_matches_per_week(7) == 3
    assert max_matches_per_week(1) == 1
    assert default_matches_per_week(10) == 5
    assert default_matches_per_week(0) == 4


def test_calendar_weeks_adds_distinct_break_weeks():
    assert calendar_weeks(7, []) == 7
    assert calendar_weeks(7, [3, 5]) == 9
    assert calendar_weeks(7, [3, 3]) == 8


def test_projected_end_date():
    assert projected_end_date("2026-03-02", 1) == "2026-03-02"
    assert projected_end_date("2026-03-02", 9) == "2026-04-27"
    assert projected_end_date("", 9) is None


def test_total_tables_missing_count_is_one(venues):
    assert total_tables(venues) == 3
    assert total_tables([]) == 0


def test_venue_capacity_conflict_when_home_teams_exceed_tables():
    venues = [Venue(id=1, name="Corner Pocket", table_count=1), Venue(id=2, name="Rack Room", table_count=4)]
    teams = [
        make_participation(1, "A", "Corner Pocket"),
        make_participation(2, "B", "corner pocket "),
        make_participation(3, "C", "Rack Room"),
    ]

    capacity = venue_capacity(venues, teams, matches_per_week=4)

    assert [c.venue_id for c in capacity] == [1, 2]
    assert capacity[0].home_team_count == 2
    assert capacity[0].peak_weekly_matches == 2
    assert capacity[0].conflict is True
    assert capacity[1].conflict is False


def test_venue_capacity_capped_by_matches_per_week():
    venues = [Venue(id=1, name="Hall", table_count=1)]
    teams = [make_participation(i, f"T{i}", "Hall") for i in range(1, 5)]

    capacity = venue_capacity(venues, teams, matches_per_week=1)

    assert capacity[0].peak_weekly_matches == 1
    assert capacity[0].conflict is False


def test_estimate_schedule(teams, venues):
    config = ScheduleConfiguration(start_date="2026-03-02", matches_per_week=2, break_weeks=[3])

    estimate = estimate_schedule(config, teams, venues, season_end_date="2026-06-29")

    assert estimate.team_count == 4
    assert estimate.total_matches == 6
    assert estimate.season_weeks == 3
    assert estimate.calendar_weeks == 4
    assert estimate.projected_end_date == "2026-03-23"
    assert estimate.season_overflow is False
    assert estimate.total_tables == 3
    assert estimate.weekly_capacity_shortfall is False


def test_estimate_schedule_detects_overflow_and_shortfall(teams):
    config = ScheduleConfiguration(start_date="2026-03-02", matches_per_week=2)
    venues = [Venue(id=1, name="Solo", table_count=1)]

    estimate = estimate_schedule(config, teams, venues, season_end_date="2026-03-09")

    assert estimate.season_overflow is True
    assert estimate.weekly_capacity_shortfall is True


def test_estimate_schedule_without_teams():
    estimate = estimate_schedule(ScheduleConfiguration(), None, [])
    assert estimate.season_weeks == 14
    assert estimate.projected_end_date is None


def test_round_robin_labels():
    assert round_robin_label(1) == "Single Round Robin"
    assert round_robin_label(2) == "Double Round Robin"
    assert round_robin_label(3) == "Triple Round Robin"
    assert round_robin_label(4) == "Quad Round Robin"


def test_parameter_grid_labels(teams, venues):
    config = ScheduleConfiguration(start_date="2026-03-05", matches_per_week=2, times_play_each_other=2, break_weeks=[4])

    grid = {box.type: box for box in parameter_grid(config, teams, venues)}

    assert grid["start_date"].value == "Mar 5, 2026"
    assert grid["teams"].value == "4 teams"
    assert grid["teams"].read_only is True
    assert grid["establishments"].read_only is True
    assert grid["tables_per_establishment"].value == "3 tables"
    assert grid["matches_per_week"].value == "2 matches"
    assert grid["times_play_each_other"].value == "2 times"
    assert grid["alternating_home_away"].value == "Alternating"
    assert grid["break_weeks"].value == "Week 4"


def test_parameter_grid_empty_labels():
    config = ScheduleConfiguration(alternating_home_away=False, break_weeks=[2, 5])

    grid = {box.type: box for box in parameter_grid(config, [], [])}

    assert grid["start_date"].value == "Select date..."
    assert grid["teams"].value == "None yet"
    assert grid["tables_per_establishment"].value == "No venues"
    assert grid["times_play_each_other"].value == "1 time"
    assert grid["alternating_home_away"].value == "Fixed"
    assert grid["break_weeks"].value == "2 weeks"


def test_validate_configuration_ok():
    config = ScheduleConfiguration(start_date="2026-03-02", matches_per_week=2, break_weeks=[3])
    assert validate_configuration(config, 4) == []


def test_validate_configuration_reports_every_problem():
    config = ScheduleConfiguration(start_date="", matches_per_week=1, times_play_each_other=5, break_weeks=[0, 2, 2])

    errors = validate_configuration(config, 1)

    assert "Please set a start date" in errors
    assert "Need at least 2 teams to generate a schedule" in errors
    assert any("between 1 and 4" in e for e in errors)
    assert "Break week 0 is not a valid week number" in errors
    assert "Break week 2 is listed more than once" in errors


def test_validate_configuration_matches_per_week_range():
    config = ScheduleConfiguration(start_date="2026-03-02", matches_per_week=3)
    assert validate_configuration(config, 4) == ["Matches per week must be between 1 and 2 for 4 teams"]


def test_require_valid_configuration_raises():
    with pytest.raises(ScheduleConfigurationError) as exc_info:
        require_valid_configuration(ScheduleConfiguration(start_date="bad", matches_per_week=1), 2)
    assert exc_info.value.errors == ["Start date 'bad' is not a valid YYYY-MM-DD date"]
