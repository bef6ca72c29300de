from leaguedesk.api.types import ScheduleMatch, ScheduleWeek
from leaguedesk.services.schedule_preview import (
    EMPTY_GENERATED_MESSAGE,
    EMPTY_MANUAL_MESSAGE,
    build_preview,
    match_card,
)


def _weeks(count):
    return [
        ScheduleWeek(
            week_number=n,
            date=f"2026-03-{2 + 7 * (n - 1):02d}",
            matches=[ScheduleMatch(home_team_id=1, away_team_id=2, date=f"2026-03-{2 + 7 * (n - 1):02d}")],
        )
        for n in range(1, count + 1)
    ]


def test_empty_messages():
    assert build_preview([], is_manual=True).empty_message == EMPTY_MANUAL_MESSAGE
    assert build_preview([]).empty_message == EMPTY_GENERATED_MESSAGE
    assert EMPTY_MANUAL_MESSAGE == "No matches added yet. Click 'Add Match' to start building your schedule."


def test_break_week_note():
    preview = build_preview(_weeks(4)[:3] + [ScheduleWeek(week_number=4, date="2026-03-23", is_break_week=True)])
    assert preview.total_matches == 3
    assert preview.weeks[3].note == "No matches scheduled - Holiday/Break"


def test_more_weeks_count_and_expanded():
    weeks = _weeks(4) + [
        ScheduleWeek(week_number=5, date="2026-03-30"),
        ScheduleWeek(week_number=6, date="2026-04-06"),
    ]

    collapsed = build_preview(weeks)
    expanded = build_preview(weeks, expanded=True)

    assert collapsed.total_weeks == 6
    assert len(collapsed.weeks) == 4
    assert collapsed.more_weeks == 2
    assert len(expanded.weeks) == 6
    assert expanded.more_weeks == 0
    assert collapsed.weeks[0].date_label == "Mar 2, 2026"


def test_match_card_labels():
    card = match_card(ScheduleMatch(home_team_id=5, away_team_name="Sharks", date="2026-03-05"))
    assert card.home_label == "Team 5"
    assert card.away_label == "Sharks"
    assert card.venue_label == "Venue TBD"
    assert card.date_label == "Thu, Mar 5"

    card = match_card(ScheduleMatch(date=""))
    assert card.title == "TBD vs TBD"


def test_bye_card_falls_back_to_team_id():
    card = match_card(ScheduleMatch(is_bye=True, bye_team_id=7, date="2026-03-02"))
    assert card.is_bye is True
    assert card.home_label == "Team 7"
    assert card.venue_label is None
