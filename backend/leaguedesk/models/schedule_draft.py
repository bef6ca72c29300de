from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON
from sqlmodel import Column, Field, SQLModel

from leaguedesk.api.types import (
    ScheduleConfiguration,
    ScheduleWarning,
    ScheduleWeek,
    SeasonParticipation,
    Venue,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScheduleDraft(SQLModel, table=True):
    """
    Working schedule for one season, kept until it is saved to the league API.

    JSON columns hold plain dicts; use the typed accessors below and assign
    whole values back (in-place edits of a JSON column are not tracked).
    """

    __tablename__ = "schedule_draft"

    id: Optional[int] = Field(default=None, primary_key=True)
    season_id: int = Field(index=True)
    status: str = Field(default="draft")  # "draft" | "saved"
    is_manual: bool = Field(default=False)
    has_edits: bool = Field(default=False)
    configuration_json: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    weeks_json: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    warnings_json: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    teams_json: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    venues_json: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    season_end_date: Optional[str] = None
    matches_created: Optional[int] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    saved_at: Optional[datetime] = Field(default=None)

    @property
    def configuration(self) -> ScheduleConfiguration:
        return ScheduleConfiguration.model_validate(self.configuration_json or {})

    def set_configuration(self, config: ScheduleConfiguration) -> None:
        self.configuration_json = config.model_dump(mode="json")

    @property
    def weeks(self) -> List[ScheduleWeek]:
        return [ScheduleWeek.model_validate(w) for w in self.weeks_json or []]

    def set_weeks(self, weeks: List[ScheduleWeek]) -> None:
        self.weeks_json = [w.model_dump(mode="json") for w in weeks]

    @property
    def warnings(self) -> List[ScheduleWarning]:
        return [ScheduleWarning.model_validate(w) for w in self.warnings_json or []]

    def set_warnings(self, warnings: List[ScheduleWarning]) -> None:
        self.warnings_json = [w.model_dump(mode="json") for w in warnings]

    @property
    def teams(self) -> List[SeasonParticipation]:
        return [SeasonParticipation.model_validate(t) for t in self.teams_json or []]

    def set_teams(self, teams: List[SeasonParticipation]) -> None:
        self.teams_json = [t.model_dump(mode="json") for t in teams]

    @property
    def venues(self) -> List[Venue]:
        return [Venue.model_validate(v) for v in self.venues_json or []]

    def set_venues(self, venues: List[Venue]) -> None:
        self.venues_json = [v.model_dump(mode="json") for v in venues]

    def touch(self) -> None:
        self.updated_at = _utcnow()
