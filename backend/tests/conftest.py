import os
from unittest.mock import MagicMock

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from leaguedesk.api.types import Season, SeasonParticipation, TeamList, Venue
from leaguedesk.database import get_session
from leaguedesk.dependencies import get_league_api
from leaguedesk.main import app

TEST_DATABASE_URL = "sqlite:///:memory:"

# ============================================================================
# Test Database Setup with StaticPool
# ============================================================================
# sqlite:///:memory: with StaticPool so every session shares one database;
# the app's get_session and get_league_api dependencies are overridden.
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


def override_get_session():
    """Override session to use test engine"""
    with Session(test_engine) as session:
        yield session


def make_participation(team_id: int, name: str, establishment: str = "") -> SeasonParticipation:
    return SeasonParticipation(
        id=100 + team_id,
        season=1,
        team=team_id,
        team_detail=TeamList(id=team_id, name=name, establishment=establishment),
    )


@pytest.fixture
def season() -> Season:
    return Season(id=1, league=7, name="Spring 2026", start_date="2026-03-02", end_date="2026-06-29")


@pytest.fixture
def teams():
    return [
        make_participation(1, "Sharks", "Corner Pocket"),
        make_participation(2, "Breakers", "Corner Pocket"),
        make_participation(3, "Bankers", "Rack Room"),
        make_participation(4, "Scratch", "Rack Room"),
    ]


@pytest.fixture
def venues():
    return [
        Venue(id=10, league=7, name="Corner Pocket", table_count=2),
        Venue(id=11, league=7, name="Rack Room", table_count=None),
    ]


@pytest.fixture(name="session", scope="function")
def session_fixture():
    """Fresh draft tables for every test"""
    from leaguedesk.models.schedule_draft import ScheduleDraft  # noqa: F401

    SQLModel.metadata.drop_all(test_engine)
    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="league_api")
def league_api_fixture(season, teams, venues):
    """LeagueApi stand-in preloaded with one season, four teams and two venues"""
    league_api = MagicMock()
    league_api.seasons.get.return_value = season
    league_api.seasons.get_teams.return_value = teams
    league_api.seasons.get_venues.return_value = venues
    return league_api


@pytest.fixture(name="client")
def client_fixture(session: Session, league_api):
    """Test client with the database session and league API overridden"""
    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_league_api] = lambda: league_api

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
