"""
Table counts per venue.

Counts are edited locally (bounded 1..20) and only sent to the league API
when the operator applies them; venues without a count are treated as
having one table.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from leaguedesk.api.client import ApiError
from leaguedesk.api.seasons import SeasonsApi
from leaguedesk.api.types import Venue

logger = logging.getLogger(__name__)

MIN_TABLES = 1
MAX_TABLES = 20


@dataclass
class TableUpdateResult:
    updated: List[Venue] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def clamp_tables(count: int) -> int:
    return max(MIN_TABLES, min(MAX_TABLES, count))


def increment(count: int) -> int:
    return clamp_tables(count + 1)


def decrement(count: int) -> int:
    return clamp_tables(count - 1)


def current_counts(venues: Sequence[Venue]) -> Dict[int, int]:
    return {venue.id: venue.table_count or 1 for venue in venues}


def pending_changes(venues: Sequence[Venue], edited: Dict[int, int]) -> Dict[int, int]:
    """Venue id -> new count, for venues whose edited count differs."""
    current = current_counts(venues)
    clamped = {venue_id: clamp_tables(count) for venue_id, count in edited.items()}
    return {
        venue_id: count
        for venue_id, count in clamped.items()
        if venue_id in current and count != current[venue_id]
    }


def apply_table_changes(
    seasons_api: SeasonsApi, venues: Sequence[Venue], edited: Dict[int, int]
) -> TableUpdateResult:
    """
    PATCH each pending venue with its clamped table count.

    Out-of-range counts are clamped rather than rejected. A failing venue is
    reported in errors and does not stop the others.
    """
    result = TableUpdateResult()
    for venue_id, count in sorted(pending_changes(venues, edited).items()):
        try:
            venue = seasons_api.update_venue(venue_id, {"table_count": clamp_tables(count)})
        except ApiError as e:
            logger.warning(f"Failed to update tables for venue {venue_id}: {e.message}")
            result.errors.append(f"Venue {venue_id}: {e.message}")
            continue
        result.updated.append(venue)

    logger.info(f"Updated table counts for {len(result.updated)} venue(s)")
    return result
