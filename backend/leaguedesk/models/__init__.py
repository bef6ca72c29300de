from leaguedesk.models.schedule_draft import ScheduleDraft

__all__ = [
    "ScheduleDraft",
]
