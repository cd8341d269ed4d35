"""Data models for incident declarations and their outcomes."""

from incident_bot.models.incident import Channel, IncidentRequest
from incident_bot.models.results import IncidentOutcome, IncidentState, StageResult

__all__ = [
    "Channel",
    "IncidentRequest",
    "IncidentOutcome",
    "IncidentState",
    "StageResult",
]
