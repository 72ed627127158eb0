"""Type definitions and TypedDict classes for the dashboard."""

from typing import TypedDict, Literal


KPI = Literal["won", "draw", "lost", "goalsFor", "goalsAgainst"]


class StatRecord(TypedDict, total=False):
    """One team × season row as returned by the football data service."""
    teamName: str
    year: int
    won: int
    draw: int
    lost: int
    goalsFor: int
    goalsAgainst: int


class ChartRow(TypedDict, total=False):
    """StatRecord with the season year as a display string."""
    teamName: str
    year: str
    won: int
    draw: int
    lost: int
    goalsFor: int
    goalsAgainst: int


class TeamAverage(TypedDict):
    """Per-team average of the selected KPI."""
    teamName: str
    average: float
