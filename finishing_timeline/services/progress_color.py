"""Progress percentage to severity color band."""

from enum import Enum
from typing import Optional


class ProgressBand(str, Enum):
    """Severity band for a completion percentage."""
    AT_RISK = "at-risk"
    IN_PROGRESS = "in-progress"
    ON_TRACK = "on-track"


BAND_COLORS = {
    ProgressBand.AT_RISK: "#ef4444",
    ProgressBand.IN_PROGRESS: "#f59e0b",
    ProgressBand.ON_TRACK: "#10b981",
}

AT_RISK_BELOW = 30
ON_TRACK_FROM = 70


def progress_band(progress: Optional[float]) -> ProgressBand:
    """Classify a percentage; absent progress counts as 0."""
    value = progress or 0
    if value < AT_RISK_BELOW:
        return ProgressBand.AT_RISK
    if value < ON_TRACK_FROM:
        return ProgressBand.IN_PROGRESS
    return ProgressBand.ON_TRACK


def progress_color(progress: Optional[float]) -> str:
    """Hex color of the band ``progress`` falls in."""
    return BAND_COLORS[progress_band(progress)]
