"""Tests for the progress color rule."""

import pytest
from finishing_timeline.services.progress_color import (
    BAND_COLORS,
    ProgressBand,
    progress_band,
    progress_color,
)

RED = "#ef4444"
AMBER = "#f59e0b"
GREEN = "#10b981"


@pytest.mark.unit
@pytest.mark.parametrize("progress,expected", [
    (None, RED),
    (0, RED),
    (29, RED),
    (30, AMBER),
    (69, AMBER),
    (70, GREEN),
    (100, GREEN),
])
def test_progress_color_boundaries(progress, expected):
    assert progress_color(progress) == expected


@pytest.mark.unit
def test_progress_band_is_total_over_percentages():
    """Every percentage lands in exactly one band, bands are contiguous."""
    bands = [progress_band(p) for p in range(101)]

    assert bands[:30] == [ProgressBand.AT_RISK] * 30
    assert bands[30:70] == [ProgressBand.IN_PROGRESS] * 40
    assert bands[70:] == [ProgressBand.ON_TRACK] * 31
    assert set(BAND_COLORS) == set(ProgressBand)
