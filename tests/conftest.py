"""Shared pytest fixtures and configuration."""

import os
import pytest
from freezegun import freeze_time

from finishing_timeline.models.milestone import Milestone
from finishing_timeline.models.task import Task

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("TIMELINE_API_URL", "https://api.test.local/api")
os.environ.setdefault("TIMELINE_API_TIMEOUT_SECONDS", "5")
os.environ.setdefault("LOG_FORMAT", "text")


@pytest.fixture
def sample_task_record():
    """Task as returned by the API (populated property)."""
    return {
        "_id": "65a1f0c2e4b0a1b2c3d4e5f6",
        "title": "Kitchen tiling",
        "description": "Ceramic wall tiles, second floor",
        "startDate": "2024-01-10T00:00:00.000Z",
        "endDate": "2024-01-20T00:00:00.000Z",
        "status": "in-progress",
        "priority": "high",
        "progress": 45,
        "property": {"_id": "prop-1", "title": "Villa 12"},
        "createdAt": "2024-01-01T08:00:00.000Z",
    }


@pytest.fixture
def sample_milestone_record():
    """Milestone as returned by the API (unpopulated property)."""
    return {
        "_id": "65a1f0c2e4b0a1b2c3d4e5f7",
        "title": "Handover",
        "date": "2024-03-01",
        "category": "delivery",
        "isCompleted": False,
        "notifyBefore": 3,
        "property": "prop-1",
    }


@pytest.fixture
def sample_property_record():
    return {
        "_id": "prop-1",
        "title": "Villa 12",
        "address": "Street 9, New Cairo",
        "status": "in-progress",
        "client": "client-1",
    }


@pytest.fixture
def sample_task(sample_task_record):
    return Task.model_validate(sample_task_record)


@pytest.fixture
def sample_milestone(sample_milestone_record):
    return Milestone.model_validate(sample_milestone_record)


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00") as frozen_time:
        yield frozen_time
