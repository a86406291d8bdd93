"""Tests for Task models."""

import pytest
from pydantic import ValidationError
from finishing_timeline.models.property import PropertyRef
from finishing_timeline.models.task import Task, TaskPayload, TaskPriority, TaskStatus


@pytest.mark.unit
def test_task_from_api_record(sample_task_record):
    """API aliases map onto model fields."""
    task = Task.model_validate(sample_task_record)

    assert task.id == "65a1f0c2e4b0a1b2c3d4e5f6"
    assert task.title == "Kitchen tiling"
    assert task.start_date == "2024-01-10T00:00:00.000Z"
    assert task.end_date == "2024-01-20T00:00:00.000Z"
    assert task.status == TaskStatus.IN_PROGRESS
    assert task.priority == TaskPriority.HIGH
    assert task.progress == 45
    assert isinstance(task.property_ref, PropertyRef)
    assert task.property_id == "prop-1"


@pytest.mark.unit
def test_task_defaults():
    task = Task()

    assert task.id is None
    assert task.title == ""
    assert task.status == TaskStatus.PENDING
    assert task.priority == TaskPriority.MEDIUM
    assert task.progress is None
    assert task.property_id is None


@pytest.mark.unit
def test_task_keeps_raw_dates():
    """Malformed dates are not rejected by the model; projections deal with them."""
    task = Task.model_validate({"_id": "t1", "startDate": "soon", "endDate": None})

    assert task.start_date == "soon"
    assert task.end_date is None


@pytest.mark.unit
def test_task_unpopulated_property():
    task = Task.model_validate({"_id": "t1", "property": "prop-9"})
    assert task.property_id == "prop-9"


@pytest.mark.unit
@pytest.mark.parametrize("raw,expected", [(150, 100), (-5, 0), ("60", 60), (33.7, 33), ("abc", None), (None, None)])
def test_task_progress_is_clamped(raw, expected):
    assert Task.model_validate({"progress": raw}).progress == expected


@pytest.mark.unit
def test_task_null_title_becomes_empty():
    assert Task.model_validate({"title": None}).title == ""


@pytest.mark.unit
def test_task_unknown_status_kept_as_text():
    task = Task.model_validate({"status": "archived"})

    assert task.status == "archived"
    assert task.status_value == "archived"


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["critical", "", None, 3])
def test_task_unknown_priority_falls_back_to_medium(raw):
    assert Task.model_validate({"priority": raw}).priority == TaskPriority.MEDIUM


@pytest.mark.unit
def test_task_numeric_id_becomes_string():
    task = Task.model_validate({"_id": 42, "title": "Grout"})
    assert task.id == "42"


@pytest.mark.unit
def test_task_payload_from_task_with_unknown_status():
    task = Task.model_validate({
        "_id": "t1", "title": "T", "status": "archived", "property": "prop-1",
        "startDate": "2024-01-01", "endDate": "2024-01-02",
    })
    assert TaskPayload.from_task(task).status == TaskStatus.PENDING


@pytest.mark.unit
def test_task_payload_serializes_by_alias():
    payload = TaskPayload(
        property_id="prop-1",
        title="Paint living room",
        start_date="2024-01-10T00:00:00.000Z",
        end_date="2024-01-15",
        progress=20,
    )

    assert payload.to_api() == {
        "property": "prop-1",
        "title": "Paint living room",
        "description": "",
        "startDate": "2024-01-10",
        "endDate": "2024-01-15",
        "status": "pending",
        "priority": "medium",
        "progress": 20,
    }


@pytest.mark.unit
def test_task_payload_from_task(sample_task):
    payload = TaskPayload.from_task(sample_task)

    assert payload.property_id == "prop-1"
    assert payload.start_date == "2024-01-10"
    assert payload.end_date == "2024-01-20"
    assert payload.status == TaskStatus.IN_PROGRESS
    assert payload.progress == 45


@pytest.mark.unit
def test_task_payload_validation():
    """Payloads need a property, a title, valid dates and progress within 0-100."""
    base = dict(property_id="prop-1", title="T", start_date="2024-01-01", end_date="2024-01-02")

    with pytest.raises(ValidationError):
        TaskPayload(**{**base, "start_date": "not a date"})
    with pytest.raises(ValidationError):
        TaskPayload(**{**base, "title": ""})
    with pytest.raises(ValidationError):
        TaskPayload(**{**base, "property_id": ""})
    with pytest.raises(ValidationError):
        TaskPayload(**base, progress=101)
