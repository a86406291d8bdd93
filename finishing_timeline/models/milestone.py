"""Milestone models."""

from enum import Enum
from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from finishing_timeline.models.property import PropertyRef, property_id_of
from finishing_timeline.models.task import enum_or_default
from finishing_timeline.utils.dates import format_date


class MilestoneCategory(str, Enum):
    """Milestone category values."""
    PLANNING = "planning"
    CONSTRUCTION = "construction"
    INSPECTION = "inspection"
    PAYMENT = "payment"
    DELIVERY = "delivery"


DEFAULT_NOTIFY_BEFORE_DAYS = 7


class Milestone(BaseModel):
    """Single-date significant event tied to a property."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = Field(None, alias="_id", description="Milestone ID")
    title: str = Field(default="", description="Milestone title")
    date: Any = Field(None, description="Raw milestone date")
    category: MilestoneCategory = Field(default=MilestoneCategory.PLANNING)
    is_completed: bool = Field(default=False, alias="isCompleted")
    notify_before: int = Field(
        default=DEFAULT_NOTIFY_BEFORE_DAYS,
        ge=0,
        alias="notifyBefore",
        description="Days before the date to notify"
    )
    property_ref: Optional[Union[PropertyRef, str]] = Field(None, alias="property")

    @field_validator("title", mode="before")
    @classmethod
    def _title_not_null(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("category", mode="before")
    @classmethod
    def _tolerant_category(cls, value: Any) -> MilestoneCategory:
        return enum_or_default(MilestoneCategory, value, MilestoneCategory.PLANNING)

    @field_validator("is_completed", mode="before")
    @classmethod
    def _completed_not_null(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("notify_before", mode="before")
    @classmethod
    def _notify_default(cls, value: Any) -> Any:
        return DEFAULT_NOTIFY_BEFORE_DAYS if value in (None, "") else value

    @property
    def property_id(self) -> Optional[str]:
        return property_id_of(self.property_ref)


class MilestonePayload(BaseModel):
    """Body sent to the API when creating or updating a milestone."""
    model_config = ConfigDict(populate_by_name=True)

    property_id: str = Field(..., alias="property", min_length=1)
    title: str = Field(..., min_length=1)
    date: str = Field(..., description="Milestone date (YYYY-MM-DD)")
    category: MilestoneCategory = Field(default=MilestoneCategory.PLANNING)
    notify_before: int = Field(default=DEFAULT_NOTIFY_BEFORE_DAYS, ge=0, alias="notifyBefore")

    @field_validator("date", mode="before")
    @classmethod
    def _format_date(cls, value: Any) -> str:
        formatted = format_date(value)
        if not formatted:
            raise ValueError("must be a valid date")
        return formatted

    @classmethod
    def from_milestone(cls, milestone: Milestone) -> "MilestonePayload":
        return cls(
            property_id=milestone.property_id or "",
            title=milestone.title,
            date=milestone.date,
            category=milestone.category,
            notify_before=milestone.notify_before,
        )

    def to_api(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
