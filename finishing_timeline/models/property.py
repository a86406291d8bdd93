"""Property models."""

from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class PropertyRef(BaseModel):
    """Property as embedded (populated) inside a task or milestone."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    id: str = Field(..., alias="_id", description="Property ID")
    title: Optional[str] = Field(None, description="Property title")


class Property(BaseModel):
    """Property record as listed by the API."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    id: str = Field(..., alias="_id", description="Property ID")
    title: str = Field(default="", description="Property title")
    address: Optional[str] = Field(None, description="Street address")
    status: Optional[str] = Field(None, description="Property status")
    client: Optional[Union[str, dict[str, Any]]] = Field(None, description="Owning client (id or populated record)")


def property_id_of(ref: Optional[Union[PropertyRef, str]]) -> Optional[str]:
    """Return the property ID whether the reference is populated or not."""
    if ref is None:
        return None
    if isinstance(ref, PropertyRef):
        return ref.id
    return ref or None
