"""Tool schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ToolCreate(BaseModel):
    """Offer a new tool for lending."""

    name: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=2000)


class ToolUpdate(BaseModel):
    """Update a tool."""

    name: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=2000)
    available: bool | None = None


class ToolResponse(BaseModel):
    """Tool response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    owner_id: int
    available: bool
    created_at: datetime
    updated_at: datetime
