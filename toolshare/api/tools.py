"""Tool API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from toolshare.api.dependencies import get_current_user, get_tool_service
from toolshare.models.user import User
from toolshare.schemas.tool import ToolCreate, ToolResponse, ToolUpdate
from toolshare.services.tools import ToolService

router = APIRouter(prefix="/api/v1/tools", tags=["tools"])


@router.get("", response_model=list[ToolResponse])
def get_tools(
    current_user: Annotated[User, Depends(get_current_user)],
    tool_service: Annotated[ToolService, Depends(get_tool_service)],
    available: bool | None = None,
    owner_id: int | None = None,
):
    """Get tools, optionally only available ones or one owner's."""
    return tool_service.list_tools(available=available, owner_id=owner_id)


@router.post("", response_model=ToolResponse, status_code=status.HTTP_201_CREATED)
def create_tool(
    tool_data: ToolCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    tool_service: Annotated[ToolService, Depends(get_tool_service)],
):
    """Offer a tool for lending."""
    return tool_service.create_tool(current_user, tool_data.name, tool_data.description)


@router.get("/{tool_id}", response_model=ToolResponse)
def get_tool(
    tool_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    tool_service: Annotated[ToolService, Depends(get_tool_service)],
):
    """Get a specific tool."""
    return tool_service.get_tool(tool_id)


@router.put("/{tool_id}", response_model=ToolResponse)
def update_tool(
    tool_id: int,
    tool_data: ToolUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    tool_service: Annotated[ToolService, Depends(get_tool_service)],
):
    """Update a tool (owner only)."""
    return tool_service.update_tool(
        tool_id,
        current_user,
        name=tool_data.name,
        description=tool_data.description,
        available=tool_data.available,
    )


@router.delete("/{tool_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tool(
    tool_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    tool_service: Annotated[ToolService, Depends(get_tool_service)],
):
    """Delete a tool (owner only)."""
    tool_service.delete_tool(tool_id, current_user)
