"""Pydantic schemas for Goal endpoints."""

import uuid
from datetime import datetime

from pydantic import Field

from portfolio.schemas.common import CamelModel


class GoalRequest(CamelModel):
    """Request body for POST and PUT /api/goals."""
    title: str | None = None
    description: str | None = None


class GoalResponse(CamelModel):
    id: uuid.UUID = Field(alias="_id")
    user_id: uuid.UUID = Field(alias="user")
    title: str
    description: str
    created_at: datetime
    updated_at: datetime
