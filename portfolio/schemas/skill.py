"""
Pydantic schemas for Skill endpoints.

The public listing uses SkillResponse (no owner). The authenticated endpoints
return OwnedSkillResponse, which includes the owner as "user".
"""

import uuid
from datetime import datetime

from pydantic import Field, field_validator

from portfolio.models.skill import SkillCategory
from portfolio.schemas.common import CamelModel


class SkillRequest(CamelModel):
    """Request body for POST and PUT /api/skills."""
    name: str | None = None
    category: SkillCategory | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None


class SkillResponse(CamelModel):
    """Public representation of a skill."""
    id: uuid.UUID = Field(alias="_id")
    name: str
    category: SkillCategory
    created_at: datetime
    updated_at: datetime


class OwnedSkillResponse(SkillResponse):
    user_id: uuid.UUID | None = Field(alias="user")
