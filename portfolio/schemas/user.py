"""
Pydantic schemas for User-related responses.

hashed_password is NEVER included in any response schema.
"""

import uuid

from pydantic import BaseModel


class UserResponse(BaseModel):
    """Current identity as returned by GET /api/users/me."""
    id: uuid.UUID
    name: str
    email: str

    model_config = {"from_attributes": True}
