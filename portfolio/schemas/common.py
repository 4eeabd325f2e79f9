"""
Shared pydantic building blocks.

The JSON wire format uses camelCase field names (githubUrl, startDate) and
"_id" for identifiers, which is what the dashboard client reads. Python code
keeps snake_case; CamelModel maps between the two and accepts either form on
input.
"""

import uuid

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, ORM-readable, snake_case accepted too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DeletedResponse(BaseModel):
    """Response body for DELETE endpoints — the id the client should drop."""
    id: uuid.UUID


class MessageResponse(BaseModel):
    message: str
