"""
Ownership check shared by the project, skill and goal services.

A resource with an owner may only be updated or deleted by that owner.
Resources without an owner (only skills can lack one) are open to any
authenticated user.
"""

import logging
import uuid

from portfolio.exceptions import NotAuthorizedError

logger = logging.getLogger(__name__)


def ensure_owner(owner_id: uuid.UUID | None, user_id: uuid.UUID) -> None:
    """
    Raises:
        NotAuthorizedError: If the resource has an owner other than user_id.
    """
    if owner_id is not None and owner_id != user_id:
        logger.warning("User %s denied access to a resource owned by %s", user_id, owner_id)
        raise NotAuthorizedError()
