"""Request identity, as injected by the session layer in front of the API.

The session layer authenticates the user and forwards ``X-User-Id`` (and
``X-User-Role: admin`` for administrators). This module only reads them.
"""

from fastapi import Header

from storefront.exceptions import Forbidden, Unauthorized
from storefront.utils.logging import add_context

ADMIN_ROLE = "admin"


def current_user(x_user_id: str | None = Header(default=None)) -> str:
    if not x_user_id or not x_user_id.strip():
        raise Unauthorized("Login required")
    user_id = x_user_id.strip()
    add_context(user_id=user_id)
    return user_id


def current_admin(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> str:
    user_id = current_user(x_user_id)
    if (x_user_role or "").strip().lower() != ADMIN_ROLE:
        raise Forbidden("Administrator role required")
    return user_id
