"""Shared helpers for rejecting mutations."""

import logging
from typing import Any

from intranet_core_lib.errors import AccessDeniedError, ValidationFailedError
from intranet_core_lib.principal import Principal

logger = logging.getLogger(__name__)


def ensure_allowed(allowed: bool, principal: Principal, action: str) -> None:
    """Raise ``AccessDeniedError`` unless the predicate result allows the action."""
    if not allowed:
        logger.warning("Denied '%s' for user %s in company %s", action, principal.subject, principal.company_id)
        raise AccessDeniedError(f"You are not allowed to {action}.")


def pick(changes: dict[str, Any], allowed_fields: set[str]) -> dict[str, Any]:
    """Return the changes if every field may be written."""
    unknown = set(changes) - allowed_fields
    if unknown:
        raise ValidationFailedError(f"Fields cannot be changed: {', '.join(sorted(unknown))}.")
    return dict(changes)
