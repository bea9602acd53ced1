"""Identifier and code generation."""

import secrets
import string

_ID_ALPHABET = string.ascii_lowercase + string.digits
_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_id(length: int = 9) -> str:
    """Return a short random alphanumeric identifier."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def generate_invite_code(length: int = 6) -> str:
    """Return an upper-case invite code."""
    return "".join(secrets.choice(_CODE_ALPHABET) for _ in range(length))
