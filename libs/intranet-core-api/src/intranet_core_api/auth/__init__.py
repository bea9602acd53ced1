"""Identity and session handling."""

from intranet_core_api.auth.auth_service import AuthService
from intranet_core_api.auth.passwords import hash_password, verify_password
from intranet_core_api.auth.session_store import SessionStore

__all__ = [
    "AuthService",
    "SessionStore",
    "hash_password",
    "verify_password",
]
