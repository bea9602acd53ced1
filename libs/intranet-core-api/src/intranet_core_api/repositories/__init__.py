"""Company-scoped repositories over the key-value store."""

from intranet_core_api.repositories.base import Repository
from intranet_core_api.repositories.registry import Repositories

__all__ = [
    "Repositories",
    "Repository",
]
