# ghbackup Remote Module
# GitHub API access

from ghbackup.remote.client import (
    DEFAULT_API_URL,
    ConflictError,
    GitHubClient,
    GitHubError,
    NotFoundError,
)

__all__ = [
    "DEFAULT_API_URL",
    "GitHubClient",
    "GitHubError",
    "NotFoundError",
    "ConflictError",
]
