"""ghbackup - GitHub Backup.

Periodic two-way synchronization of local text files with paths in a
GitHub repository.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "GitHubClient",
    "SyncAgent",
    "BackupOrchestrator",
    "SchedulePolicy",
    "start_backup",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name == "GitHubClient":
        from ghbackup.remote.client import GitHubClient

        return GitHubClient
    if name == "SyncAgent":
        from ghbackup.sync.agent import SyncAgent

        return SyncAgent
    if name in ("BackupOrchestrator", "start_backup"):
        from ghbackup.sync import orchestrator

        return getattr(orchestrator, name)
    if name == "SchedulePolicy":
        from ghbackup.sync.schedule import SchedulePolicy

        return SchedulePolicy
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
