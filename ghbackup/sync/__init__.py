# ghbackup Sync Module
# Per-file synchronization and the backup loop

from ghbackup.sync.agent import SyncAgent, should_pull, should_push
from ghbackup.sync.models import (
    ActionType,
    Direction,
    FileResult,
    PassResult,
    RemoteFileSnapshot,
    TrackedFile,
)
from ghbackup.sync.orchestrator import BackupOrchestrator, start_backup
from ghbackup.sync.schedule import SchedulePolicy

__all__ = [
    # Models
    "TrackedFile",
    "RemoteFileSnapshot",
    "ActionType",
    "Direction",
    "FileResult",
    "PassResult",
    # Agent
    "SyncAgent",
    "should_pull",
    "should_push",
    # Loop
    "SchedulePolicy",
    "BackupOrchestrator",
    "start_backup",
]
