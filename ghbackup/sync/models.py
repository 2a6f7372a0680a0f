# ghbackup Sync Models
# Tracked files, remote snapshots and per-step results

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from ghbackup.utils.paths import remote_key


@dataclass(frozen=True)
class TrackedFile:
    """A local file configured for periodic synchronization."""

    local_path: Path
    base_dir: Path

    @property
    def remote_key(self) -> str:
        """Repository path of this file, relative to base_dir."""
        return remote_key(self.local_path, self.base_dir)

    @property
    def exists(self) -> bool:
        return self.local_path.is_file()


@dataclass(frozen=True)
class RemoteFileSnapshot:
    """
    Content and metadata of a file in the repository.

    Fetched fresh on every check, never cached.
    """

    sha: str
    content: str
    size: int


class ActionType(str, Enum):
    """Outcome of a single pull or push step."""

    PULLED = "pulled"  # Remote content written to the local file
    CREATED = "created"  # New remote file uploaded
    UPDATED = "updated"  # Existing remote file replaced
    UNCHANGED = "unchanged"
    SKIPPED_MISSING = "skipped_missing"  # Local file does not exist
    SKIPPED_ABSENT = "skipped_absent"  # Nothing to pull, remote file absent
    ERROR = "error"


class Direction(str, Enum):
    PULL = "pull"
    PUSH = "push"


@dataclass
class FileResult:
    """Result of one sync step for one file."""

    local_path: Path
    direction: Direction
    action_type: ActionType
    remote_key: str = ""
    error: Optional[str] = None
    dry_run: bool = False

    @property
    def wrote(self) -> bool:
        """Check if this step changed (or would change) either side."""
        return self.action_type in (ActionType.PULLED, ActionType.CREATED, ActionType.UPDATED)

    @property
    def success(self) -> bool:
        return self.action_type != ActionType.ERROR


@dataclass
class PassResult:
    """Result of one full pass over all tracked files."""

    cycle: int
    results: list[FileResult] = field(default_factory=list)
    stopped: bool = False

    @property
    def pulled(self) -> int:
        return sum(1 for r in self.results if r.action_type == ActionType.PULLED)

    @property
    def pushed(self) -> int:
        return sum(1 for r in self.results if r.action_type in (ActionType.CREATED, ActionType.UPDATED))

    @property
    def errors(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def has_errors(self) -> bool:
        return self.errors > 0
