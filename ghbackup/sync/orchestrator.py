# ghbackup Backup Orchestrator
# Ensures the repository once, then runs pull+push passes on a schedule

import threading
from collections import deque
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from ghbackup.sync.agent import SyncAgent
from ghbackup.sync.models import PassResult
from ghbackup.sync.schedule import SchedulePolicy

# Passes kept in memory by a long-running loop
DEFAULT_HISTORY = 10


class BackupOrchestrator:
    """
    Drives the backup loop.

    Files are processed strictly in order, one at a time: the pull step
    for a file always runs before its push step, so a freshly pulled file
    is compared again before the agent moves on.

    The loop ends when the schedule's max_cycles is reached or the stop
    event is set. The stop event is checked between files and interrupts
    the sleep between passes. Only the last `history` pass results are kept.
    """

    def __init__(
        self,
        agent: SyncAgent,
        *,
        schedule: Optional[SchedulePolicy] = None,
        stop_event: Optional[threading.Event] = None,
        history: int = DEFAULT_HISTORY,
    ):
        if history < 1:
            raise ValueError("history must be at least 1")
        self.agent = agent
        self.console = agent.console
        self.schedule = schedule or SchedulePolicy()
        self.stop_event = stop_event or threading.Event()
        self.history = history

    def stop(self) -> None:
        """Request a graceful stop."""
        self.stop_event.set()

    def run_pass(self, repo_name: str, file_paths: Sequence[Path], base_dir: Path, *, cycle: int = 1) -> PassResult:
        """
        Run one pass over all tracked files.

        Per-file failures are recorded in the result and never abort the pass.
        """
        result = PassResult(cycle=cycle)
        for file_path in file_paths:
            if self.stop_event.is_set():
                result.stopped = True
                break
            result.results.append(self.agent.sync_file(repo_name, file_path, base_dir))
            result.results.append(self.agent.upload_file_to_repo(repo_name, file_path, base_dir))
        return result

    def start_backup(self, file_paths: Sequence[Path], repo_name: str, base_dir: Path) -> list[PassResult]:
        """
        Ensure the repository, then run passes until stopped.

        Args:
            file_paths: Tracked local file paths.
            repo_name: Desired repository name.
            base_dir: Base directory for remote keys.

        Returns:
            Results of the completed passes, oldest first, at most
            `history` of them.

        Raises:
            GitHubError: If the repository cannot be found or created.
        """
        try:
            repo = self.agent.ensure_repo(repo_name)
        except Exception as e:
            self.console.print_error(f"Backup process terminated: {e}")
            raise

        passes: deque[PassResult] = deque(maxlen=self.history)
        cycle = 0
        while not self.stop_event.is_set():
            cycle += 1
            self.console.print_info("Starting backup process...")
            result = self.run_pass(repo, file_paths, base_dir, cycle=cycle)
            passes.append(result)
            self.console.print_pass_result(result, dry_run=self.agent.dry_run)

            if result.stopped or not self.schedule.should_continue(cycle):
                break

            delay = self.schedule.next_delay()
            self.console.print_info(f"Backup complete. Waiting {_format_delay(delay)} before next backup...")
            # Returns early when stop() is called
            if self.stop_event.wait(delay):
                break

        self.console.print_info("Backup stopped.")
        return list(passes)


def start_backup(
    agent: SyncAgent,
    file_paths: Sequence[Path],
    repo_name: str,
    base_dir: Path,
    *,
    schedule: Optional[SchedulePolicy] = None,
    stop_event: Optional[threading.Event] = None,
    history: int = DEFAULT_HISTORY,
) -> list[PassResult]:
    """Convenience wrapper around BackupOrchestrator.start_backup."""
    orchestrator = BackupOrchestrator(agent, schedule=schedule, stop_event=stop_event, history=history)
    return orchestrator.start_backup(file_paths, repo_name, base_dir)


def _format_delay(seconds: float) -> str:
    if seconds >= 3600 and seconds % 3600 == 0:
        hours = int(seconds // 3600)
        return f"{hours} hour" + ("s" if hours != 1 else "")
    if seconds >= 60 and seconds % 60 == 0:
        minutes = int(seconds // 60)
        return f"{minutes} minute" + ("s" if minutes != 1 else "")
    return f"{seconds:g} seconds"
