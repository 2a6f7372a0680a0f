# ghbackup Sync Agent
# Repository bootstrap plus per-file pull and push steps

import base64
from pathlib import Path
from typing import Optional

from ghbackup.output.console import Console, FileStatus
from ghbackup.remote.client import GitHubClient, GitHubError, NotFoundError
from ghbackup.sync.models import ActionType, Direction, FileResult, RemoteFileSnapshot, TrackedFile
from ghbackup.utils.paths import atomic_write, read_text


def should_pull(local_content: str, local_size: int, remote: RemoteFileSnapshot) -> bool:
    """Remote wins if it is larger or its content differs."""
    return remote.size > local_size or remote.content != local_content


def should_push(local_content: str, local_size: int, remote: RemoteFileSnapshot) -> bool:
    """Local wins if it is larger or its content differs."""
    return local_size > remote.size or local_content != remote.content


def encode_content(text: str) -> str:
    """Encode text as base64 for the contents API."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_content(data: str) -> str:
    """Decode a base64 contents API body (may contain line breaks) to text."""
    return base64.b64decode(data).decode("utf-8", errors="replace")


class SyncAgent:
    """
    Synchronizes individual tracked files with a GitHub repository.

    The client is injected so tests can substitute a fake. Every check
    fetches the remote file fresh; nothing is cached between calls.
    """

    def __init__(
        self,
        client: GitHubClient,
        *,
        console: Optional[Console] = None,
        private: bool = True,
        commit_prefix: str = "Backup:",
        dry_run: bool = False,
    ):
        """
        Initialize agent.

        Args:
            client: Authenticated GitHub client.
            console: Console for diagnostics.
            private: Visibility of a newly created repository.
            commit_prefix: Prefix of generated commit messages.
            dry_run: If True, report decisions without writing either side.
        """
        self.client = client
        self.owner = client.owner
        self.console = console or Console()
        self.private = private
        self.commit_prefix = commit_prefix
        self.dry_run = dry_run

    def ensure_repo(self, repo_name: str) -> str:
        """
        Find the backup repository or create it.

        Args:
            repo_name: Desired repository name.

        Returns:
            Name of the existing or newly created repository.

        Raises:
            GitHubError: On any API failure.
        """
        try:
            repos = self.client.list_owned_repositories()
            if any(repo.get("name") == repo_name for repo in repos):
                self.console.print_info(f'Repository "{repo_name}" found.')
                return repo_name

            self.console.print_info(f'Creating repository "{repo_name}"...')
            created = self.client.create_repository(repo_name, private=self.private)
            self.console.print_success(f'Repository "{repo_name}" created.')
            return created.get("name", repo_name)
        except Exception as e:
            self.console.print_error(f"Error ensuring repository: {e}")
            raise

    def fetch_file_meta(self, repo_name: str, remote_path: str) -> Optional[RemoteFileSnapshot]:
        """
        Fetch the current remote copy of a file.

        Args:
            repo_name: Repository name.
            remote_path: Path inside the repository.

        Returns:
            RemoteFileSnapshot, or None if the file does not exist remotely.
        """
        try:
            data = self.client.get_file_content(self.owner, repo_name, remote_path)
        except NotFoundError:
            return None
        except Exception as e:
            self.console.print_error(f'Failed to fetch metadata for "{remote_path}": {e}')
            raise

        # Files over 1 MB come back with encoding "none" and no content
        if data.get("encoding") != "base64":
            error = GitHubError(f"file is too large for the contents API ({data.get('size')} bytes)")
            self.console.print_error(f'Failed to fetch metadata for "{remote_path}": {error}')
            raise error

        return RemoteFileSnapshot(
            sha=data["sha"],
            content=decode_content(data.get("content", "")),
            size=data["size"],
        )

    def sync_file(self, repo_name: str, local_path: Path, base_dir: Path) -> FileResult:
        """
        Pull the remote copy over the local file if it is larger or different.

        Never raises: failures are logged and returned as an error result.
        """
        tracked = TrackedFile(Path(local_path), Path(base_dir))
        try:
            if not tracked.exists:
                self.console.print_warning(f'File "{tracked.local_path}" does not exist. Skipping.')
                return self._result(tracked, Direction.PULL, ActionType.SKIPPED_MISSING)

            key = tracked.remote_key
            local_content = read_text(tracked.local_path)
            local_size = tracked.local_path.stat().st_size

            self.console.print_debug(f'Checking "{key}" in repository "{repo_name}"...')
            remote = self.fetch_file_meta(repo_name, key)

            if remote is None:
                self.console.print_debug(f'File "{key}" not found in GitHub. Skipping.')
                return self._result(tracked, Direction.PULL, ActionType.SKIPPED_ABSENT)

            if not should_pull(local_content, local_size, remote):
                self.console.print_debug(f'File "{key}" is up-to-date locally.')
                return self._result(tracked, Direction.PULL, ActionType.UNCHANGED)

            self.console.print_info(f'Remote file "{key}" is larger or has different content. Updating local file...')
            if not self.dry_run:
                atomic_write(tracked.local_path, remote.content)
                self.console.print_success(f'Local file "{tracked.local_path}" updated from GitHub.')
            return self._result(tracked, Direction.PULL, ActionType.PULLED)
        except Exception as e:
            self.console.print_error(f'Failed to sync "{tracked.local_path}": {e}')
            return self._result(tracked, Direction.PULL, ActionType.ERROR, error=str(e))

    def upload_file_to_repo(self, repo_name: str, local_path: Path, base_dir: Path) -> FileResult:
        """
        Push the local file if it is new remotely, larger, or different.

        An update carries the fetched sha, so GitHub rejects it when the
        remote file changed in between. That rejection is logged like any
        other failure and not retried.

        Never raises: failures are logged and returned as an error result.
        """
        tracked = TrackedFile(Path(local_path), Path(base_dir))
        try:
            if not tracked.exists:
                self.console.print_warning(f'File "{tracked.local_path}" does not exist. Skipping.')
                return self._result(tracked, Direction.PUSH, ActionType.SKIPPED_MISSING)

            key = tracked.remote_key
            local_content = read_text(tracked.local_path)
            local_size = tracked.local_path.stat().st_size

            self.console.print_debug(f'Checking "{key}" in repository "{repo_name}"...')
            remote = self.fetch_file_meta(repo_name, key)

            if remote is None:
                self.console.print_info(f'Uploading new file "{key}" to repository "{repo_name}"...')
                if not self.dry_run:
                    self.client.create_or_update_file(
                        self.owner,
                        repo_name,
                        key,
                        f"{self.commit_prefix} Uploading {key}",
                        encode_content(local_content),
                    )
                    self.console.print_success(f'Successfully uploaded "{key}" to repository "{repo_name}".')
                return self._result(tracked, Direction.PUSH, ActionType.CREATED)

            if not should_push(local_content, local_size, remote):
                self.console.print_debug(f'File "{key}" is the same on both GitHub and local. Skipping upload.')
                return self._result(tracked, Direction.PUSH, ActionType.UNCHANGED)

            self.console.print_info(f'File content is different or local is larger. Updating "{key}"...')
            if not self.dry_run:
                self.client.create_or_update_file(
                    self.owner,
                    repo_name,
                    key,
                    f"{self.commit_prefix} Updating {key}",
                    encode_content(local_content),
                    sha=remote.sha,
                )
                self.console.print_success(f'Successfully updated "{key}" in repository "{repo_name}".')
            return self._result(tracked, Direction.PUSH, ActionType.UPDATED)
        except Exception as e:
            self.console.print_error(f'Failed to upload "{tracked.local_path}": {e}')
            return self._result(tracked, Direction.PUSH, ActionType.ERROR, error=str(e))

    def check_file(self, repo_name: str, local_path: Path, base_dir: Path) -> FileStatus:
        """
        Compare a tracked file with its remote copy without writing anything.

        Returns:
            FileStatus naming the step the next pass would perform.
        """
        tracked = TrackedFile(Path(local_path), Path(base_dir))
        key = tracked.remote_key
        try:
            remote = self.fetch_file_meta(repo_name, key)
        except Exception as e:
            return FileStatus(key, None, None, ActionType.ERROR.value, error=str(e))

        remote_size = remote.size if remote else None
        if not tracked.exists:
            return FileStatus(key, None, remote_size, ActionType.SKIPPED_MISSING.value)

        try:
            local_content = read_text(tracked.local_path)
            local_size = tracked.local_path.stat().st_size
        except OSError as e:
            return FileStatus(key, None, remote_size, ActionType.ERROR.value, error=str(e))

        if remote is None:
            plan = ActionType.CREATED
        elif should_pull(local_content, local_size, remote):
            plan = ActionType.PULLED
        elif should_push(local_content, local_size, remote):
            plan = ActionType.UPDATED
        else:
            plan = ActionType.UNCHANGED
        return FileStatus(key, local_size, remote_size, plan.value)

    def _result(
        self,
        tracked: TrackedFile,
        direction: Direction,
        action_type: ActionType,
        *,
        error: Optional[str] = None,
    ) -> FileResult:
        try:
            key = tracked.remote_key
        except ValueError:
            # No relative path exists (e.g. different drive)
            key = ""
        return FileResult(
            local_path=tracked.local_path,
            direction=direction,
            action_type=action_type,
            remote_key=key,
            error=error,
            dry_run=self.dry_run,
        )
