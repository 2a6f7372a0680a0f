# ghbackup Test Fixtures
# Pytest fixtures for ghbackup tests

import base64
import hashlib
import tempfile
from collections.abc import Generator
from io import StringIO
from pathlib import Path
from typing import Any, Optional

import pytest
import yaml
from rich.console import Console as RichConsole

from ghbackup.output.console import Console
from ghbackup.remote.client import ConflictError, GitHubError, NotFoundError


class FakeGitHubClient:
    """In-memory stand-in for GitHubClient that records every call."""

    def __init__(self, owner: str = "octocat", repos: Optional[list[str]] = None):
        self.owner = owner
        self.repos: list[str] = list(repos or [])
        self.files: dict[tuple[str, str], str] = {}
        self.calls: list[tuple] = []
        self.errors: dict[tuple[str, str], Exception] = {}
        self.closed = False

    @staticmethod
    def sha_of(content: str) -> str:
        return hashlib.sha1(content.encode("utf-8")).hexdigest()

    def put(self, repo: str, path: str, content: str) -> None:
        """Seed a remote file."""
        self.files[(repo, path)] = content

    def list_owned_repositories(self) -> list[dict[str, Any]]:
        self.calls.append(("list_repos",))
        return [{"name": name} for name in self.repos]

    def create_repository(self, name: str, *, private: bool = True) -> dict[str, Any]:
        self.calls.append(("create_repo", name, private))
        self.repos.append(name)
        return {"name": name, "private": private}

    def get_file_content(self, owner: str, repo: str, path: str) -> dict[str, Any]:
        self.calls.append(("get", path))
        if ("get", path) in self.errors:
            raise self.errors[("get", path)]
        if (repo, path) not in self.files:
            raise NotFoundError(f"GET {path} returned 404", status_code=404)
        content = self.files[(repo, path)]
        raw = content.encode("utf-8")
        encoded = base64.b64encode(raw).decode("ascii")
        # GitHub wraps base64 bodies at 60 characters
        wrapped = "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60))
        return {"sha": self.sha_of(content), "content": wrapped, "encoding": "base64", "size": len(raw)}

    def create_or_update_file(
        self,
        owner: str,
        repo: str,
        path: str,
        message: str,
        content: str,
        sha: Optional[str] = None,
    ) -> dict[str, Any]:
        self.calls.append(("put", path, message, sha))
        if ("put", path) in self.errors:
            raise self.errors[("put", path)]
        current = self.files.get((repo, path))
        if sha is None and current is not None:
            raise GitHubError('"sha" wasn\'t supplied', status_code=422)
        if sha is not None and (current is None or self.sha_of(current) != sha):
            raise ConflictError(f"{path} does not match {sha}", status_code=409)
        text = base64.b64decode(content).decode("utf-8")
        self.files[(repo, path)] = text
        return {"content": {"path": path, "sha": self.sha_of(text)}}

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeGitHubClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def writes(self) -> list[tuple]:
        return [c for c in self.calls if c[0] == "put"]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def base_dir(temp_dir: Path) -> Path:
    """Base directory holding tracked files."""
    base = temp_dir / "data"
    base.mkdir()
    return base


@pytest.fixture
def fake_client() -> FakeGitHubClient:
    """Fake client that already owns the 'backup' repository."""
    return FakeGitHubClient(repos=["backup"])


@pytest.fixture
def console() -> Console:
    """Console with captured, uncolored output."""
    c = Console(verbose=True, colored=False)
    c._console = RichConsole(file=StringIO(), no_color=True, width=200)
    return c


@pytest.fixture
def read_output(console: Console):
    """Return a callable giving the captured console output."""

    def _read() -> str:
        console._console.file.seek(0)
        return console._console.file.read()

    return _read


@pytest.fixture
def make_client():
    """Factory for fake clients with custom owner or repositories."""
    return FakeGitHubClient


@pytest.fixture
def sample_config(base_dir: Path) -> dict:
    """Create sample configuration dict."""
    return {
        "github": {"owner": "octocat", "token": "ghp_test"},
        "repository": {"name": "backup"},
        "files": {"base_dir": str(base_dir), "paths": ["a.txt", "sub/notes.txt"]},
        "schedule": {"interval": 60},
        "output": {"colored": False},
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: dict) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "config.yaml"
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)
    return config_path
