# ghbackup GitHub Client
# Thin wrapper over the GitHub REST API repository and contents endpoints

from typing import Any, Optional
from urllib.parse import quote

import httpx

DEFAULT_API_URL = "https://api.github.com"
REPOS_PER_PAGE = 100


class GitHubError(Exception):
    """Exception raised for GitHub API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None, response_text: str = ""):
        self.message = message
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(message)


class NotFoundError(GitHubError):
    """The requested resource does not exist (HTTP 404)."""


class ConflictError(GitHubError):
    """The supplied sha no longer matches the remote file (HTTP 409)."""


_STATUS_ERRORS: dict[int, type[GitHubError]] = {
    404: NotFoundError,
    409: ConflictError,
}


class GitHubClient:
    """
    Authenticated client for the GitHub REST API.

    Holds one httpx session for the lifetime of the client. Use it as a
    context manager, or call close() when done.
    """

    def __init__(
        self,
        owner: str,
        token: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize client.

        Args:
            owner: GitHub user that owns the backup repository.
            token: Personal access token.
            api_url: API base URL (GitHub Enterprise installs differ).
            timeout: Per-request timeout in seconds. None waits forever.
            transport: Optional httpx transport (used by tests).

        Raises:
            ValueError: If owner or token is empty.
        """
        if not owner or not token:
            raise ValueError("GitHub username and token are required.")

        self.owner = owner
        self._http = httpx.Client(
            base_url=api_url,
            headers={
                "Authorization": f"token {token}",
                "Accept": "application/vnd.github.v3+json",
                "User-Agent": "ghbackup",
            },
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._http.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """
        Send a request and map failures onto GitHubError.

        Raises:
            NotFoundError: On 404.
            ConflictError: On 409.
            GitHubError: On any other non-2xx status or transport failure.
        """
        try:
            resp = self._http.request(method, url, **kwargs)
        except httpx.RequestError as e:
            raise GitHubError(f"{method} {url} failed: {e}") from e

        if resp.is_error:
            error_cls = _STATUS_ERRORS.get(resp.status_code, GitHubError)
            message = f"{method} {url} returned {resp.status_code}"
            try:
                body = resp.json()
            except ValueError:
                body = None
            detail = body.get("message") if isinstance(body, dict) else None
            if detail:
                message = f"{message}: {detail}"
            raise error_cls(message, status_code=resp.status_code, response_text=resp.text)

        return resp

    def list_owned_repositories(self) -> list[dict[str, Any]]:
        """
        List every repository owned by the authenticated user.

        Reads all result pages.

        Returns:
            List of repository objects (each has at least "name").
        """
        repos: list[dict[str, Any]] = []
        page = 1
        while True:
            resp = self._request(
                "GET",
                "/user/repos",
                params={"type": "owner", "per_page": REPOS_PER_PAGE, "page": page},
            )
            batch = resp.json()
            repos.extend(batch)
            if len(batch) < REPOS_PER_PAGE:
                return repos
            page += 1

    def create_repository(self, name: str, *, private: bool = True) -> dict[str, Any]:
        """Create a repository for the authenticated user."""
        resp = self._request("POST", "/user/repos", json={"name": name, "private": private})
        return resp.json()

    def get_file_content(self, owner: str, repo: str, path: str) -> dict[str, Any]:
        """
        Fetch the content record of a file.

        Returns:
            Content object with "sha", "content", "encoding" and "size".
            "content" is base64 only when "encoding" is "base64".

        Raises:
            NotFoundError: If the file does not exist.
        """
        resp = self._request("GET", _contents_url(owner, repo, path))
        return resp.json()

    def create_or_update_file(
        self,
        owner: str,
        repo: str,
        path: str,
        message: str,
        content: str,
        sha: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Create a file, or update it when sha is given.

        Args:
            owner: Repository owner.
            repo: Repository name.
            path: File path inside the repository.
            message: Commit message.
            content: Base64-encoded file content.
            sha: Blob sha of the file being replaced. Omit to create.

        Raises:
            ConflictError: If sha does not match the current remote file.
        """
        body: dict[str, Any] = {"message": message, "content": content}
        if sha is not None:
            body["sha"] = sha
        resp = self._request("PUT", _contents_url(owner, repo, path), json=body)
        return resp.json()


def _contents_url(owner: str, repo: str, path: str) -> str:
    return f"/repos/{quote(owner)}/{quote(repo)}/contents/{quote(path)}"
