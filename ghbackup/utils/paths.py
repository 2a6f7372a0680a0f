# ghbackup Path Utilities
# Remote key derivation and safe text file I/O

import os
import tempfile
from pathlib import Path, PurePath


def expand_path(path: str | Path) -> Path:
    """
    Expand ~ and environment variables in path.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded absolute Path object.
    """
    path_str = str(path)
    # Expand ~ first, then environment variables
    path_str = os.path.expanduser(path_str)
    path_str = os.path.expandvars(path_str)
    return Path(path_str).resolve()


def ensure_dir(path: Path) -> Path:
    """
    Ensure directory exists, creating if necessary.

    Args:
        path: Directory path.

    Returns:
        The path that was ensured.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def remote_key(local_path: str | PurePath, base_dir: str | PurePath) -> str:
    """
    Derive the repository path for a local file.

    The key is the path relative to base_dir, always joined with forward
    slashes so the same local file maps to the same remote path on every
    platform.

    Args:
        local_path: Local file path.
        base_dir: Base directory the key is computed against.

    Returns:
        Relative path using "/" separators.
    """
    local = local_path if isinstance(local_path, PurePath) else Path(local_path)
    base = base_dir if isinstance(base_dir, PurePath) else Path(base_dir)
    try:
        return local.relative_to(base).as_posix()
    except ValueError:
        # Not under base_dir: fall back to a "../" style relative path
        return os.path.relpath(local, base).replace("\\", "/")


def read_text(path: Path) -> str:
    """
    Read a file as UTF-8 text without newline translation.

    Undecodable bytes are replaced, so binary files do not round-trip.
    """
    return path.read_bytes().decode("utf-8", errors="replace")


def atomic_write(path: Path, content: str | bytes, *, encoding: str = "utf-8") -> None:
    """
    Atomically write content to file.

    Uses a temporary file and atomic rename. String content is encoded
    as-is, without newline translation.

    Args:
        path: Target file path.
        content: Content to write (str or bytes).
        encoding: Encoding for string content (default utf-8).
    """
    ensure_dir(path.parent)

    if isinstance(content, str):
        content = content.encode(encoding)

    # Create temp file in same directory for atomic rename
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.replace(temp_path, path)
    except Exception:
        # Cleanup on failure
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise
