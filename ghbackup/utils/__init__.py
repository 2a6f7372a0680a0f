# ghbackup Utilities Module
# Helper functions for path handling and file I/O

from ghbackup.utils.paths import (
    atomic_write,
    ensure_dir,
    expand_path,
    read_text,
    remote_key,
)

__all__ = [
    "expand_path",
    "ensure_dir",
    "remote_key",
    "read_text",
    "atomic_write",
]
