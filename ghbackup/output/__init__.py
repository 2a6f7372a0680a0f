# ghbackup Output Module
# Rich console output

from ghbackup.output.console import Console, FileStatus, create_console

__all__ = [
    "Console",
    "FileStatus",
    "create_console",
]
