# ghbackup Default Configuration
# Default configuration as Python dict and YAML generator

import copy
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "github": {
        "owner": "",
        "token_env": "GITHUB_TOKEN",
        "api_url": "https://api.github.com",
        "timeout": None,
    },
    "repository": {
        "name": "file-backup",
        "private": True,
        "commit_prefix": "Backup:",
    },
    "files": {
        "base_dir": "~",
        "paths": [],
    },
    "schedule": {
        "interval": 3600,
        "jitter": 0,
        "max_cycles": None,
    },
    "output": {
        "verbose": False,
        "colored": True,
    },
}


def get_default_config() -> dict[str, Any]:
    """Return a deep copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def generate_default_config() -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# ghbackup - GitHub Backup Configuration
#
# Tracked files are synchronized with the repository every schedule.interval
# seconds. Remote paths are the file paths relative to files.base_dir.
#
# For each file, every pass:
#   1. pull: the GitHub copy overwrites the local file if it is larger or differs
#   2. push: the local file is uploaded if it is new, larger or different
#
# The token is read from github.token, or else from the environment
# variable named by github.token_env.
#
# Only UTF-8 text files are supported.

"""
    return header + yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
