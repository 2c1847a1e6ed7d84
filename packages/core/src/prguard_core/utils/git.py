"""Thin subprocess wrapper over the git CLI.

Arguments are passed as a list and never through a shell; commit ranges come
from CI inputs.
"""

from __future__ import annotations

import logging
import subprocess

from prguard_core.errors import GitCommandError

logger = logging.getLogger(__name__)

_GIT_TIMEOUT = 60


def run_git(path: str, *args: str) -> str:
    command = ["git", "-C", path, *args]
    logger.debug("Running %s", " ".join(command))
    try:
        # Commit messages may use a legacy encoding; undecodable bytes become U+FFFD.
        result = subprocess.run(
            command, capture_output=True, encoding="utf-8", errors="replace", timeout=_GIT_TIMEOUT
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        raise GitCommandError(command, None, stderr=str(e)) from e
    if result.returncode != 0:
        raise GitCommandError(command, result.returncode, result.stdout, result.stderr)
    return result.stdout


def log_commit_ids(path: str, target_sha: str, merged_sha: str) -> list[str]:
    """Commits reachable from merged_sha but not from target_sha, newest first."""
    stdout = run_git(path, "log", "--pretty=format:%H", "--end-of-options", f"{target_sha}..{merged_sha}")
    return [line.strip() for line in stdout.splitlines() if line.strip()]


def read_commit_message(path: str, commit_id: str) -> str:
    """Return the raw commit message, exactly as stored in the commit object."""
    raw = run_git(path, "cat-file", "commit", commit_id)
    # Headers end at the first blank line; everything after is the message.
    _, sep, message = raw.partition("\n\n")
    return message if sep else ""
