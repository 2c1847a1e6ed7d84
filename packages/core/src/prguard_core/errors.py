"""Exception hierarchy shared by the guard, the linter and the CLI.

The CLI maps every PrguardError to a non-zero exit status. GithubException from
PyGithub is left alone and handled separately as a transport failure.
"""

from __future__ import annotations


class PrguardError(Exception):
    """Base class for all errors raised by prguard_core."""


class PolicyViolationError(PrguardError):
    """A pull request breaks a repository policy. The message carries the remediation."""


class WrongBaseBranchError(PolicyViolationError):
    def __init__(self, base: str, desired_branch: str):
        self.base = base
        self.desired_branch = desired_branch
        super().__init__("This PR is against the wrong branch.")


class GitCommandError(PrguardError):
    """A git invocation failed. stdout/stderr are kept for diagnostics."""

    def __init__(self, command: list[str], returncode: int | None, stdout: str = "", stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"`{' '.join(command)}` failed with exit status {returncode}")


class ImpactFileError(PrguardError):
    """The change-impact artifact is missing or malformed."""
