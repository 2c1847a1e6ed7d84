"""Logging setup for the CLI.

Inside GitHub Actions, log records are written as workflow commands so that
warnings and errors show up as annotations on the run. Locally, rich renders them.
"""

from __future__ import annotations

import logging
import os
import sys

from rich.logging import RichHandler

_WORKFLOW_COMMANDS = {
    logging.DEBUG: "::debug::",
    logging.WARNING: "::warning::",
    logging.ERROR: "::error::",
    logging.CRITICAL: "::error::",
}


class ActionsFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        prefix = _WORKFLOW_COMMANDS.get(record.levelno, "")
        if not prefix:
            return message
        # Workflow commands are single-line; escape per the Actions toolkit.
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        return f"{prefix}{escaped}"


def in_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    if in_github_actions():
        handler: logging.Handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ActionsFormatter("%(message)s"))
    else:
        handler = RichHandler(show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)
    # PyGithub logs every request at DEBUG; keep it out unless asked.
    logging.getLogger("github").setLevel(logging.DEBUG if verbose else logging.WARNING)
