"""Translate core and transport failures into click exit statuses."""

from __future__ import annotations

import logging
from contextlib import contextmanager

import click
from github import GithubException

from prguard_core.errors import GitCommandError, PrguardError

logger = logging.getLogger(__name__)


@contextmanager
def reported_failures():
    """Log failures with full detail and re-raise them as click.ClickException (exit 1)."""
    try:
        yield
    except GithubException as e:
        logger.error("GitHub API request failed with status %s: %s", e.status, e.data)
        raise click.ClickException(f"GitHub API request failed (status {e.status}).") from e
    except GitCommandError as e:
        logger.error("%s", e)
        logger.error("Process stdout: %s", e.stdout)
        logger.error("Process stderr: %s", e.stderr)
        raise click.ClickException("`git` failed, please see detailed error above.") from e
    except PrguardError as e:
        raise click.ClickException(str(e)) from e
