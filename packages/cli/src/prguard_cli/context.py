"""Pull request context from the GitHub Actions environment."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import click

from prguard_cli.auth import resolve_github_token
from prguard_core.gh.pull_request import GithubForge

logger = logging.getLogger(__name__)


def load_event_payload() -> dict:
    """Return the webhook payload that triggered the workflow, or {} outside Actions."""
    event_path = os.environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        return {}
    try:
        return json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read event payload %s: %s", event_path, e)
        return {}


def resolve_pull_number(explicit: int | None = None) -> int | None:
    """Explicit --pr wins; otherwise use pull_request.number from the event payload.

    Returns None for merge-queue and push events, which carry no pull request.
    """
    if explicit is not None:
        return explicit
    number = (load_event_payload().get("pull_request") or {}).get("number")
    return int(number) if number else None


def resolve_repo(explicit: str | None = None) -> str | None:
    return explicit or os.environ.get("GITHUB_REPOSITORY") or None


def build_forge(config: dict, repo: str | None):
    """Instantiate a GithubForge for the repository, or raise click.UsageError."""
    repo_name = resolve_repo(repo)
    if not repo_name:
        raise click.UsageError("No repository given. Pass --repo owner/name or set GITHUB_REPOSITORY.")

    token = config.get("github_token") or resolve_github_token()
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    return GithubForge.from_token(repo_name, token)
