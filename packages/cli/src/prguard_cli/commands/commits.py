"""lint-commits command: check commit subjects in a merge range."""

from __future__ import annotations

import logging

import click

from prguard_cli.errors import reported_failures
from prguard_core.commits import check_commit_messages

logger = logging.getLogger(__name__)


@click.command("lint-commits")
@click.option("--merged-sha", required=True, help="Head of the range: the PR's test-merge commit.")
@click.option("--target-sha", required=True, help="Base of the range: the target branch commit.")
@click.option(
    "--path",
    default=".",
    show_default=True,
    type=click.Path(exists=True, file_okay=False),
    help="Path to the git checkout.",
)
@click.pass_context
def commits_cmd(ctx, merged_sha: str, target_sha: str, path: str):
    """Lint the subject line of every commit in TARGET_SHA..MERGED_SHA.

    \b
    A subject must:
      - contain a colon (`pkgname: description`)
      - not end with a period
    """
    config = ctx.obj["config"]

    with reported_failures():
        report = check_commit_messages(merged_sha, target_sha, path)

    if not report.passed:
        logger.error(
            "Please review the guidelines at %s, as well as the applicable area-specific guidelines linked there.",
            config["commit_conventions_url"],
        )
        raise click.ClickException("Commit-linting failed, please see detailed errors above.")

    logger.info("All %d commit subject(s) passed.", len(report.commit_ids))
