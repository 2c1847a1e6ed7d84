"""check-target-branch command: block large-impact PRs aimed at a primary branch."""

from __future__ import annotations

import logging

import click

from prguard_cli.context import build_forge, resolve_pull_number
from prguard_cli.errors import reported_failures
from prguard_core.impact import load_impact
from prguard_core.target_branch import TargetBranchPolicy, check_target_branch

logger = logging.getLogger(__name__)


@click.command("check-target-branch")
@click.option("--repo", default=None, help="GitHub repository in owner/name format. Defaults to $GITHUB_REPOSITORY.")
@click.option("--pr", "pr_number", type=int, default=None, help="Pull request number. Defaults to the event payload.")
@click.option(
    "--changed-paths",
    "changed_paths",
    default=None,
    help="Path to the change-impact JSON produced by the evaluation stage. Overrides config file.",
)
@click.option("--review-key", default=None, help="Review key to tag the posted review with. Overrides config file.")
@click.option("--dry", is_flag=True, envvar="PRGUARD_DRY", help="Log the review instead of posting it.")
@click.pass_context
def target_branch_cmd(
    ctx,
    repo: str | None,
    pr_number: int | None,
    changed_paths: str | None,
    review_key: str | None,
    dry: bool,
):
    """Check that the pull request targets an appropriate base branch.

    PRs that cause more rebuilds than the configured threshold, or that rebuild
    all NixOS tests, must target a staging branch rather than a primary one.
    On violation a "request changes" review is posted and the command exits 1.
    """
    config = ctx.obj["config"]

    pull_number = resolve_pull_number(pr_number)
    if pull_number is None:
        logger.warning(
            "Skipping checkTargetBranch: no pull_request number (is this being run as part of a merge group?)"
        )
        return

    with reported_failures():
        impact = load_impact(changed_paths or config["changed_paths"])
        forge = build_forge(config, repo)
        check_target_branch(
            forge,
            pull_number,
            impact,
            policy=TargetBranchPolicy.from_config(config),
            dry=dry or bool(config.get("dry")),
            review_key=review_key or config.get("target_branch_review_key"),
            bot_login=config["bot_login"],
        )
