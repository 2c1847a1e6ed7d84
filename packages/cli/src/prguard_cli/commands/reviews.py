"""post-review and dismiss-reviews commands: manage the bot's reviews from a workflow step."""

from __future__ import annotations

import logging

import click

from prguard_cli.context import build_forge, resolve_pull_number
from prguard_cli.errors import reported_failures
from prguard_core.reviews import EVENT_TO_STATE, dismiss_reviews, post_review

logger = logging.getLogger(__name__)

_repo_option = click.option(
    "--repo", default=None, help="GitHub repository in owner/name format. Defaults to $GITHUB_REPOSITORY."
)
_pr_option = click.option(
    "--pr", "pr_number", type=int, default=None, help="Pull request number. Defaults to the event payload."
)
_key_option = click.option("--review-key", default=None, help="Correlation key embedded in the review body.")
_dry_option = click.option("--dry", is_flag=True, envvar="PRGUARD_DRY", help="Log instead of calling the API.")


@click.command("post-review")
@_repo_option
@_pr_option
@click.option("--body", default=None, help="Review body (Markdown).")
@click.option(
    "--body-file",
    type=click.File("r", encoding="utf-8"),
    default=None,
    help="Read the review body from a file ('-' for stdin).",
)
@click.option(
    "--event",
    type=click.Choice(sorted(EVENT_TO_STATE)),
    default="REQUEST_CHANGES",
    show_default=True,
    help="Review event to submit.",
)
@_key_option
@_dry_option
@click.pass_context
def post_review_cmd(ctx, repo, pr_number, body, body_file, event, review_key, dry):
    """Post the bot's review, updating the existing one instead of adding another."""
    config = ctx.obj["config"]

    if (body is None) == (body_file is None):
        raise click.UsageError("Pass exactly one of --body or --body-file.")
    if body_file is not None:
        body = body_file.read()

    pull_number = resolve_pull_number(pr_number)
    if pull_number is None:
        logger.warning("postReview called outside of pull_request context")
        return

    with reported_failures():
        forge = build_forge(config, repo)
        post_review(
            forge,
            pull_number,
            body,
            event=event,
            review_key=review_key,
            dry=dry or bool(config.get("dry")),
            bot_login=config["bot_login"],
        )


@click.command("dismiss-reviews")
@_repo_option
@_pr_option
@_key_option
@_dry_option
@click.pass_context
def dismiss_reviews_cmd(ctx, repo, pr_number, review_key, dry):
    """Dismiss the bot's reviews and mark them outdated.

    With --review-key only matching reviews are dismissed, provided every bot
    review carries a key. Otherwise all of the bot's reviews are dismissed.
    """
    config = ctx.obj["config"]

    pull_number = resolve_pull_number(pr_number)
    if pull_number is None:
        logger.warning("dismissReviews called outside of pull_request context")
        return

    with reported_failures():
        forge = build_forge(config, repo)
        dismiss_reviews(
            forge,
            pull_number,
            review_key=review_key,
            dry=dry or bool(config.get("dry")),
            bot_login=config["bot_login"],
            message=config["dismiss_message"],
        )
