"""CLI entry point for prguard.

Commands:
  check-target-branch  request changes when a large PR targets a primary branch
  lint-commits         check commit subjects in a merge range
  post-review          post or update the bot's review
  dismiss-reviews      dismiss the bot's reviews
  classify             show branch classifications
"""

from __future__ import annotations

import importlib.metadata

import click

from prguard_cli.commands.classify import classify_cmd
from prguard_cli.commands.commits import commits_cmd
from prguard_cli.commands.reviews import dismiss_reviews_cmd, post_review_cmd
from prguard_cli.commands.target_branch import target_branch_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("prguard"),
    prog_name="prguard",
)
@click.option(
    "--config",
    "config_path",
    default=".prguard.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRGUARD_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Pull request policy checks for CI pipelines."""
    from prguard_cli.log import configure_logging
    from prguard_core.config import load_config

    configure_logging(verbose)

    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = load_config(config_path)
    except ValueError as e:
        raise click.UsageError(str(e))


main.add_command(target_branch_cmd)
main.add_command(commits_cmd)
main.add_command(post_review_cmd)
main.add_command(dismiss_reviews_cmd)
main.add_command(classify_cmd)
