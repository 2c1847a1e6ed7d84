"""Guard against large-impact pull requests that target a primary branch."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from prguard_core.branches import BranchClassification, classify
from prguard_core.errors import WrongBaseBranchError
from prguard_core.gh.base import Forge, PullRequestRef
from prguard_core.impact import ChangeImpactSummary
from prguard_core.reviews import DEFAULT_BOT_LOGIN, post_review

logger = logging.getLogger(__name__)

_CHANGE_BASE_DOCS = (
    "https://docs.github.com/en/pull-requests/collaborating-with-pull-requests/"
    "proposing-changes-to-your-work-with-pull-requests/changing-the-base-branch-of-a-pull-request"
)


@dataclass(frozen=True)
class TargetBranchPolicy:
    rebuild_threshold: int = 1000
    tests_label: str = "10.rebuild-nixos-tests"
    staging_branch: str = "staging"
    tests_staging_branch: str = "staging-nixos"
    branch_conventions_url: str = "https://github.com/NixOS/nixpkgs/blob/master/CONTRIBUTING.md#branch-conventions"

    @classmethod
    def from_config(cls, config: dict) -> TargetBranchPolicy:
        defaults = cls()
        return cls(
            rebuild_threshold=int(config.get("rebuild_threshold", defaults.rebuild_threshold)),
            tests_label=config.get("tests_label", defaults.tests_label),
            staging_branch=config.get("staging_branch", defaults.staging_branch),
            tests_staging_branch=config.get("tests_staging_branch", defaults.tests_staging_branch),
            branch_conventions_url=config.get("branch_conventions_url", defaults.branch_conventions_url),
        )


@dataclass(frozen=True)
class TargetBranchVerdict:
    base: str
    head: str
    desired_branch: str
    reason: str  # human-readable cause, e.g. "causes more than 1000 rebuilds"

    def review_body(self, branch_conventions_url: str) -> str:
        return (
            f"The PR's base branch is set to `{self.base}`, but this PR {self.reason}. "
            f"Please [change the base branch]({_CHANGE_BASE_DOCS}) to "
            f"[the right base branch for your changes]({branch_conventions_url}) "
            f"(probably `{self.desired_branch}`)."
        )


def _staging_for(base: BranchClassification, unversioned: str) -> str:
    if base.version is not None:
        return f"staging-{base.version}"
    return unversioned


def evaluate_target_branch(
    base: str, head: str, impact: ChangeImpactSummary, policy: TargetBranchPolicy
) -> TargetBranchVerdict | None:
    """Return a verdict if the PR should move to a staging branch, else None."""
    base_class = classify(base)
    head_class = classify(head)

    if head_class.is_development:
        return None

    if not base_class.is_primary:
        return None

    if impact.max_rebuild_count >= policy.rebuild_threshold:
        return TargetBranchVerdict(
            base=base,
            head=head,
            desired_branch=_staging_for(base_class, policy.staging_branch),
            reason=f"causes more than {policy.rebuild_threshold} rebuilds",
        )

    if impact.has_label(policy.tests_label):
        return TargetBranchVerdict(
            base=base,
            head=head,
            desired_branch=_staging_for(base_class, policy.tests_staging_branch),
            reason="rebuilds all NixOS tests",
        )

    return None


def check_target_branch(
    forge: Forge,
    pull_number: int,
    impact: ChangeImpactSummary,
    policy: TargetBranchPolicy | None = None,
    dry: bool = False,
    review_key: str | None = None,
    bot_login: str = DEFAULT_BOT_LOGIN,
    pr: PullRequestRef | None = None,
) -> None:
    """Request changes on the PR and raise WrongBaseBranchError if it targets the wrong branch.

    Pass ``pr`` when the refs are already known (e.g. from the event payload) to
    skip fetching them. Clearing a previous review is left to the dismiss stage
    that runs before this one.
    """
    policy = policy or TargetBranchPolicy()
    if pr is None:
        pr = forge.get_pull(pull_number)

    if classify(pr.head_ref).is_development:
        logger.info("Skipping checkTargetBranch: PR is from a development branch (%s)", pr.head_ref)
        return

    verdict = evaluate_target_branch(pr.base_ref, pr.head_ref, impact, policy)
    if verdict is None:
        logger.info("checkTargetBranch: this PR was against an appropriate branch.")
        return

    body = verdict.review_body(policy.branch_conventions_url)
    post_review(forge, pull_number, body, event="REQUEST_CHANGES", review_key=review_key, dry=dry, bot_login=bot_login)
    raise WrongBaseBranchError(verdict.base, verdict.desired_branch)
