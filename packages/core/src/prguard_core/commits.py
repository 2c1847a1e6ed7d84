"""Commit subject linting for a merge range."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from prguard_core.utils.git import log_commit_ids, read_commit_message

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubjectRule:
    name: str
    reason: str
    post_reason: str
    violated: Callable[[str], bool]


RULES: tuple[SubjectRule, ...] = (
    SubjectRule(
        name="missing-colon",
        reason="does not contain a colon",
        post_reason="There are likely other issues as well.",
        violated=lambda subject: ":" not in subject,
    ),
    SubjectRule(
        name="trailing-period",
        reason="ends in a period",
        post_reason="There may be other issues as well.",
        violated=lambda subject: subject.endswith("."),
    ),
)


@dataclass(frozen=True)
class LintViolation:
    commit_id: str
    rule: str
    reason: str
    post_reason: str

    def describe(self) -> str:
        return (
            f"Commit {self.commit_id}'s message's subject was detected as not meeting "
            f"our guidelines because {self.reason}. {self.post_reason}"
        )


@dataclass
class LintReport:
    commit_ids: list[str] = field(default_factory=list)
    violations: list[LintViolation] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.violations

    def violations_for(self, commit_id: str) -> list[LintViolation]:
        return [v for v in self.violations if v.commit_id == commit_id]


def subject_line(message: str) -> str:
    """Everything before the first newline, or the whole message if it has none."""
    return message.split("\n", 1)[0]


def lint_subject(commit_id: str, subject: str, rules: tuple[SubjectRule, ...] = RULES) -> list[LintViolation]:
    return [
        LintViolation(commit_id=commit_id, rule=rule.name, reason=rule.reason, post_reason=rule.post_reason)
        for rule in rules
        if rule.violated(subject)
    ]


def check_commit_messages(merged_sha: str, target_sha: str, path: str = ".") -> LintReport:
    """Lint every commit in target_sha..merged_sha.

    Raises GitCommandError if history cannot be read; subject violations are
    collected into the report and logged, never raised.
    """
    logger.debug("Linting %s..%s in %s", target_sha, merged_sha, path)
    report = LintReport(commit_ids=log_commit_ids(path, target_sha, merged_sha))

    for commit_id in report.commit_ids:
        subject = subject_line(read_commit_message(path, commit_id))
        violations = lint_subject(commit_id, subject)
        for violation in violations:
            logger.error(violation.describe())
        if not violations:
            logger.info("Commit %s's message's subject seems OK!", commit_id)
        report.violations.extend(violations)

    return report
