"""Abstract forge interface.

Everything prguard needs from the code-hosting service goes through Forge:
pull request metadata, review listing and the review mutations. The guard and
the review reconciliation logic depend on Forge, not on PyGithub, so tests can
drive them with an in-memory implementation.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

REVIEW_KEY_RE = re.compile(r"<!-- prguard review key: (.*?) -->")


@dataclass(frozen=True)
class PullRequestRef:
    number: int
    base_ref: str
    head_ref: str


@dataclass(frozen=True)
class ReviewRecord:
    """A pull request review as reported by the forge."""

    id: int
    node_id: str
    author: str | None
    state: str  # "COMMENTED" | "CHANGES_REQUESTED" | "APPROVED" | "DISMISSED" | "PENDING"
    body: str = ""
    html_url: str = ""

    @property
    def review_key(self) -> str | None:
        """The key embedded in the body by post_review(), or None."""
        match = REVIEW_KEY_RE.search(self.body or "")
        return match.group(1) if match else None


class Forge(ABC):
    """Narrow view of a forge, scoped to one repository."""

    @abstractmethod
    def get_pull(self, pull_number: int) -> PullRequestRef:
        """Fetch base and head refs for a pull request."""

    @abstractmethod
    def list_reviews(self, pull_number: int) -> list[ReviewRecord]:
        """Return every review on the pull request, oldest first, across all pages."""

    @abstractmethod
    def create_review(self, pull_number: int, body: str, event: str) -> ReviewRecord:
        """Submit a new review with the given event (COMMENT, REQUEST_CHANGES...)."""

    @abstractmethod
    def update_review(self, pull_number: int, review_id: int, body: str) -> ReviewRecord:
        """Replace the body of an existing review."""

    @abstractmethod
    def dismiss_review(self, pull_number: int, review_id: int, message: str) -> None:
        """Dismiss a CHANGES_REQUESTED review."""

    @abstractmethod
    def minimize_comment(self, node_id: str, classifier: str = "OUTDATED") -> None:
        """Hide a comment or review body behind the given classifier."""
