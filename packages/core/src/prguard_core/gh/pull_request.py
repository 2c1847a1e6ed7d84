"""PyGithub-backed Forge implementation."""

from __future__ import annotations

import logging

from github import Github

from prguard_core.gh.base import Forge, PullRequestRef, ReviewRecord

logger = logging.getLogger(__name__)

_MINIMIZE_COMMENT = """
mutation($node_id: ID!, $classifier: ReportedContentClassifiers!) {
  minimizeComment(input: {classifier: $classifier, subjectId: $node_id}) {
    clientMutationId
  }
}
"""


def get_client(token: str) -> Github:
    return Github(token)


def get_repo(repo_name: str, token: str):
    return get_client(token).get_repo(repo_name)


def _review_from_data(data: dict) -> ReviewRecord:
    user = data.get("user") or {}
    return ReviewRecord(
        id=data["id"],
        node_id=data.get("node_id", ""),
        author=user.get("login"),
        state=data.get("state", ""),
        body=data.get("body") or "",
        html_url=data.get("html_url", ""),
    )


def _review_from_object(review) -> ReviewRecord:
    # edit() refreshes attributes but not raw_data.
    return ReviewRecord(
        id=review.id,
        node_id=review.node_id,
        author=review.user.login if review.user else None,
        state=review.state,
        body=review.body or "",
        html_url=review.html_url,
    )


class GithubForge(Forge):
    """Forge backed by the GitHub REST and GraphQL APIs.

    minimizeComment has no PyGithub wrapper and goes through the client's
    GraphQL requester. Failures surface as GithubException.
    """

    def __init__(self, gh: Github, repo_name: str):
        self._gh = gh
        self._repo = gh.get_repo(repo_name)

    @classmethod
    def from_token(cls, repo_name: str, token: str) -> GithubForge:
        return cls(get_client(token), repo_name)

    def get_pull(self, pull_number: int) -> PullRequestRef:
        pr = self._repo.get_pull(pull_number)
        return PullRequestRef(number=pr.number, base_ref=pr.base.ref, head_ref=pr.head.ref)

    def list_reviews(self, pull_number: int) -> list[ReviewRecord]:
        pr = self._repo.get_pull(pull_number)
        # PaginatedList walks every page on iteration.
        return [_review_from_data(review.raw_data) for review in pr.get_reviews()]

    def create_review(self, pull_number: int, body: str, event: str) -> ReviewRecord:
        pr = self._repo.get_pull(pull_number)
        review = pr.create_review(body=body, event=event)
        logger.debug("Created review %s on #%d", review.id, pull_number)
        return _review_from_data(review.raw_data)

    def update_review(self, pull_number: int, review_id: int, body: str) -> ReviewRecord:
        review = self._repo.get_pull(pull_number).get_review(review_id)
        review.edit(body)
        logger.debug("Updated review %s on #%d", review_id, pull_number)
        return _review_from_object(review)

    def dismiss_review(self, pull_number: int, review_id: int, message: str) -> None:
        self._repo.get_pull(pull_number).get_review(review_id).dismiss(message)
        logger.debug("Dismissed review %s on #%d", review_id, pull_number)

    def minimize_comment(self, node_id: str, classifier: str = "OUTDATED") -> None:
        self._gh.requester.graphql_query(_MINIMIZE_COMMENT, {"node_id": node_id, "classifier": classifier})
        logger.debug("Minimized %s as %s", node_id, classifier)
