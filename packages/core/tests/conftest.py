"""Shared fixtures: an in-memory Forge that records every call."""

from __future__ import annotations

import dataclasses
import threading

import pytest

from prguard_core.gh.base import Forge, PullRequestRef, ReviewRecord
from prguard_core.reviews import EVENT_TO_STATE, review_key_marker

BOT = "github-actions[bot]"

MUTATIONS = {"create_review", "update_review", "dismiss_review", "minimize_comment"}


class FakeForge(Forge):
    def __init__(self, pull: PullRequestRef | None = None):
        self.pull = pull or PullRequestRef(number=1, base_ref="master", head_ref="feature")
        self.reviews: list[ReviewRecord] = []
        self.calls: list[tuple] = []
        self._next_id = 100
        self._lock = threading.Lock()

    def add_review(self, author=BOT, state="CHANGES_REQUESTED", body="old", key=None) -> ReviewRecord:
        if key is not None:
            body = f"{body}\n\n{review_key_marker(key)}"
        with self._lock:
            self._next_id += 1
            review = ReviewRecord(
                id=self._next_id,
                node_id=f"PRR_{self._next_id}",
                author=author,
                state=state,
                body=body,
                html_url=f"https://github.com/o/r/pull/1#pullrequestreview-{self._next_id}",
            )
            self.reviews.append(review)
        return review

    @property
    def mutations(self) -> list[tuple]:
        return [c for c in self.calls if c[0] in MUTATIONS]

    def _replace(self, review_id: int, **changes) -> ReviewRecord:
        with self._lock:
            for i, review in enumerate(self.reviews):
                if review.id == review_id:
                    self.reviews[i] = dataclasses.replace(review, **changes)
                    return self.reviews[i]
        raise KeyError(review_id)

    def get_pull(self, pull_number):
        self.calls.append(("get_pull", pull_number))
        return self.pull

    def list_reviews(self, pull_number):
        self.calls.append(("list_reviews", pull_number))
        return list(self.reviews)

    def create_review(self, pull_number, body, event):
        self.calls.append(("create_review", pull_number, event))
        return self.add_review(state=EVENT_TO_STATE[event], body=body)

    def update_review(self, pull_number, review_id, body):
        self.calls.append(("update_review", pull_number, review_id))
        return self._replace(review_id, body=body)

    def dismiss_review(self, pull_number, review_id, message):
        self.calls.append(("dismiss_review", pull_number, review_id, message))
        self._replace(review_id, state="DISMISSED")

    def minimize_comment(self, node_id, classifier="OUTDATED"):
        self.calls.append(("minimize_comment", node_id, classifier))


@pytest.fixture
def forge():
    return FakeForge()
