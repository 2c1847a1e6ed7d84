"""Post, update and dismiss the bot's own pull request reviews.

Repeated pipeline runs must converge on a single review per complaint rather than
piling up duplicates. Each review body can carry a key marker
(``<!-- prguard review key: KEY -->``); post_review() uses it to find the review to
update and dismiss_reviews() uses it to limit what gets dismissed.

Reviews without a marker predate key discipline. They are treated as matching
every key, so a keyed dismissal falls back to dismissing everything the bot wrote.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from prguard_core.gh.base import Forge, ReviewRecord

logger = logging.getLogger(__name__)

DEFAULT_BOT_LOGIN = "github-actions[bot]"
DEFAULT_DISMISS_MESSAGE = "Review dismissed automatically"

EVENT_TO_STATE = {
    "COMMENT": "COMMENTED",
    "REQUEST_CHANGES": "CHANGES_REQUESTED",
}

_MAX_WORKERS = 8


def review_key_marker(review_key: str) -> str:
    return f"<!-- prguard review key: {review_key} -->"


def _bot_reviews(forge: Forge, pull_number: int, bot_login: str) -> list[ReviewRecord]:
    return [r for r in forge.list_reviews(pull_number) if r.author == bot_login]


def find_pending_review(
    reviews: list[ReviewRecord], state: str, review_key: str | None = None
) -> ReviewRecord | None:
    """Pick the review post_review() should update, if any.

    With a key, an exact marker match wins over an unmarked review; reviews marked
    with a different key are never touched.
    """
    candidates = [r for r in reviews if r.state == state]
    if review_key is None:
        return candidates[0] if candidates else None
    for review in candidates:
        if review.review_key == review_key:
            return review
    for review in candidates:
        if review.review_key is None:
            return review
    return None


def post_review(
    forge: Forge,
    pull_number: int,
    body: str,
    event: str = "REQUEST_CHANGES",
    review_key: str | None = None,
    dry: bool = False,
    bot_login: str = DEFAULT_BOT_LOGIN,
) -> ReviewRecord | None:
    """Create the bot's review, or update the one already standing in the same state.

    Returns the created or updated review, or None in dry mode.
    """
    if event not in EVENT_TO_STATE:
        raise ValueError(f"Unsupported review event: {event!r}. Choose one of {sorted(EVENT_TO_STATE)}.")

    pending = find_pending_review(_bot_reviews(forge, pull_number, bot_login), EVENT_TO_STATE[event], review_key)

    if review_key:
        body = f"{body}\n\n{review_key_marker(review_key)}"

    if dry:
        if pending:
            logger.info("pending review found: %s", pending.html_url or pending.id)
        else:
            logger.info("no pending review found")
        logger.info(body)
        return None

    if pending:
        logger.info("Updating review %s on #%d", pending.id, pull_number)
        return forge.update_review(pull_number, pending.id, body)

    logger.info("Posting %s review on #%d", event, pull_number)
    return forge.create_review(pull_number, body, event)


def select_reviews_to_dismiss(reviews: list[ReviewRecord], review_key: str | None = None) -> list[ReviewRecord]:
    """Narrow to the keyed reviews only when every review carries a key.

    If the key matches none of the reviews, nothing is selected.
    """
    if review_key and all(r.review_key is not None for r in reviews):
        return [r for r in reviews if r.review_key == review_key]
    return list(reviews)


def _retire(forge: Forge, pull_number: int, review: ReviewRecord, message: str) -> None:
    if review.state == "CHANGES_REQUESTED":
        forge.dismiss_review(pull_number, review.id, message)
    forge.minimize_comment(review.node_id, classifier="OUTDATED")


def dismiss_reviews(
    forge: Forge,
    pull_number: int,
    review_key: str | None = None,
    dry: bool = False,
    bot_login: str = DEFAULT_BOT_LOGIN,
    message: str = DEFAULT_DISMISS_MESSAGE,
) -> list[ReviewRecord]:
    """Dismiss and minimize the bot's reviews. Returns the reviews that were selected."""
    reviews = _bot_reviews(forge, pull_number, bot_login)
    selected = select_reviews_to_dismiss(reviews, review_key)

    if reviews and not selected:
        logger.info("No review carries key %r; nothing to dismiss.", review_key)
        return selected

    if dry:
        for review in selected:
            action = "dismiss and minimize" if review.state == "CHANGES_REQUESTED" else "minimize"
            logger.info("Would %s review %s (%s)", action, review.id, review.html_url or review.state)
        return selected

    if not selected:
        return selected

    with ThreadPoolExecutor(max_workers=min(_MAX_WORKERS, len(selected))) as pool:
        futures = [pool.submit(_retire, forge, pull_number, review, message) for review in selected]
        # result() re-raises the first failure from the worker thread.
        for future in futures:
            future.result()

    logger.info("Dismissed %d review(s) on #%d", len(selected), pull_number)
    return selected
