"""RQ worker job: ping reviewers on Telegram about new variants."""
import logging
from flask import current_app, has_app_context
from storefront import create_app
from storefront.services import telegram_service

logger = logging.getLogger(__name__)

_worker_app = None


def _get_app():
    """Return an app instance for worker execution.

    Reuse the current app when already inside an app context (tests/CLI),
    otherwise lazily create the worker app once.
    """
    global _worker_app
    if has_app_context():
        return current_app._get_current_object()
    if _worker_app is None:
        _worker_app = create_app()
    return _worker_app


def send_reviewer_ping(reviewer_ids, text):
    """Send the same message to every reviewer; failures are retried by RQ."""
    app = _get_app()
    with app.app_context():
        failed = []
        for reviewer_id in reviewer_ids:
            try:
                telegram_service.send_message(chat_id=reviewer_id, text=text)
            except Exception:
                logger.exception("Failed to ping reviewer %s", reviewer_id)
                failed.append(reviewer_id)

        if failed:
            raise RuntimeError(f"Reviewer ping failed for {len(failed)} reviewer(s)")
        logger.info("Pinged %d reviewers", len(reviewer_ids))
