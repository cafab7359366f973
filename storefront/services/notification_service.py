import logging
from flask import current_app
from rq import Retry
from storefront import extensions
from storefront.extensions import db
from storefront.models.notification import Notification

logger = logging.getLogger(__name__)


def variant_approval_message(product_title, variant_title):
    return (
        f'New variant needs approval for "{product_title}": '
        f"{variant_title or 'Untitled variant'}"
    )


def notify_variants_created(product, variant_titles, sender_id=None):
    """Tell reviewers that new variants are waiting for approval.

    Writes one in-app notification per reviewer per variant and enqueues a
    Telegram ping. Never raises: a notification failure must not undo the
    variants that were already created.

    Returns:
        number of notifications written
    """
    reviewer_ids = current_app.config.get("REVIEWER_IDS", [])
    if not reviewer_ids:
        logger.warning("No reviewers configured for variant notification")
        return 0

    try:
        messages = [
            variant_approval_message(product.title, title) for title in variant_titles
        ]
        notifications = [
            Notification(
                recipient_id=reviewer_id,
                sender_id=sender_id,
                type="variant_needs_approval",
                message=message,
                redirect_url=f"/store/product/{product.id}",
                is_read=False,
            )
            for message in messages
            for reviewer_id in reviewer_ids
        ]
        db.session.add_all(notifications)
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception("Failed to create variant notifications for product %s", product.id)
        return 0

    if messages and current_app.config.get("TELEGRAM_BOT_TOKEN"):
        try:
            extensions.task_queue.enqueue(
                "storefront.workers.notifications.send_reviewer_ping",
                list(reviewer_ids),
                "\n".join(messages),
                retry=Retry(max=3, interval=[10, 30, 60]),
            )
        except Exception:
            logger.exception("Failed to enqueue reviewer ping for product %s", product.id)

    return len(notifications)
