import logging
from storefront.extensions import db
from storefront.models.option import Option, OptionValue

logger = logging.getLogger(__name__)


def list_options(product_id):
    return (
        Option.query.filter_by(product_id=product_id)
        .order_by(Option.position, Option.id)
        .all()
    )


def create_option(product_id, option_type):
    """Append a new option to a product.

    Raises:
        ValueError if the label is empty or already used (case-insensitive)
    """
    label = (option_type or "").strip()
    if not label:
        raise ValueError("Option type is required.")

    existing = list_options(product_id)
    if any(o.option_type.lower() == label.lower() for o in existing):
        raise ValueError(f"Option '{label}' already exists.")

    option = Option(
        product_id=product_id,
        option_type=label,
        position=max((o.position or 0 for o in existing), default=0) + 1,
    )
    db.session.add(option)
    db.session.commit()
    logger.info("Created option %r for product %s", label, product_id)
    return option


def get_option(option_id):
    return db.session.get(Option, option_id)


def delete_option(option_id):
    """Delete an option and all of its value rows. Returns False if missing."""
    option = db.session.get(Option, option_id)
    if not option:
        return False

    product_id = option.product_id
    OptionValue.query.filter_by(option_id=option_id).delete(synchronize_session=False)
    db.session.delete(option)
    db.session.commit()
    logger.info("Deleted option %s from product %s", option_id, product_id)
    return True
