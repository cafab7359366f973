import logging
from storefront.extensions import db
from storefront.models.option import Option, OptionValue
from storefront.models.variant import ProductVariant
from storefront.services.variant_reconciliation import ValuePositionTracker

logger = logging.getLogger(__name__)


def create_option_value(option_id, product_id, value):
    """Add a value to an option without tying it to a variant.

    A value the option already has (case-insensitive) keeps its position.
    """
    value = (value or "").strip()
    if not value:
        raise ValueError("Value is required.")

    tracker = ValuePositionTracker.for_product(product_id)
    row = OptionValue(
        option_id=option_id,
        product_id=product_id,
        value=value,
        position=tracker.position_for(option_id, value),
    )
    db.session.add(row)
    db.session.commit()
    return row


def set_variant_option_values(variant_id, product_id, pairs):
    """Replace a variant's option values.

    Args:
        pairs: list of {"option_id": int, "value": str}

    Raises:
        ValueError if the variant or an option does not belong to the product,
        or an option appears twice
    """
    variant = db.session.get(ProductVariant, variant_id)
    if not variant or variant.product_id != product_id:
        raise ValueError("Variant not found.")

    option_ids = {
        o.id for o in Option.query.filter_by(product_id=product_id).all()
    }
    cleaned = []
    seen = set()
    for pair in pairs:
        value = (pair.get("value") or "").strip()
        if pair.get("option_id") not in option_ids:
            raise ValueError(f"Option {pair.get('option_id')} not found.")
        if pair["option_id"] in seen:
            raise ValueError(f"Option {pair['option_id']} given more than once.")
        seen.add(pair["option_id"])
        if not value:
            raise ValueError("Value is required.")
        cleaned.append((pair["option_id"], value))

    # Seed before the delete so values this variant used keep their rank
    tracker = ValuePositionTracker.for_product(product_id)
    OptionValue.query.filter_by(variant_id=variant_id).delete(
        synchronize_session=False
    )

    rows = [
        OptionValue(
            option_id=option_id,
            variant_id=variant_id,
            product_id=product_id,
            value=value,
            position=tracker.position_for(option_id, value),
        )
        for option_id, value in cleaned
    ]
    db.session.add_all(rows)
    db.session.commit()
    logger.info("Set %d option values on variant %s", len(rows), variant_id)
    return rows


def get_option_value(value_id):
    return db.session.get(OptionValue, value_id)


def delete_option_value(value_id):
    row = db.session.get(OptionValue, value_id)
    if not row:
        return False
    db.session.delete(row)
    db.session.commit()
    return True
