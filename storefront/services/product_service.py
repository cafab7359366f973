from storefront.extensions import db
from storefront.models.product import Product
from storefront.models.option import Option, OptionValue
from storefront.models.variant import ProductVariant


def get_product_for_store(product_id, store):
    """Return the product if it belongs to the store and is not deleted."""
    if store is None:
        return None
    product = db.session.get(Product, product_id)
    if not product or product.store_id != store.id or product.is_deleted:
        return None
    return product


def get_product_configuration(product_id):
    """Options with their distinct values, and variants with their selections.

    Returns:
        {
          "options": [{"id", "option_type", "position",
                       "values": [{"value", "position"}]}],
          "variants": [{"id", "title", "images", "options": {label: value}}],
        }
    """
    options = (
        Option.query.filter_by(product_id=product_id)
        .order_by(Option.position, Option.id)
        .all()
    )
    rows = (
        OptionValue.query.filter_by(product_id=product_id)
        .order_by(OptionValue.position, OptionValue.id)
        .all()
    )
    variants = (
        ProductVariant.query.filter_by(product_id=product_id)
        .order_by(ProductVariant.id)
        .all()
    )

    labels = {o.id: o.option_type for o in options}
    distinct = {o.id: {} for o in options}
    selections = {}
    for row in rows:
        # first spelling of a value wins; rows are ordered by position
        distinct.setdefault(row.option_id, {}).setdefault(
            row.value.lower(), {"value": row.value, "position": row.position}
        )
        if row.variant_id is not None and row.option_id in labels:
            selections.setdefault(row.variant_id, {})[labels[row.option_id]] = row.value

    return {
        "options": [
            {
                "id": o.id,
                "option_type": o.option_type,
                "position": o.position,
                "values": list(distinct[o.id].values()),
            }
            for o in options
        ],
        "variants": [
            {
                "id": v.id,
                "title": v.title,
                "images": v.images or [],
                "options": selections.get(v.id, {}),
            }
            for v in variants
        ],
    }
