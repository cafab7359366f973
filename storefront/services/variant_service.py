import logging
from decimal import Decimal, InvalidOperation
from storefront.extensions import db
from storefront.models.variant import ProductVariant

logger = logging.getLogger(__name__)

PRICE_FIELDS = ("price", "ocean_shipping_cost", "air_shipping_cost", "drop_custom_price")
UPDATABLE_FIELDS = ("title", "drop_custom_price", "drop_description", "drop_public", "images")


def get_variant(variant_id):
    return db.session.get(ProductVariant, variant_id)


def create_variant(product_id, data):
    """Create one variant by hand, awaiting approval like engine-made ones.

    Args:
        data: dict with title, price, ocean_shipping_cost, air_shipping_cost,
              drop_custom_price, drop_description, drop_public, images

    Raises:
        ValueError with a message safe to show to the caller
    """
    fields = _clean_fields(
        data, ("title", "drop_description", "drop_public", "images") + PRICE_FIELDS
    )
    variant = ProductVariant(
        product_id=product_id,
        title=fields.get("title"),
        price=fields.get("price"),
        ocean_shipping_cost=fields.get("ocean_shipping_cost"),
        air_shipping_cost=fields.get("air_shipping_cost"),
        drop_custom_price=fields.get("drop_custom_price"),
        drop_description=fields.get("drop_description"),
        drop_public=fields.get("drop_public", False),
        drop_approved=False,
        is_default=False,
        images=fields.get("images") or [],
    )
    _check_custom_price(variant, variant.drop_custom_price)

    db.session.add(variant)
    db.session.commit()
    logger.info("Created variant %s (%r) for product %s", variant.id, variant.title, product_id)
    return variant


def update_variant(variant, data):
    """Apply the fields present in data. Returns the names of changed fields."""
    fields = _clean_fields(data, UPDATABLE_FIELDS)
    if "drop_custom_price" in fields:
        _check_custom_price(variant, fields["drop_custom_price"])

    changed = []
    for name, value in fields.items():
        if getattr(variant, name) != value:
            setattr(variant, name, value)
            changed.append(name)
    db.session.commit()
    return changed


def delete_variant(variant_id):
    """Delete a variant and its option value rows. Returns False if missing."""
    variant = db.session.get(ProductVariant, variant_id)
    if not variant:
        return False

    product_id = variant.product_id
    db.session.delete(variant)
    db.session.commit()
    logger.info("Deleted variant %s from product %s", variant_id, product_id)
    return True


def _check_custom_price(variant, custom_price):
    if custom_price is None:
        return
    base = (variant.ocean_shipping_cost or Decimal("0")) + (variant.price or Decimal("0"))
    if custom_price <= base:
        raise ValueError(f"Your price must be higher than the base price (${base:.2f})")


def _clean_fields(data, allowed):
    if not isinstance(data, dict):
        raise ValueError("Variant must be a JSON object.")

    fields = {}
    for name in allowed:
        if name not in data:
            continue
        value = data[name]
        if name in PRICE_FIELDS:
            fields[name] = _parse_price(value, name)
        elif name == "drop_public":
            if not isinstance(value, bool):
                raise ValueError("drop_public must be true or false.")
            fields[name] = value
        elif name == "images":
            fields[name] = _parse_images(value)
        elif value is None:
            fields[name] = None
        elif isinstance(value, str):
            fields[name] = value.strip() or None
        else:
            raise ValueError(f"{name} must be a string.")
    return fields


def _parse_price(value, field):
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"{field} must be a number.")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"{field} must be a number.")
    if not amount.is_finite():
        raise ValueError(f"{field} must be a number.")
    if amount < 0:
        raise ValueError(f"{field} must not be negative.")
    return amount.quantize(Decimal("0.01"))


def _parse_images(value):
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("images must be a list of {src} objects.")
    images = []
    for image in value:
        src = image.get("src") if isinstance(image, dict) else None
        if not isinstance(src, str) or not src.strip():
            raise ValueError("images must be a list of {src} objects.")
        images.append({"src": src.strip()})
    return images
