"""JSON API for managing product options, values and variants."""
import logging
from flask import current_app, g, request
from storefront.blueprints.api import api_bp
from storefront.blueprints.api.auth import require_store
from storefront.extensions import db
from storefront.models.audit_log import AuditLog
from storefront.services import (
    change_set as change_set_service,
    notification_service,
    option_service,
    option_value_service,
    product_service,
    variant_image_service,
    variant_service,
)
from storefront.services.variant_reconciliation import reconcile_variants

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Product not found or access denied"


def _error(message, status):
    return {"success": False, "error": message}, status


def _json_body():
    body = request.get_json(silent=True)
    if body is None:
        raise ValueError("Request body must be JSON.")
    return body


def _owned_product(product_id):
    return product_service.get_product_for_store(product_id, g.store)


def _audit(action, product_id, payload=None):
    db.session.add(
        AuditLog(
            actor_id=g.store.owner_id,
            action=action,
            product_id=product_id,
            payload=payload,
        )
    )
    db.session.commit()


@api_bp.route("/products/<int:product_id>/configuration", methods=["GET"])
@require_store
def product_configuration(product_id):
    product = _owned_product(product_id)
    if not product:
        return _error(PRODUCT_NOT_FOUND, 404)

    config = product_service.get_product_configuration(product.id)
    return {"success": True, "product": {"id": product.id, "title": product.title, **config}}


@api_bp.route("/products/<int:product_id>/variants/apply", methods=["POST"])
@require_store
def apply_variants(product_id):
    """Create the variants described by a change-set.

    Images are generated first for variants with generate_image set, so the
    engine only receives their URLs.
    """
    product = _owned_product(product_id)
    if not product:
        return _error(PRODUCT_NOT_FOUND, 404)

    try:
        change_set = change_set_service.parse_change_set(_json_body())
    except ValueError as e:
        return _error(str(e), 400)

    variant_images = variant_image_service.generate_variant_images(
        product, change_set_service.image_prompts(change_set)
    )

    result = reconcile_variants(product.id, change_set, variant_images)
    if not result["success"]:
        current_app.logger.error(
            "Variant reconciliation failed for product %s: %s",
            product.id, result["error"],
        )
        return result, 500

    created = result["created_variants"]
    _audit(
        "CREATE_VARIANTS",
        product.id,
        {
            "variant_ids": [v["id"] for v in created],
            "options": [o["option_type"] for o in change_set["options"]],
        },
    )
    notification_service.notify_variants_created(
        product, [v["title"] for v in created], sender_id=g.store.owner_id
    )
    return result, 201


@api_bp.route("/products/<int:product_id>/options", methods=["POST"])
@require_store
def create_option(product_id):
    product = _owned_product(product_id)
    if not product:
        return _error(PRODUCT_NOT_FOUND, 404)

    try:
        body = _json_body()
        option = option_service.create_option(
            product.id, body.get("option_type", body.get("label"))
        )
    except ValueError as e:
        status = 409 if "already exists" in str(e) else 400
        return _error(str(e), status)

    _audit("CREATE_OPTION", product.id, {"option_id": option.id, "option_type": option.option_type})
    return {
        "success": True,
        "option": {
            "id": option.id,
            "option_type": option.option_type,
            "position": option.position,
        },
    }, 201


@api_bp.route("/options/<int:option_id>", methods=["DELETE"])
@require_store
def delete_option(option_id):
    option = option_service.get_option(option_id)
    if not option or not _owned_product(option.product_id):
        return _error("Option not found", 404)

    product_id = option.product_id
    option_service.delete_option(option_id)
    _audit("DELETE_OPTION", product_id, {"option_id": option_id})
    return {"success": True}


@api_bp.route("/options/<int:option_id>/values", methods=["POST"])
@require_store
def create_option_value(option_id):
    option = option_service.get_option(option_id)
    if not option or not _owned_product(option.product_id):
        return _error("Option not found", 404)

    try:
        body = _json_body()
        row = option_value_service.create_option_value(
            option.id, option.product_id, body.get("value")
        )
    except ValueError as e:
        return _error(str(e), 400)

    _audit("CREATE_OPTION_VALUE", option.product_id, {"option_id": option.id, "value": row.value})
    return {
        "success": True,
        "option_value": {
            "id": row.id,
            "option_id": row.option_id,
            "value": row.value,
            "position": row.position,
        },
    }, 201


@api_bp.route("/variants/<int:variant_id>/option-values", methods=["PUT"])
@require_store
def set_variant_option_values(variant_id):
    try:
        body = _json_body()
        product_id = int(body.get("product_id"))
        pairs = [
            {"option_id": int(p["option_id"]), "value": p.get("value")}
            for p in body.get("option_values", [])
        ]
    except (TypeError, KeyError, ValueError, AttributeError):
        return _error("Expected product_id and option_values: [{option_id, value}].", 400)

    if not _owned_product(product_id):
        return _error(PRODUCT_NOT_FOUND, 404)

    try:
        rows = option_value_service.set_variant_option_values(variant_id, product_id, pairs)
    except ValueError as e:
        return _error(str(e), 400)

    _audit("SET_VARIANT_OPTION_VALUES", product_id, {"variant_id": variant_id, "count": len(rows)})
    return {
        "success": True,
        "option_values": [
            {"id": r.id, "option_id": r.option_id, "value": r.value, "position": r.position}
            for r in rows
        ],
    }


@api_bp.route("/option-values/<int:value_id>", methods=["DELETE"])
@require_store
def delete_option_value(value_id):
    row = option_value_service.get_option_value(value_id)
    if not row or not _owned_product(row.product_id):
        return _error("Option value not found", 404)

    product_id = row.product_id
    option_value_service.delete_option_value(value_id)
    _audit("DELETE_OPTION_VALUE", product_id, {"option_value_id": value_id})
    return {"success": True}


def _variant_dict(variant):
    def money(amount):
        return None if amount is None else str(amount)

    return {
        "id": variant.id,
        "product_id": variant.product_id,
        "title": variant.title,
        "images": variant.images or [],
        "price": money(variant.price),
        "ocean_shipping_cost": money(variant.ocean_shipping_cost),
        "air_shipping_cost": money(variant.air_shipping_cost),
        "drop_custom_price": money(variant.drop_custom_price),
        "drop_description": variant.drop_description,
        "drop_public": variant.drop_public,
        "drop_approved": variant.drop_approved,
    }


def _owned_variant(variant_id):
    variant = variant_service.get_variant(variant_id)
    if not variant or not _owned_product(variant.product_id):
        return None
    return variant


@api_bp.route("/products/<int:product_id>/variants", methods=["POST"])
@require_store
def create_variant(product_id):
    product = _owned_product(product_id)
    if not product:
        return _error(PRODUCT_NOT_FOUND, 404)

    try:
        variant = variant_service.create_variant(product.id, _json_body())
    except ValueError as e:
        return _error(str(e), 400)

    _audit("CREATE_VARIANT", product.id, {"variant_id": variant.id, "title": variant.title})
    notification_service.notify_variants_created(
        product, [variant.title], sender_id=g.store.owner_id
    )
    return {"success": True, "variant": _variant_dict(variant)}, 201


@api_bp.route("/variants/<int:variant_id>", methods=["PATCH"])
@require_store
def update_variant(variant_id):
    variant = _owned_variant(variant_id)
    if not variant:
        return _error("Variant not found", 404)

    try:
        changed = variant_service.update_variant(variant, _json_body())
    except ValueError as e:
        return _error(str(e), 400)

    if changed:
        _audit("UPDATE_VARIANT", variant.product_id, {"variant_id": variant.id, "fields": changed})
    return {"success": True, "variant": _variant_dict(variant)}


@api_bp.route("/variants/<int:variant_id>", methods=["DELETE"])
@require_store
def delete_variant(variant_id):
    variant = _owned_variant(variant_id)
    if not variant:
        return _error("Variant not found", 404)

    product_id = variant.product_id
    variant_service.delete_variant(variant_id)
    _audit("DELETE_VARIANT", product_id, {"variant_id": variant_id})
    return {"success": True}
