"""Tests for manual option and option value management."""
from decimal import Decimal

import pytest

from storefront.models.option import Option, OptionValue
from storefront.models.variant import ProductVariant
from storefront.services import (
    option_service,
    option_value_service,
    product_service,
    variant_service,
)
from storefront.services.change_set import parse_change_set
from storefront.services.variant_reconciliation import reconcile_variants


def _seed_colors(product):
    return reconcile_variants(
        product.id,
        parse_change_set(
            {
                "options": [{"action": "create", "option_type": "Color"}],
                "variants": [
                    {"title": "Red", "option_values": {"Color": "Red"}},
                    {"title": "Blue", "option_values": {"Color": "Blue"}},
                ],
            }
        ),
    )


def test_create_option_appends_position(db, product):
    first = option_service.create_option(product.id, "Color")
    second = option_service.create_option(product.id, " Size ")

    assert (first.position, second.position) == (1, 2)
    assert second.option_type == "Size"
    assert [o.option_type for o in option_service.list_options(product.id)] == ["Color", "Size"]


def test_create_option_rejects_duplicate_label(db, product):
    option_service.create_option(product.id, "Color")

    with pytest.raises(ValueError, match="already exists"):
        option_service.create_option(product.id, "color")


def test_create_option_requires_label(db, product):
    with pytest.raises(ValueError):
        option_service.create_option(product.id, "   ")


def test_delete_option_removes_its_values(db, product):
    _seed_colors(product)
    color = Option.query.filter_by(product_id=product.id).one()

    assert option_service.delete_option(color.id) is True
    assert Option.query.count() == 0
    assert OptionValue.query.count() == 0
    assert ProductVariant.query.count() == 2
    assert option_service.delete_option(color.id) is False


def test_create_option_value_reuses_known_position(db, product):
    _seed_colors(product)
    color = Option.query.filter_by(product_id=product.id).one()

    known = option_value_service.create_option_value(color.id, product.id, "blue")
    new = option_value_service.create_option_value(color.id, product.id, "Green")

    assert known.position == 2
    assert known.variant_id is None
    assert new.position == 3


def test_set_variant_option_values_replaces_rows(db, product):
    result = _seed_colors(product)
    red_id = result["created_variants"][0]["id"]
    color = Option.query.filter_by(product_id=product.id).one()
    size = option_service.create_option(product.id, "Size")

    rows = option_value_service.set_variant_option_values(
        red_id,
        product.id,
        [{"option_id": color.id, "value": "Red"}, {"option_id": size.id, "value": "XL"}],
    )

    assert [(r.value, r.position) for r in rows] == [("Red", 1), ("XL", 1)]
    values = OptionValue.query.filter_by(variant_id=red_id).all()
    assert sorted(r.value for r in values) == ["Red", "XL"]


def test_set_variant_option_values_keeps_rank_of_only_user(db, product):
    result = _seed_colors(product)
    blue_id = result["created_variants"][1]["id"]
    color = Option.query.filter_by(product_id=product.id).one()

    rows = option_value_service.set_variant_option_values(
        blue_id, product.id, [{"option_id": color.id, "value": "BLUE"}]
    )

    assert rows[0].position == 2


def test_set_variant_option_values_rejects_foreign_option(db, product):
    result = _seed_colors(product)

    with pytest.raises(ValueError, match="Option 9999 not found"):
        option_value_service.set_variant_option_values(
            result["created_variants"][0]["id"],
            product.id,
            [{"option_id": 9999, "value": "Red"}],
        )


def test_set_variant_option_values_rejects_unknown_variant(db, product):
    with pytest.raises(ValueError, match="Variant not found"):
        option_value_service.set_variant_option_values(12345, product.id, [])


def test_delete_option_value(db, product):
    _seed_colors(product)
    row = OptionValue.query.first()

    assert option_value_service.delete_option_value(row.id) is True
    assert option_value_service.delete_option_value(row.id) is False
    assert OptionValue.query.count() == 1


def test_product_configuration_groups_distinct_values(db, product):
    _seed_colors(product)
    reconcile_variants(
        product.id,
        parse_change_set(
            {
                "options": [{"action": "create", "option_type": "color"}],
                "variants": [{"title": "Red 2", "option_values": {"color": "red"}}],
            }
        ),
    )

    config = product_service.get_product_configuration(product.id)

    assert len(config["options"]) == 1
    assert config["options"][0]["values"] == [
        {"value": "Red", "position": 1},
        {"value": "Blue", "position": 2},
    ]
    assert [v["options"] for v in config["variants"]] == [
        {"Color": "Red"},
        {"Color": "Blue"},
        {"Color": "red"},
    ]


def test_get_product_for_store_checks_ownership(db, product, store):
    from storefront.models.store import Store

    other = Store(name="Other", owner_id=1, api_key="other-key")
    db.session.add(other)
    db.session.commit()

    assert product_service.get_product_for_store(product.id, store) is product
    assert product_service.get_product_for_store(product.id, other) is None
    assert product_service.get_product_for_store(product.id, None) is None


def test_set_variant_option_values_rejects_repeated_option(db, product):
    result = _seed_colors(product)
    red_id = result["created_variants"][0]["id"]
    color = Option.query.filter_by(product_id=product.id).one()

    with pytest.raises(ValueError, match="more than once"):
        option_value_service.set_variant_option_values(
            red_id,
            product.id,
            [{"option_id": color.id, "value": "Blue"}, {"option_id": color.id, "value": "red"}],
        )

    assert [r.value for r in OptionValue.query.filter_by(variant_id=red_id)] == ["Red"]


def test_create_variant_starts_unapproved(db, product):
    variant = variant_service.create_variant(
        product.id,
        {
            "title": " Black ",
            "price": "10",
            "ocean_shipping_cost": 2.5,
            "drop_custom_price": 19.99,
            "images": [{"src": "https://cdn.example.test/black.jpg"}],
        },
    )

    assert variant.title == "Black"
    assert variant.price == Decimal("10.00")
    assert variant.drop_custom_price == Decimal("19.99")
    assert variant.drop_approved is False
    assert variant.drop_public is False
    assert variant.images == [{"src": "https://cdn.example.test/black.jpg"}]


@pytest.mark.parametrize(
    "data, message",
    [
        ({"title": "Black", "price": 10, "drop_custom_price": 10}, "base price"),
        ({"title": "Black", "price": "ten"}, "must be a number"),
        ({"title": "Black", "price": -1}, "must not be negative"),
        ({"title": "Black", "drop_public": "yes"}, "drop_public"),
        ({"title": "Black", "images": ["https://x"]}, "images"),
        ({"title": 7}, "title"),
        ([], "JSON object"),
    ],
)
def test_create_variant_validates_fields(db, product, data, message):
    with pytest.raises(ValueError, match=message):
        variant_service.create_variant(product.id, data)

    assert ProductVariant.query.count() == 0


def test_update_variant_checks_custom_price_against_stored_base(db, product):
    variant = variant_service.create_variant(
        product.id, {"title": "Black", "price": 10, "ocean_shipping_cost": 2}
    )

    with pytest.raises(ValueError, match=r"\$12\.00"):
        variant_service.update_variant(variant, {"drop_custom_price": 12})

    changed = variant_service.update_variant(
        variant, {"title": "Black", "drop_custom_price": 15, "drop_public": True}
    )

    assert changed == ["drop_custom_price", "drop_public"]
    assert variant.drop_custom_price == Decimal("15.00")
    # base pricing is copied at creation and not editable afterwards
    variant_service.update_variant(variant, {"price": 1})
    assert variant.price == Decimal("10.00")


def test_delete_variant_removes_its_option_values(db, product):
    result = _seed_colors(product)
    red_id, blue_id = (v["id"] for v in result["created_variants"])

    assert variant_service.delete_variant(red_id) is True
    assert variant_service.delete_variant(red_id) is False
    assert [r.variant_id for r in OptionValue.query.all()] == [blue_id]
    assert Option.query.count() == 1
