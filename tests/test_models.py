"""Tests for database models."""
from storefront.models.option import Option, OptionValue
from storefront.models.product import Product
from storefront.models.variant import ProductVariant


def test_product_creation(db, store):
    p = Product(store_id=store.id, title="Canvas Tote")
    db.session.add(p)
    db.session.flush()

    assert p.id is not None
    assert not p.is_deleted
    assert p.store.id == store.id


def test_variant_defaults(db, product):
    v = ProductVariant(product_id=product.id, title="Red")
    db.session.add(v)
    db.session.flush()

    assert v.id is not None
    assert v.images == []
    assert v.is_default is False
    assert v.drop_approved is False
    assert v.drop_public is False
    assert v.price is None


def test_option_value_row(db, product):
    option = Option(product_id=product.id, option_type="Color", position=1)
    variant = ProductVariant(product_id=product.id, title="Red")
    db.session.add_all([option, variant])
    db.session.flush()

    row = OptionValue(
        option_id=option.id,
        variant_id=variant.id,
        product_id=product.id,
        value="Red",
        position=1,
    )
    db.session.add(row)
    db.session.flush()

    assert row.option.option_type == "Color"
    assert row.variant.title == "Red"
    assert option.values.count() == 1


def test_deleting_product_removes_configuration(db, product):
    option = Option(product_id=product.id, option_type="Color", position=1)
    variant = ProductVariant(product_id=product.id, title="Red")
    db.session.add_all([option, variant])
    db.session.flush()
    db.session.add(
        OptionValue(
            option_id=option.id,
            variant_id=variant.id,
            product_id=product.id,
            value="Red",
            position=1,
        )
    )
    db.session.commit()

    db.session.delete(product)
    db.session.commit()

    assert Option.query.count() == 0
    assert ProductVariant.query.count() == 0
    assert OptionValue.query.count() == 0
