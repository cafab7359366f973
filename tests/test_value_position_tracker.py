"""Tests for per-option value positions."""
from types import SimpleNamespace

from storefront.models.option import Option, OptionValue
from storefront.services.variant_reconciliation import ValuePositionTracker


def _row(option_id, value, position):
    return SimpleNamespace(option_id=option_id, value=value, position=position)


def test_unknown_option_starts_at_one():
    tracker = ValuePositionTracker()

    assert not tracker.has(1, "Red")
    assert tracker.position_for(1, "Red") == 1
    assert tracker.position_for(1, "Blue") == 2
    assert tracker.position_for(2, "Small") == 1


def test_seeded_values_keep_their_recorded_position():
    tracker = ValuePositionTracker(
        [_row(1, "Red", 1), _row(1, "Blue", 2), _row(1, "Red", 1), _row(1, "Green", 3)]
    )

    assert tracker.has(1, "BLUE")
    assert tracker.position_for(1, "blue") == 2
    assert tracker.position_for(1, "red") == 1
    assert tracker.position_for(1, "Teal") == 4


def test_new_value_follows_highest_seeded_position():
    tracker = ValuePositionTracker([_row(1, "Red", 1), _row(1, "Blue", 5)])

    assert tracker.position_for(1, "Green") == 6
    assert tracker.position_for(1, "green") == 6
    assert tracker.position_for(1, "Teal") == 7


def test_rows_without_option_are_ignored():
    tracker = ValuePositionTracker([_row(None, "Red", 7)])

    assert tracker.position_for(1, "Red") == 1


def test_first_recorded_position_wins_for_conflicting_rows():
    tracker = ValuePositionTracker([_row(1, "Red", 2), _row(1, "red", 3)])

    assert tracker.position_for(1, "RED") == 2
    assert tracker.position_for(1, "Blue") == 4


def test_for_product_reads_only_that_product(db, product, store):
    from storefront.models.product import Product

    other = Product(store_id=store.id, title="Other")
    db.session.add(other)
    db.session.flush()
    mine = Option(product_id=product.id, option_type="Color", position=1)
    theirs = Option(product_id=other.id, option_type="Color", position=1)
    db.session.add_all([mine, theirs])
    db.session.flush()
    db.session.add_all(
        [
            OptionValue(option_id=mine.id, product_id=product.id, value="Red", position=1),
            OptionValue(option_id=theirs.id, product_id=other.id, value="Teal", position=4),
        ]
    )
    db.session.commit()

    tracker = ValuePositionTracker.for_product(product.id)

    assert tracker.has(mine.id, "red")
    assert not tracker.has(theirs.id, "teal")
    assert tracker.position_for(mine.id, "Blue") == 2
