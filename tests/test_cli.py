"""Tests for Flask CLI commands."""
import json

from storefront.models.product import Product
from storefront.models.store import Store


def test_seed_demo_is_idempotent(app, db):
    runner = app.test_cli_runner()

    first = runner.invoke(args=["seed-demo"])
    second = runner.invoke(args=["seed-demo"])

    assert first.exit_code == 0
    assert "api key" in first.output
    assert "skipping" in second.output
    assert Store.query.count() == 1
    assert Product.query.count() == 1


def test_reconcile_and_show_config(app, db, product, tmp_path):
    path = tmp_path / "changeset.json"
    path.write_text(
        json.dumps(
            {
                "options": [{"action": "create", "option_type": "Size"}],
                "variants": [
                    {"title": "Small", "option_values": {"Size": "S"}},
                    {"title": "Large", "option_values": {"Size": "L"}},
                ],
            }
        )
    )
    runner = app.test_cli_runner()

    result = runner.invoke(args=["reconcile", str(product.id), str(path)])
    assert result.exit_code == 0
    assert json.loads(result.output)["success"] is True

    result = runner.invoke(args=["show-config", str(product.id)])
    assert "#1 Size: 1:S, 2:L" in result.output
    assert "Small (Size=S)" in result.output


def test_reconcile_rejects_invalid_change_set(app, db, product, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"options": "Size"}))

    result = app.test_cli_runner().invoke(args=["reconcile", str(product.id), str(path)])

    assert result.exit_code != 0
    assert "'options' must be a list" in result.output


def test_reconcile_unknown_product(app, db, tmp_path):
    path = tmp_path / "cs.json"
    path.write_text("{}")

    result = app.test_cli_runner().invoke(args=["reconcile", "999", str(path)])

    assert result.exit_code != 0
    assert "Product 999 not found" in result.output
