#!/usr/bin/env python3
"""Seed a sample store with products and variants for local development."""
import sys
import os
import secrets

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from storefront import create_app
from storefront.extensions import db
from storefront.models.store import Store
from storefront.models.product import Product
from storefront.services.change_set import parse_change_set
from storefront.services.variant_reconciliation import reconcile_variants

app = create_app()

SAMPLE_PRODUCTS = [
    {
        "title": "Classic Crew Tee",
        "options": ["Color", "Size"],
        "variants": [
            ("Black / M", {"Color": "Black", "Size": "M"}),
            ("Black / L", {"Color": "Black", "Size": "L"}),
            ("White / M", {"Color": "White", "Size": "M"}),
        ],
    },
    {
        "title": "Canvas Tote",
        "options": ["Color"],
        "variants": [
            ("Natural", {"Color": "Natural"}),
            ("Olive", {"Color": "Olive"}),
        ],
    },
    {
        "title": "Ceramic Mug",
        "options": ["Size", "Finish"],
        "variants": [
            ("11 oz Gloss", {"Size": "11 oz", "Finish": "Gloss"}),
            ("15 oz Gloss", {"Size": "15 oz", "Finish": "Gloss"}),
            ("15 oz Matte", {"Size": "15 oz", "Finish": "Matte"}),
        ],
    },
]


def seed():
    with app.app_context():
        if Store.query.first():
            print("A store already exists, skipping seed.")
            return

        store = Store(name="Sample Store", owner_id=1, api_key=secrets.token_hex(24))
        db.session.add(store)
        db.session.commit()
        print(f"Store {store.id} api key: {store.api_key}")

        for item in SAMPLE_PRODUCTS:
            product = Product(store_id=store.id, title=item["title"])
            db.session.add(product)
            db.session.commit()

            change_set = parse_change_set(
                {
                    "options": [
                        {"action": "create", "option_type": label}
                        for label in item["options"]
                    ],
                    "variants": [
                        {"title": title, "option_values": values}
                        for title, values in item["variants"]
                    ],
                }
            )
            result = reconcile_variants(product.id, change_set)
            if not result["success"]:
                print(f"  Failed {item['title']}: {result['error']}")
                continue
            print(
                f"  Created {product.id}: {item['title']} "
                f"({len(result['created_variants'])} variants)"
            )

        print(f"\nSeeded {len(SAMPLE_PRODUCTS)} products.")


if __name__ == "__main__":
    seed()
