"""Flask CLI commands for admin operations."""
import json
import secrets
import click


def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        from storefront.extensions import db

        db.create_all()
        click.echo("Database initialized.")

    @app.cli.command("seed-demo")
    def seed_demo():
        """Seed a demo store and product (idempotent)."""
        from storefront.extensions import db
        from storefront.models.store import Store
        from storefront.models.product import Product

        if Store.query.first():
            click.echo("A store already exists, skipping demo seed.")
            return

        store = Store(name="Demo Store", owner_id=1, api_key=secrets.token_hex(24))
        db.session.add(store)
        db.session.flush()

        product = Product(
            store_id=store.id,
            title="Classic Crew Tee",
            body_html="<p>Heavyweight cotton tee.</p>",
        )
        db.session.add(product)
        db.session.commit()

        click.echo(f"Seeded store {store.id} (api key: {store.api_key})")
        click.echo(f"Seeded product {product.id}: {product.title}")

    @app.cli.command("reconcile")
    @click.argument("product_id", type=int)
    @click.argument("changeset_file", type=click.File("r"))
    def reconcile(product_id, changeset_file):
        """Apply a change-set JSON file to a product (no image generation)."""
        from storefront.extensions import db
        from storefront.models.product import Product
        from storefront.services.change_set import parse_change_set
        from storefront.services.variant_reconciliation import reconcile_variants

        if not db.session.get(Product, product_id):
            raise click.ClickException(f"Product {product_id} not found")

        try:
            change_set = parse_change_set(json.load(changeset_file))
        except json.JSONDecodeError as e:
            raise click.ClickException(f"Invalid JSON: {e}")
        except ValueError as e:
            raise click.ClickException(str(e))

        result = reconcile_variants(product_id, change_set)
        click.echo(json.dumps(result, indent=2))
        if not result["success"]:
            raise SystemExit(1)

    @app.cli.command("show-config")
    @click.argument("product_id", type=int)
    def show_config(product_id):
        """Print a product's options, values and variants."""
        from storefront.services.product_service import get_product_configuration

        config = get_product_configuration(product_id)
        if not config["options"] and not config["variants"]:
            click.echo(f"Product {product_id} has no options or variants.")
            return

        for option in config["options"]:
            values = ", ".join(
                f"{v['position']}:{v['value']}" for v in option["values"]
            ) or "-"
            click.echo(f"#{option['position']} {option['option_type']}: {values}")
        for variant in config["variants"]:
            pairs = ", ".join(f"{k}={v}" for k, v in variant["options"].items()) or "-"
            click.echo(f"  [{variant['id']}] {variant['title']} ({pairs})")
