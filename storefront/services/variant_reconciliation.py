"""Merge a change-set of desired variants into a product's configuration.

A product's configuration lives in three tables: options, option_values and
product_variants. Reconciliation runs in three committed stages:

    1. resolve option labels to option ids, creating missing options
    2. create one variant row per requested variant, in one batch
    3. create one option value row per (variant, option, value), in one batch

Stages are committed independently. A failure in stage 2 or 3 leaves the rows
of earlier stages in place (options without values, variants without option
values); callers should re-read the product before resubmitting.
"""
import logging
from sqlalchemy.exc import SQLAlchemyError
from storefront.extensions import db
from storefront.models.option import Option, OptionValue
from storefront.models.variant import ProductVariant

logger = logging.getLogger(__name__)


class ReconciliationError(Exception):
    """A storage failure that aborted a reconciliation stage."""

    def __init__(self, stage, message):
        super().__init__(message)
        self.stage = stage
        self.message = message


class OptionResolver:
    """Map requested option labels to option ids for one product."""

    def __init__(self, product_id):
        self.product_id = product_id
        self.option_ids = {}
        self.created = []
        self._ids_by_key = {}

    def resolve(self, requested_options):
        existing = Option.query.filter_by(product_id=self.product_id).all()
        by_label = {}
        for option in existing:
            by_label.setdefault(option.option_type.lower(), option.id)
        max_position = max((o.position or 0 for o in existing), default=0)

        for entry in requested_options:
            label = entry["option_type"]
            key = label.lower()

            if entry["action"] == "update" and entry.get("id"):
                option_id = entry["id"]
            elif key in by_label:
                option_id = by_label[key]
            else:
                max_position += 1
                option_id = self._create(label, max_position)
                by_label[key] = option_id

            self.option_ids[label] = option_id
            self._ids_by_key.setdefault(key, option_id)

        return self.option_ids

    def option_id_for(self, label):
        """Option id for a label used in a variant's option values, or None."""
        if label in self.option_ids:
            return self.option_ids[label]
        return self._ids_by_key.get(label.lower())

    def _create(self, label, position):
        option = Option(
            product_id=self.product_id,
            option_type=label,
            position=position,
        )
        try:
            db.session.add(option)
            db.session.flush()
            option_id = option.id
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception(
                "Failed to create option %r for product %s", label, self.product_id
            )
            raise ReconciliationError(
                ReconciliationOrchestrator.RESOLVING_OPTIONS,
                f"Failed to create option: {label}",
            ) from e

        self.created.append(option_id)
        logger.info(
            "Created option %r (id=%s, position=%d) for product %s",
            label, option_id, position, self.product_id,
        )
        return option_id


class ValuePositionTracker:
    """Known values and their positions, per option.

    A value keeps the position it was first given. Comparison is
    case-insensitive, so "red" reuses the position of "Red".
    """

    def __init__(self, rows=()):
        self._positions = {}  # option_id -> {lowercased value: position}
        self._max_positions = {}
        for row in rows:
            if row.option_id is None:
                continue
            self._seed(row.option_id, row.value, row.position)

    @classmethod
    def for_product(cls, product_id):
        rows = (
            OptionValue.query.filter_by(product_id=product_id)
            .order_by(OptionValue.id)
            .all()
        )
        return cls(rows)

    def _seed(self, option_id, value, position):
        position = position or 0
        known = self._positions.setdefault(option_id, {})
        known.setdefault((value or "").lower(), position)
        self._max_positions[option_id] = max(
            self._max_positions.get(option_id, 0), position
        )

    def has(self, option_id, value):
        return (value or "").lower() in self._positions.get(option_id, {})

    def position_for(self, option_id, value):
        """Return the position of a value, minting the next one if it is new."""
        known = self._positions.setdefault(option_id, {})
        key = (value or "").lower()
        if key in known:
            return known[key]

        position = self._max_positions.get(option_id, 0) + 1
        self._max_positions[option_id] = position
        known[key] = position
        return position


class VariantMaterializer:
    """Create the variant rows of a change-set in a single batch."""

    def __init__(self, product_id, variant_images=None):
        self.product_id = product_id
        self.variant_images = variant_images or {}

    def images_for(self, title):
        url = self.variant_images.get(title)
        return [{"src": url}] if url else []

    def materialize(self, requested_variants):
        variants = [
            ProductVariant(
                product_id=self.product_id,
                title=entry["title"],
                images=self.images_for(entry["title"]),
                price=None,
                ocean_shipping_cost=None,
                air_shipping_cost=None,
                drop_custom_price=None,
                drop_public=False,
                drop_approved=False,
                is_default=False,
            )
            for entry in requested_variants
        ]

        try:
            db.session.add_all(variants)
            db.session.flush()
            created = [
                {"id": v.id, "title": v.title, "images": list(v.images)}
                for v in variants
            ]
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception("Failed to create variants for product %s", self.product_id)
            raise ReconciliationError(
                ReconciliationOrchestrator.MATERIALIZING_VARIANTS,
                "Failed to create variants",
            ) from e

        logger.info("Created %d variants for product %s", len(created), self.product_id)
        return created


class OptionValueLinker:
    """Stage one option value row per (variant, option, value) and insert them."""

    def __init__(self, product_id, resolver, tracker):
        self.product_id = product_id
        self.resolver = resolver
        self.tracker = tracker

    def link(self, created_variants, requested_variants):
        """Insert the option value rows and return each variant's linked pairs."""
        staged = []
        linked = []

        for variant, entry in zip(created_variants, requested_variants):
            pairs = {}
            for label, value in entry["option_values"].items():
                option_id = self.resolver.option_id_for(label)
                if option_id is None:
                    logger.warning(
                        "No option id found for type %r (variant %r), skipping",
                        label, variant["title"],
                    )
                    continue

                staged.append(
                    {
                        "option_id": option_id,
                        "variant_id": variant["id"],
                        "product_id": self.product_id,
                        "value": value,
                        "position": self.tracker.position_for(option_id, value),
                    }
                )
                pairs[label] = value
            linked.append(pairs)

        if staged:
            self._bulk_insert(staged)
            logger.info(
                "Created %d option values for product %s", len(staged), self.product_id
            )
        return linked

    def _bulk_insert(self, rows):
        try:
            db.session.add_all([OptionValue(**row) for row in rows])
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception(
                "Failed to create option values for product %s", self.product_id
            )
            raise ReconciliationError(
                ReconciliationOrchestrator.LINKING_VALUES,
                "Failed to create option values",
            ) from e


class ReconciliationOrchestrator:
    """Run the reconciliation stages in order and report a single result."""

    IDLE = "IDLE"
    RESOLVING_OPTIONS = "RESOLVING_OPTIONS"
    MATERIALIZING_VARIANTS = "MATERIALIZING_VARIANTS"
    LINKING_VALUES = "LINKING_VALUES"
    DONE = "DONE"
    FAILED = "FAILED"

    STATES = {
        IDLE,
        RESOLVING_OPTIONS,
        MATERIALIZING_VARIANTS,
        LINKING_VALUES,
        DONE,
        FAILED,
    }

    def __init__(self, product_id, variant_images=None):
        self.product_id = product_id
        self.variant_images = variant_images or {}
        self.state = self.IDLE
        self.resolver = None
        self.tracker = None

    def _enter(self, state):
        logger.debug("Reconciliation of product %s: %s → %s", self.product_id, self.state, state)
        self.state = state

    def run(self, change_set):
        if self.state != self.IDLE:
            raise RuntimeError(f"Reconciliation already ran (state={self.state})")

        requested_variants = change_set.get("variants", [])
        try:
            self._enter(self.RESOLVING_OPTIONS)
            self.resolver = OptionResolver(self.product_id)
            self.resolver.resolve(change_set.get("options", []))

            self._enter(self.MATERIALIZING_VARIANTS)
            materializer = VariantMaterializer(self.product_id, self.variant_images)
            created = materializer.materialize(requested_variants)

            self._enter(self.LINKING_VALUES)
            self.tracker = ValuePositionTracker.for_product(self.product_id)
            linker = OptionValueLinker(self.product_id, self.resolver, self.tracker)
            linked = linker.link(created, requested_variants)
        except ReconciliationError as e:
            logger.error(
                "Reconciliation of product %s failed during %s: %s",
                self.product_id, e.stage, e.message,
            )
            self._enter(self.FAILED)
            return {"success": False, "error": e.message}
        except SQLAlchemyError:
            # reads (existing options, existing values) are not wrapped per stage
            db.session.rollback()
            logger.exception(
                "Reconciliation of product %s failed during %s", self.product_id, self.state
            )
            self._enter(self.FAILED)
            return {"success": False, "error": "Failed to read product configuration"}

        self._enter(self.DONE)
        return {
            "success": True,
            "created_variants": [
                {
                    "id": variant["id"],
                    "title": variant["title"],
                    "images": variant["images"],
                    "option_values": pairs,
                }
                for variant, pairs in zip(created, linked)
            ],
        }


def reconcile_variants(product_id, change_set, variant_images=None):
    """Apply a parsed change-set to a product.

    Args:
        product_id: id of a product the caller has already checked ownership of
        change_set: dict from change_set.parse_change_set
        variant_images: optional title → image URL map from image generation

    Returns:
        {"success": True, "created_variants": [...]} in input order, or
        {"success": False, "error": "..."}
    """
    logger.info(
        "Reconciling %d options / %d variants into product %s",
        len(change_set.get("options", [])),
        len(change_set.get("variants", [])),
        product_id,
    )
    return ReconciliationOrchestrator(product_id, variant_images).run(change_set)
