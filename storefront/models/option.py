from datetime import datetime, timezone
from storefront.extensions import db


class Option(db.Model):
    """One configurable axis of a product ("Color", "Size")."""

    __tablename__ = "options"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    option_type = db.Column(db.String(100), nullable=False)  # label
    position = db.Column(db.Integer, nullable=False, default=1)  # 1-based
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    values = db.relationship(
        "OptionValue",
        backref="option",
        lazy="dynamic",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Option {self.option_type} #{self.position}>"


class OptionValue(db.Model):
    """A variant's selection of one option's value.

    Rows double as the list of distinct values of an option: every row with
    the same option and the same value (case-insensitive) carries the same
    position, which is the rank of the value rather than of the row.
    """

    __tablename__ = "option_values"

    id = db.Column(db.Integer, primary_key=True)
    option_id = db.Column(
        db.Integer,
        db.ForeignKey("options.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    variant_id = db.Column(
        db.Integer,
        db.ForeignKey("product_variants.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    value = db.Column(db.String(255), nullable=False)
    position = db.Column(db.Integer, nullable=False)

    def __repr__(self):
        return f"<OptionValue {self.option_id}={self.value} #{self.position}>"
