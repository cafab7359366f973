from datetime import datetime, timezone
from storefront.extensions import db


class ProductVariant(db.Model):
    __tablename__ = "product_variants"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = db.Column(db.String(255))
    images = db.Column(db.JSON, default=list)  # [{"src": url}]
    price = db.Column(db.Numeric(10, 2))
    ocean_shipping_cost = db.Column(db.Numeric(10, 2))
    air_shipping_cost = db.Column(db.Numeric(10, 2))
    drop_custom_price = db.Column(db.Numeric(10, 2))
    drop_description = db.Column(db.Text)
    drop_public = db.Column(db.Boolean, nullable=False, default=False)
    drop_approved = db.Column(db.Boolean, nullable=False, default=False)
    is_default = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    option_values = db.relationship(
        "OptionValue",
        backref="variant",
        lazy="select",
        cascade="all, delete-orphan",
        order_by="OptionValue.id",
    )

    def __repr__(self):
        return f"<ProductVariant {self.id}: {self.title}>"
