from datetime import datetime, timezone
from storefront.extensions import db


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    store_id = db.Column(
        db.Integer,
        db.ForeignKey("stores.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = db.Column(db.String(255), nullable=False)
    body_html = db.Column(db.Text, default="")
    image_storage_key = db.Column(db.String(512))  # reference photo for AI edits
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
    deleted_at = db.Column(db.DateTime(timezone=True))

    # Relationships
    options = db.relationship(
        "Option",
        backref="product",
        lazy="select",
        cascade="all, delete-orphan",
        order_by="Option.position",
    )
    variants = db.relationship(
        "ProductVariant",
        backref="product",
        lazy="select",
        cascade="all, delete-orphan",
        order_by="ProductVariant.id",
    )

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    def __repr__(self):
        return f"<Product {self.id}: {self.title}>"
