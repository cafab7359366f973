from datetime import datetime, timezone
from storefront.extensions import db


class Store(db.Model):
    __tablename__ = "stores"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    owner_id = db.Column(db.BigInteger, nullable=False, index=True)
    api_key = db.Column(db.String(64), unique=True, nullable=False, index=True)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    products = db.relationship("Product", backref="store", lazy="dynamic")

    def __repr__(self):
        return f"<Store {self.id}: {self.name}>"
