from datetime import datetime, timezone
from storefront.extensions import db


class AuditLog(db.Model):
    __tablename__ = "audit_log"

    id = db.Column(db.Integer, primary_key=True)
    actor_id = db.Column(db.BigInteger, nullable=False, index=True)
    action = db.Column(db.String(50), nullable=False)
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    payload = db.Column(db.JSON)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    ACTIONS = {
        "CREATE_VARIANTS",
        "CREATE_OPTION",
        "DELETE_OPTION",
        "CREATE_OPTION_VALUE",
        "SET_VARIANT_OPTION_VALUES",
        "DELETE_OPTION_VALUE",
        "CREATE_VARIANT",
        "UPDATE_VARIANT",
        "DELETE_VARIANT",
    }

    def __repr__(self):
        return f"<AuditLog {self.action} by {self.actor_id}>"
