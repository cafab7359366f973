from datetime import datetime, timezone
from storefront.extensions import db


class Notification(db.Model):
    __tablename__ = "notifications"

    id = db.Column(db.Integer, primary_key=True)
    recipient_id = db.Column(db.BigInteger, nullable=False, index=True)
    sender_id = db.Column(db.BigInteger)
    type = db.Column(db.String(50), nullable=False)
    message = db.Column(db.Text, nullable=False)
    redirect_url = db.Column(db.String(512))
    is_read = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    TYPES = {"variant_needs_approval"}

    def __repr__(self):
        return f"<Notification {self.type} → {self.recipient_id}>"
