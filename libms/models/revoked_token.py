import uuid

from libms.extensions import db
from libms.utils.clock import utcnow


class RevokedToken(db.Model):
    """JWT ids that must no longer be accepted (logout, refresh rotation)."""

    __tablename__ = "revoked_tokens"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    jti = db.Column(db.String(64), unique=True, nullable=False, index=True)
    token_type = db.Column(db.String(10), nullable=False)  # access/refresh
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True)
    revoked_at = db.Column(db.DateTime, nullable=False, default=utcnow)
