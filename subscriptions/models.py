from app.extensions import db
from core.utils import utcnow

class Subscription(db.Model):
    """Directed follow: ``sub_id`` follows ``subed_id``."""
    __tablename__ = 'subscribe'
    __table_args__ = (db.UniqueConstraint('sub_id', 'subed_id', name='uq_subscribe_pair'),)

    id = db.Column(db.Integer, primary_key=True)
    sub_id = db.Column(db.String(64), nullable=False, index=True)
    subed_id = db.Column(db.String(64), nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    def __repr__(self):
        return f'<Subscription {self.sub_id} -> {self.subed_id}>'
