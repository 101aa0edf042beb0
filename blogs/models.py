from app.extensions import db
from core.utils import new_id, utcnow, isoformat

class Blog(db.Model):
    """A named content container owned by exactly one account."""
    __tablename__ = 'blogs'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)
    thumbnail_url = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    deleted_at = db.Column(db.DateTime(timezone=True), nullable=True)

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    def to_dict(self):
        """Return blog data as dictionary."""
        return {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'description': self.description,
            'thumbnail_url': self.thumbnail_url,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
            'deleted_at': isoformat(self.deleted_at)
        }

    def to_summary(self):
        return {'name': self.name or '', 'thumbnail_url': self.thumbnail_url}

    def __repr__(self):
        return f'<Blog {self.name}>'
