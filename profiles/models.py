from app.extensions import db
from core.utils import utcnow, isoformat

class Profile(db.Model):
    """Account profile mirrored from the identity provider.

    ``id`` is the provider-issued user id. A non-null ``deleted_at`` marks the
    account as soft-deleted: it may not create new content, while its existing
    blogs and posts stay addressable.
    """
    __tablename__ = 'profiles'

    id = db.Column(db.String(64), primary_key=True)
    nickname = db.Column(db.String(100), nullable=True)
    profile_image_url = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    deleted_at = db.Column(db.DateTime(timezone=True), nullable=True)

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    def to_dict(self):
        """Return profile data as dictionary."""
        return {
            'id': self.id,
            'nickname': self.nickname,
            'profile_image_url': self.profile_image_url,
            'created_at': isoformat(self.created_at),
            'deleted_at': isoformat(self.deleted_at)
        }

    def to_public_dict(self):
        return {
            'id': self.id,
            'nickname': self.nickname,
            'profile_image_url': self.profile_image_url
        }

    def __repr__(self):
        return f'<Profile {self.id}>'
