from app.extensions import db
from core.utils import new_id, utcnow, isoformat

class Forum(db.Model):
    """Community forum post. The category lives in a ``[category]`` title prefix."""
    __tablename__ = 'forums'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.String(250), nullable=False)
    description = db.Column(db.Text, nullable=True)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    blog_id = db.Column(db.String(36), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, index=True)

    # Relationships
    comments = db.relationship('ForumComment', backref='forum', lazy=True, cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'user_id': self.user_id,
            'blog_id': self.blog_id,
            'created_at': isoformat(self.created_at)
        }

    def __repr__(self):
        return f'<Forum {self.title}>'

class ForumComment(db.Model):
    __tablename__ = 'forum_comments'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    forum_id = db.Column(db.String(36), db.ForeignKey('forums.id', ondelete='CASCADE'), nullable=False, index=True)
    user_id = db.Column(db.String(64), nullable=False)
    blog_id = db.Column(db.String(36), nullable=True)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'forum_id': self.forum_id,
            'user_id': self.user_id,
            'blog_id': self.blog_id,
            'content': self.content,
            'created_at': isoformat(self.created_at)
        }

    def __repr__(self):
        return f'<ForumComment {self.id}>'
