from app.extensions import db
from categories.models import Category
from core.utils import new_id, utcnow, isoformat

# Post <-> Category association, capped per post by the routes
post_categories = db.Table(
    'post_categories',
    db.Column('post_id', db.String(36), db.ForeignKey('posts.id', ondelete='CASCADE'), primary_key=True),
    db.Column('category_id', db.String(36), db.ForeignKey('categories.id', ondelete='CASCADE'), primary_key=True)
)

class Post(db.Model):
    """Blog post with HTML content.

    ``user_id`` is copied from the blog owner when the post is created and is
    never recomputed. Privacy checks compare against this copy, so it would go
    stale if blog ownership ever became transferable.
    """
    __tablename__ = 'posts'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    blog_id = db.Column(db.String(36), nullable=False, index=True)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False, default='')
    thumbnail_url = db.Column(db.String(500), nullable=True)
    category_id = db.Column(db.String(36), nullable=True)  # legacy single category
    is_private = db.Column(db.Boolean, nullable=False, default=False)
    published = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    categories = db.relationship(Category, secondary=post_categories, lazy=True, order_by=Category.name)

    @property
    def category_ids(self):
        return [category.id for category in self.categories]

    def to_dict(self):
        """Return the full post, content included."""
        return {
            'id': self.id,
            'blog_id': self.blog_id,
            'user_id': self.user_id,
            'title': self.title,
            'content': self.content,
            'thumbnail_url': self.thumbnail_url,
            'category_id': self.category_id,
            'category_ids': self.category_ids,
            'is_private': self.is_private,
            'published': self.published,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at)
        }

    def to_summary(self):
        """Listing shape: private posts keep their metadata but not their content."""
        return {
            'id': self.id,
            'blog_id': self.blog_id,
            'user_id': self.user_id,
            'title': self.title,
            'content': None if self.is_private else self.content,
            'thumbnail_url': self.thumbnail_url,
            'is_private': self.is_private,
            'created_at': isoformat(self.created_at)
        }

    def __repr__(self):
        return f'<Post {self.title}>'
