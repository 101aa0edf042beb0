import pytest

from app import create_app
from app.extensions import db
from blogs.models import Blog
from posts.models import Post
from profiles.models import Profile


@pytest.fixture
def app():
    """Create app with a fresh in-memory database"""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client"""
    with app.test_client() as client:
        yield client


@pytest.fixture
def auth_headers(app):
    """Build Authorization headers for a user id using the local identity provider"""
    def make(user_id, user_metadata=None):
        token = app.extensions['identity_provider'].issue_token(user_id, user_metadata)
        return {'Authorization': f'Bearer {token}'}
    return make


@pytest.fixture
def make_profile(app):
    def make(user_id, nickname=None, deleted_at=None):
        profile = Profile(id=user_id, nickname=nickname or user_id, deleted_at=deleted_at)
        db.session.add(profile)
        db.session.commit()
        return profile
    return make


@pytest.fixture
def make_blog(app):
    def make(user_id, name='blog', deleted_at=None):
        blog = Blog(user_id=user_id, name=name, deleted_at=deleted_at)
        db.session.add(blog)
        db.session.commit()
        return blog
    return make


@pytest.fixture
def make_post(app):
    def make(blog, title='post', content='<p>hello</p>', is_private=False, published=True):
        post = Post(
            blog_id=blog.id,
            user_id=blog.user_id,
            title=title,
            content=content,
            is_private=is_private,
            published=published
        )
        db.session.add(post)
        db.session.commit()
        return post
    return make
