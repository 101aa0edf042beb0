from flask import request, jsonify, current_app, g
from flasgger import swag_from
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from auth import auth_optional, auth_required
from blogs.models import Blog
from categories.models import Category
from core import access, lifecycle
from core.errors import BlogNotFound, MissingFields, PostNotFound, StoreFailure
from core.utils import request_json, window_args
from profiles.models import Profile
from subscriptions.models import Subscription
from .models import Post
from .utils import extract_first_image_url, resolve_categories
from . import posts_bp

POST_ID_PARAM = {
    'name': 'post_id',
    'in': 'path',
    'type': 'string',
    'required': True,
    'description': 'ID of the post'
}

def _with_blogs(posts):
    """Attach ``{name, thumbnail_url}`` of each post's blog to its listing summary."""
    blog_ids = {post.blog_id for post in posts}
    blogs = {}
    if blog_ids:
        blogs = {blog.id: blog for blog in Blog.query.filter(Blog.id.in_(blog_ids)).all()}
    result = []
    for post in posts:
        item = post.to_summary()
        blog = blogs.get(post.blog_id)
        item['blog'] = blog.to_summary() if blog else None
        result.append(item)
    return result

@posts_bp.route('/feed', methods=['GET'])
@auth_required
@swag_from({
    'tags': ['Posts'],
    'description': 'Latest published posts written by the bloggers the current user subscribes to',
    'security': [{'Bearer': []}],
    'parameters': [
        {'name': 'limit', 'in': 'query', 'type': 'integer', 'default': 14}
    ],
    'responses': {
        '200': {'description': 'Post summaries, newest first'},
        '401': {'description': 'Unauthorized', 'schema': {'$ref': '#/definitions/Error'}}
    }
})
def get_feed():
    """Get the subscription feed for the current user."""
    limit, _ = window_args(request.args, current_app.config['FEED_PAGE_SIZE'])

    subscribed_ids = [
        row.subed_id for row in Subscription.query.filter_by(sub_id=g.actor.id).all()
    ]
    if not subscribed_ids:
        return jsonify([])

    posts = Post.query.filter(Post.user_id.in_(subscribed_ids), *access.post_listing_criteria(feed=True))\
        .order_by(Post.created_at.desc())\
        .limit(limit)\
        .all()

    return jsonify(_with_blogs(posts))

@posts_bp.route('', methods=['GET'])
@swag_from({
    'tags': ['Posts'],
    'description': 'List all posts, newest first. Private posts are listed with their content withheld.',
    'parameters': [
        {'name': 'limit', 'in': 'query', 'type': 'integer', 'default': 20},
        {'name': 'offset', 'in': 'query', 'type': 'integer', 'default': 0}
    ],
    'responses': {
        '200': {'description': 'Post summaries with blog name and thumbnail'}
    }
})
def get_posts():
    """List posts across all blogs."""
    limit, offset = window_args(request.args, current_app.config['POSTS_PAGE_SIZE'])

    posts = Post.query.filter(*access.post_listing_criteria())\
        .order_by(Post.created_at.desc())\
        .offset(offset)\
        .limit(limit)\
        .all()

    return jsonify(_with_blogs(posts))

@posts_bp.route('/blog/<blog_id>', methods=['GET'])
@swag_from({
    'tags': ['Posts'],
    'description': 'List every post of a blog, private ones included',
    'parameters': [
        {'name': 'blog_id', 'in': 'path', 'type': 'string', 'required': True}
    ],
    'responses': {
        '200': {'description': 'Post summaries, newest first'}
    }
})
def get_blog_posts(blog_id):
    """List posts of one blog."""
    posts = Post.query.filter(Post.blog_id == blog_id, *access.post_listing_criteria())\
        .order_by(Post.created_at.desc())\
        .all()

    return jsonify([post.to_summary() for post in posts])

@posts_bp.route('/<post_id>', methods=['GET'])
@auth_optional
@swag_from({
    'tags': ['Posts'],
    'description': 'Get a post with its blog, categories and author profile. Private posts are visible to their author only.',
    'parameters': [POST_ID_PARAM],
    'responses': {
        '200': {'description': 'Post detail', 'schema': {'$ref': '#/definitions/Post'}},
        '403': {'description': 'Private post', 'schema': {'$ref': '#/definitions/Error'}},
        '404': {'description': 'Post or blog not found', 'schema': {'$ref': '#/definitions/Error'}}
    }
})
def get_post(post_id):
    """Get a specific post by ID."""
    post = db.session.get(Post, post_id)
    if not post:
        raise PostNotFound()

    blog = db.session.get(Blog, post.blog_id)
    if not blog:
        raise BlogNotFound()

    access.raise_for_denial(access.can_read_post(g.actor, post))

    category = db.session.get(Category, post.category_id) if post.category_id else None
    profile = db.session.get(Profile, blog.user_id)

    data = post.to_dict()
    data.update({
        'blog': {
            'id': blog.id,
            'user_id': blog.user_id,
            'name': blog.name,
            'thumbnail_url': blog.thumbnail_url
        },
        'category': category.to_dict() if category else None,
        'categories': [c.to_dict() for c in post.categories],
        'profile': profile.to_public_dict() if profile else None
    })
    return jsonify(data)

@posts_bp.route('', methods=['POST'])
@auth_required
@swag_from({
    'tags': ['Posts'],
    'description': 'Create a post in one of your blogs',
    'security': [{'Bearer': []}],
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': {
            'type': 'object',
            'properties': {
                'blog_id': {'type': 'string'},
                'title': {'type': 'string', 'example': '첫 번째 글'},
                'content': {'type': 'string', 'example': '<p>안녕하세요</p>'},
                'category_ids': {'type': 'array', 'items': {'type': 'string'}, 'maxItems': 5},
                'is_private': {'type': 'boolean', 'default': False},
                'thumbnail_url': {'type': 'string'}
            },
            'required': ['blog_id', 'title']
        }
    }],
    'responses': {
        '201': {'description': 'Post created', 'schema': {'$ref': '#/definitions/Post'}},
        '400': {'description': 'Missing blog_id or title'},
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Not the blog owner, or account deleted'},
        '404': {'description': 'Blog not found'}
    }
})
def create_post():
    """Create a new post."""
    data = request_json()
    blog_id = data.get('blog_id')
    title = str(data.get('title') or '').strip()

    if not blog_id or not title:
        raise MissingFields('blog_id and title are required')

    access.raise_for_denial(
        access.can_write_post_in(g.actor, blog_id), 'Not authorized to post to this blog'
    )
    lifecycle.ensure_active_account(g.actor)

    content = data.get('content') or ''
    post = Post(
        blog_id=blog_id,
        user_id=g.actor.id,
        title=title,
        content=content,
        published=True,
        is_private=data.get('is_private') is True,
        thumbnail_url=data.get('thumbnail_url') or extract_first_image_url(content),
        category_id=data.get('category_id')
    )
    post.categories = resolve_categories(
        data.get('category_ids'), current_app.config['MAX_POST_CATEGORIES']
    )

    try:
        db.session.add(post)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error creating post: {str(e)}')
        raise StoreFailure('Failed to create post') from e

    return jsonify(post.to_dict()), 201

@posts_bp.route('/<post_id>', methods=['PATCH'])
@auth_required
@swag_from({
    'tags': ['Posts'],
    'description': 'Update a post. Changing content re-derives the thumbnail; category_ids replaces all categories.',
    'security': [{'Bearer': []}],
    'parameters': [
        POST_ID_PARAM,
        {
            'name': 'body',
            'in': 'body',
            'required': True,
            'schema': {
                'type': 'object',
                'properties': {
                    'title': {'type': 'string'},
                    'content': {'type': 'string'},
                    'category_ids': {'type': 'array', 'items': {'type': 'string'}},
                    'is_private': {'type': 'boolean'},
                    'thumbnail_url': {'type': 'string'}
                }
            }
        }
    ],
    'responses': {
        '200': {'description': 'Post updated', 'schema': {'$ref': '#/definitions/Post'}},
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Not the blog owner'},
        '404': {'description': 'Post or blog not found'}
    }
})
def update_post(post_id):
    """Update a post."""
    post = db.session.get(Post, post_id)
    if not post:
        raise PostNotFound()

    blog = db.session.get(Blog, post.blog_id)
    access.raise_for_denial(access.can_write_post(g.actor, blog), 'Not authorized to edit this post')

    data = request_json()

    if data.get('title') is not None:
        title = str(data['title']).strip()
        if not title:
            raise MissingFields('title cannot be empty')
        post.title = title

    if data.get('content') is not None:
        post.content = data['content']
        post.thumbnail_url = extract_first_image_url(post.content)

    if isinstance(data.get('is_private'), bool):
        post.is_private = data['is_private']

    if 'thumbnail_url' in data:
        post.thumbnail_url = data['thumbnail_url']

    if 'category_id' in data:
        post.category_id = data['category_id']

    if isinstance(data.get('category_ids'), list):
        post.categories = resolve_categories(
            data['category_ids'], current_app.config['MAX_POST_CATEGORIES']
        )

    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error updating post: {str(e)}')
        raise StoreFailure('Failed to update post') from e

    return jsonify(post.to_dict())

@posts_bp.route('/<post_id>', methods=['DELETE'])
@auth_required
@swag_from({
    'tags': ['Posts'],
    'description': 'Permanently delete a post',
    'security': [{'Bearer': []}],
    'parameters': [POST_ID_PARAM],
    'responses': {
        '200': {'description': 'Post deleted', 'schema': {'$ref': '#/definitions/Success'}},
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Not the blog owner'},
        '404': {'description': 'Post or blog not found'}
    }
})
def delete_post(post_id):
    """Delete a post."""
    post = db.session.get(Post, post_id)
    if not post:
        raise PostNotFound()

    blog = db.session.get(Blog, post.blog_id)
    access.raise_for_denial(access.can_write_post(g.actor, blog), 'Not authorized to delete this post')

    try:
        db.session.delete(post)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error deleting post: {str(e)}')
        raise StoreFailure('Failed to delete post') from e

    return jsonify({'success': True})
