from flask import jsonify, current_app, g
from flasgger import swag_from
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from auth import auth_required
from core import access, lifecycle
from core.errors import BlogNotFound, MissingFields, StoreFailure
from core.utils import request_json
from profiles.models import Profile
from .models import Blog
from . import blogs_bp

BLOG_ID_PARAM = {
    'name': 'blog_id',
    'in': 'path',
    'type': 'string',
    'required': True,
    'description': 'ID of the blog'
}

@blogs_bp.route('/my', methods=['GET'])
@auth_required
@swag_from({
    'tags': ['Blogs'],
    'description': 'List the current user\'s active blogs',
    'security': [{'Bearer': []}],
    'responses': {
        '200': {'description': 'Active blogs, oldest first'},
        '401': {'description': 'Unauthorized'}
    }
})
def get_my_blogs():
    blogs = Blog.query.filter(Blog.user_id == g.actor.id, Blog.deleted_at.is_(None))\
        .order_by(Blog.created_at.asc())\
        .all()
    return jsonify([blog.to_dict() for blog in blogs])

@blogs_bp.route('/trash', methods=['GET'])
@auth_required
@swag_from({
    'tags': ['Blogs'],
    'description': 'List the current user\'s soft-deleted blogs',
    'security': [{'Bearer': []}],
    'responses': {
        '200': {'description': 'Deleted blogs, most recently deleted first'},
        '401': {'description': 'Unauthorized'}
    }
})
def get_deleted_blogs():
    blogs = Blog.query.filter(Blog.user_id == g.actor.id, Blog.deleted_at.isnot(None))\
        .order_by(Blog.deleted_at.desc())\
        .all()
    return jsonify([blog.to_dict() for blog in blogs])

@blogs_bp.route('', methods=['POST'])
@auth_required
@swag_from({
    'tags': ['Blogs'],
    'description': 'Create a new blog',
    'security': [{'Bearer': []}],
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': {
            'type': 'object',
            'properties': {
                'name': {'type': 'string', 'example': '나의 블로그'},
                'description': {'type': 'string', 'example': '블로그를 소개해주세요'},
                'thumbnail_url': {'type': 'string'}
            },
            'required': ['name']
        }
    }],
    'responses': {
        '201': {'description': 'Blog created', 'schema': {'$ref': '#/definitions/Blog'}},
        '400': {'description': 'Missing name'},
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Account deleted'}
    }
})
def create_blog():
    """Create a blog owned by the current user."""
    data = request_json()
    name = str(data.get('name') or '').strip()
    if not name:
        raise MissingFields('Blog name is required')

    lifecycle.ensure_active_account(g.actor)

    description = str(data.get('description') or '').strip()
    blog = Blog(
        user_id=g.actor.id,
        name=name,
        description=description or None,
        thumbnail_url=data.get('thumbnail_url')
    )

    try:
        db.session.add(blog)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error creating blog: {str(e)}')
        raise StoreFailure('Failed to create blog') from e

    return jsonify(blog.to_dict()), 201

@blogs_bp.route('/<blog_id>', methods=['GET'])
@swag_from({
    'tags': ['Blogs'],
    'description': 'Get a blog with its owner\'s public profile',
    'parameters': [BLOG_ID_PARAM],
    'responses': {
        '200': {'description': 'Blog detail', 'schema': {'$ref': '#/definitions/Blog'}},
        '404': {'description': 'Blog not found'}
    }
})
def get_blog(blog_id):
    blog = db.session.get(Blog, blog_id)
    if not blog:
        raise BlogNotFound()

    profile = db.session.get(Profile, blog.user_id)
    data = blog.to_dict()
    data['profile'] = profile.to_public_dict() if profile else None
    return jsonify(data)

@blogs_bp.route('/<blog_id>', methods=['PATCH'])
@auth_required
@swag_from({
    'tags': ['Blogs'],
    'description': 'Update a blog\'s name, description or thumbnail',
    'security': [{'Bearer': []}],
    'parameters': [
        BLOG_ID_PARAM,
        {
            'name': 'body',
            'in': 'body',
            'required': True,
            'schema': {
                'type': 'object',
                'properties': {
                    'name': {'type': 'string'},
                    'description': {'type': 'string'},
                    'thumbnail_url': {'type': 'string'}
                }
            }
        }
    ],
    'responses': {
        '200': {'description': 'Blog updated', 'schema': {'$ref': '#/definitions/Blog'}},
        '403': {'description': 'Not the blog owner'},
        '404': {'description': 'Blog not found'}
    }
})
def update_blog(blog_id):
    blog = db.session.get(Blog, blog_id)
    access.raise_for_denial(access.can_manage_blog(g.actor, blog), 'Not authorized to edit this blog')

    data = request_json()
    if data.get('name') is not None:
        name = str(data['name']).strip()
        if not name:
            raise MissingFields('Blog name cannot be empty')
        blog.name = name
    if 'description' in data:
        blog.description = data['description']
    if 'thumbnail_url' in data:
        blog.thumbnail_url = data['thumbnail_url']

    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error updating blog: {str(e)}')
        raise StoreFailure('Failed to update blog') from e

    return jsonify(blog.to_dict())

@blogs_bp.route('/<blog_id>', methods=['DELETE'])
@auth_required
@swag_from({
    'tags': ['Blogs'],
    'description': 'Move a blog to the trash (soft delete). Its posts are left untouched.',
    'security': [{'Bearer': []}],
    'parameters': [BLOG_ID_PARAM],
    'responses': {
        '200': {'description': 'Blog deleted', 'schema': {'$ref': '#/definitions/Success'}},
        '400': {'description': 'Blog is already deleted'},
        '403': {'description': 'Not the blog owner'},
        '404': {'description': 'Blog not found'}
    }
})
def delete_blog(blog_id):
    lifecycle.delete_blog(g.actor, blog_id)
    return jsonify({'success': True, 'message': 'Blog moved to trash'})

@blogs_bp.route('/<blog_id>/restore', methods=['PATCH'])
@auth_required
@swag_from({
    'tags': ['Blogs'],
    'description': 'Restore a blog from the trash',
    'security': [{'Bearer': []}],
    'parameters': [BLOG_ID_PARAM],
    'responses': {
        '200': {'description': 'Blog restored', 'schema': {'$ref': '#/definitions/Blog'}},
        '400': {'description': 'Blog is not deleted'},
        '403': {'description': 'Not the blog owner'},
        '404': {'description': 'Blog not found'}
    }
})
def restore_blog(blog_id):
    result = lifecycle.restore_blog(g.actor, blog_id)
    return jsonify(result.record.to_dict())
