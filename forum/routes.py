from flask import request, jsonify, current_app, g
from flasgger import swag_from
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from auth import auth_required
from blogs.models import Blog
from core import access, lifecycle
from core.errors import CommentNotFound, ForumNotFound, MissingFields, StoreFailure
from core.utils import request_json, window_args
from .models import Forum, ForumComment
from . import forum_bp

ALL_CATEGORIES = '전체'
SEARCH_TYPES = ('title', 'content', 'title_content')

FORUM_ID_PARAM = {
    'name': 'forum_id',
    'in': 'path',
    'type': 'string',
    'required': True,
    'description': 'ID of the forum post'
}

def _blog_summaries(blog_ids):
    blog_ids = {blog_id for blog_id in blog_ids if blog_id}
    if not blog_ids:
        return {}
    return {blog.id: blog.to_summary() for blog in Blog.query.filter(Blog.id.in_(blog_ids)).all()}

def _comment_counts(forum_ids):
    if not forum_ids:
        return {}
    rows = db.session.query(ForumComment.forum_id, func.count(ForumComment.id))\
        .filter(ForumComment.forum_id.in_(forum_ids))\
        .group_by(ForumComment.forum_id)\
        .all()
    return dict(rows)

def _search_filter(q, search_type):
    pattern = f'%{q}%'
    if search_type == 'title':
        return Forum.title.ilike(pattern)
    if search_type == 'content':
        return Forum.description.ilike(pattern)
    return or_(Forum.title.ilike(pattern), Forum.description.ilike(pattern))

@forum_bp.route('', methods=['GET'])
@swag_from({
    'tags': ['Forum'],
    'description': 'List forum posts, newest first',
    'parameters': [
        {'name': 'limit', 'in': 'query', 'type': 'integer', 'default': 20},
        {'name': 'offset', 'in': 'query', 'type': 'integer', 'default': 0},
        {'name': 'category', 'in': 'query', 'type': 'string', 'description': 'Title prefix category; 전체 lists everything'},
        {'name': 'q', 'in': 'query', 'type': 'string', 'description': 'Search text'},
        {'name': 'type', 'in': 'query', 'type': 'string', 'enum': list(SEARCH_TYPES), 'default': 'title_content'}
    ],
    'responses': {
        '200': {'description': 'Forum posts with blog summary and comment count'}
    }
})
def get_forums():
    limit, offset = window_args(request.args, current_app.config['FORUM_PAGE_SIZE'])
    category = request.args.get('category')
    q = (request.args.get('q') or '').strip()
    search_type = request.args.get('type', 'title_content')

    query = Forum.query
    if category and category != ALL_CATEGORIES:
        query = query.filter(Forum.title.ilike(f'[{category}]%'))
    if q:
        query = query.filter(_search_filter(q, search_type))

    forums = query.order_by(Forum.created_at.desc()).offset(offset).limit(limit).all()

    blogs = _blog_summaries(forum.blog_id for forum in forums)
    counts = _comment_counts([forum.id for forum in forums])
    result = []
    for forum in forums:
        item = forum.to_dict()
        item['blog'] = blogs.get(forum.blog_id)
        item['comment_count'] = counts.get(forum.id, 0)
        item['view_count'] = 0
        result.append(item)
    return jsonify(result)

@forum_bp.route('/<forum_id>', methods=['GET'])
@swag_from({
    'tags': ['Forum'],
    'description': 'Get a single forum post',
    'parameters': [FORUM_ID_PARAM],
    'responses': {
        '200': {'description': 'Forum post', 'schema': {'$ref': '#/definitions/Forum'}},
        '404': {'description': 'Forum post not found'}
    }
})
def get_forum(forum_id):
    forum = db.session.get(Forum, forum_id)
    if not forum:
        raise ForumNotFound()

    data = forum.to_dict()
    data['blog'] = _blog_summaries([forum.blog_id]).get(forum.blog_id)
    data['view_count'] = 0
    data['comment_count'] = 0
    return jsonify(data)

@forum_bp.route('', methods=['POST'])
@auth_required
@swag_from({
    'tags': ['Forum'],
    'description': 'Create a forum post. A category is stored as a "[category] " title prefix.',
    'security': [{'Bearer': []}],
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': {
            'type': 'object',
            'properties': {
                'title': {'type': 'string', 'example': '블로그 이웃 구해요'},
                'description': {'type': 'string'},
                'category': {'type': 'string', 'example': '자유'},
                'blog_id': {'type': 'string'}
            },
            'required': ['title']
        }
    }],
    'responses': {
        '201': {'description': 'Forum post created', 'schema': {'$ref': '#/definitions/Forum'}},
        '400': {'description': 'Missing title'},
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Account deleted'}
    }
})
def create_forum():
    data = request_json()
    title = str(data.get('title') or '').strip()
    if not title:
        raise MissingFields('Title is required')

    lifecycle.ensure_active_account(g.actor)

    category = str(data.get('category') or '').strip()
    if category:
        title = f'[{category}] {title}'

    forum = Forum(
        title=title,
        description=data.get('description'),
        user_id=g.actor.id,
        blog_id=data.get('blog_id')
    )
    try:
        db.session.add(forum)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error creating forum post: {str(e)}')
        raise StoreFailure('Failed to create forum post') from e

    return jsonify(forum.to_dict()), 201

@forum_bp.route('/<forum_id>', methods=['DELETE'])
@auth_required
@swag_from({
    'tags': ['Forum'],
    'description': 'Delete a forum post and its comments',
    'security': [{'Bearer': []}],
    'parameters': [FORUM_ID_PARAM],
    'responses': {
        '200': {'description': 'Forum post deleted', 'schema': {'$ref': '#/definitions/Success'}},
        '403': {'description': 'Not the author'},
        '404': {'description': 'Forum post not found'}
    }
})
def delete_forum(forum_id):
    forum = db.session.get(Forum, forum_id)
    if not forum:
        raise ForumNotFound()
    access.raise_for_denial(access.is_author(g.actor, forum.user_id), 'Not authorized to delete this forum post')

    try:
        db.session.delete(forum)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error deleting forum post: {str(e)}')
        raise StoreFailure('Failed to delete forum post') from e

    return jsonify({'success': True})

@forum_bp.route('/<forum_id>/comments', methods=['GET'])
@swag_from({
    'tags': ['Forum'],
    'description': 'Comments of a forum post, oldest first',
    'parameters': [FORUM_ID_PARAM],
    'responses': {
        '200': {'description': 'Comments with the commenter\'s blog summary'}
    }
})
def get_comments(forum_id):
    comments = ForumComment.query.filter_by(forum_id=forum_id)\
        .order_by(ForumComment.created_at.asc())\
        .all()

    blogs = _blog_summaries(comment.blog_id for comment in comments)
    result = []
    for comment in comments:
        item = comment.to_dict()
        item['blog'] = blogs.get(comment.blog_id)
        result.append(item)
    return jsonify(result)

@forum_bp.route('/comments', methods=['POST'])
@auth_required
@swag_from({
    'tags': ['Forum'],
    'description': 'Comment on a forum post',
    'security': [{'Bearer': []}],
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': {
            'type': 'object',
            'properties': {
                'forum_id': {'type': 'string'},
                'content': {'type': 'string'},
                'blog_id': {'type': 'string'}
            },
            'required': ['forum_id', 'content']
        }
    }],
    'responses': {
        '201': {'description': 'Comment created'},
        '400': {'description': 'Missing forum_id or content'},
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Account deleted'},
        '404': {'description': 'Forum post not found'}
    }
})
def create_comment():
    data = request_json()
    forum_id = data.get('forum_id')
    content = str(data.get('content') or '').strip()
    if not forum_id or not content:
        raise MissingFields('forum_id and content are required')

    lifecycle.ensure_active_account(g.actor)

    if not db.session.get(Forum, forum_id):
        raise ForumNotFound()

    comment = ForumComment(
        forum_id=forum_id,
        user_id=g.actor.id,
        blog_id=data.get('blog_id'),
        content=content
    )
    try:
        db.session.add(comment)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error creating comment: {str(e)}')
        raise StoreFailure('Failed to create comment') from e

    return jsonify(comment.to_dict()), 201

@forum_bp.route('/comments/<comment_id>', methods=['DELETE'])
@auth_required
@swag_from({
    'tags': ['Forum'],
    'description': 'Delete a forum comment',
    'security': [{'Bearer': []}],
    'parameters': [
        {'name': 'comment_id', 'in': 'path', 'type': 'string', 'required': True}
    ],
    'responses': {
        '200': {'description': 'Comment deleted', 'schema': {'$ref': '#/definitions/Success'}},
        '403': {'description': 'Not the author'},
        '404': {'description': 'Comment not found'}
    }
})
def delete_comment(comment_id):
    comment = db.session.get(ForumComment, comment_id)
    if not comment:
        raise CommentNotFound()
    access.raise_for_denial(access.is_author(g.actor, comment.user_id), 'Not authorized to delete this comment')

    try:
        db.session.delete(comment)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error deleting comment: {str(e)}')
        raise StoreFailure('Failed to delete comment') from e

    return jsonify({'success': True})
