"""Failure taxonomy shared by the access-control and lifecycle code.

Each failure kind carries a fixed HTTP status and a short machine-usable
``reason``; the gateway serializes them as ``{"error": ..., "reason": ...}``
without any stack detail.
"""

from flask import jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db


class SnuggleError(Exception):
    status_code = 500
    reason = 'StoreFailure'
    message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        return {'error': self.message, 'reason': self.reason}


class Unauthenticated(SnuggleError):
    status_code = 401
    reason = 'Unauthenticated'
    message = 'Authentication required'


class NotOwner(SnuggleError):
    status_code = 403
    reason = 'NotOwner'
    message = 'Not authorized to modify this resource'


class PrivatePost(SnuggleError):
    status_code = 403
    reason = 'PrivatePost'
    message = 'Private post'


class AccountDeleted(SnuggleError):
    status_code = 403
    reason = 'AccountDeleted'
    message = 'Account is deleted'


class ResourceNotFound(SnuggleError):
    status_code = 404
    reason = 'ResourceNotFound'
    message = 'Resource not found'


class PostNotFound(ResourceNotFound):
    reason = 'PostNotFound'
    message = 'Post not found'


class BlogNotFound(ResourceNotFound):
    reason = 'BlogNotFound'
    message = 'Blog not found'


class ProfileNotFound(ResourceNotFound):
    reason = 'ProfileNotFound'
    message = 'Profile not found'


class ForumNotFound(ResourceNotFound):
    reason = 'ForumNotFound'
    message = 'Forum not found'


class CommentNotFound(ResourceNotFound):
    reason = 'CommentNotFound'
    message = 'Comment not found'


class MissingFields(SnuggleError):
    status_code = 400
    reason = 'MissingFields'
    message = 'Missing required fields'


class AlreadyDeleted(SnuggleError):
    status_code = 400
    reason = 'AlreadyDeleted'
    message = 'Already deleted'


class NotDeleted(SnuggleError):
    status_code = 400
    reason = 'NotDeleted'
    message = 'Not deleted'


class StoreFailure(SnuggleError):
    pass


def register_error_handlers(app):
    """Map taxonomy exceptions and store errors to JSON responses."""

    @app.errorhandler(SnuggleError)
    def handle_snuggle_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(error):
        db.session.rollback()
        current_app.logger.error(f'Entity store error: {str(error)}')
        return jsonify(StoreFailure().to_dict()), StoreFailure.status_code
