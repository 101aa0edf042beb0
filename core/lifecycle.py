"""Soft-delete and restore transitions for accounts and blogs.

Both records move between two states, Active (``deleted_at`` is null) and
Deleted (``deleted_at`` set). Transitions are conditional writes, so a
concurrent transition that wins the race makes this one fail with the same
``AlreadyDeleted`` / ``NotDeleted`` error as the read-side check would.

Deleting an account cascades to its active blogs on a best-effort basis:
the account transition is committed first, then each blog is stamped in its
own commit. Blog failures are logged and collected on the result and never
undo the account deletion. Restoring an account does not restore its blogs.
"""

from dataclasses import dataclass, field
from typing import Any, List

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from blogs.models import Blog
from profiles.models import Profile
from .utils import utcnow
from . import access, errors


@dataclass
class TransitionResult:
    record: Any
    cascade_errors: List[str] = field(default_factory=list)

    @property
    def cascade_complete(self):
        return not self.cascade_errors


def _conditional_stamp(model, record_id, currently_deleted, value):
    """Write ``deleted_at = value`` only if the row is still in the expected state."""
    state = model.deleted_at.isnot(None) if currently_deleted else model.deleted_at.is_(None)
    return model.query.filter(model.id == record_id, state).update(
        {model.deleted_at: value}, synchronize_session=False
    )


def _transition(model, record, deleting, conflict_error):
    value = utcnow() if deleting else None
    updated = _conditional_stamp(model, record.id, not deleting, value)
    if not updated:
        db.session.rollback()
        raise conflict_error
    db.session.commit()
    return value


def _stamp_blog(blog, value):
    _conditional_stamp(Blog, blog.id, False, value)
    db.session.commit()


def _cascade_delete_blogs(user_id, value):
    failures = []
    blogs = Blog.query.filter(Blog.user_id == user_id, Blog.deleted_at.is_(None)).all()
    for blog in blogs:
        blog_id = blog.id
        try:
            _stamp_blog(blog, value)
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.error(f'Cascade delete failed for blog {blog_id}: {str(exc)}')
            failures.append(f'{blog_id}: {exc}')
    return failures


def _load_profile(actor, user_id):
    access.raise_for_denial(access.can_write_profile(actor, user_id))
    profile = db.session.get(Profile, user_id)
    if profile is None:
        raise errors.ProfileNotFound()
    return profile


def delete_account(actor, user_id) -> TransitionResult:
    """Active -> Deleted for an account, cascading to its active blogs."""
    profile = _load_profile(actor, user_id)
    if profile.is_deleted:
        raise errors.AlreadyDeleted('Account is already deleted')

    now = _transition(Profile, profile, True, errors.AlreadyDeleted('Account is already deleted'))
    current_app.logger.info(f'Account {user_id} soft-deleted')

    failures = _cascade_delete_blogs(user_id, now)
    if failures:
        current_app.logger.error(
            f'Account {user_id} deleted with {len(failures)} blog cascade failure(s)'
        )
    return TransitionResult(db.session.get(Profile, user_id), failures)


def restore_account(actor, user_id) -> TransitionResult:
    """Deleted -> Active for an account. Blogs stay in the trash."""
    profile = _load_profile(actor, user_id)
    if not profile.is_deleted:
        raise errors.NotDeleted('Account is not deleted')

    _transition(Profile, profile, False, errors.NotDeleted('Account is not deleted'))
    current_app.logger.info(f'Account {user_id} restored')
    return TransitionResult(db.session.get(Profile, user_id))


def _load_blog(actor, blog_id):
    blog = db.session.get(Blog, blog_id)
    access.raise_for_denial(access.can_manage_blog(actor, blog))
    return blog


def delete_blog(actor, blog_id) -> TransitionResult:
    blog = _load_blog(actor, blog_id)
    if blog.is_deleted:
        raise errors.AlreadyDeleted('Blog is already deleted')

    _transition(Blog, blog, True, errors.AlreadyDeleted('Blog is already deleted'))
    current_app.logger.info(f'Blog {blog_id} moved to trash')
    return TransitionResult(db.session.get(Blog, blog_id))


def restore_blog(actor, blog_id) -> TransitionResult:
    blog = _load_blog(actor, blog_id)
    if not blog.is_deleted:
        raise errors.NotDeleted('Blog is not deleted')

    _transition(Blog, blog, False, errors.NotDeleted('Blog is not deleted'))
    current_app.logger.info(f'Blog {blog_id} restored')
    return TransitionResult(db.session.get(Blog, blog_id))


def ensure_active_account(actor):
    """Reject new content from a soft-deleted account.

    Accounts without a synced profile are treated as active; the identity
    provider remains the source of truth for who the user is."""
    profile = db.session.get(Profile, actor.id)
    if profile is not None and profile.is_deleted:
        raise errors.AccountDeleted()
