"""Ownership and visibility decisions for posts, blogs, profiles and forum entries.

Every check is a plain equality between opaque identity strings; there are
no roles, groups or delegated capabilities. Checks return an
``(allowed, denial)`` tuple instead of raising, and treat missing records as
an unconditional denial. Routes turn a denial into an HTTP failure with
:func:`raise_for_denial`.

Listing is deliberately looser than reading: listings return every post,
private ones included, and only the single-post detail fetch applies
:func:`can_read_post`.
"""

import enum
from typing import Optional, Tuple

from app.extensions import db
from blogs.models import Blog
from posts.models import Post
from . import errors


class Denial(enum.Enum):
    UNAUTHENTICATED = 'Unauthenticated'
    NOT_OWNER = 'NotOwner'
    PRIVATE_POST = 'PrivatePost'
    BLOG_NOT_FOUND = 'BlogNotFound'


Decision = Tuple[bool, Optional[Denial]]

ALLOWED: Decision = (True, None)

_DENIAL_ERRORS = {
    Denial.UNAUTHENTICATED: errors.Unauthenticated,
    Denial.NOT_OWNER: errors.NotOwner,
    Denial.PRIVATE_POST: errors.PrivatePost,
    Denial.BLOG_NOT_FOUND: errors.BlogNotFound,
}


def _deny(denial: Denial) -> Decision:
    return False, denial


def can_read_post(actor, post: Post) -> Decision:
    """Public posts are readable by anyone; private ones only by ``post.user_id``.

    The comparison uses the post's denormalized owner, not the blog's current
    owner."""
    if not post.is_private:
        return ALLOWED
    if actor is not None and actor.id == post.user_id:
        return ALLOWED
    return _deny(Denial.PRIVATE_POST)


def _owns_blog(actor, blog: Optional[Blog]) -> Decision:
    if actor is None:
        return _deny(Denial.UNAUTHENTICATED)
    if blog is None:
        return _deny(Denial.BLOG_NOT_FOUND)
    if actor.id != blog.user_id:
        return _deny(Denial.NOT_OWNER)
    return ALLOWED


def can_write_post(actor, blog: Optional[Blog]) -> Decision:
    """Create/update/delete of a post is allowed only for the owner of its blog.

    ``blog`` must be a fresh lookup of the post's ``blog_id``; ``None`` means
    the lookup missed and yields ``BLOG_NOT_FOUND`` rather than ``NOT_OWNER``."""
    return _owns_blog(actor, blog)


def can_write_post_in(actor, blog_id) -> Decision:
    """:func:`can_write_post` with the blog looked up from ``blog_id``."""
    blog = db.session.get(Blog, blog_id) if blog_id else None
    return can_write_post(actor, blog)


def can_manage_blog(actor, blog: Optional[Blog]) -> Decision:
    return _owns_blog(actor, blog)


def can_write_profile(actor, target_user_id) -> Decision:
    """Profile sync/delete/restore: an account may act only on itself."""
    if actor is None:
        return _deny(Denial.UNAUTHENTICATED)
    if actor.id != target_user_id:
        return _deny(Denial.NOT_OWNER)
    return ALLOWED


def is_author(actor, user_id) -> Decision:
    if actor is None:
        return _deny(Denial.UNAUTHENTICATED)
    if actor.id != user_id:
        return _deny(Denial.NOT_OWNER)
    return ALLOWED


def post_listing_criteria(feed=False):
    """Filter criteria applied when listing posts.

    General listings apply none: private and unpublished posts are listed.
    The subscription feed restricts to published posts."""
    if feed:
        return [Post.published.is_(True)]
    return []


def raise_for_denial(decision: Decision, not_owner_message=None):
    """Raise the taxonomy error for a denied decision; no-op when allowed."""
    allowed, denial = decision
    if allowed:
        return
    if denial is Denial.NOT_OWNER:
        raise errors.NotOwner(not_owner_message)
    raise _DENIAL_ERRORS[denial]()
