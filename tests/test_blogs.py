"""
Blog endpoints.

Covers:
- Create, my blogs, trash listing
- Owner-only edit, delete and restore
- Repeated delete / restore errors
"""

from unittest.mock import patch

from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from core.utils import utcnow


def test_create_blog(client, auth_headers):
    response = client.post('/api/blogs', headers=auth_headers('u1'), json={
        'name': ' 나의 블로그 ', 'description': 'hello'
    })
    assert response.status_code == 201
    data = response.get_json()
    assert data['name'] == '나의 블로그'
    assert data['user_id'] == 'u1'
    assert data['deleted_at'] is None


def test_create_blog_requires_name(client, auth_headers):
    response = client.post('/api/blogs', headers=auth_headers('u1'), json={'description': 'x'})
    assert response.status_code == 400
    assert response.get_json()['reason'] == 'MissingFields'


def test_create_blog_refused_for_deleted_account(client, auth_headers, make_profile):
    make_profile('u1', deleted_at=utcnow())
    response = client.post('/api/blogs', headers=auth_headers('u1'), json={'name': 'again'})
    assert response.status_code == 403
    assert response.get_json()['reason'] == 'AccountDeleted'


def test_my_blogs_and_trash(client, auth_headers, make_blog):
    make_blog('u1', name='active')
    make_blog('u1', name='trashed', deleted_at=utcnow())
    make_blog('u2', name='someone else')

    mine = client.get('/api/blogs/my', headers=auth_headers('u1')).get_json()
    assert [b['name'] for b in mine] == ['active']

    trash = client.get('/api/blogs/trash', headers=auth_headers('u1')).get_json()
    assert [b['name'] for b in trash] == ['trashed']


def test_blog_detail(client, make_profile, make_blog):
    make_profile('u1', nickname='owner')
    blog = make_blog('u1')

    data = client.get(f'/api/blogs/{blog.id}').get_json()
    assert data['profile']['nickname'] == 'owner'
    assert client.get('/api/blogs/missing').status_code == 404


def test_update_blog_owner_only(client, auth_headers, make_blog):
    blog = make_blog('u1')
    blog_id = blog.id

    forbidden = client.patch(f'/api/blogs/{blog_id}', headers=auth_headers('u2'), json={'name': 'mine now'})
    assert forbidden.status_code == 403
    assert forbidden.get_json()['error'] == 'Not authorized to edit this blog'

    response = client.patch(f'/api/blogs/{blog_id}', headers=auth_headers('u1'), json={'name': 'renamed'})
    assert response.status_code == 200
    assert response.get_json()['name'] == 'renamed'


def test_delete_and_restore_blog(client, auth_headers, make_blog):
    blog = make_blog('u1')
    blog_id = blog.id
    headers = auth_headers('u1')

    assert client.delete(f'/api/blogs/{blog_id}', headers=auth_headers('u2')).status_code == 403

    response = client.delete(f'/api/blogs/{blog_id}', headers=headers)
    assert response.status_code == 200
    assert response.get_json()['success'] is True

    again = client.delete(f'/api/blogs/{blog_id}', headers=headers)
    assert again.status_code == 400
    assert again.get_json()['reason'] == 'AlreadyDeleted'

    restored = client.patch(f'/api/blogs/{blog_id}/restore', headers=headers)
    assert restored.status_code == 200
    assert restored.get_json()['deleted_at'] is None

    not_deleted = client.patch(f'/api/blogs/{blog_id}/restore', headers=headers)
    assert not_deleted.status_code == 400
    assert not_deleted.get_json()['reason'] == 'NotDeleted'


def test_deleting_blog_keeps_posts_addressable(client, auth_headers, make_blog, make_post):
    blog = make_blog('u1')
    post = make_post(blog)
    post_id = post.id

    client.delete(f'/api/blogs/{blog.id}', headers=auth_headers('u1'))
    assert client.get(f'/api/posts/{post_id}').status_code == 200


def test_store_failure_is_reported_without_detail(client, auth_headers):
    with patch.object(db.session, 'commit', side_effect=SQLAlchemyError('connection lost')):
        response = client.post('/api/blogs', headers=auth_headers('u1'), json={'name': 'doomed'})
    assert response.status_code == 500
    assert response.get_json() == {'error': 'Failed to create blog', 'reason': 'StoreFailure'}


def test_non_object_body_is_rejected(client, auth_headers, make_blog):
    blog = make_blog('u1')
    headers = auth_headers('u1')
    assert client.post('/api/blogs', headers=headers, json=['name']).status_code == 400
    assert client.patch(f'/api/blogs/{blog.id}', headers=headers, json='renamed').status_code == 400
