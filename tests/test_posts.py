"""
Post endpoints.

Covers:
- Private post detail visible only to its author (listing then detail)
- Listings keep private posts but withhold their content
- Create: BlogNotFound vs NotOwner, deleted account, missing fields
- Thumbnail taken from the first image, category cap
- Update and delete require blog ownership
- Subscription feed
"""

from app.extensions import db
from categories.models import Category
from core.utils import utcnow
from subscriptions.models import Subscription


def test_private_post_detail_forbidden_for_other_user(client, auth_headers, make_blog, make_post):
    """U2 sees U1's private post in the listing but gets 403 on the detail"""
    blog = make_blog('u1')
    post = make_post(blog, title='secret', content='<p>diary</p>', is_private=True)
    post_id = post.id

    listing = client.get('/api/posts', headers=auth_headers('u2'))
    assert listing.status_code == 200
    item = next(p for p in listing.get_json() if p['id'] == post_id)
    assert item['is_private'] is True
    assert item['content'] is None

    response = client.get(f'/api/posts/{post_id}', headers=auth_headers('u2'))
    assert response.status_code == 403
    assert response.get_json()['reason'] == 'PrivatePost'

    anonymous = client.get(f'/api/posts/{post_id}')
    assert anonymous.status_code == 403


def test_private_post_detail_visible_to_author(client, auth_headers, make_profile, make_blog, make_post):
    make_profile('u1', nickname='writer')
    blog = make_blog('u1', name='diary')
    post = make_post(blog, content='<p>mine</p>', is_private=True)

    response = client.get(f'/api/posts/{post.id}', headers=auth_headers('u1'))
    assert response.status_code == 200
    data = response.get_json()
    assert data['content'] == '<p>mine</p>'
    assert data['blog']['name'] == 'diary'
    assert data['profile']['nickname'] == 'writer'


def test_post_detail_not_found(client, make_blog, make_post):
    assert client.get('/api/posts/missing').status_code == 404

    blog = make_blog('u1')
    post = make_post(blog)
    post_id = post.id
    db.session.delete(blog)
    db.session.commit()

    response = client.get(f'/api/posts/{post_id}')
    assert response.status_code == 404
    assert response.get_json()['reason'] == 'BlogNotFound'


def test_listing_includes_blog_summary(client, make_blog, make_post):
    blog = make_blog('u1', name='travel')
    make_post(blog)

    data = client.get('/api/posts').get_json()
    assert data[0]['blog'] == {'name': 'travel', 'thumbnail_url': None}


def test_blog_posts_listing(client, make_blog, make_post):
    blog = make_blog('u1')
    other = make_blog('u2')
    make_post(blog, title='a')
    make_post(blog, title='b', is_private=True)
    make_post(other, title='c')

    data = client.get(f'/api/posts/blog/{blog.id}').get_json()
    assert sorted(p['title'] for p in data) == ['a', 'b']


def test_create_post_in_own_blog(client, auth_headers, make_blog):
    blog = make_blog('u1')
    response = client.post('/api/posts', headers=auth_headers('u1'), json={
        'blog_id': blog.id,
        'title': '  first  ',
        'content': '<p>hi</p><img src="https://cdn.example.com/a.png"><img src="b.png">'
    })
    assert response.status_code == 201
    data = response.get_json()
    assert data['title'] == 'first'
    assert data['user_id'] == 'u1'
    assert data['thumbnail_url'] == 'https://cdn.example.com/a.png'
    assert data['is_private'] is False


def test_create_post_in_someone_elses_blog(client, auth_headers, make_blog):
    blog = make_blog('u1')
    response = client.post('/api/posts', headers=auth_headers('u2'), json={
        'blog_id': blog.id, 'title': 'intruder'
    })
    assert response.status_code == 403
    assert response.get_json()['reason'] == 'NotOwner'


def test_create_post_in_missing_blog(client, auth_headers):
    """A missing blog is a 404, not an ownership failure"""
    response = client.post('/api/posts', headers=auth_headers('u1'), json={
        'blog_id': 'missing', 'title': 'lost'
    })
    assert response.status_code == 404
    assert response.get_json()['reason'] == 'BlogNotFound'


def test_update_and_delete_post_in_missing_blog(client, auth_headers, make_blog, make_post):
    blog = make_blog('u1')
    post = make_post(blog)
    post_id = post.id
    db.session.delete(blog)
    db.session.commit()

    patched = client.patch(f'/api/posts/{post_id}', headers=auth_headers('u1'), json={'title': 'x'})
    assert patched.status_code == 404
    assert patched.get_json()['reason'] == 'BlogNotFound'

    deleted = client.delete(f'/api/posts/{post_id}', headers=auth_headers('u1'))
    assert deleted.status_code == 404
    assert deleted.get_json()['reason'] == 'BlogNotFound'


def test_private_post_follows_recorded_author_not_blog_owner(client, auth_headers, make_blog, make_post):
    """Privacy compares against post.user_id even when the blog belongs to someone else"""
    blog = make_blog('u2')
    post = make_post(blog, is_private=True)
    post.user_id = 'u1'
    db.session.commit()
    post_id = post.id

    assert client.get(f'/api/posts/{post_id}', headers=auth_headers('u1')).status_code == 200

    response = client.get(f'/api/posts/{post_id}', headers=auth_headers('u2'))
    assert response.status_code == 403
    assert response.get_json()['reason'] == 'PrivatePost'


def test_is_private_accepts_only_booleans(client, auth_headers, make_blog):
    blog = make_blog('u1')
    headers = auth_headers('u1')

    created = client.post('/api/posts', headers=headers, json={
        'blog_id': blog.id, 'title': 't', 'is_private': 'false'
    })
    assert created.get_json()['is_private'] is False
    post_id = created.get_json()['id']

    client.patch(f'/api/posts/{post_id}', headers=headers, json={'is_private': True})
    unchanged = client.patch(f'/api/posts/{post_id}', headers=headers, json={'is_private': 'false'})
    assert unchanged.get_json()['is_private'] is True


def test_non_object_body_is_rejected(client, auth_headers):
    response = client.post('/api/posts', headers=auth_headers('u1'), json=[1])
    assert response.status_code == 400
    assert response.get_json()['reason'] == 'MissingFields'


def test_create_post_validation(client, auth_headers):
    assert client.post('/api/posts', json={'blog_id': 'b', 'title': 't'}).status_code == 401

    response = client.post('/api/posts', headers=auth_headers('u1'), json={'title': 'no blog'})
    assert response.status_code == 400
    assert response.get_json()['reason'] == 'MissingFields'


def test_create_post_refused_for_deleted_account(client, auth_headers, make_profile, make_blog):
    make_profile('u1', deleted_at=utcnow())
    blog = make_blog('u1')
    response = client.post('/api/posts', headers=auth_headers('u1'), json={
        'blog_id': blog.id, 'title': 'ghost'
    })
    assert response.status_code == 403
    assert response.get_json()['reason'] == 'AccountDeleted'


def test_create_post_caps_categories(client, auth_headers, make_blog):
    blog = make_blog('u1')
    categories = [Category(name=f'c{i}') for i in range(7)]
    db.session.add_all(categories)
    db.session.commit()
    ids = [c.id for c in categories]

    response = client.post('/api/posts', headers=auth_headers('u1'), json={
        'blog_id': blog.id, 'title': 't', 'category_ids': list(reversed(ids))
    })
    assert response.status_code == 201
    # the first five requested (c6..c2) are kept, listed by name
    assert response.get_json()['category_ids'] == ids[2:]

    post_id = response.get_json()['id']
    detail = client.get(f'/api/posts/{post_id}').get_json()
    assert [c['name'] for c in detail['categories']] == ['c2', 'c3', 'c4', 'c5', 'c6']


def test_update_post(client, auth_headers, make_blog, make_post):
    blog = make_blog('u1')
    post = make_post(blog, content='<img src="old.png">')
    post_id = post.id

    forbidden = client.patch(f'/api/posts/{post_id}', headers=auth_headers('u2'), json={'title': 'x'})
    assert forbidden.status_code == 403

    response = client.patch(f'/api/posts/{post_id}', headers=auth_headers('u1'), json={
        'title': 'renamed', 'content': '<p>no images</p>', 'is_private': True
    })
    assert response.status_code == 200
    data = response.get_json()
    assert data['title'] == 'renamed'
    assert data['thumbnail_url'] is None
    assert data['is_private'] is True

    empty = client.patch(f'/api/posts/{post_id}', headers=auth_headers('u1'), json={'title': '  '})
    assert empty.status_code == 400


def test_delete_post(client, auth_headers, make_blog, make_post):
    blog = make_blog('u1')
    post = make_post(blog)
    post_id = post.id

    assert client.delete(f'/api/posts/{post_id}', headers=auth_headers('u2')).status_code == 403

    response = client.delete(f'/api/posts/{post_id}', headers=auth_headers('u1'))
    assert response.status_code == 200
    assert response.get_json() == {'success': True}
    assert client.get(f'/api/posts/{post_id}').status_code == 404


def test_feed_lists_published_posts_of_subscriptions(client, auth_headers, make_blog, make_post):
    followed = make_blog('u1')
    stranger = make_blog('u3')
    make_post(followed, title='visible')
    make_post(followed, title='draft', published=False)
    make_post(stranger, title='other')
    db.session.add(Subscription(sub_id='u2', subed_id='u1'))
    db.session.commit()

    response = client.get('/api/posts/feed', headers=auth_headers('u2'))
    assert response.status_code == 200
    assert [p['title'] for p in response.get_json()] == ['visible']

    assert client.get('/api/posts/feed', headers=auth_headers('u9')).get_json() == []
    assert client.get('/api/posts/feed').status_code == 401
