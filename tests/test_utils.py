from app.extensions import db
from categories.models import Category
from posts.utils import extract_first_image_url, resolve_categories


def test_extract_first_image_url():
    html = '<p>intro</p><img class="a" src=\'first.jpg\'><img src="second.jpg">'
    assert extract_first_image_url(html) == 'first.jpg'
    assert extract_first_image_url('<p>no images</p>') is None
    assert extract_first_image_url(None) is None


def test_resolve_categories_caps_and_skips_unknown(app):
    categories = [Category(name=f'c{i}') for i in range(3)]
    db.session.add_all(categories)
    db.session.commit()
    a, b, c = [category.id for category in categories]

    resolved = resolve_categories([b, 'unknown', a, b, c], limit=4)

    assert [category.id for category in resolved] == [b, a]
    assert resolve_categories('not-a-list', limit=5) == []
