"""Helpers for post creation and update."""

import re
from typing import List, Optional

from categories.models import Category

IMG_SRC_REGEX = re.compile(r"""<img[^>]+src=["']([^"']+)["']""")


def extract_first_image_url(content: Optional[str]) -> Optional[str]:
    """Return the ``src`` of the first ``<img>`` in HTML *content*, used as the post thumbnail."""
    if not content:
        return None
    match = IMG_SRC_REGEX.search(content)
    return match.group(1) if match else None


def resolve_categories(category_ids, limit: int) -> List[Category]:
    """Load up to *limit* categories for *category_ids*.

    Ids past the cap are dropped before lookup and unknown ids are ignored.
    Once saved, ``Post.categories`` lists them by name."""
    if not isinstance(category_ids, list):
        return []
    wanted = []
    for category_id in category_ids[:limit]:
        if category_id and category_id not in wanted:
            wanted.append(str(category_id))
    if not wanted:
        return []
    found = {c.id: c for c in Category.query.filter(Category.id.in_(wanted)).all()}
    return [found[category_id] for category_id in wanted if category_id in found]
