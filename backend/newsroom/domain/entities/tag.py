from dataclasses import dataclass


@dataclass
class Tag:
    """Free-form label attached to articles through the article_tags association."""

    name: str
    slug: str
    id: int | None = None
