from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Category:
    """Soft classification for articles; deleting one never removes articles."""

    name: str
    slug: str
    description: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
