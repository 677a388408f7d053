# Import all models to register them with SQLModel
from blogcore.models.blog import (
    Blog,
    BlogBase,
    BlogCategory,
    BlogCreate,
    BlogUpdate,
    ThumbnailType,
    resolve_thumbnail_url,
)

__all__ = [
    "Blog",
    "BlogBase",
    "BlogCategory",
    "BlogCreate",
    "BlogUpdate",
    "ThumbnailType",
    "resolve_thumbnail_url",
]
