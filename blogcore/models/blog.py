from typing import Optional
from datetime import datetime, timezone
from enum import Enum
from sqlmodel import Field, SQLModel, Column
from pydantic import computed_field, field_validator
from sqlalchemy import Enum as SAEnum, Index, Text
from blogcore.core.config import settings

class BlogCategory(str, Enum):
    STRATEGY = "Strategy"
    MARKETING_AND_SALES = "Marketing and Sales"
    FINANCE = "Finance"
    MINDSET = "Mindset"
    COMMUNICATION = "Communication"

class ThumbnailType(str, Enum):
    FILE = "file"  # filename of an uploaded image
    URL = "url"  # fully-qualified external URL


def resolve_thumbnail_url(thumbnail: str, thumbnail_type: ThumbnailType, uploads_path: Optional[str] = None) -> str:
    """
    Get the URL a client should fetch a thumbnail from.

    Uploaded files are served under the uploads path; external URLs are
    returned unchanged. The stored value is not escaped.
    """
    if thumbnail_type == ThumbnailType.FILE:
        prefix = (uploads_path if uploads_path is not None else settings.UPLOADS_URL_PATH).rstrip("/")
        return f"{prefix}/{thumbnail}"
    return thumbnail


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum_values(enum_cls) -> list:
    # Store "Marketing and Sales", not "MARKETING_AND_SALES"
    return [member.value for member in enum_cls]


def _require_text(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("must not be empty")
    return value


class BlogBase(SQLModel):
    title: str = Field(max_length=200, index=True)
    description: str = Field(max_length=5000)  # Short excerpt/summary
    category: BlogCategory
    thumbnail: str  # Filename or URL, see thumbnail_type
    thumbnail_type: ThumbnailType = Field(default=ThumbnailType.FILE)
    content: str  # Full blog content (markdown/HTML)

    @field_validator("title", "description", "thumbnail", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _require_text(value)


class Blog(BlogBase, table=True):
    __tablename__ = "blogs"
    __table_args__ = (
        Index("ix_blogs_category_created_at", "category", "created_at"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    # URL-friendly title, assigned by the slug service when absent
    slug: str = Field(unique=True, index=True)
    category: BlogCategory = Field(
        sa_column=Column(SAEnum(BlogCategory, name="blog_category", values_callable=_enum_values), nullable=False)
    )
    thumbnail_type: ThumbnailType = Field(
        default=ThumbnailType.FILE,
        sa_column=Column(SAEnum(ThumbnailType, name="thumbnail_type", values_callable=_enum_values), nullable=False),
    )
    content: str = Field(sa_column=Column(Text, nullable=False))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @computed_field
    @property
    def thumbnail_url(self) -> str:
        return resolve_thumbnail_url(self.thumbnail, self.thumbnail_type)


class BlogCreate(BlogBase):
    slug: Optional[str] = None

    @field_validator("slug")
    @classmethod
    def empty_slug_is_absent(cls, value: Optional[str]) -> Optional[str]:
        # "" asks for a generated slug; whitespace is an invalid slug
        if value == "":
            return None
        return _require_text(value)


class BlogUpdate(SQLModel):
    # Every field is optional; None means "leave unchanged"
    title: Optional[str] = Field(default=None, max_length=200)
    slug: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=5000)
    category: Optional[BlogCategory] = None
    thumbnail: Optional[str] = None
    thumbnail_type: Optional[ThumbnailType] = None
    content: Optional[str] = None

    @field_validator("title", "slug", "description", "thumbnail", "content")
    @classmethod
    def not_blank(cls, value: Optional[str]) -> Optional[str]:
        return _require_text(value)
