from dataclasses import dataclass
from typing import Any, List, Optional

from pydantic import ValidationError


class BlogError(Exception):
    """Base class for errors raised by blog operations."""


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


# Messages reported for a missing or empty value
REQUIRED_MESSAGES = {
    "title": "Title is required",
    "slug": "Slug is required",
    "description": "Description is required",
    "category": "Category is required",
    "thumbnail": "Thumbnail is required",
    "thumbnail_type": "Thumbnail type is required",
    "content": "Content is required",
}

# Messages reported for a value outside its enumerated set
CHOICE_MESSAGES = {
    "category": "Invalid category",
    "thumbnail_type": "Thumbnail type must be 'file' or 'url'",
}


def _message_for(field: str, error: dict) -> str:
    kind = error.get("type", "")
    if kind == "missing" or error.get("input", "") is None:
        return REQUIRED_MESSAGES.get(field, f"{field} is required")
    if kind == "enum" and field in CHOICE_MESSAGES:
        return CHOICE_MESSAGES[field]
    if kind == "string_too_long":
        limit = (error.get("ctx") or {}).get("max_length")
        return f"{field.replace('_', ' ').capitalize()} must be at most {limit} characters"
    if kind == "value_error" and field in REQUIRED_MESSAGES:
        # Raised by the non-empty validators
        return REQUIRED_MESSAGES[field]
    return error.get("msg", "Invalid value")


class BlogValidationError(BlogError):
    """A create/update payload was rejected. ``errors`` lists every offending field."""

    def __init__(self, errors: List[FieldError]):
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "BlogValidationError":
        errors = []
        for error in exc.errors():
            loc = error.get("loc") or ("__root__",)
            field = str(loc[0])
            errors.append(FieldError(field=field, message=_message_for(field, error)))
        return cls(errors)

    def fields(self) -> List[str]:
        return [e.field for e in self.errors]


class SlugConflictError(BlogError):
    """Another record committed the same slug first. Safe to retry."""

    retryable = True

    def __init__(self, slug: str, cause: Optional[Any] = None):
        self.slug = slug
        self.cause = cause
        super().__init__(f"Slug '{slug}' already exists")


class BlogNotFoundError(BlogError):
    def __init__(self, blog_id: int):
        self.blog_id = blog_id
        super().__init__(f"Blog {blog_id} not found")
