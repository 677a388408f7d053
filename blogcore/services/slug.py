import logging
import re
import uuid
from typing import Iterable, Optional, Protocol, TypeVar
from sqlmodel import Session, select
from blogcore.core.config import settings
from blogcore.models.blog import Blog

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

Entity = TypeVar("Entity")


class SlugLookup(Protocol):
    def exists(self, slug: str) -> bool:
        ...


class SessionSlugLookup:
    """Checks slugs against committed (and pending) rows of the blogs table."""

    def __init__(self, session: Session):
        self.session = session

    def exists(self, slug: str) -> bool:
        return self.session.exec(select(Blog.id).where(Blog.slug == slug)).first() is not None


class InMemorySlugLookup:
    def __init__(self, slugs: Iterable[str] = ()):
        self.slugs = set(slugs)

    def exists(self, slug: str) -> bool:
        return slug in self.slugs

    def add(self, slug: str) -> None:
        self.slugs.add(slug)


def normalize_slug(title: Optional[str]) -> str:
    """Lowercase the title and collapse every run of non [a-z0-9] characters into one hyphen."""
    if not title:
        return ""
    return _NON_ALNUM.sub("-", title.lower()).strip("-")


def new_random_slug() -> str:
    return str(uuid.uuid4())


def generate_unique_slug(title: Optional[str], lookup: SlugLookup, max_suffix: Optional[int] = None) -> str:
    """
    Derive a slug from the title that no record visible to ``lookup`` uses.

    Tries the base slug, then base-1, base-2, ... and returns the first free
    candidate. Falls back to a random identifier when the title has no usable
    characters or when every suffix up to ``max_suffix`` is taken.

    Errors raised by the lookup propagate unchanged.
    """
    base = normalize_slug(title)
    if not base:
        logger.debug("Title %r has no slug characters, using a random slug", title)
        return new_random_slug()

    limit = settings.SLUG_MAX_SUFFIX if max_suffix is None else max_suffix
    candidate = base
    counter = 1
    while lookup.exists(candidate):
        if counter > limit:
            logger.warning("Slug '%s' taken up to suffix %d, using a random slug", base, limit)
            return new_random_slug()
        candidate = f"{base}-{counter}"
        counter += 1
    return candidate


def assign_slug_if_absent(entity: Entity, lookup: SlugLookup, max_suffix: Optional[int] = None) -> Entity:
    """
    Give ``entity`` a slug before it is persisted.

    A non-empty slug already on the entity is kept as-is without any collision
    check. Otherwise the slug is derived from the title, or is random when the
    title is empty. Returns the same entity.
    """
    if getattr(entity, "slug", None):
        return entity

    title = getattr(entity, "title", None)
    if title:
        entity.slug = generate_unique_slug(title, lookup, max_suffix=max_suffix)
    else:
        entity.slug = new_random_slug()
    return entity
