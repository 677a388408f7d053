import logging
from typing import Any, List, Mapping, Optional, Type, TypeVar, Union
from pydantic import ValidationError
from sqlalchemy import desc, func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, select
from blogcore.core.config import settings
from blogcore.core.exceptions import BlogNotFoundError, BlogValidationError, FieldError, SlugConflictError
from blogcore.models.blog import Blog, BlogCategory, BlogCreate, BlogUpdate, utcnow
from blogcore.services.slug import SessionSlugLookup, SlugLookup, assign_slug_if_absent

logger = logging.getLogger(__name__)

Payload = TypeVar("Payload", bound=SQLModel)

MAX_PAGE_SIZE = 100


def validate_payload(model: Type[Payload], payload: Union[SQLModel, Mapping[str, Any]]) -> Payload:
    """Validate a create/update payload, reporting every offending field at once."""
    if isinstance(payload, SQLModel):
        payload = payload.model_dump(exclude_unset=True)
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise BlogValidationError.from_pydantic(e) from e


class BlogService:
    def __init__(self, session: Session, lookup: Optional[SlugLookup] = None):
        self.session = session
        self.lookup = lookup or SessionSlugLookup(session)

    def _slug_taken(self, slug: Optional[str]) -> bool:
        # Always ask storage; self.lookup may be a substitute
        return bool(slug) and SessionSlugLookup(self.session).exists(slug)

    def create_blog(self, payload: Union[BlogCreate, Mapping[str, Any]]) -> Blog:
        """
        Validate, assign a slug and insert a new blog.

        If another record commits the same slug between the pre-check and our
        commit, an auto-generated slug is derived again and the insert retried
        up to SLUG_COMMIT_RETRIES times. A slug supplied by the caller is never
        replaced; its conflict is raised as SlugConflictError.
        """
        blog_in = validate_payload(BlogCreate, payload)
        slug_supplied = bool(blog_in.slug)

        retries = 0
        while True:
            assign_slug_if_absent(blog_in, self.lookup)
            blog = Blog(**blog_in.model_dump())
            self.session.add(blog)
            try:
                self.session.commit()
            except IntegrityError as e:
                self.session.rollback()
                if not self._slug_taken(blog_in.slug):
                    raise
                if slug_supplied or retries >= settings.SLUG_COMMIT_RETRIES:
                    logger.warning("Slug '%s' conflicts with an existing blog", blog_in.slug)
                    raise SlugConflictError(blog_in.slug, cause=e) from e
                retries += 1
                logger.info(
                    "Slug '%s' was taken before commit, retrying (%d/%d)",
                    blog_in.slug, retries, settings.SLUG_COMMIT_RETRIES,
                )
                blog_in.slug = None
                continue

            self.session.refresh(blog)
            logger.info("Created blog %s with slug '%s'", blog.id, blog.slug)
            return blog

    def update_blog(self, blog_id: int, payload: Union[BlogUpdate, Mapping[str, Any]]) -> Blog:
        """Apply the provided fields. The slug only changes when one is given explicitly."""
        blog_in = validate_payload(BlogUpdate, payload)

        blog = self.get_blog(blog_id)
        if not blog:
            raise BlogNotFoundError(blog_id)

        changes = blog_in.model_dump(exclude_none=True)
        for field, value in changes.items():
            setattr(blog, field, value)

        blog.updated_at = utcnow()
        self.session.add(blog)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if "slug" in changes and self._slug_taken(changes["slug"]):
                logger.warning("Slug '%s' conflicts with an existing blog", changes["slug"])
                raise SlugConflictError(changes["slug"], cause=e) from e
            raise

        self.session.refresh(blog)
        return blog

    def get_blog(self, blog_id: int) -> Optional[Blog]:
        return self.session.get(Blog, blog_id)

    def get_blog_by_slug(self, slug: str) -> Optional[Blog]:
        return self.session.exec(select(Blog).where(Blog.slug == slug)).first()

    def list_blogs(self, category: Optional[BlogCategory] = None, page: int = 1, limit: int = 10) -> List[Blog]:
        """Newest first, optionally filtered by category."""
        errors = []
        if page < 1:
            errors.append(FieldError("page", "Page must be at least 1"))
        if not 1 <= limit <= MAX_PAGE_SIZE:
            errors.append(FieldError("limit", f"Limit must be between 1 and {MAX_PAGE_SIZE}"))
        if errors:
            raise BlogValidationError(errors)

        query = select(Blog)
        if category is not None:
            query = query.where(Blog.category == category)
        offset = (page - 1) * limit
        return self.session.exec(
            query.order_by(desc(Blog.created_at), desc(Blog.id)).offset(offset).limit(limit)
        ).all()

    def count_blogs(self, category: Optional[BlogCategory] = None) -> int:
        query = select(func.count(Blog.id))
        if category is not None:
            query = query.where(Blog.category == category)
        return self.session.exec(query).one()

    def delete_blog(self, blog_id: int) -> bool:
        blog = self.get_blog(blog_id)
        if not blog:
            return False
        self.session.delete(blog)
        self.session.commit()
        logger.info("Deleted blog %s", blog_id)
        return True
