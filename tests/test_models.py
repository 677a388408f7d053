import pytest

from blogcore.core.exceptions import BlogValidationError
from blogcore.models.blog import Blog, BlogCategory, BlogCreate, BlogUpdate, ThumbnailType, resolve_thumbnail_url
from blogcore.services.blog import validate_payload


def test_file_thumbnail_is_served_from_uploads():
    assert resolve_thumbnail_url("photo.png", ThumbnailType.FILE) == "/uploads/photo.png"


def test_url_thumbnail_is_returned_unchanged():
    assert resolve_thumbnail_url("https://x.com/a.png", ThumbnailType.URL) == "https://x.com/a.png"


def test_thumbnail_uploads_path_is_configurable():
    assert resolve_thumbnail_url("a b.png", "file", uploads_path="/media/") == "/media/a b.png"


def test_blog_exposes_thumbnail_url(blog_payload):
    blog = Blog(slug="x", **blog_payload(thumbnail="https://cdn.example.com/t.jpg", thumbnail_type=ThumbnailType.URL))
    assert blog.thumbnail_url == "https://cdn.example.com/t.jpg"
    assert blog.model_dump()["thumbnail_url"] == "https://cdn.example.com/t.jpg"


def test_thumbnail_type_defaults_to_file(blog_payload):
    blog_in = BlogCreate(**blog_payload())
    assert blog_in.thumbnail_type == ThumbnailType.FILE
    assert blog_in.slug is None


def test_category_accepts_display_values(blog_payload):
    blog_in = validate_payload(BlogCreate, blog_payload(category="Marketing and Sales"))
    assert blog_in.category is BlogCategory.MARKETING_AND_SALES


def test_validation_enumerates_every_offending_field():
    with pytest.raises(BlogValidationError) as exc_info:
        validate_payload(BlogCreate, {
            "title": "",
            "description": "   ",
            "category": "Gardening",
            "thumbnail_type": "ftp",
        })

    messages = {e.field: e.message for e in exc_info.value.errors}
    assert messages == {
        "title": "Title is required",
        "description": "Description is required",
        "category": "Invalid category",
        "thumbnail": "Thumbnail is required",
        "thumbnail_type": "Thumbnail type must be 'file' or 'url'",
        "content": "Content is required",
    }


def test_null_values_are_reported_as_required(blog_payload):
    with pytest.raises(BlogValidationError) as exc_info:
        validate_payload(BlogCreate, blog_payload(title=None, category=None))
    assert sorted(exc_info.value.fields()) == ["category", "title"]
    assert "Title is required" in str(exc_info.value)


def test_title_length_is_limited(blog_payload):
    with pytest.raises(BlogValidationError) as exc_info:
        validate_payload(BlogCreate, blog_payload(title="x" * 201))
    assert exc_info.value.errors[0].message == "Title must be at most 200 characters"


def test_update_accepts_partial_payload():
    blog_in = validate_payload(BlogUpdate, {"title": "New title"})
    assert blog_in.model_dump(exclude_none=True) == {"title": "New title"}


def test_update_rejects_blank_values():
    with pytest.raises(BlogValidationError) as exc_info:
        validate_payload(BlogUpdate, {"slug": "", "content": " "})
    assert sorted(exc_info.value.fields()) == ["content", "slug"]
