import logging

from sqlmodel import Session

from blogcore.core.logging import configure_logging
from blogcore.db import session as db_session
from blogcore.services.blog import BlogService


def test_create_db_and_tables_and_get_session(engine, monkeypatch, blog_payload):
    monkeypatch.setattr(db_session, "engine", engine)
    db_session.create_db_and_tables()

    sessions = db_session.get_session()
    session = next(sessions)
    assert isinstance(session, Session)

    blog = BlogService(session).create_blog(blog_payload())
    assert blog.slug == "scaling-a-startup-in-2024"
    sessions.close()


def test_configure_logging_sets_level():
    configure_logging("debug")
    assert logging.getLogger().level == logging.DEBUG
    configure_logging("WARNING")
    assert logging.getLogger().level == logging.WARNING
