import logging
from sqlmodel import Session
from blogcore.core.logging import configure_logging
from blogcore.db.session import engine, create_db_and_tables
from blogcore.models.blog import BlogCategory, ThumbnailType
from blogcore.services.blog import BlogService

logger = logging.getLogger("seed_data")

SAMPLE_BLOGS = [
    {
        "title": "Scaling a Startup in 2024!",
        "description": "What changes between your first ten customers and your first thousand.",
        "category": BlogCategory.STRATEGY,
        "thumbnail": "scaling.webp",
        "content": "Growth exposes every shortcut you took early on...",
    },
    {
        "title": "Cold Emails That Get Replies",
        "description": "A short checklist for outbound that does not feel like spam.",
        "category": BlogCategory.MARKETING_AND_SALES,
        "thumbnail": "https://images.example.com/cold-email.png",
        "thumbnail_type": ThumbnailType.URL,
        "content": "Start with the reader, not with your product...",
    },
    {
        "title": "Runway Math for Founders",
        "description": "Burn, runway and the three numbers to check every month.",
        "category": BlogCategory.FINANCE,
        "thumbnail": "runway.webp",
        "content": "Runway is cash divided by net burn...",
    },
]

def seed_blogs():
    logger.info("Creating database and tables...")
    create_db_and_tables()

    with Session(engine) as session:
        service = BlogService(session)
        existing = service.count_blogs()
        if existing:
            logger.info("Database already contains %d blogs. Skipping seed.", existing)
            return

        logger.info("Seeding initial blogs...")
        for payload in SAMPLE_BLOGS:
            blog = service.create_blog(payload)
            logger.info("  %s -> %s (%s)", blog.title, blog.slug, blog.thumbnail_url)

        logger.info("Seed complete!")

if __name__ == "__main__":
    configure_logging()
    seed_blogs()
