from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Blog Core"
    DATABASE_URL: str = "sqlite:///./blog.db"
    SQL_ECHO: bool = False

    # Thumbnails stored as files are served from here
    UPLOADS_URL_PATH: str = "/uploads"

    # Slugs
    SLUG_MAX_SUFFIX: int = 1000  # highest "-N" probed before falling back to a uuid
    SLUG_COMMIT_RETRIES: int = 3

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
