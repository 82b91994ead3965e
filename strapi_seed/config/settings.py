"""
Application Configuration
Loads settings from environment variables and defines the seeding pipeline
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Seeder settings loaded from SEED_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="SEED_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # Strapi API
    strapi_url: str = Field(default="http://localhost:1337")
    strapi_api_token: str = Field(default="")
    environment: str = Field(default="development")
    request_timeout: Optional[float] = Field(default=None)

    # Seed data
    data_file: str = Field(default="data/data.json")
    uploads_dir: str = Field(default="data/uploads")
    state_file: str = Field(default=".strapi-seed-state.json")

    # Public role lookup
    role_max_retries: int = Field(default=10, ge=1)
    role_retry_delay: float = Field(default=2.0, ge=0)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    @field_validator("strapi_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}. Must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        if v not in ("console", "json"):
            raise ValueError(f"Invalid log format: {v}. Must be 'console' or 'json'")
        return v


# Processing Pipeline Definition
# Each step is one stage of the seed run; the orchestrator runs them in order
PROCESSING_STEPS = [
    {
        "id": "permissions",
        "name": "Public Permissions",
        "module": "run_permissions_step",
        "description": "Enabling find/findOne on the public role",
        "state": "PERMISSIONS_SET",
    },
    {
        "id": "categories",
        "name": "Categories",
        "module": "run_categories_step",
        "description": "Importing categories",
        "state": "CATEGORIES_IMPORTED",
    },
    {
        "id": "authors",
        "name": "Authors",
        "module": "run_authors_step",
        "description": "Importing authors and their avatars",
        "state": "AUTHORS_IMPORTED",
    },
    {
        "id": "articles",
        "name": "Articles",
        "module": "run_articles_step",
        "description": "Importing articles, covers and block media",
        "state": "ARTICLES_IMPORTED",
    },
    {
        "id": "global_settings",
        "name": "Global Settings",
        "module": "run_global_settings_step",
        "description": "Importing global settings",
        "state": "GLOBAL_IMPORTED",
    },
    {
        "id": "about",
        "name": "About Page",
        "module": "run_about_step",
        "description": "Importing the about page",
        "state": "ABOUT_IMPORTED",
    },
]

# Actions opened to anonymous visitors, per content type
PUBLIC_PERMISSIONS = {
    "article": ["find", "findOne"],
    "category": ["find", "findOne"],
    "author": ["find", "findOne"],
    "global": ["find", "findOne"],
    "about": ["find", "findOne"],
}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
