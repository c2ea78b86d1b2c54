from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    magnet_rss_key: Optional[str] = None
    # Empty selects the in-memory store (development only).
    database_url: str = ""
    environment: str = "development"
    feed_cache_seconds: int = 3600
    feed_title: str = "Latest Magnet Link"
    feed_description: str = "This feed provides the latest magnet link."

    def get_bearer_secret(self) -> Optional[str]:
        if not self.magnet_rss_key or not isinstance(self.magnet_rss_key, str):
            return None
        return self.magnet_rss_key

    def uses_database(self) -> bool:
        return bool(self.database_url.strip())

    def validate_production(self) -> None:
        if self.environment == "production":
            if not self.get_bearer_secret():
                raise ValueError(
                    "MAGNET_RSS_KEY must be set in production. "
                    "Provide the bearer secret via the MAGNET_RSS_KEY environment variable."
                )
            if not self.uses_database():
                raise ValueError(
                    "DATABASE_URL must be set in production. "
                    "The in-memory store does not survive restarts."
                )
            if "CHANGEME" in self.database_url:
                raise ValueError(
                    "DATABASE_URL contains placeholder credentials. "
                    "Set DATABASE_URL environment variable for production."
                )
