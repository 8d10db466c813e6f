"""
Environment-specific configuration settings.

Defaults favour the in-memory data source so the dashboard runs locally
without a database.
"""

from dataclasses import dataclass
import os
from typing import Optional


@dataclass
class Settings:
    """Application settings with local-friendly defaults."""

    # Environment
    environment: str = "dev"
    aws_region: str = "eu-west-2"

    # Where filtering happens: "client" evaluates rows in-process,
    # "server" hands a composed query descriptor to the data source.
    filter_mode: str = "client"

    # Data source: "memory" or "postgres"
    data_source: str = "memory"
    database_url: Optional[str] = None
    db_secret_arn: Optional[str] = None

    # Working-set cache
    cache_ttl_seconds: int = 300
    cache_max_size: int = 100

    # Stats cards
    recent_window_days: int = 7
    recent_insights_limit: int = 5

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        env = os.environ.get("ENVIRONMENT", "dev")
        database_url = os.environ.get("DATABASE_URL") or None
        db_secret_arn = os.environ.get("DB_SECRET_ARN") or None
        default_source = "postgres" if (database_url or db_secret_arn) else "memory"

        filter_mode = os.environ.get("FILTER_MODE", "client").lower()
        if filter_mode not in ("client", "server"):
            filter_mode = "client"

        settings = cls(
            environment=env,
            aws_region=os.environ.get("AWS_REGION", "eu-west-2"),
            filter_mode=filter_mode,
            data_source=os.environ.get("DATA_SOURCE", default_source).lower(),
            database_url=database_url,
            db_secret_arn=db_secret_arn,
            cache_ttl_seconds=int(os.environ.get("CACHE_TTL_SECONDS", "300")),
            cache_max_size=int(os.environ.get("CACHE_MAX_SIZE", "100")),
            recent_window_days=int(os.environ.get("RECENT_WINDOW_DAYS", "7")),
            recent_insights_limit=int(os.environ.get("RECENT_INSIGHTS_LIMIT", "5")),
        )

        # Production overrides
        if env == "prod":
            settings.cache_max_size = max(settings.cache_max_size, 500)
        return settings
