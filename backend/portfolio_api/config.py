"""
Portfolio API - Application Configuration
=========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types and ranges, and exposes a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; checked again during app startup.

Environment variables (case-insensitive):
    DB_USER, DB_PASSWORD     Credentials for the MongoDB Atlas cluster
    DB_CLUSTER_HOST          Atlas cluster host name
    DB_NAME                  Database holding the portfolio collections
    MONGODB_URI              Full connection string; overrides the three above
    TOKEN_SECRET             Shared HS256 secret for issued tokens
    TOKEN_EXPIRE_MINUTES     Lifetime of issued tokens (default 60)
    REQUIRE_AUTH             Enforce bearer tokens on protected routes
    HOST, PORT               Bind address for uvicorn (default 0.0.0.0:5000)
    CORS_ORIGINS             Comma-separated list, "*" for any origin
    LOG_LEVEL                DEBUG, INFO, WARNING, ERROR or CRITICAL
    ACCESS_LOG_SKIP_PATHS    Comma-separated paths kept out of the access log
"""

from typing import List, Optional, Set
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_TOKEN_SECRET = "change-me"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments MUST
    provide database credentials and TOKEN_SECRET.
    """

    # ── Database ──────────────────────────────────────────────────────────
    db_user: str = Field(default="", description="MongoDB Atlas user name")
    db_password: str = Field(default="", description="MongoDB Atlas password")
    db_cluster_host: str = Field(default="cluster0.7ijeqqy.mongodb.net")
    db_name: str = Field(default="portfolio")

    # Full connection string, e.g. mongodb://localhost:27017 for local work
    mongodb_uri: Optional[str] = Field(default=None)

    # Server selection timeout for the driver, in milliseconds
    db_timeout_ms: int = Field(default=5000, ge=100, le=60000)

    # ── Tokens ────────────────────────────────────────────────────────────
    token_secret: str = Field(default=DEFAULT_TOKEN_SECRET)
    token_algorithm: str = Field(default="HS256")
    token_expire_minutes: int = Field(default=60, ge=1, le=60 * 24 * 30)

    # Write routes and the contact inbox require a bearer token when True
    require_auth: bool = Field(default=True)

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)

    log_level: str = Field(default="INFO")

    # Paths left out of the access log; load balancers poll /health constantly
    access_log_skip_paths: str = Field(default="/health")

    @property
    def access_log_skip_paths_set(self) -> Set[str]:
        """Comma-separated ACCESS_LOG_SKIP_PATHS as a set of exact paths."""
        return {path.strip() for path in self.access_log_skip_paths.split(",") if path.strip()}

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("token_algorithm")
    @classmethod
    def validate_token_algorithm(cls, v: str) -> str:
        """Only symmetric HMAC algorithms make sense with a shared secret."""
        upper = v.upper()
        if upper not in {"HS256", "HS384", "HS512"}:
            raise ValueError(f"Unsupported token_algorithm '{v}'")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def database_uri(self) -> str:
        """
        Connection string handed to the MongoDB driver.

        MONGODB_URI wins when set. Otherwise an Atlas SRV URI is built from
        the credentials; user name and password are percent-escaped so that
        characters such as '@' or ':' survive.
        """
        if self.mongodb_uri:
            return self.mongodb_uri
        credentials = ""
        if self.db_user:
            credentials = f"{quote_plus(self.db_user)}:{quote_plus(self.db_password)}@"
        return (
            f"mongodb+srv://{credentials}{self.db_cluster_host}/"
            "?retryWrites=true&w=majority&appName=Cluster0"
        )

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that critical settings are configured.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises one ValueError listing them.
        """
        errors = []
        if not self.token_secret or self.token_secret == DEFAULT_TOKEN_SECRET:
            errors.append("TOKEN_SECRET is not set. Issued tokens use an insecure default secret.")
        if not self.mongodb_uri and not (self.db_user and self.db_password):
            errors.append("DB_USER/DB_PASSWORD are not set and no MONGODB_URI was given.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
