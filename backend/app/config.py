"""
NoteShare Backend — Application Configuration
===============================================

What:  Centralized configuration for both services (board and summarizer).
How:   Pydantic Settings reads environment variables (or a .env file),
       validates types/ranges, and exposes a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before the app starts.

The two services each own a database URL and a schema policy:
    board       DATABASE_URL          BOARD_RESET_SCHEMA=true  (drop + recreate on boot)
    summarizer  SUMMARY_DATABASE_URL  SUMMARY_RESET_SCHEMA=false (create if absent)
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments must set
    GROQ_API_KEY for the summarizer and should point the database URLs at a
    persistent volume.
    """

    # ── Board database ────────────────────────────────────────────────────
    # Async SQLite URL (aiosqlite driver). File-based URLs get their parent
    # directory and an empty file created on startup.
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/app.db",
        description="Async SQLAlchemy URL for accounts, groups and notes",
    )

    # Drop every board table and recreate it on each start. Data does NOT
    # survive a restart while this is enabled.
    board_reset_schema: bool = Field(default=True)

    # ── Summarizer database ───────────────────────────────────────────────
    summary_database_url: str = Field(
        default="sqlite+aiosqlite:///./data/summaries.db",
        description="Async SQLAlchemy URL for stored summaries",
    )

    # Summaries are additive across restarts by default.
    summary_reset_schema: bool = Field(default=False)

    # Upper bound on pooled connections per database (no overflow).
    db_pool_size: int = Field(default=5, ge=1, le=50)

    # ── Completion endpoint (Groq, OpenAI-compatible) ─────────────────────
    groq_api_key: str = Field(default="", description="Bearer token for the completion API")
    groq_model: str = Field(default="llama-3.1-8b-instant")
    summary_api_url: str = Field(
        default="https://api.groq.com/openai/v1/chat/completions",
    )

    # ── Summarize request limits ──────────────────────────────────────────
    # Byte ceiling is checked before the body is parsed; char bounds apply
    # to the trimmed extracted text.
    summary_max_body_bytes: int = Field(default=32 * 1024, ge=1)
    summary_min_chars: int = Field(default=5, ge=1)
    summary_max_chars: int = Field(default=8000, ge=1)

    # Fixed row limit for GET /api/summaries and its preview length.
    summary_list_limit: int = Field(default=100, ge=1, le=1000)
    summary_preview_chars: int = Field(default=80, ge=1)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" allows any origin (development default).
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def validate_required_for_summarizer(self) -> None:
        """
        What:  Checks the settings the summarizer cannot work without.
        When:  Called during summarizer startup (lifespan).
        Raises ValueError listing every missing value.
        """
        errors = []
        if not self.groq_api_key:
            errors.append("GROQ_API_KEY is not set. POST /api/summarize will fail until it is.")
        if self.summary_min_chars > self.summary_max_chars:
            errors.append(
                f"SUMMARY_MIN_CHARS ({self.summary_min_chars}) exceeds "
                f"SUMMARY_MAX_CHARS ({self.summary_max_chars})."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


settings = Settings()
