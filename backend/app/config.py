"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets (SMTP credentials, webhook URL) come from environment variables
    - get_settings() is cached (lru_cache) — single instance per process
    - Settings are validated by presence/absence and type coercion only

Design Decisions:
    - Env names match the legacy deployment (.env with SMTP_*, FROM_EMAIL,
      N8N_WHATSAPP_WEBHOOK, PORT) so existing environments keep working
    - Defaults point SMTP at a local catcher (Mailpit on 1025)
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Database
    database_url: str = "postgresql+asyncpg://forum:forum@db:5432/forum"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # E-mail (SMTP)
    smtp_host: str = "127.0.0.1"
    smtp_port: int = 1025
    smtp_secure: bool = False
    smtp_user: str | None = None
    smtp_pass: str | None = None
    smtp_timeout_seconds: float = 30
    from_email: str = "no-reply@forum.local"

    # WhatsApp bridge (workflow automation webhook)
    whatsapp_webhook_url: str | None = Field(
        None,
        validation_alias=AliasChoices(
            "whatsapp_webhook_url", "n8n_whatsapp_webhook",
        ),
    )
    webhook_timeout_seconds: float = 10

    # HTTP
    port: int = 3001
    public_base_url: str | None = None
    static_dir: str = "public"
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def thread_link_base(self) -> str:
        """Base URL used to build links back to threads in notifications."""
        base = self.public_base_url or f"http://localhost:{self.port}"
        return base.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    return Settings()
