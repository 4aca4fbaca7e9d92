"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK (Junior Developer Guide) ───────────────────────
#
# This class uses pydantic-settings to read configuration from TWO
# sources (in priority order):
#
#   1. **Environment variables** — e.g., OPENAI_API_KEY=sk-abc123
#   2. **.env file** — key=value lines in the project root .env file
#
# Field `document_db_url` maps to env var `DOCUMENT_DB_URL`, and so on.
#
# Empty strings mean "not configured".  Nothing is validated at startup:
# each provider raises ConfigurationError at request time when a value
# it needs is missing, and the API turns that into a 500.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Knowledge-base console settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Language model ===
    openai_api_key: str = ""
    openai_base_url: str = ""  # OpenAI-compatible endpoint override
    openai_chat_model: str = "gpt-4o-mini"
    # Model with built-in live web search, used for the supplementary summary.
    openai_search_model: str = "gpt-4o-mini-search-preview"

    # === Keyword / web search (Google Custom Search JSON API) ===
    google_search_api_key: str = ""
    google_search_engine_id: str = ""

    # === Remote document database (also serves vector search) ===
    document_db_url: str = ""
    security_token: str = ""  # Bearer token for the DB *and* the dashboard gate

    # === Extraction microservices ===
    scraper_api_url: str = ""
    # Empty = reuse scraper_api_url; both endpoints usually live on one service.
    transcript_api_url: str = ""

    # === AWS (S3 + Textract) ===
    aws_region: str = "us-west-1"
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    s3_bucket: str = "intersightai-db"
    s3_key_prefix: str = "uploads/"
    # Read-after-write grace period between the S3 put and the Textract start.
    upload_grace_seconds: float = 2.0
    textract_poll_interval_seconds: float = 7.0
    textract_max_attempts: int = 20

    # === Dashboard auth ===
    auth_cookie_max_age_seconds: int = 60 * 60 * 24 * 7

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    @property
    def effective_transcript_api_url(self) -> str:
        """Return the transcript service URL, falling back to the scraper service."""
        return self.transcript_api_url or self.scraper_api_url

    def get_configured_providers(self) -> dict[str, bool]:
        """Report which external collaborators have the configuration they need."""
        return {
            "llm": bool(self.openai_api_key),
            "google_search": bool(self.google_search_api_key and self.google_search_engine_id),
            "document_db": bool(self.document_db_url and self.security_token),
            "scraper": bool(self.scraper_api_url),
            "transcript": bool(self.effective_transcript_api_url),
            "object_storage": bool(self.s3_bucket and self.aws_region),
        }
