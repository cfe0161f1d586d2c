"""
Application settings and configuration management.

Uses pydantic-settings for environment variable loading.
"""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "VoiceHire"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 5000

    # Database
    database_url: str = "sqlite:///./voicehire.db"
    database_echo: bool = False

    # Auth
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 60 * 24 * 7

    # Gemini generation API
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash-lite"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/models"
    gemini_max_retries: int = 3
    gemini_retry_base_seconds: float = 5.0  # waits 10s, 20s
    gemini_timeout_seconds: float = 30.0
    gemini_max_output_tokens: int = 1500

    # Langfuse tracing (optional)
    langfuse_enabled: bool = False
    langfuse_secret_key: str = ""
    langfuse_public_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    # Interview settings
    max_questions: int = 20
    min_answer_chars: int = 5

    # Proctoring
    proctor_max_warnings: int = 3
    proctor_cooldown_seconds: float = 8.0
    proctor_dismiss_seconds: float = 8.0
    proctor_sample_interval_seconds: float = 2.0
    proctor_pixel_threshold: int = 60
    proctor_change_ratio: float = 0.40
    proctor_frame_width: int = 160
    proctor_frame_height: int = 120

    # CORS - stored as comma-separated string in env
    # Uses validation_alias to read from CORS_ORIGINS env var
    cors_origins_str: str = Field(
        default="http://localhost:5000,http://127.0.0.1:5000",
        validation_alias="cors_origins"
    )

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @computed_field
    @property
    def gemini_generate_url(self) -> str:
        """Full generateContent URL for the configured model."""
        return f"{self.gemini_base_url.rstrip('/')}/{self.gemini_model}:generateContent"

    @property
    def gemini_configured(self) -> bool:
        return bool(self.gemini_api_key) and self.gemini_api_key != "your_gemini_api_key_here"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
