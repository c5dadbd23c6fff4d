"""Configuration management for MoodScope."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import PromptConstants
from .errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # OpenAI API
    openai_api_key: str = Field("", description="OpenAI API key")
    api_key: str = Field("", description="API key (alternative naming)")
    openai_model: str = Field("gpt-4o-mini", description="Model used for structured analysis")
    request_timeout: float = Field(30.0, description="Backend request timeout in seconds")
    temperature: float = Field(0.3, description="Sampling temperature")
    max_tokens: int = Field(1200, description="Maximum tokens per backend response")

    @property
    def effective_api_key(self) -> str:
        """Get the effective API key from either field."""
        return self.openai_api_key or self.api_key

    def require_api_key(self) -> str:
        """Return the API key or fail at startup when none is configured."""
        key = self.effective_api_key
        if not key:
            raise ConfigurationError(
                "No backend API key configured. Set OPENAI_API_KEY (or API_KEY) in the environment."
            )
        return key

    # Logging
    log_level: str = Field("INFO", description="Logging level")

    # Analysis settings
    max_analyses: int = Field(15, ge=1, description="Analyses allowed per session")
    max_batch_size: int = Field(10, ge=1, description="Texts processed per batch")
    mood_context_chars: int = Field(PromptConstants.MOOD_CONTEXT_CHARS, ge=1, description="Characters of text sent as mood context")
    max_attempts: int = Field(1, ge=1, description="Backend attempts per request (1 disables retry)")


# Global settings instance
settings = Settings()
