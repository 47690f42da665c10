"""
Configuration management.

Centralized environment variable management and validation.
"""

import re
from pathlib import Path
from typing import Literal, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from shared.errors import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # Allow case-insensitive env var matching
        extra="ignore"
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_dir: str = "logs"

    # OpenAI configuration
    # Brief parsing and the sales pitch use the cheaper model; script and shot plan
    # use the larger one
    openai_api_key: Optional[str] = None
    parser_llm_model: str = "gpt-4o-mini"
    script_llm_model: str = "gpt-4o"
    shot_plan_llm_model: str = "gpt-4o"
    pitch_llm_model: str = "gpt-4o-mini"

    # USE_LLM_SHOT_PLAN: when false the deterministic shot plan is always used
    use_llm_shot_plan: bool = True
    # ENABLE_SALES_PITCH: run the optional pitch stage that feeds caption text
    enable_sales_pitch: bool = True

    # Veo (Google Gemini API) configuration
    gemini_api_key: Optional[str] = None
    veo_model: str = "veo-3.1-generate-preview"

    # Supabase Storage configuration
    # Both must be set for uploads; otherwise the final video is served from disk
    supabase_url: Optional[str] = None
    supabase_service_key: Optional[str] = None
    video_outputs_bucket: str = "video-outputs"
    signed_url_ttl_seconds: int = 3600

    # Working directories
    tmp_dir: str = "./tmp"
    renders_dir: str = "./renders"

    # Render defaults
    default_tone: Literal["energetic", "aspirational", "professional", "witty"] = "aspirational"
    default_locale: str = "en-US"
    default_scene_count: int = 1
    max_scene_count: int = 3
    seconds_per_scene: int = 7

    # CAPTION_ALPHA_HEX: alpha byte prefixed to the brand color for caption boxes
    # (00 = opaque, FF = transparent)
    caption_alpha_hex: str = "AA"

    @field_validator("openai_api_key")
    @classmethod
    def validate_openai_api_key(cls, v: Optional[str]) -> Optional[str]:
        """Validate OpenAI API key format when provided."""
        if not v:
            return None
        if not v.startswith("sk-"):
            raise ConfigError("OPENAI_API_KEY must start with 'sk-'")
        if len(v) < 20:
            raise ConfigError("OPENAI_API_KEY appears to be invalid")
        return v

    @field_validator("supabase_url")
    @classmethod
    def validate_supabase_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate Supabase URL format when provided."""
        if not v:
            return None
        if not v.startswith(("http://", "https://")):
            raise ConfigError("SUPABASE_URL must be a valid HTTP/HTTPS URL")
        return v

    @field_validator("caption_alpha_hex")
    @classmethod
    def validate_caption_alpha_hex(cls, v: str) -> str:
        """Alpha must be a single byte written as two hex digits."""
        if not re.fullmatch(r"[0-9A-Fa-f]{2}", v):
            raise ConfigError("CAPTION_ALPHA_HEX must be exactly two hex digits")
        return v.upper()

    @field_validator("default_scene_count", "max_scene_count", "seconds_per_scene")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ConfigError("Scene count and scene length settings must be positive")
        return v

    @property
    def storage_enabled(self) -> bool:
        """True when Supabase credentials are configured."""
        return bool(self.supabase_url and self.supabase_service_key)

    @property
    def tmp_path(self) -> Path:
        return Path(self.tmp_dir)

    @property
    def renders_path(self) -> Path:
        return Path(self.renders_dir)


# Singleton instance
try:
    settings = Settings()
except Exception as e:
    # Re-raise as ConfigError for consistency
    if isinstance(e, ConfigError):
        raise
    raise ConfigError(f"Failed to load configuration: {str(e)}") from e
