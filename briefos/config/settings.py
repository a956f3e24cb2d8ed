"""
Configuration settings for BriefOS
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="BRIEFOS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="BriefOS")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    debug: bool = Field(default=False)

    # Storage
    db_path: str = Field(default="briefs.db")

    # Google Gemini
    gemini_model: str = Field(default="gemini-2.5-flash")
    generation_timeout_seconds: float = Field(default=50.0, gt=0)
    analysis_timeout_seconds: float = Field(default=50.0, gt=0)
    mock_delay_seconds: float = Field(default=1.5, ge=0)

    # Credential lookup
    credential_env_vars: List[str] = Field(
        default_factory=lambda: ["GEMINI_API_KEY", "GOOGLE_API_KEY", "GOOGLE_GENAI_API_KEY"]
    )
    credential_key_prefix: str = Field(default="AIza")
    credential_min_scan_length: int = Field(default=30)
    credential_min_length: int = Field(default=20)
    dotenv_path: str = Field(default=".env")

    # Prompt context
    home_vendor: str = Field(default="Sprinklr")

    # Logging
    log_dir: str = Field(default="logs")
    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=True)


# Literal values seen in templates and sample configs
PLACEHOLDER_KEYS = {
    "MY_GEMINI_API_KEY",
    "YOUR_API_KEY",
    "YOUR_GEMINI_API_KEY",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "API_KEY",
    "CHANGEME",
    "TEST-API-KEY",
}

# Substrings that mark an unfilled template value
PLACEHOLDER_MARKERS = ("YOUR_API_KEY", "PLACEHOLDER", "REPLACE_ME", "<", ">", "XXXX")


def get_settings(**overrides) -> Settings:
    """Build the settings object for one process."""
    return Settings(**overrides)
