"""Configuration settings for the SEO auditor."""

from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Auditor settings, read from AUDIT_* environment variables or .env."""

    # AI insight settings
    openrouter_api_key: str | None = Field(default=None, description="OpenRouter API key")
    ai_model: str = Field(
        default="google/gemini-2.0-flash-001",
        description="Model used to write narrative insights",
    )
    ai_max_insights: int = Field(default=8, description="Maximum insights kept from the AI reply")
    ai_temperature: float = Field(default=0.7, description="Sampling temperature for insights")
    ai_max_tokens: int = Field(default=2000, description="Token limit for the insight reply")
    ai_timeout: float = Field(default=60.0, description="AI request timeout in seconds")

    # Rendering
    browser_headless: bool = Field(default=True, description="Run Chromium without a window")
    user_agent: str = Field(
        default="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        description="User agent presented to audited sites",
    )
    page_load_timeout: int = Field(default=30000, description="Navigation timeout (ms)")
    js_wait_timeout: int = Field(default=1000, description="Settle time after network idle (ms)")
    max_retries: int = Field(default=2, description="Navigation attempts before giving up")

    # Viewport and screenshot
    screenshot_width: int = Field(default=1920, description="Viewport width (px)")
    screenshot_height: int = Field(default=1080, description="Viewport height (px)")
    screenshot_full_page: bool = Field(default=True, description="Screenshot the whole scrollable page")

    # Reports
    reports_dir: Path = Field(default=Path("./reports"), description="Where report files are written")

    model_config = {"env_prefix": "AUDIT_", "env_file": ".env"}


settings = Settings()
