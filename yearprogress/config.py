"""Application configuration."""

import os

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    server_host: str = os.getenv("SERVER_HOST", "0.0.0.0")
    server_port: int = int(os.getenv("SERVER_PORT", "8000"))

    # Fonts (Pillow needs TTF files)
    flowers_font_url: str = os.getenv(
        "FLOWERS_FONT_URL",
        "https://github.com/google/fonts/raw/main/ofl/delius/Delius-Regular.ttf",
    )
    ink_font_url: str = os.getenv(
        "INK_FONT_URL",
        "https://github.com/google/fonts/raw/main/ofl/greatvibes/GreatVibes-Regular.ttf",
    )
    font_fetch_timeout: float = float(os.getenv("FONT_FETCH_TIMEOUT", "5"))

    # Responses
    cache_control: str = os.getenv(
        "CACHE_CONTROL", "public, s-maxage=3600, stale-while-revalidate=86400"
    )

    # Demo renders
    output_dir: str = os.getenv("OUTPUT_DIR", "static/images")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = False


settings = Settings()
