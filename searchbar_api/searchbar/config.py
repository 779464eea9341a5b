from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

# Load environment variables from .env (if present)
load_dotenv()

SERVICE_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseModel):
    # API key for this FastAPI server (sent via X-API-Key header)
    api_key: str = os.getenv("SEARCHBAR_API_KEY", "")

    # CORS origins (comma-separated or "*")
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # YAML catalog of search groups, icons and no-results fallbacks
    catalog_file: str = os.getenv("SEARCHBAR_CATALOG_FILE", str(SERVICE_ROOT / "catalog.yml"))

    # YAML string table (placeholder texts, category labels)
    strings_file: str = os.getenv("SEARCHBAR_STRINGS_FILE", str(SERVICE_ROOT / "strings.yml"))

    # Upper bound on rendered dropdown options when truncation is requested
    max_options: int = int(os.getenv("SEARCHBAR_MAX_OPTIONS", "30"))

    log_level: str = os.getenv("SEARCHBAR_LOG_LEVEL", "INFO")

    # HTML preview of the dropdown
    css_theme: str = os.getenv("CSS_THEME", "light")
    html_font_size: str = os.getenv("HTML_FONT_SIZE", "15px")
    html_max_width: str = os.getenv("HTML_MAX_WIDTH", "640px")


settings = Settings()
