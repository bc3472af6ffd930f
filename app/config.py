from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


logger = logging.getLogger(__name__)


#
# Shared theme tokens for the admin console.
# - Centralized here so components/styles.py and the plotly theme agree.
#
THEME = {
    # Backgrounds
    "bg_primary": "#F7F7F8",     # page background
    "bg_secondary": "#FFFFFF",   # sidebar / top surfaces
    "bg_card": "#FFFFFF",       # card surface
    # Accents
    "accent_primary": "#2563EB",
    "accent_secondary": "#3B82F6",  # hover
    "navy_900": "#0F172A",
    "navy_800": "#1E293B",
    # Text + borders
    "text_primary": "#111827",
    "text_secondary": "rgba(17, 24, 39, 0.72)",
    "border_color": "#E5E7EB",
    "grid": "rgba(17, 24, 39, 0.10)",
    "shadow": "0 1px 3px rgba(16,24,40,0.08)",
    "radius_px": 10,
    # Status colors
    "success": "#067647",
    "warning": "#F59E0B",
    "danger": "#B42318",
}

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class AppConfig:
    # Required for live mode (Supabase REST)
    supabase_url: Optional[str]
    supabase_key: Optional[str]

    # Origin used when composing form share links
    app_base_url: str

    # Defaults
    default_use_mock: bool
    log_level: str

    @property
    def missing_settings(self) -> list[str]:
        missing = []
        if not self.supabase_url:
            missing.append("SUPABASE_URL")
        if not self.supabase_key:
            missing.append("SUPABASE_ANON_KEY")
        return missing

    @property
    def is_configured(self) -> bool:
        return not self.missing_settings


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def get_config() -> AppConfig:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - Missing store credentials are logged, never raised; live calls fail later
      with StoreConfigError and the fallback layer takes over.
    """
    load_dotenv(override=False)

    cfg = AppConfig(
        supabase_url=_getenv("SUPABASE_URL"),
        supabase_key=_getenv("SUPABASE_ANON_KEY") or _getenv("SUPABASE_KEY"),
        app_base_url=(_getenv("APP_BASE_URL", "http://localhost:8501") or "").rstrip("/"),
        default_use_mock=(_getenv("USE_MOCK_DATA", "false") or "false").lower() == "true",
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
    )
    if cfg.missing_settings:
        logger.error(
            "Supabase credentials are not set (%s). All store calls will fail until they are provided.",
            ", ".join(cfg.missing_settings),
        )
    return cfg


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
