"""Centralised settings for mdlinks.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Link validation
    # ------------------------------------------------------------------
    max_concurrency: int = field(
        default_factory=lambda: int(os.environ.get("MDLINKS_MAX_CONCURRENCY", "10"))
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("MDLINKS_REQUEST_TIMEOUT", "10.0"))
    )
    follow_redirects: bool = field(
        default_factory=lambda: _env_bool("MDLINKS_FOLLOW_REDIRECTS", "true")
    )

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------
    failure_policy: str = field(
        default_factory=lambda: os.environ.get("MDLINKS_FAILURE_POLICY", "abort").strip().lower()
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("MDLINKS_LOG_LEVEL", "WARNING").upper()
    )


# Module-level singleton — import this everywhere:
#   from mdlinks.config import settings
settings = Settings()
