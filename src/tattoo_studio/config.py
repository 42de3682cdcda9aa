"""Environment-driven configuration."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    google_api_key: Optional[str] = None
    log_level: str = "INFO"


def load_settings() -> Settings:
    """
    Read settings from the environment (and a .env file if present).

    A fresh Settings is built on every call; nothing is cached.
    """
    load_dotenv()

    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        log_level = "INFO"

    return Settings(google_api_key=api_key or None, log_level=log_level)
