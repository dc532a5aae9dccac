"""
Species admin configuration.

Settings are resolved from Streamlit secrets first (for cloud deployment),
then environment variables:
- SPECIES_API_URL (default: http://localhost:8000/api/species)
- SPECIES_API_TIMEOUT in seconds (default: no timeout)
- LOG_LEVEL (default: INFO)
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

try:
    import streamlit as st
    STREAMLIT_AVAILABLE = True
except ImportError:
    STREAMLIT_AVAILABLE = False

DEFAULT_API_URL = "http://localhost:8000/api/species"
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(levelname)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    timeout: Optional[float] = None
    log_level: str = DEFAULT_LOG_LEVEL


def _read_secrets() -> dict:
    """Return the [api] section of Streamlit secrets, or {} when unavailable."""
    if not STREAMLIT_AVAILABLE:
        return {}
    try:
        # Accessing st.secrets raises when no secrets.toml exists
        secrets_dict = dict(st.secrets)
    except Exception:
        return {}
    section = secrets_dict.get("api")
    return dict(section) if section else {}


def parse_timeout(value) -> Optional[float]:
    """
    Parse a timeout setting.

    Args:
        value: Seconds as a number or string; None or "" means no timeout

    Returns:
        Timeout in seconds, or None for no timeout

    Raises:
        ValueError: If the value is not a positive number
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid API timeout: {value!r}")
    if timeout <= 0:
        raise ValueError(f"API timeout must be positive, got {value!r}")
    return timeout


def get_settings() -> Settings:
    """Resolve settings from Streamlit secrets, environment variables, then defaults."""
    secrets = _read_secrets()

    api_url = secrets.get("API_URL") or os.getenv("SPECIES_API_URL") or DEFAULT_API_URL
    timeout = secrets.get("API_TIMEOUT", os.getenv("SPECIES_API_TIMEOUT"))
    log_level = secrets.get("LOG_LEVEL") or os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL

    return Settings(
        api_url=str(api_url).rstrip("/"),
        timeout=parse_timeout(timeout),
        log_level=str(log_level).upper(),
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Set up root logging the same way for the app and scripts."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
