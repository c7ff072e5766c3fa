# /classroom/config.py

"""
Central place for environment-driven settings.

Values are read from the process environment (a local `.env` file is loaded
first for development). Modules import the constants they need from here so
that tests can patch them where they are used.
"""

import os
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# --- Data Source Selection ---
# When false, every repository talks to the in-memory JSON fixture store.
USE_LIVE_BACKEND = os.getenv("USE_LIVE_BACKEND", "false").lower() == "true"

# --- Hosted Table Backend ---
BACKEND_BASE_URL = os.getenv("BACKEND_BASE_URL", "http://localhost:8080/api")
BACKEND_PROJECT_ID = os.getenv("BACKEND_PROJECT_ID", "")
BACKEND_PUBLIC_KEY = os.getenv("BACKEND_PUBLIC_KEY", "")
BACKEND_TIMEOUT_SECONDS = float(os.getenv("BACKEND_TIMEOUT_SECONDS", "15"))

# --- Local Fixture Store ---
DEFAULT_FIXTURE_DIR = Path(__file__).resolve().parent / "data" / "fixtures"
FIXTURE_DIR = os.getenv("FIXTURE_DIR", str(DEFAULT_FIXTURE_DIR))

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configures the root logger once for the whole application."""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
