# smartlist/config/settings.py

"""Central configuration for the smartlist price comparison engine."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the smartlist price comparison engine."""

    # --- Products API ---
    API_BASE_URL: str = os.getenv(
        "PRODUCTS_API_BASE", "http://localhost:8000"
    )
    COMPARE_PATH: str = "/products/compare"
    SEARCH_PATH: str = "/products/search"
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out
    MAX_RETRIES: int = 3                # Retry count on transient failures
    RETRY_DELAY: float = 0.5            # Base seconds between retries
    SEARCH_LIMIT: int = 8               # Max suggestions per search

    # --- HTTP ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Products & display ---
    PRODUCT_KEY_SEPARATOR: str = "__"
    PLACEHOLDER_THUMBNAIL: str = "/file.svg"
    NO_PRICE_TEXT: str = "—"

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("SMARTLIST_LOG_LEVEL", "WARNING").upper()
    QUIET_LOGGERS: tuple[str, ...] = ("curl_cffi", "asyncio")

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    RESULTS_DIR: Path = BASE_DIR / "results"
    LOGS_DIR: Path = BASE_DIR / "logs"
