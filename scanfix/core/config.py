import os

from pydantic import BaseModel


class Settings(BaseModel):
    APP_VERSION: str = os.getenv("APP_VERSION", "0.1.0")

    # Scan backend
    SCANNER_BASE_URL: str = os.getenv("SCANNER_BASE_URL", "http://localhost:5000")
    SCAN_REQUEST_TIMEOUT: float = float(os.getenv("SCAN_REQUEST_TIMEOUT", "30"))

    # Polling: fixed delay between one response and the next request
    SCAN_POLL_INTERVAL_MS: int = int(os.getenv("SCAN_POLL_INTERVAL_MS", "1000"))
    # Bounded retry for transport errors while polling (0 = fail on first error)
    SCAN_POLL_RETRIES: int = int(os.getenv("SCAN_POLL_RETRIES", "0"))

    # Export (local only for the UI)
    EXPORT_DIR: str = os.getenv("EXPORT_DIR", "exports")


settings = Settings()
