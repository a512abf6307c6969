"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""

    # API
    API_BASE_URL = os.getenv("BOOKS_API_URL", "http://localhost:9000")

    # Defaults
    DEFAULT_TIMEOUT = 10

    @property
    def api_base_url(self) -> str:
        """Base URL without a trailing slash."""
        return self.API_BASE_URL.rstrip("/")
