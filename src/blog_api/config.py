"""Runtime configuration for the blog API.

Settings are read from the environment once, when the application starts,
and handed to the WordPress client explicitly.
"""

import os

from pydantic import BaseModel, Field

DEFAULT_WP_API_BASE = "http://localhost:8884"

# Path of the core WordPress REST namespace on the remote host.
WP_API_PATH = "/wp-json/wp/v2"


class Settings(BaseModel):
    """Configuration consumed by ``WordPressClient``."""

    wp_api_base: str = Field(
        DEFAULT_WP_API_BASE, description="Base URL of the WordPress site"
    )
    revalidate_seconds: int = Field(
        60, ge=0, description="Max staleness advertised on every request"
    )
    timeout_seconds: float = Field(10.0, gt=0, description="HTTP timeout")

    @property
    def api_url(self) -> str:
        return f"{self.wp_api_base.rstrip('/')}{WP_API_PATH}"


def get_settings() -> Settings:
    """Build ``Settings`` from ``WP_API_BASE``, ``WP_REVALIDATE_SECONDS`` and
    ``WP_TIMEOUT_SECONDS``.  Unset or empty variables fall back to defaults.
    """
    values: dict = {}
    base = os.environ.get("WP_API_BASE")
    if base:
        values["wp_api_base"] = base
    revalidate = os.environ.get("WP_REVALIDATE_SECONDS")
    if revalidate:
        values["revalidate_seconds"] = int(revalidate)
    timeout = os.environ.get("WP_TIMEOUT_SECONDS")
    if timeout:
        values["timeout_seconds"] = float(timeout)
    return Settings(**values)
