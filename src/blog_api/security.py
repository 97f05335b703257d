"""API-key guard for the diagnostic routes.

The diagnostics expose the upstream WordPress URL and per-post media
details, so they are hidden entirely unless ``API_KEY`` is configured.
"""

import os
import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader

API_KEY_HEADER_NAME = "X-API-Key"

api_key_header = APIKeyHeader(
    name=API_KEY_HEADER_NAME,
    auto_error=False,
    description="Key for the diagnostic routes",
)


def get_api_key() -> str | None:
    return os.environ.get("API_KEY") or None


async def verify_api_key(
    api_key: Annotated[str | None, Depends(api_key_header)],
) -> str:
    expected_key = get_api_key()
    if expected_key is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    if api_key is None or not secrets.compare_digest(api_key, expected_key):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
        )
    return api_key


RequireApiKey = Annotated[str, Depends(verify_api_key)]
