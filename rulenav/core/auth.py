from __future__ import annotations

import hmac
import os
from typing import Annotated

from fastapi import Security
from fastapi.security import APIKeyHeader

from rulenav.core.errors import APIError


api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def configured_api_keys() -> list[str]:
    """Keys accepted on tree endpoints; comma separated to allow rotation."""
    raw = os.getenv("RULENAV_API_KEY", "")
    return [key.strip() for key in raw.split(",") if key.strip()]


def api_key_matches(candidate: str | None, keys: list[str]) -> bool:
    if not candidate:
        return False
    return any(hmac.compare_digest(candidate.encode(), key.encode()) for key in keys)


async def require_api_key(
    x_api_key: Annotated[str | None, Security(api_key_header)],
) -> None:
    keys = configured_api_keys()
    if not keys:
        return
    if not api_key_matches(x_api_key, keys):
        raise APIError(status_code=401, code="unauthorized", message="Invalid API key")
