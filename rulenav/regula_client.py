import asyncio
import logging
import os
from dataclasses import dataclass

import httpx

from .core.paths import normalize_prefix

logger = logging.getLogger("rulenav")

MAX_ATTEMPTS = 4
# the upstream refuses pages bigger than this
MAX_PAGE_LIMIT = 100


class RegulaError(Exception):
    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {resp.status_code}"


@dataclass
class RegulaClient:
    base_url: str
    timeout_s: float = 10
    page_limit: int = MAX_PAGE_LIMIT

    @classmethod
    def from_env(cls):
        base = os.getenv("REGULA_BASE_URL", "").rstrip("/")
        if not base:
            raise RegulaError(503, "Regula upstream not configured")
        try:
            timeout_s = float(os.getenv("REGULA_TIMEOUT_S", "10"))
            page_limit = int(os.getenv("REGULA_PAGE_LIMIT", str(MAX_PAGE_LIMIT)))
        except ValueError as e:
            raise RegulaError(503, f"Invalid Regula settings: {e}") from e
        return cls(base, timeout_s, max(1, min(page_limit, MAX_PAGE_LIMIT)))

    def rulesets_url(self, prefix: str = "") -> str:
        return f"{self.base_url}/rulesets/{normalize_prefix(prefix)}"

    async def _get(self, url: str, params: dict) -> dict:
        # retry network errors and 5xx with backoff, 4xx are final
        for attempt in range(MAX_ATTEMPTS):
            last = attempt == MAX_ATTEMPTS - 1
            try:
                async with httpx.AsyncClient(timeout=self.timeout_s) as client:
                    resp = await client.get(url, params=params, headers={"Accept": "application/json"})
            except httpx.RequestError as e:
                if last:
                    raise RegulaError(504, f"Network error talking to Regula: {e}") from e
                logger.warning("regula request failed (attempt %d): %s", attempt + 1, e)
                await asyncio.sleep(0.5 * (2 ** attempt))
                continue

            if resp.status_code >= 500:
                if last:
                    raise RegulaError(resp.status_code, _error_message(resp))
                logger.warning("regula returned %d (attempt %d)", resp.status_code, attempt + 1)
                await asyncio.sleep(0.5 * (2 ** attempt))
                continue
            if resp.status_code >= 400:
                raise RegulaError(resp.status_code, _error_message(resp))
            try:
                data = resp.json()
            except ValueError as e:
                raise RegulaError(502, "Invalid JSON from Regula") from e
            if not isinstance(data, dict):
                raise RegulaError(502, "Invalid JSON from Regula")
            return data

    async def list_rulesets(self, prefix: str = "") -> list[dict]:
        """Fetch every ruleset under ``prefix``, following continue tokens.

        Only paths are requested from the upstream. An unknown prefix yields
        an empty list.
        """
        url = self.rulesets_url(prefix)
        rulesets: list[dict] = []
        token = ""
        while True:
            params = {"list": "", "paths": "", "limit": str(self.page_limit)}
            if token:
                params["continue"] = token
            try:
                data = await self._get(url, params)
            except RegulaError as e:
                if e.status == 404:
                    return rulesets
                raise
            rulesets.extend(data.get("rulesets") or [])
            token = data.get("continue") or ""
            if not token:
                return rulesets

    async def list_ruleset_paths(self, prefix: str = "") -> list[str]:
        rulesets = await self.list_rulesets(prefix)
        return [item["path"] for item in rulesets if item.get("path")]
