from __future__ import annotations

from dataclasses import dataclass

from rulenav.regula_client import RegulaClient, RegulaError


@dataclass
class UpstreamError(Exception):
    status_code: int
    code: str
    message: str
    upstream_status: int


class UpstreamHTTPError(UpstreamError):
    pass


class UpstreamNetworkError(UpstreamError):
    pass


def map_regula_error(err: RegulaError) -> UpstreamError:
    message = err.message or "Regula upstream error"
    if err.status == 504:
        return UpstreamNetworkError(504, "upstream_timeout", message, err.status)
    return UpstreamHTTPError(502, "upstream_error", message, err.status)


__all__ = [
    "RegulaClient",
    "RegulaError",
    "UpstreamError",
    "UpstreamHTTPError",
    "UpstreamNetworkError",
    "map_regula_error",
]
