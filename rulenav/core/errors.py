from __future__ import annotations

from typing import Any


class APIError(Exception):
    """Error rendered to clients as ``{"code", "message", "details"}``."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}

    def __repr__(self) -> str:
        return f"APIError({self.status_code}, {self.code!r}, {self.message!r})"
