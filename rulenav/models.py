from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class TreeNodeModel(BaseModel):
    name: str
    path: str = Field(..., description="Full ruleset path like 'pricing/fees/base'")
    children: Optional[list[TreeNodeModel]] = None


class TreeStats(BaseModel):
    ruleset_count: int
    root_counts: dict[str, int]


class RulesetTreeResponse(BaseModel):
    items: list[TreeNodeModel]
    stats: TreeStats


class PathsTreeRequest(BaseModel):
    paths: list[str] = Field(..., description="Ruleset paths, e.g. ['a/b', 'a/c']")
    separator: Optional[str] = Field(default=None, min_length=1)
    strict: Optional[bool] = None


class PathsTreeResponse(BaseModel):
    items: list[TreeNodeModel]


class HealthResponse(BaseModel):
    ok: bool


class ReadyResponse(BaseModel):
    ready: bool
    reason: str | None = None


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: dict[str, Any] | None = None


TreeNodeModel.model_rebuild()
