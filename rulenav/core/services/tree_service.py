from __future__ import annotations

import logging

from rulenav.core.errors import APIError
from rulenav.core.paths import configured_separator, configured_strict_paths, normalize_prefix
from rulenav.core.regula_client import RegulaClient, RegulaError, map_regula_error
from rulenav.models import PathsTreeRequest, PathsTreeResponse, RulesetTreeResponse, TreeStats
from rulenav.ruleset_tree import (
    InvalidPathError,
    TreeNode,
    forest_stats,
    render_tree_text,
    rulesets_to_tree,
    tree_to_dicts,
)

logger = logging.getLogger("rulenav")


def build_forest(paths: list[str], separator: str | None = None, strict: bool | None = None) -> list[TreeNode]:
    sep = separator or configured_separator()
    strict_paths = configured_strict_paths() if strict is None else strict
    try:
        forest = rulesets_to_tree(paths, separator=sep, strict=strict_paths)
    except InvalidPathError as e:
        raise APIError(400, "invalid_path", str(e), {"path": e.path, "reason": e.reason})
    logger.debug("built forest of %d roots from %d paths", len(forest), len(paths))
    return forest


async def fetch_ruleset_paths(prefix: str = "") -> list[str]:
    try:
        client = RegulaClient.from_env()
    except RegulaError as e:
        raise APIError(503, "not_configured", e.message)
    try:
        return await client.list_ruleset_paths(normalize_prefix(prefix))
    except RegulaError as e:
        upstream = map_regula_error(e)
        raise APIError(
            upstream.status_code,
            upstream.code,
            upstream.message,
            {"upstream_status": upstream.upstream_status},
        )


async def ruleset_tree(prefix: str = "", separator: str | None = None) -> RulesetTreeResponse:
    paths = await fetch_ruleset_paths(prefix)
    sep = separator or configured_separator()
    forest = build_forest(paths, separator=sep)
    return RulesetTreeResponse(
        items=tree_to_dicts(forest),
        stats=TreeStats(**forest_stats(paths, sep)),
    )


def paths_tree(req: PathsTreeRequest) -> PathsTreeResponse:
    forest = build_forest(req.paths, separator=req.separator, strict=req.strict)
    return PathsTreeResponse(items=tree_to_dicts(forest))


def paths_tree_text(req: PathsTreeRequest) -> str:
    forest = build_forest(req.paths, separator=req.separator, strict=req.strict)
    return render_tree_text(forest)
