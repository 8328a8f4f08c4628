from rulenav.core.services.tree_service import (
    build_forest,
    fetch_ruleset_paths,
    paths_tree,
    paths_tree_text,
    ruleset_tree,
)

__all__ = [
    "build_forest",
    "fetch_ruleset_paths",
    "paths_tree",
    "paths_tree_text",
    "ruleset_tree",
]
