from __future__ import annotations

import os
import re

from rulenav.ruleset_tree import DEFAULT_SEPARATOR


_SLASH_RE = re.compile(r"/+")
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def normalize_prefix(raw: str | None) -> str:
    """Collapse repeated slashes and strip the edges: ' /a//b/ ' -> 'a/b'."""
    value = (raw or "").strip()
    if not value:
        return ""
    parts = [part.strip() for part in _SLASH_RE.split(value)]
    return "/".join(part for part in parts if part)


def parse_bool(raw: str | None, default: bool = False) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return default


def parse_separator(raw: str | None) -> str:
    if not raw:
        return DEFAULT_SEPARATOR
    return raw


def configured_separator() -> str:
    return parse_separator(os.getenv("RULENAV_TREE_SEPARATOR"))


def configured_strict_paths() -> bool:
    return parse_bool(os.getenv("RULENAV_STRICT_PATHS"), default=False)
