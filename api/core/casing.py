"""
snake_case / kebab-case -> camelCase key conversion for response payloads.
"""

from __future__ import annotations

import re
from typing import Any

_SEPARATOR_RE = re.compile(r"[-_]([a-zA-Z])")


def to_camel(key: str) -> str:
    return _SEPARATOR_RE.sub(lambda match: match.group(1).upper(), key)


def keys_to_camel(value: Any) -> Any:
    """
    Return a copy of `value` with every dict key camelCased, at any depth.

    Lists and tuples are walked element by element (tuples come back as
    lists, matching JSON). Other values are returned unchanged. The input is
    never mutated.
    """
    if isinstance(value, dict):
        return {
            (to_camel(k) if isinstance(k, str) else k): keys_to_camel(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [keys_to_camel(item) for item in value]
    return value
