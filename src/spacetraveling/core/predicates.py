"""Prismic query predicates.

Predicates are serialized into the ``q`` parameter of the documents search
endpoint, e.g. ``[at(document.type, "post")]``.
"""

from __future__ import annotations

import json
from typing import Any, List


def _serialize_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_serialize_value(v) for v in value) + "]"
    return json.dumps(str(value), ensure_ascii=False)


def at(path: str, value: Any) -> str:
    """Match documents where *path* equals *value*."""
    return f"[at({path}, {_serialize_value(value)})]"


def build_query(predicates: List[str]) -> str:
    """Join predicates into the bracketed ``q`` parameter value."""
    return "[" + "".join(predicates) + "]"
