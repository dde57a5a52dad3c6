"""Redaction for request/response traces.

Only used when ``api_trace_enabled`` is set. Credentials never reach the
log; auth headers keep their scheme so a missing token is still visible.
Catalog listings are capped at ``max_items`` entries.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

_SECRET_KEYS: frozenset[str] = frozenset(
    {
        "authorization",
        "proxy-authorization",
        "api_token",
        "token",
        "password",
        "cookie",
        "set-cookie",
    }
)

_MAX_DEPTH = 20


def _mask(value: Any) -> str:
    if isinstance(value, str):
        scheme, sep, _secret = value.partition(" ")
        if sep and scheme.isalpha():
            return f"{scheme} <redacted>"
    return "<redacted>"


def redact_for_log(value: Any, *, max_string: int = 512, max_items: int = 20) -> Any:
    """Copy *value* with secrets masked and long strings/listings shortened."""

    def walk(node: Any, depth: int) -> Any:
        if depth > _MAX_DEPTH:
            return "<max-depth>"
        if node is None or isinstance(node, (bool, int, float, Decimal)):
            return node
        if isinstance(node, str):
            if len(node) <= max_string:
                return node
            return f"{node[:max_string]}...<{len(node) - max_string} chars cut>"
        if isinstance(node, (bytes, bytearray)):
            return f"<{len(node)} bytes>"
        if isinstance(node, Mapping):
            return {
                str(key): _mask(item) if str(key).lower() in _SECRET_KEYS else walk(item, depth + 1)
                for key, item in node.items()
            }
        if isinstance(node, Sequence):
            shown = [walk(item, depth + 1) for item in node[:max_items]]
            if len(node) > max_items:
                shown.append(f"<+{len(node) - max_items} more>")
            return shown
        return repr(node)

    return walk(value, 0)
