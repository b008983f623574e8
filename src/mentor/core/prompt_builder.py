"""
Core prompt builder: template-based prompt construction shared by the proxy
prompt builders. Callers own the template strings; this module only fills them.
"""

from __future__ import annotations

from typing import Any


class _SafeFormatDict(dict):
    """Mapping that returns empty string for missing keys (for str.format_map)."""

    def __missing__(self, key: str) -> str:
        return ""


def build_from_template(template: str, **kwargs: Any) -> str:
    """
    Fill a template with the given keyword arguments.
    Missing keys and None values render as empty strings.
    """
    if not template:
        return ""
    safe = {k: ("" if v is None else v) for k, v in kwargs.items()}
    return template.format_map(_SafeFormatDict(safe))


def bucket_label(value: float, buckets: list[tuple[float, str]], fallback: str) -> str:
    """Return the label of the first bucket whose upper bound is >= value."""
    for upper, label in buckets:
        if value <= upper:
            return label
    return fallback
