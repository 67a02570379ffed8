"""Helpers that force arbitrary model output into fixed response shapes.

Model replies are untrusted: they may be invalid JSON, the wrong type, or miss
fields entirely. Everything here returns a safe default instead of raising.
"""

import json
from typing import Any

ELLIPSIS = "…"


def parse_json_object(text: str, fallback: dict[str, Any]) -> dict[str, Any]:
    """Parse ``text`` as a JSON object.

    Returns ``fallback`` when the text is not valid JSON. Valid JSON that is
    not an object (a list, a number, ``null``) yields an empty dict so that
    field lookups fall through to their defaults.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        return fallback
    return data if isinstance(data, dict) else {}


def coerce_field(data: Any, name: str, expected_type: type | tuple[type, ...], default: Any) -> Any:
    """Return ``data[name]`` if it has the expected type, otherwise ``default``."""
    if not isinstance(data, dict):
        return default
    value = data.get(name)
    if isinstance(value, expected_type):
        return value
    return default


def stringify(value: Any) -> str:
    """Render a JSON scalar as text the way the browser client shows it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def coerce_str_list(value: Any) -> list[str]:
    """Coerce ``value`` to a list of non-empty strings."""
    if not isinstance(value, list):
        return []
    return [text for text in (stringify(item) for item in value) if text]


def truncate(text: str, limit: int, marker: str = ELLIPSIS) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + marker
