"""
Bracket-notation query string encoding.

The content API reads nested query parameters the way ``qs`` writes them:

    {"filters": {"city": {"slug": {"$eq": "oslo"}}}, "populate": ["city"]}

becomes

    filters[city][slug][$eq]=oslo&populate[0]=city
"""
from collections.abc import Mapping
from decimal import Decimal
from typing import Any


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def _flatten(prefix: str, value: Any, out: list[tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]", item, out)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, out)
    else:
        out.append((prefix, _scalar(value)))


def encode_params(params: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Flatten nested params into ordered (key, value) pairs. None values are dropped."""
    out: list[tuple[str, str]] = []
    for key, value in params.items():
        _flatten(key, value, out)
    return out
