from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping

from freshmart.app.common.errors import FormError


def form_fields(source: Mapping[str, Any], fields: Iterable[str], defaults: Mapping[str, str] | None = None) -> Dict[str, str]:
    """Pick `fields` out of a submitted form as stripped strings (passwords excepted)."""
    defaults = defaults or {}
    data = {}
    for name in fields:
        value = source.get(name)
        if value is None:
            value = defaults.get(name, "")
        value = str(value)
        data[name] = value if name == "password" else value.strip()
    return data


def require_fields(data: Mapping[str, Any], fields: Mapping[str, str]) -> None:
    """`fields` maps form keys to the labels used in the error message."""
    missing = [name for name in fields if not str(data.get(name) or "").strip()]
    if missing:
        labels = ", ".join(fields[name] for name in missing)
        raise FormError(f"Please fill in: {labels}.", missing)
