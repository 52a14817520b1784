"""Render arbitrary values as display strings.

Used only by the display and diagnostic paths of the Result variants. Never
raises: serialization problems fall back to the natural string form.
"""

from __future__ import annotations

import json
from typing import Any

__all__ = ["to_display_string"]

_SERIALIZATION_ERRORS = (TypeError, ValueError, RecursionError)


def _is_opaque(value: object) -> bool:
    # Values whose natural form says nothing about their contents.
    if isinstance(value, dict):
        return True
    cls = type(value)
    return cls.__str__ is object.__str__ and cls.__repr__ is object.__repr__


def _nested_attributes(obj: Any) -> dict[str, Any]:
    if _is_opaque(obj):
        return vars(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _structured_form(value: Any) -> str:
    payload = value if isinstance(value, dict) else vars(value)
    return json.dumps(payload, separators=(",", ":"), default=_nested_attributes)


def to_display_string(value: object) -> str:
    """Return ``str(value)``, substituting compact JSON for opaque objects.

    Dicts and instances of classes without their own ``__str__``/``__repr__``
    are rendered as JSON (``{"a":1}``). Anything JSON cannot encode keeps its
    natural form.
    """
    try:
        text = str(value)
    except Exception:
        return object.__repr__(value)

    if not _is_opaque(value):
        return text
    try:
        return _structured_form(value)
    except _SERIALIZATION_ERRORS:
        return text
