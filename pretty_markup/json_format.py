"""JSON pretty-printing, delegated to the standard library serializer."""

from __future__ import annotations

import json
import logging

from .constants import DEFAULT_INDENT_UNIT
from .exceptions import InvalidJsonError

logger = logging.getLogger(__name__)


def pretty_json(value: object, indent: str = DEFAULT_INDENT_UNIT) -> str | None:
    """Pretty-print JSON text or an already decoded structure.

    Args:
        value: JSON text, or a dict, list or tuple to serialize directly.
        indent: Indentation unit per nesting level.

    Returns:
        str | None: Indented JSON, or None when `value` is neither text nor a
            structured value.

    Raises:
        InvalidJsonError: If `value` is text that is not valid JSON.

    Examples:
        pretty_json('{"a":1}')  # '{\\n  "a": 1\\n}'
        pretty_json(42)  # None
    """
    if isinstance(value, str):
        try:
            data = json.loads(value)
        except json.JSONDecodeError as error:
            raise InvalidJsonError(f"Invalid JSON: {error}") from error
    elif isinstance(value, (dict, list, tuple)):
        data = value
    else:
        logger.debug("Cannot format %s as JSON", type(value).__name__)
        return None

    try:
        return json.dumps(data, indent=indent, ensure_ascii=False)
    except (TypeError, ValueError) as error:
        raise InvalidJsonError(f"Value is not JSON serializable: {error}") from error
