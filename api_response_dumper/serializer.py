"""Serialize recorded values to JSON embeddable in generated JavaScript."""

import json
import logging
import re
from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

# Leading capitals to lower-case: "Id" -> "id", "URLValue" -> "urlValue"
_LEADING_CAPS = re.compile(r"^(?:[A-Z]+(?=[A-Z][a-z]|[^A-Za-z]|$)|[A-Z])")


def camel_case_key(name: str) -> str:
    """Convert a property name to lower camel case.

    snake_case names go through pydantic's alias generator, PascalCase
    names get their leading capitals lower-cased.
    """
    if "_" in name:
        return to_camel(name)
    return _LEADING_CAPS.sub(lambda m: m.group(0).lower(), name)


def camel_case_keys(data: Any) -> Any:
    """Recursively rename mapping keys in JSON-compatible data."""
    if isinstance(data, dict):
        return {
            camel_case_key(k) if isinstance(k, str) else k: camel_case_keys(v)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [camel_case_keys(item) for item in data]
    return data


def to_json(value: Any) -> str:
    """Render a value as compact JSON with lower camel case property names.

    Args:
        value: Anything FastAPI can encode (dataclasses, pydantic models,
            dicts, lists, datetimes, enums, ...)

    Returns:
        JSON text
    """
    encoded = camel_case_keys(jsonable_encoder(value))
    return json.dumps(encoded, ensure_ascii=False, separators=(",", ":"))


def escape_single_quotes(text: str) -> str:
    """Escape single quotes so text can sit inside a single-quoted JS string.

    Only quotes are escaped. Backslashes and control characters pass through
    unchanged, so JSON containing them will not survive JSON.parse.
    """
    return text.replace("'", "\\'")


def escape_js_string(value: str) -> str:
    """Escape a name for use as a key in a single-quoted JS string."""
    return value.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
