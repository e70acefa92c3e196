# lang_mustache/core/coercion.py
"""
Converts resolved context values into their rendering forms: text, compact
JSON, iterable elements, and section truthiness.
"""
import json
from collections.abc import Mapping, Set
from typing import Any, Iterable, List
from urllib.parse import quote_plus

from .resolver import MISSING, is_collection, is_sequence

JSON_SEPARATORS = (",", ":")

# form-urlencoding leaves ASCII alphanumerics and "*-._" untouched.
_FORM_SAFE_CHARS = "*"


def _json_default(value: Any) -> Any:
    if isinstance(value, Set):
        return list(value)
    if isinstance(value, Mapping):
        return dict(value)
    if is_sequence(value):
        return list(value)
    return str(value)


def to_json(value: Any) -> str:
    """Serializes value as compact JSON, keeping mapping insertion order."""
    if value is MISSING:
        value = None
    return json.dumps(value, separators=JSON_SEPARATORS, ensure_ascii=False, default=_json_default)


def to_text(value: Any) -> str:
    """Text form of a value as substituted into the output.

    None and missing values render empty, booleans as ``true``/``false`` and
    nested containers as compact JSON.
    """
    if value is None or value is MISSING:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, Mapping) or is_collection(value):
        return to_json(value)
    return str(value)


def iter_elements(value: Any) -> List[Any]:
    """Elements of a sequence or set; anything else has none."""
    if is_collection(value):
        return list(value)
    return []


def is_truthy(value: Any) -> bool:
    """Whether a section renders for value.

    Missing, None, False, empty strings and empty collections are falsy.
    Numbers are truthy whatever their value, and so is any mapping.
    """
    if value is None or value is MISSING or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if is_collection(value):
        return len(value) > 0
    return True


def json_escape(text: str) -> str:
    # the body of a JSON string literal, without the surrounding quotes.
    return json.dumps(text, ensure_ascii=False)[1:-1]


def url_encode(text: str) -> str:
    """Form-urlencodes text: spaces become '+', reserved characters are escaped."""
    return quote_plus(text, safe=_FORM_SAFE_CHARS, encoding="utf-8").replace("~", "%7E")


def join_text(elements: Iterable[Any], delimiter: str) -> str:
    return delimiter.join(to_text(element) for element in elements)
