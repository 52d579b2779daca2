from __future__ import annotations

import copy
import json
from typing import Any

from pydantic import JsonValue, TypeAdapter, ValidationError

from .errors import InvalidFormatError, InvalidValueError

Document = dict[str, JsonValue]

_VALUE_ADAPTER: TypeAdapter[JsonValue] = TypeAdapter(JsonValue)
_DOCUMENT_ADAPTER: TypeAdapter[Document] = TypeAdapter(Document)


def is_sequence(value: Any) -> bool:
    return isinstance(value, list)


def is_mapping(value: Any) -> bool:
    return isinstance(value, dict)


def is_number(value: Any) -> bool:
    # bool is an int subclass but a distinct JSON type
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def json_equal(left: Any, right: Any) -> bool:
    """
    Deep equality under JSON typing rules.

    Differs from ``==`` only where Python conflates JSON types: ``True`` is
    never equal to ``1`` and ``False`` is never equal to ``0``.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if is_number(left) and is_number(right):
        return left == right
    if is_sequence(left) and is_sequence(right):
        return len(left) == len(right) and all(json_equal(a, b) for a, b in zip(left, right))
    if is_mapping(left) and is_mapping(right):
        return left.keys() == right.keys() and all(json_equal(left[k], right[k]) for k in left)
    return type(left) is type(right) and left == right


def coerce_value(value: Any) -> JsonValue:
    """
    Validate that ``value`` is JSON-representable and return a private copy of it.

    Raises InvalidValueError for anything the backing file could not hold.
    """
    try:
        validated = _VALUE_ADAPTER.validate_python(value)
        json.dumps(validated, allow_nan=False)
    except (ValidationError, TypeError, ValueError) as e:
        raise InvalidValueError(f"The value provided is not JSON-representable: {e}") from e
    return copy.deepcopy(validated)


def validate_document(raw: Any) -> Document:
    """
    Validate a parsed file payload as a document (a JSON object at the top level).
    """
    if not is_mapping(raw):
        raise InvalidFormatError("The database file must contain a JSON object at the top level.")
    try:
        return _DOCUMENT_ADAPTER.validate_python(raw)
    except ValidationError as e:
        raise InvalidFormatError(f"The database file contains invalid JSON: {e}") from e
