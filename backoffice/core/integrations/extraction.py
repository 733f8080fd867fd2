"""
Response extraction for external data queries.

JSONPath validation and evaluation plus coercion of the extracted value
to the query's expected response type.

Dependencies: jsonpath_ng
System role: Turns raw API responses into typed values
"""

import math
from typing import Any

from jsonpath_ng.ext import parse as parse_jsonpath
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError

from backoffice.core.enums import ExpectedResponseType


class ExtractionError(ValueError):
    """Raised when a value cannot be extracted or coerced."""


def validate_jsonpath(path: str) -> None:
    """
    Ensure a JSONPath expression is usable.

    Args:
        path: JSONPath expression

    Raises:
        ExtractionError: If the path does not start with "$" or does not parse
    """
    if not path or not path.startswith("$"):
        raise ExtractionError("Invalid JSONPath expression: must start with '$'")
    try:
        parse_jsonpath(path)
    except (JsonPathLexerError, JsonPathParserError) as e:
        raise ExtractionError(f"Invalid JSONPath expression: {e}") from e


def extract_value(data: Any, path: str) -> Any:
    """
    Evaluate a JSONPath against response data.

    Args:
        data: Decoded JSON response
        path: JSONPath expression

    Returns:
        The single matched value, or a list when several nodes match

    Raises:
        ExtractionError: If nothing matches
    """
    matches = [match.value for match in parse_jsonpath(path).find(data)]
    if not matches:
        raise ExtractionError(f"No data found at path: {path}")
    return matches[0] if len(matches) == 1 else matches


def _to_number(value: Any) -> int | float:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError as e:
                raise ExtractionError(f'Cannot convert "{value}" to number') from e
    else:
        raise ExtractionError(f'Cannot convert "{value}" to number')
    if isinstance(number, float) and math.isnan(number):
        raise ExtractionError(f'Cannot convert "{value}" to number')
    return number


def _to_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value in ("true", "1", 1):
        return True
    if value in ("false", "0", 0):
        return False
    raise ExtractionError(f'Cannot convert "{value}" to boolean')


def coerce_value(value: Any, expected_type: ExpectedResponseType) -> Any:
    """
    Coerce an extracted value to the expected response type.

    Args:
        value: Extracted value
        expected_type: Target type

    Returns:
        Coerced value

    Raises:
        ExtractionError: If the value cannot represent the expected type
    """
    if expected_type == ExpectedResponseType.NUMBER:
        return _to_number(value)
    if expected_type == ExpectedResponseType.STRING:
        return value if isinstance(value, str) else str(value)
    if expected_type == ExpectedResponseType.BOOLEAN:
        return _to_boolean(value)
    if expected_type == ExpectedResponseType.JSON_OBJECT:
        if not isinstance(value, dict):
            raise ExtractionError(f"Expected JSON object but got {type(value).__name__}")
        return value
    if expected_type == ExpectedResponseType.JSON_ARRAY:
        if not isinstance(value, list):
            raise ExtractionError(f"Expected JSON array but got {type(value).__name__}")
        return value
    return value
