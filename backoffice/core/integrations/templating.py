"""
Request templating for external data queries.

Substitutes {placeholder} tokens in endpoint paths and query templates,
and parses GET query templates into parameter dicts.

Dependencies: math, re, urllib.parse (stdlib)
System role: URL and payload construction for the data fetcher
"""

import math
import re
from typing import Any
from urllib.parse import unquote

from backoffice.core.exceptions import ExternalDataError

PLACEHOLDER_PATTERN = re.compile(r"\{(\w+)\}")


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def substitute_placeholders(template: str, variables: dict[str, Any] | None) -> str:
    """
    Replace every {name} token with the matching context variable.

    Args:
        template: Text containing {name} placeholders
        variables: Context variables; None leaves the template untouched

    Returns:
        str: Template with placeholders replaced

    Raises:
        ExternalDataError: If a placeholder has no matching variable
    """
    if variables is None:
        return template

    def replace(match: re.Match) -> str:
        key = match.group(1)
        if key not in variables:
            raise ExternalDataError(f"Missing required context variable: {key}")
        return _stringify(variables[key])

    return PLACEHOLDER_PATTERN.sub(replace, template)


def extract_placeholders(*templates: str | None) -> list[str]:
    """
    Distinct placeholder names in order of first appearance.

    Args:
        *templates: Templates to scan; None entries are skipped

    Returns:
        list[str]: Placeholder names
    """
    seen: list[str] = []
    for template in templates:
        if not template:
            continue
        for name in PLACEHOLDER_PATTERN.findall(template):
            if name not in seen:
                seen.append(name)
    return seen


def build_url(base_url: str, endpoint_path: str) -> str:
    """Join a base URL and path with exactly one slash between them."""
    path = endpoint_path if endpoint_path.startswith("/") else f"/{endpoint_path}"
    return f"{base_url.rstrip('/')}{path}"


def parse_query_string(query_string: str) -> dict[str, str]:
    """
    Parse "a=1&b=two" into a dict with URL-decoded keys and values.

    Pairs without a key are skipped; keys without a value map to "".
    """
    params: dict[str, str] = {}
    for pair in query_string.split("&"):
        key, _, value = pair.partition("=")
        if key:
            params[unquote(key)] = unquote(value) if value else ""
    return params


def coerce_query_param(value: str) -> Any:
    """
    Interpret a URL query value as a context variable.

    "true"/"false" become booleans and numeric strings become int or
    float; anything else stays a string.
    """
    if value == "true":
        return True
    if value == "false":
        return False
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        return value
    return number if math.isfinite(number) else value
