"""
Unit tests for query templating helpers.

System role: Verification of placeholder substitution and query parsing
"""

import pytest

from backoffice.core.exceptions import ExternalDataError
from backoffice.core.integrations.templating import (
    build_url,
    coerce_query_param,
    extract_placeholders,
    parse_query_string,
    substitute_placeholders,
)


class TestSubstitutePlaceholders:
    def test_replaces_every_occurrence(self):
        result = substitute_placeholders(
            "/rest/api/2/search?jql=project={project} AND key={project}-{id}",
            {"project": "SOC", "id": 42},
        )

        assert result == "/rest/api/2/search?jql=project=SOC AND key=SOC-42"

    def test_booleans_render_lowercase(self):
        assert substitute_placeholders("open={open}", {"open": True}) == "open=true"

    def test_missing_variable_names_the_key(self):
        with pytest.raises(ExternalDataError, match="Missing required context variable: status"):
            substitute_placeholders("/issues?status={status}", {"project": "SOC"})

    def test_none_context_leaves_template_untouched(self):
        assert substitute_placeholders("/issues/{id}", None) == "/issues/{id}"


def test_extract_placeholders_in_first_seen_order():
    names = extract_placeholders("/projects/{project}/issues", None, '{"status": "{status}", "p": "{project}"}')

    assert names == ["project", "status"]


@pytest.mark.parametrize(
    "base_url, path, expected",
    [
        ("https://api.example.com", "/v1/items", "https://api.example.com/v1/items"),
        ("https://api.example.com/", "/v1/items", "https://api.example.com/v1/items"),
        ("https://api.example.com/", "v1/items", "https://api.example.com/v1/items"),
    ],
)
def test_build_url_joins_with_single_slash(base_url, path, expected):
    assert build_url(base_url, path) == expected


def test_parse_query_string_decodes_and_skips_empty_keys():
    params = parse_query_string("jql=project%20%3D%20SOC&maxResults=0&=orphan&flag")

    assert params == {"jql": "project = SOC", "maxResults": "0", "flag": ""}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("true", True),
        ("false", False),
        ("5", 5),
        ("-3", -3),
        ("2.5", 2.5),
        ("SOC", "SOC"),
        ("True", "True"),
        ("nan", "nan"),
        ("", ""),
    ],
)
def test_coerce_query_param(raw, expected):
    result = coerce_query_param(raw)

    assert result == expected
    assert type(result) is type(expected)
