"""
Unit tests for scope details validation.

System role: Verification of service scope template rules
"""

import pytest

from backoffice.core.scope_template import validate_scope_details

TEMPLATE = {
    "fields": [
        {"name": "endpoints", "label": "Endpoints", "type": "number", "required": True, "min": 1, "max": 5000},
        {"name": "tier", "label": "Tier", "type": "select", "options": ["gold", "silver"]},
        {"name": "contact", "label": "Contact", "type": "email"},
        {"name": "portal", "label": "Portal", "type": "url"},
        {"name": "go_live", "label": "Go-live", "type": "date"},
        {"name": "managed", "label": "Managed", "type": "boolean"},
        {"name": "site_code", "label": "Site code", "type": "string", "min_length": 3, "max_length": 6},
    ]
}


def test_valid_details():
    details = {
        "endpoints": 250,
        "tier": "gold",
        "contact": "soc@acme.example",
        "portal": "https://portal.acme.example",
        "go_live": "2025-04-01",
        "managed": True,
        "site_code": "RUH01",
        "extra_key": "allowed",
    }

    assert validate_scope_details(TEMPLATE, details) == []


@pytest.mark.parametrize("template", [None, {}, {"fields": []}])
def test_no_template_means_no_constraints(template):
    assert validate_scope_details(template, {"anything": 1}) == []


def test_required_field_missing_or_blank():
    assert validate_scope_details(TEMPLATE, {}) == ["Endpoints is required"]
    assert validate_scope_details(TEMPLATE, {"endpoints": None}) == ["Endpoints is required"]


@pytest.mark.parametrize(
    "details, expected",
    [
        ({"endpoints": 0}, "Endpoints must be at least 1"),
        ({"endpoints": 9000}, "Endpoints must be at most 5000"),
        ({"endpoints": "250"}, "Endpoints must be a number"),
        ({"endpoints": True}, "Endpoints must be a number"),
        ({"endpoints": 1, "tier": "bronze"}, "Tier must be one of: gold, silver"),
        ({"endpoints": 1, "contact": "not-an-email"}, "Contact must be a valid email address"),
        ({"endpoints": 1, "portal": "ftp://files"}, "Portal must be a valid URL"),
        ({"endpoints": 1, "go_live": "01/04/2025"}, "Go-live must be a date (YYYY-MM-DD)"),
        ({"endpoints": 1, "managed": "yes"}, "Managed must be true or false"),
        ({"endpoints": 1, "site_code": "AB"}, "Site code must be at least 3 characters"),
        ({"endpoints": 1, "site_code": "ABCDEFG"}, "Site code must be at most 6 characters"),
    ],
)
def test_field_rules(details, expected):
    assert validate_scope_details(TEMPLATE, details) == [expected]


def test_errors_accumulate_across_fields():
    errors = validate_scope_details(TEMPLATE, {"tier": "bronze", "managed": 1})

    assert errors == [
        "Endpoints is required",
        "Tier must be one of: gold, silver",
        "Managed must be true or false",
    ]
