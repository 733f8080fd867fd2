"""
Unit tests for JSONPath extraction and value coercion.

System role: Verification of response parsing for external data queries
"""

import pytest

from backoffice.core.enums import ExpectedResponseType
from backoffice.core.integrations.extraction import (
    ExtractionError,
    coerce_value,
    extract_value,
    validate_jsonpath,
)

RESPONSE = {
    "total": 17,
    "issues": [
        {"key": "SOC-1", "fields": {"status": "open"}},
        {"key": "SOC-2", "fields": {"status": "closed"}},
    ],
}


class TestValidateJsonpath:
    def test_accepts_valid_path(self):
        validate_jsonpath("$.issues[*].key")

    @pytest.mark.parametrize("path", ["", "issues[0]", "total"])
    def test_requires_dollar_prefix(self, path):
        with pytest.raises(ExtractionError, match="must start with"):
            validate_jsonpath(path)

    def test_rejects_unparseable_path(self):
        with pytest.raises(ExtractionError):
            validate_jsonpath("$.issues[")


class TestExtractValue:
    def test_single_match_returns_value(self):
        assert extract_value(RESPONSE, "$.total") == 17

    def test_multiple_matches_return_list(self):
        assert extract_value(RESPONSE, "$.issues[*].key") == ["SOC-1", "SOC-2"]

    def test_no_match_raises(self):
        with pytest.raises(ExtractionError, match="No data found at path"):
            extract_value(RESPONSE, "$.missing")


class TestCoerceValue:
    @pytest.mark.parametrize(
        "value, expected",
        [(17, 17), ("17", 17), (" 2.5 ", 2.5), (True, 1)],
    )
    def test_number(self, value, expected):
        assert coerce_value(value, ExpectedResponseType.NUMBER) == expected

    @pytest.mark.parametrize("value", ["abc", "", None, {"a": 1}])
    def test_number_rejects_non_numeric(self, value):
        with pytest.raises(ExtractionError):
            coerce_value(value, ExpectedResponseType.NUMBER)

    def test_string(self):
        assert coerce_value(17, ExpectedResponseType.STRING) == "17"

    @pytest.mark.parametrize(
        "value, expected",
        [(True, True), ("true", True), ("1", True), (1, True), ("false", False), (0, False)],
    )
    def test_boolean(self, value, expected):
        assert coerce_value(value, ExpectedResponseType.BOOLEAN) is expected

    def test_boolean_rejects_other_strings(self):
        with pytest.raises(ExtractionError):
            coerce_value("yes", ExpectedResponseType.BOOLEAN)

    def test_json_object_and_array(self):
        assert coerce_value({"a": 1}, ExpectedResponseType.JSON_OBJECT) == {"a": 1}
        assert coerce_value([1, 2], ExpectedResponseType.JSON_ARRAY) == [1, 2]

    def test_json_types_are_checked(self):
        with pytest.raises(ExtractionError, match="Expected JSON object"):
            coerce_value([1], ExpectedResponseType.JSON_OBJECT)
        with pytest.raises(ExtractionError, match="Expected JSON array"):
            coerce_value({"a": 1}, ExpectedResponseType.JSON_ARRAY)
