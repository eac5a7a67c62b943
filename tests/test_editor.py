"""Tests für Validierung und Formatierung der Schema-Texte."""

from __future__ import annotations

import json

import pytest

from app.schemas import generate_schemas
from app.schemas.editor import (
    SCHEMA_NOT_OBJECT_MESSAGE,
    ValidationResult,
    format_schema,
    schema_to_string,
    validate_schema,
)

pytestmark = pytest.mark.unit


class TestValidateSchema:
    @pytest.mark.parametrize("text", ["", "   ", "\n"])
    def test_empty_is_valid_with_empty_object(self, text: str) -> None:
        result = validate_schema(text)
        assert result.valid is True
        assert result.parsed == {}
        assert result.error is None
        assert result.to_dict() == {"valid": True, "parsed": {}}

    def test_object_is_valid(self) -> None:
        result = validate_schema('{"a":1}')
        assert result.to_dict() == {"valid": True, "parsed": {"a": 1}}

    @pytest.mark.parametrize("text", ["[1,2,3]", "42", '"text"', "null", "true"])
    def test_non_object_json_is_invalid(self, text: str) -> None:
        result = validate_schema(text)
        assert result.valid is False
        assert result.error == SCHEMA_NOT_OBJECT_MESSAGE
        assert result.parsed is None

    @pytest.mark.parametrize("text", ["{", '{"a": }', "{'a': 1}", "not json"])
    def test_syntax_error_reports_parser_message(self, text: str) -> None:
        result = validate_schema(text)
        assert result.valid is False
        assert result.error
        assert result.to_dict().keys() == {"valid", "error"}

    @pytest.mark.parametrize(
        "text",
        ['{"minimum": NaN}', '{"maximum": Infinity}', '{"minimum": -Infinity}'],
    )
    def test_non_finite_constants_are_invalid(self, text: str) -> None:
        result = validate_schema(text)
        assert result.valid is False
        assert result.error
        assert result.parsed is None

    def test_deep_nesting_is_invalid_not_raised(self) -> None:
        depth = 100_000
        result = validate_schema('{"a": ' + "[" * depth + "]" * depth + "}")
        assert result.valid is False
        assert result.error
        assert result.parsed is None

    def test_repeated_calls_are_independent(self) -> None:
        assert validate_schema("[") == validate_schema("[")
        assert validate_schema('{"x": [1]}').valid
        assert validate_schema("").parsed == {}

    def test_result_shape_invariant(self) -> None:
        for text in ["", "{}", "[]", "{"]:
            result = validate_schema(text)
            assert isinstance(result, ValidationResult)
            assert (result.error is None) == result.valid
            assert (result.parsed is not None) == result.valid


class TestFormatSchema:
    def test_two_space_indent(self) -> None:
        assert format_schema({"a": {"b": 1}}) == '{\n  "a": {\n    "b": 1\n  }\n}'

    def test_keeps_insertion_order(self) -> None:
        text = format_schema({"z": 1, "a": 2})
        assert text.index('"z"') < text.index('"a"')

    def test_round_trip_of_generated_schemas(self) -> None:
        schemas = generate_schemas("Forecast demand for next month")
        for schema in (schemas.input, schemas.output):
            assert json.loads(format_schema(schema)) == schema

    def test_non_ascii_kept_readable(self) -> None:
        assert "ä" in format_schema({"beschreibung": "Äpfel zählen"})


class TestSchemaToString:
    def test_none_and_empty_give_empty_string(self) -> None:
        assert schema_to_string(None) == ""
        assert schema_to_string({}) == ""

    def test_non_empty_matches_format(self) -> None:
        assert schema_to_string({"a": 1}) == format_schema({"a": 1})

    def test_validate_accepts_formatted_output(self) -> None:
        schema = generate_schemas("Detect unusual server metrics").output
        result = validate_schema(schema_to_string(schema))
        assert result.valid
        assert result.parsed == schema
