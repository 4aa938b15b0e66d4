"""Tests for pydantic error translation."""

import pytest
from pydantic import ValidationError
from sysml_to_autosar.cli.pydantic_errors import (
    IDENTIFIER_PATTERN_HINT,
    format_pydantic_location,
    get_suggestion_for_error,
    translate_pydantic_error,
)
from sysml_to_autosar.models import SourceDocument


class TestTranslatePydanticError:
    """Tests for translate_pydantic_error."""

    def test_missing_field_translation(self) -> None:
        """Should translate missing field error."""
        error = {"type": "missing", "msg": "Field required", "loc": ("field",)}

        result = translate_pydantic_error(error)  # type: ignore[arg-type]

        assert "required" in result.lower()

    def test_extra_field_translation(self) -> None:
        """Should translate extra forbidden field error."""
        error = {
            "type": "extra_forbidden",
            "msg": "Extra inputs not allowed",
            "loc": ("extra",),
        }

        result = translate_pydantic_error(error)  # type: ignore[arg-type]

        assert "not allowed" in result.lower()

    def test_literal_error_with_context(self) -> None:
        """Should include expected values for literal error."""
        error = {
            "type": "literal_error",
            "msg": "Input should be...",
            "loc": ("kind",),
            "ctx": {"expected": "'enumeration', 'typedef' or 'primitive'"},
        }

        result = translate_pydantic_error(error)  # type: ignore[arg-type]

        assert result == "Must be one of: 'enumeration', 'typedef' or 'primitive'"

    def test_too_short_with_context(self) -> None:
        """Should include min length for list errors."""
        error = {
            "type": "too_short",
            "msg": "List should have at least 1 item",
            "loc": ("literals",),
            "ctx": {"min_length": 1},
        }

        result = translate_pydantic_error(error)  # type: ignore[arg-type]

        assert result == "Must contain at least 1 item(s)"

    def test_value_error_drops_prefix(self) -> None:
        """Should keep a model validator's own sentence."""
        error = {
            "type": "value_error",
            "msg": "Value error, Duplicate literal 'PARK'",
            "loc": ("types", 0),
        }

        result = translate_pydantic_error(error)  # type: ignore[arg-type]

        assert result == "Duplicate literal 'PARK'"

    def test_unknown_type_uses_message(self) -> None:
        """Should fall back to the original message."""
        error = {"type": "float_parsing", "msg": "Input should be a valid number", "loc": ()}

        result = translate_pydantic_error(error)  # type: ignore[arg-type]

        assert result == "Input should be a valid number"

    def test_real_pattern_error(self) -> None:
        """Should translate an error raised by the document schema."""
        with pytest.raises(ValidationError) as exc_info:
            SourceDocument.model_validate(
                {"schema": "sysml2ar/v1", "meta": {"name": "X"}, "packages": [{"name": "1bad"}]}
            )

        (error,) = exc_info.value.errors()

        assert translate_pydantic_error(error).startswith("Does not match pattern")
        assert format_pydantic_location(error["loc"]) == "packages[0].name"
        assert get_suggestion_for_error(error) == IDENTIFIER_PATTERN_HINT


class TestFormatPydanticLocation:
    """Tests for format_pydantic_location."""

    def test_simple_path(self) -> None:
        """Should format simple path."""
        assert format_pydantic_location(("meta", "author")) == "meta.author"

    def test_path_with_index(self) -> None:
        """Should format path with array index."""
        assert format_pydantic_location(("packages", 0, "name")) == "packages[0].name"

    def test_nested_indices(self) -> None:
        """Should format nested indices correctly."""
        loc = ("packages", 0, "components", 1, "ports", 2)

        assert format_pydantic_location(loc) == "packages[0].components[1].ports[2]"

    def test_empty_location(self) -> None:
        """Should handle empty location."""
        assert format_pydantic_location(()) == ""


class TestGetSuggestionForError:
    """Tests for get_suggestion_for_error."""

    def test_missing_suggestion(self) -> None:
        """Should suggest adding the field."""
        error = {"type": "missing", "msg": "Field required", "loc": ("name",)}

        assert "Add the required field" in get_suggestion_for_error(error)  # type: ignore[arg-type,operator]

    def test_literal_suggestion(self) -> None:
        """Should list the allowed values."""
        error = {
            "type": "literal_error",
            "msg": "Input should be 'enumeration', 'typedef' or 'primitive'",
            "loc": ("packages", 0, "types", 0, "kind"),
            "ctx": {"expected": "'enumeration', 'typedef' or 'primitive'"},
        }

        suggestion = get_suggestion_for_error(error)  # type: ignore[arg-type]

        assert suggestion == (
            "Use one of the allowed values: 'enumeration', 'typedef' or 'primitive'"
        )

    def test_wrong_schema_identifier(self) -> None:
        """Should name the supported schema."""
        with pytest.raises(ValidationError) as exc_info:
            SourceDocument.model_validate(
                {"schema": "wrong/v1", "meta": {"name": "X"}, "packages": [{"name": "X"}]}
            )

        (error,) = exc_info.value.errors()

        assert get_suggestion_for_error(error) == "Start the document with 'schema: sysml2ar/v1'"

    def test_empty_package_list(self) -> None:
        """Should ask for at least one package."""
        with pytest.raises(ValidationError) as exc_info:
            SourceDocument.model_validate(
                {"schema": "sysml2ar/v1", "meta": {"name": "X"}, "packages": []}
            )

        (error,) = exc_info.value.errors()

        assert error["type"] == "too_short"
        assert get_suggestion_for_error(error) == "Declare at least one package under 'packages'"

    def test_misspelled_port_key(self) -> None:
        """Should point at the intended key."""
        data = {
            "schema": "sysml2ar/v1",
            "meta": {"name": "X"},
            "packages": [
                {
                    "name": "X",
                    "components": [{"name": "C", "ports": [{"name": "p", "provided": []}]}],
                }
            ],
        }
        with pytest.raises(ValidationError) as exc_info:
            SourceDocument.model_validate(data)

        (error,) = exc_info.value.errors()

        location = format_pydantic_location(error["loc"])
        assert location == "packages[0].components[0].ports[0].provided"
        assert get_suggestion_for_error(error) == "Did you mean 'provides'?"

    def test_no_suggestion(self) -> None:
        """Should return None for unknown error types."""
        error = {"type": "int_type", "msg": "Input should be an integer", "loc": ("value",)}

        assert get_suggestion_for_error(error) is None  # type: ignore[arg-type]
