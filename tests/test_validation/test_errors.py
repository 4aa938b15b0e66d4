"""Tests for validation error types."""

import pytest
from sysml_to_autosar.validation.errors import (
    ErrorCodes,
    ValidationIssue,
    ValidationLocation,
    ValidationResult,
    ValidationSeverity,
)


class TestValidationLocation:
    """Tests for ValidationLocation."""

    def test_str_with_all_fields(self) -> None:
        """Should format location with line and column."""
        loc = ValidationLocation(path="Powertrain.EngineCtrl.pSpeed", line=10, column=5)
        assert str(loc) == "Powertrain.EngineCtrl.pSpeed (line 10, col 5)"

    def test_str_with_line_only(self) -> None:
        """Should format location with line only."""
        loc = ValidationLocation(path="Powertrain.EngineCtrl.pSpeed", line=10)
        assert str(loc) == "Powertrain.EngineCtrl.pSpeed (line 10)"

    def test_str_path_only(self) -> None:
        """Should format location with path only."""
        loc = ValidationLocation(path="Powertrain.EngineCtrl.pSpeed")
        assert str(loc) == "Powertrain.EngineCtrl.pSpeed"

    def test_frozen(self) -> None:
        """Should be immutable."""
        loc = ValidationLocation(path="test")
        with pytest.raises(AttributeError):
            loc.path = "new"  # type: ignore[misc]


class TestValidationIssue:
    """Tests for ValidationIssue."""

    def test_str_basic(self) -> None:
        """Should format issue as string."""
        issue = ValidationIssue(
            code="E001",
            message="Test error",
            severity=ValidationSeverity.ERROR,
        )
        result = str(issue)
        assert "[E001]" in result
        assert "ERROR" in result
        assert "Test error" in result

    def test_str_with_location_and_hint(self) -> None:
        """Should include location and suggestion in string."""
        issue = ValidationIssue(
            code="W007",
            message="Missing tag",
            severity=ValidationSeverity.WARNING,
            location=ValidationLocation(path="P.C.op.tags"),
            suggestion="Add a period",
        )
        result = str(issue)
        assert "at P.C.op.tags" in result
        assert "(hint: Add a period)" in result


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_empty_is_valid(self) -> None:
        """Should be valid with no issues."""
        result = ValidationResult()
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_warnings_keep_result_valid(self) -> None:
        """Should stay valid when only warnings exist."""
        result = ValidationResult()
        result.add_warning(ErrorCodes.W001_UNUSED_TYPE, "Unused", path="P.T")
        assert result.is_valid
        assert len(result.warnings) == 1

    def test_errors_invalidate(self) -> None:
        """Should be invalid once an error is added."""
        result = ValidationResult()
        result.add_error(
            ErrorCodes.E001_UNDEFINED_TYPE,
            "Undefined",
            path="P.C.a.type",
            suggestion="Define it",
            referenced_type="X",
        )
        assert not result.is_valid
        issue = result.errors[0]
        assert issue.location == ValidationLocation(path="P.C.a.type")
        assert issue.context == {"referenced_type": "X"}

    def test_merge(self) -> None:
        """Should append the other result's issues."""
        first = ValidationResult()
        first.add_error(ErrorCodes.E101_DUPLICATE_NAME, "Duplicate", path="P.a")
        second = ValidationResult()
        second.add_warning(ErrorCodes.W002_UNUSED_INSTANCE, "Unused", path="P.i")

        first.merge(second)

        assert [i.code for i in first.issues] == ["E101", "W002"]
