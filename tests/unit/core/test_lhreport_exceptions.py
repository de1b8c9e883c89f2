"""Unit tests for lhreport.core.exceptions module."""

import pytest

from lhreport.core.exceptions import (
    DanglingReferenceError,
    IntegrityError,
    LHReportError,
    LoaderError,
    ParseError,
    UnknownDisplayModeError,
    ValidationError,
)


class TestLHReportError:
    """Tests for LHReportError base class."""

    def test_is_exception(self):
        """Test that LHReportError is an Exception subclass."""
        assert issubclass(LHReportError, Exception)

    def test_message(self):
        """Test LHReportError with message."""
        error = LHReportError("Test error message")
        assert str(error) == "Test error message"


class TestLoaderErrors:
    """Tests for the loader error branch."""

    def test_loader_error_is_lhreport_error(self):
        assert issubclass(LoaderError, LHReportError)

    def test_parse_error_is_loader_error(self):
        assert issubclass(ParseError, LoaderError)

    def test_validation_error_is_loader_error(self):
        assert issubclass(ValidationError, LoaderError)


class TestValidationError:
    """Tests for ValidationError class."""

    def test_message_only(self):
        """Test ValidationError with message only."""
        error = ValidationError("Invalid value")
        assert str(error) == "Invalid value"
        assert error.message == "Invalid value"
        assert error.field is None
        assert error.file_path is None

    def test_with_field(self):
        """Test ValidationError with field."""
        error = ValidationError("Required", field="audits")
        assert str(error) == "Field: audits: Required"

    def test_with_file_path_and_field(self):
        """Test ValidationError with file path and field."""
        error = ValidationError("Required", field="audits", file_path="lhr.json")
        assert str(error) == "File: lhr.json, Field: audits: Required"

    def test_can_be_raised_and_caught_as_loader_error(self):
        """Test ValidationError is caught by its base."""
        with pytest.raises(LoaderError, match="broken"):
            raise ValidationError("broken")


class TestDanglingReferenceError:
    """Tests for DanglingReferenceError class."""

    def test_is_integrity_error(self):
        assert issubclass(DanglingReferenceError, IntegrityError)
        assert issubclass(IntegrityError, LHReportError)

    def test_not_a_loader_error(self):
        """Broken references are not loader failures."""
        assert not issubclass(DanglingReferenceError, LoaderError)

    def test_attributes_and_message(self):
        error = DanglingReferenceError("audit", "image-alt", "accessibility")
        assert error.kind == "audit"
        assert error.ref_id == "image-alt"
        assert error.category_id == "accessibility"
        assert str(error) == (
            "Category 'accessibility' references unknown audit 'image-alt'"
        )


class TestUnknownDisplayModeError:
    """Tests for UnknownDisplayModeError class."""

    def test_attributes_and_message(self):
        error = UnknownDisplayModeError("bogus", "viewport")
        assert error.mode == "bogus"
        assert error.audit_id == "viewport"
        assert "'bogus'" in str(error)
        assert "'viewport'" in str(error)
        assert issubclass(UnknownDisplayModeError, LHReportError)
