"""Tests for custom exception hierarchy."""

from loan_export.exceptions import (
    ConfigurationError,
    LoanExportError,
    LoanNotFoundError,
    LoanSourceError,
    UnsupportedExportError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_loan_export_error_is_exception(self) -> None:
        assert isinstance(LoanExportError("test"), Exception)

    def test_unsupported_export_is_loan_export_error(self) -> None:
        assert isinstance(UnsupportedExportError("test"), LoanExportError)

    def test_configuration_error_is_loan_export_error(self) -> None:
        assert isinstance(ConfigurationError("test"), LoanExportError)

    def test_loan_not_found_is_source_error(self) -> None:
        err = LoanNotFoundError("test")
        assert isinstance(err, LoanSourceError)
        assert isinstance(err, LoanExportError)

    def test_exception_message(self) -> None:
        err = LoanNotFoundError("Loan 42 not found")
        assert str(err) == "Loan 42 not found"
