"""Tests for perch.errors — exception hierarchy and error messages."""

import pytest

from perch.errors import (
    CompilationError,
    DuplicateRouteNameError,
    InvalidMethodError,
    InvalidPatternError,
    PatternError,
    PerchError,
    RouteValidationError,
    UnresolvedParameterError,
)


class TestHierarchy:
    def test_validation_errors(self) -> None:
        assert issubclass(RouteValidationError, PerchError)
        assert issubclass(RouteValidationError, ValueError)
        assert issubclass(InvalidPatternError, RouteValidationError)
        assert issubclass(InvalidMethodError, RouteValidationError)
        assert issubclass(DuplicateRouteNameError, RouteValidationError)

    def test_compilation_error(self) -> None:
        assert issubclass(CompilationError, PerchError)
        assert issubclass(CompilationError, ValueError)

    def test_pattern_error_alias(self) -> None:
        assert PatternError is CompilationError

    def test_unresolved_is_lookup_error(self) -> None:
        assert issubclass(UnresolvedParameterError, PerchError)
        assert issubclass(UnresolvedParameterError, LookupError)


class TestMessages:
    def test_invalid_pattern(self) -> None:
        assert str(InvalidPatternError()) == "The uri pattern cannot be null or empty"

    @pytest.mark.parametrize("method", [None, ""])
    def test_unspecified_method(self, method: str | None) -> None:
        err = InvalidMethodError(method)
        assert str(err) == "Unspecified request method"
        assert err.method == method

    def test_unknown_method(self) -> None:
        assert str(InvalidMethodError("FETCH")) == "Unknown request method 'FETCH'"

    def test_duplicate_name(self) -> None:
        err = DuplicateRouteNameError("home")
        assert err.name == "home"
        assert "'home'" in str(err)

    def test_compilation_error(self) -> None:
        err = CompilationError("/x/{id", "unbalanced '{' at position 3")
        assert err.pattern == "/x/{id"
        assert err.detail == "unbalanced '{' at position 3"
        assert str(err) == "Cannot compile uri pattern '/x/{id': unbalanced '{' at position 3"

    def test_unresolved_parameter(self) -> None:
        err = UnresolvedParameterError("id", "/contact/{id}")
        assert err.name == "id"
        assert err.pattern == "/contact/{id}"
        assert str(err) == "No value supplied for parameter 'id' in '/contact/{id}'"
