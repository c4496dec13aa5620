"""Tests for the builder error taxonomy."""

import pytest


class TestErrorHierarchy:

    def test_all_errors_share_base(self):
        from fluentschema.errors import (
            FluentSchemaError,
            InvalidArgumentError,
            PreconditionError,
            TypeMismatchError,
            UnsupportedKeywordError,
        )

        for cls in (InvalidArgumentError, PreconditionError, TypeMismatchError, UnsupportedKeywordError):
            assert issubclass(cls, FluentSchemaError)

    def test_builtin_compatibility(self):
        from fluentschema.errors import (
            InvalidArgumentError,
            TypeMismatchError,
            UnsupportedKeywordError,
        )

        assert issubclass(InvalidArgumentError, ValueError)
        assert issubclass(TypeMismatchError, TypeError)
        assert issubclass(UnsupportedKeywordError, NotImplementedError)

    def test_type_mismatch_message(self):
        from fluentschema.errors import TypeMismatchError

        err = TypeMismatchError("age", "pattern", "integer")
        assert str(err) == "'age' as 'integer' doesn't accept 'pattern' option"
        assert (err.property_name, err.option, err.type) == ("age", "pattern", "integer")

    def test_type_mismatch_untyped(self):
        from fluentschema.errors import TypeMismatchError

        assert "'untyped'" in str(TypeMismatchError("x", "minimum", None))

    def test_unsupported_keyword(self):
        from fluentschema.errors import UnsupportedKeywordError

        with pytest.raises(NotImplementedError, match="'if' isn't implemented yet"):
            raise UnsupportedKeywordError("if")
