# fluentschema/errors.py
"""Errors raised by the fluent schema builder.

Every failure is raised synchronously from the chain link that caused it.
The caller's previous builder is untouched, so no partial state is ever
observable after an error.
"""

from __future__ import annotations


class FluentSchemaError(Exception):
    """Base class for all builder errors."""


class InvalidArgumentError(FluentSchemaError, ValueError):
    """An operation received an argument of the wrong shape or type."""


class TypeMismatchError(FluentSchemaError, TypeError):
    """A type-scoped option was applied to a property of another type."""

    def __init__(self, property_name: str, option: str, type_: str | None):
        self.property_name = property_name
        self.option = option
        self.type = type_
        super().__init__(
            f"'{property_name}' as '{type_ or 'untyped'}' doesn't accept '{option}' option"
        )


class PreconditionError(FluentSchemaError):
    """An operation needs a current property but none has been declared."""


class UnsupportedKeywordError(FluentSchemaError, NotImplementedError):
    """Raised by schema keywords that are reserved but not implemented."""

    def __init__(self, keyword: str):
        self.keyword = keyword
        super().__init__(f"'{keyword}' isn't implemented yet")
