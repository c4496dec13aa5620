"""
fluentschema - Fluent builder for JSON-Schema (draft-07) documents

Chain method calls to describe properties, types, validation constraints and
combinators, then call ``value_of()`` to get a plain ``dict``::

    from fluentschema import FluentSchema

    schema = (
        FluentSchema()
        .title("Person")
        .prop("name").min_length(1).required()
        .prop("age").as_integer().minimum(0)
        .value_of()
    )

Main Components:
    - fluentschema.builder: the immutable ``FluentSchema`` builder
    - fluentschema.models: Document and entry models
    - fluentschema.errors: error taxonomy
    - fluentschema.config: environment-driven defaults
"""

from .builder import FluentSchema
from .config import FluentSchemaConfig, get_config
from .errors import (
    FluentSchemaError,
    InvalidArgumentError,
    PreconditionError,
    TypeMismatchError,
    UnsupportedKeywordError,
)

__version__ = "0.1.0"

__all__ = [
    "FluentSchema",
    "FluentSchemaConfig",
    "get_config",
    "FluentSchemaError",
    "InvalidArgumentError",
    "PreconditionError",
    "TypeMismatchError",
    "UnsupportedKeywordError",
]
