# fluentschema/builder.py
"""Fluent JSON-Schema builder.

Every method returns a *new* :class:`FluentSchema` wrapping an updated
:class:`~fluentschema.models.Document`; the receiver is never modified, so a
builder can be branched freely::

    base = FluentSchema().prop("name").min_length(1)
    person = base.prop("age").as_integer().minimum(0).required()
    schema = person.value_of()

Operations that refine something (metadata, types, constraints, combinators)
act on the most recently declared property, or on the document itself when no
property has been declared yet.

Known quirk: ``required()`` does not deduplicate, calling it twice on the same
property lists the name twice.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from functools import singledispatch
from typing import Any, Optional, Union

from pydantic import ValidationError

from fluentschema.config import get_config
from fluentschema.errors import (
    InvalidArgumentError,
    PreconditionError,
    TypeMismatchError,
    UnsupportedKeywordError,
)
from fluentschema.models import (
    CONSTRAINT_TYPES,
    JSON_TYPES,
    NUMBER_OPTIONS,
    STRING_OPTIONS,
    Document,
    NumberConstraints,
    PropertyEntry,
    ReferenceEntry,
    StringConstraints,
    constraint_category,
)
from fluentschema.utils.logging import get_logger

__all__ = ["FluentSchema", "materialize", "DEFINITION_MARKER"]

logger = get_logger(__name__)

# Attribute key that routes a declaration into ``definitions``
DEFINITION_MARKER = "def"

# Name used in error messages when the document itself is the target
ROOT_NAME = "#"

_STRUCTURAL_KEYS = ("anyOf", "allOf", "oneOf", "not", "properties")

_ENTRY_FIELDS: dict[str, str] = {
    "$id": "id",
    "title": "title",
    "description": "description",
    "default": "default",
    "examples": "examples",
    "properties": "properties",
    "required": "required",
    "anyOf": "any_of",
    "allOf": "all_of",
    "oneOf": "one_of",
    "not": "not_",
}

_RECOGNIZED_KEYS = frozenset(
    {"type", "$ref", DEFINITION_MARKER, *_ENTRY_FIELDS, *STRING_OPTIONS, *NUMBER_OPTIONS}
)

_DOCUMENT_FIELDS: dict[str, str] = {
    "$id": "id",
    "$ref": "ref",
    "type": "type",
    "title": "title",
    "description": "description",
    "examples": "examples",
}

_CONSTRAINT_MODELS = {
    "string": StringConstraints,
    "number": NumberConstraints,
}


# ---------------------------------------------------------------------------
# Argument checks
# ---------------------------------------------------------------------------


def _require_integer(option: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"'{option}' must be an Integer")


def _require_number(option: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(f"'{option}' must be a Number")


def _require_string(option: str, value: Any) -> None:
    if not isinstance(value, str):
        raise InvalidArgumentError(f"'{option}' must be a String")


def _coerce_attributes(attributes: Any) -> Mapping[str, Any]:
    if attributes is None:
        return {}
    if isinstance(attributes, FluentSchema):
        return attributes.value_of()
    if not isinstance(attributes, Mapping):
        raise InvalidArgumentError(
            f"attributes must be a mapping or a FluentSchema, got {type(attributes).__name__}"
        )
    return attributes


# ---------------------------------------------------------------------------
# Entry construction
# ---------------------------------------------------------------------------


def _make_entry(
    name: str,
    attributes: Mapping[str, Any],
    target: str,
) -> Union[PropertyEntry, ReferenceEntry]:
    """Build an entry from a loose attribute mapping.

    Unknown keys are dropped.  A ``$ref`` collapses the entry to a reference
    and discards everything else.
    """
    if attributes.get("$ref") is not None:
        try:
            return ReferenceEntry(name=name, ref=attributes["$ref"])
        except ValidationError as exc:
            raise InvalidArgumentError(f"invalid $ref for '{name}': {exc}") from exc

    dropped = sorted(str(key) for key in attributes if key not in _RECOGNIZED_KEYS)
    if dropped:
        logger.debug("Dropping unrecognized attributes %s on '%s'", dropped, name)

    type_ = attributes.get("type")
    if type_ is None and not any(attributes.get(key) is not None for key in _STRUCTURAL_KEYS):
        type_ = get_config().default_property_type
    if type_ is not None and type_ not in JSON_TYPES:
        raise InvalidArgumentError(
            f"'{name}' has unknown type '{type_}', expected one of {', '.join(JSON_TYPES)}"
        )

    constraints: Optional[dict[str, Any]] = None
    for category, options in (("string", STRING_OPTIONS), ("number", NUMBER_OPTIONS)):
        present = {key: attributes[key] for key in options if attributes.get(key) is not None}
        if not present:
            continue
        if type_ not in CONSTRAINT_TYPES[category]:
            raise TypeMismatchError(name, next(iter(present)), type_)
        constraints = {"kind": category, **present}

    data: dict[str, Any] = {
        "name": name,
        "type": type_,
        "$id": attributes.get("$id") or f"#{target}/{name}",
        "constraints": constraints,
    }
    for key in _ENTRY_FIELDS:
        if key != "$id" and attributes.get(key) is not None:
            data[key] = copy.deepcopy(attributes[key])

    try:
        return PropertyEntry.model_validate(data)
    except ValidationError as exc:
        raise InvalidArgumentError(f"invalid attributes for '{name}': {exc}") from exc


def _rebuild_document(doc: Document, key: str, **updates: Any) -> Document:
    """Return a validated copy of ``doc`` with ``updates`` applied."""
    try:
        return Document.model_validate({**dict(doc), **updates})
    except ValidationError as exc:
        raise InvalidArgumentError(f"invalid value for '{key}': {exc}") from exc


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class FluentSchema:
    """Chainable, immutable JSON-Schema builder."""

    __slots__ = ("_document",)

    def __init__(self, document: Optional[Document] = None):
        if document is None:
            cfg = get_config()
            document = Document(schema_uri=cfg.schema_uri, type=cfg.root_type)
        self._document = document

    @property
    def document(self) -> Document:
        return self._document

    def __repr__(self) -> str:
        names = [entry.name for entry in self._document.properties]
        defs = [entry.name for entry in self._document.definitions]
        return f"FluentSchema(properties={names!r}, definitions={defs!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FluentSchema):
            return NotImplemented
        return self._document == other._document

    # Builders never change, copies can share the instance
    def __copy__(self) -> "FluentSchema":
        return self

    def __deepcopy__(self, memo: dict) -> "FluentSchema":
        return self

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _current(self, keyword: str) -> Union[PropertyEntry, ReferenceEntry]:
        current = self._document.last_property
        if current is None:
            raise PreconditionError(f"'{keyword}' can be applied only to a prop")
        return current

    def _refine(self, name: str, attributes: Mapping[str, Any]) -> "FluentSchema":
        entry = _make_entry(name, attributes, "properties")
        logger.debug("Refined property '%s' -> %s", name, sorted(entry.to_attributes()))
        return FluentSchema(self._document.replace_last_property(entry))

    def _check_option(self, option: str) -> None:
        category = constraint_category(option)
        current = self._document.last_property
        if current is None:
            name, type_ = ROOT_NAME, self._document.type
        else:
            name, type_ = current.name, current.type
        if type_ not in CONSTRAINT_TYPES[category]:
            raise TypeMismatchError(name, option, type_)

    def _set_document(self, key: str, value: Any) -> "FluentSchema":
        doc = self._document
        category = constraint_category(key)
        if category is not None:
            existing = doc.constraints.to_attributes() if doc.constraints is not None else {}
            model = _CONSTRAINT_MODELS[category]
            try:
                constraints = model.model_validate({**existing, key: value})
            except ValidationError as exc:
                raise InvalidArgumentError(f"invalid value for '{key}': {exc}") from exc
            return FluentSchema(_rebuild_document(doc, key, constraints=constraints))

        if key == "type" and doc.constraints is not None:
            if value not in CONSTRAINT_TYPES[doc.constraints.kind]:
                option = next(iter(doc.constraints.to_attributes()))
                raise TypeMismatchError(ROOT_NAME, option, value)

        return FluentSchema(
            _rebuild_document(doc, key, **{_DOCUMENT_FIELDS[key]: copy.deepcopy(value)})
        )

    def _set_meta(self, key: str, value: Any) -> "FluentSchema":
        if constraint_category(key) is not None:
            self._check_option(key)
        current = self._document.last_property
        if current is None:
            logger.debug("Set document attribute '%s'", key)
            return self._set_document(key, value)
        return self._refine(current.name, {**current.to_attributes(), key: value})

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def id(self, id_: str) -> "FluentSchema":
        return self._set_meta("$id", id_)

    def title(self, title: str) -> "FluentSchema":
        return self._set_meta("title", title)

    def description(self, description: str) -> "FluentSchema":
        return self._set_meta("description", description)

    def examples(self, examples: Union[list, tuple]) -> "FluentSchema":
        if not isinstance(examples, (list, tuple)):
            raise InvalidArgumentError("'examples' must be an array e.g. ['1', 'one', 'foo']")
        return self._set_meta("examples", list(examples))

    def ref(self, ref: str) -> "FluentSchema":
        """Point the current property (or the document) at another schema.

        On a property this discards every other attribute it had.
        """
        current = self._document.last_property
        if current is None:
            return self._set_document("$ref", ref)
        return self._refine(current.name, {"$ref": ref})

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def prop(self, name: str, attributes: Any = None) -> "FluentSchema":
        """Append a property, or a definition when ``attributes`` carries ``def``.

        ``attributes`` may be a mapping of schema keywords or another
        :class:`FluentSchema`.  Without an explicit ``type`` or any combinator
        the property defaults to ``string``.
        """
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError("property name must be a non-empty string")
        attributes = _coerce_attributes(attributes)
        target = "definitions" if attributes.get(DEFINITION_MARKER) else "properties"
        entry = _make_entry(name, attributes, target)
        logger.debug("Declared %s entry '%s'", target, name)
        return FluentSchema(self._document.append(target, entry))

    def definition(self, name: str, attributes: Any = None) -> "FluentSchema":
        attributes = _coerce_attributes(attributes)
        return self.prop(name, {**attributes, DEFINITION_MARKER: True})

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def as_type(self, type_: str) -> "FluentSchema":
        if type_ not in JSON_TYPES:
            raise InvalidArgumentError(
                f"unknown type '{type_}', expected one of {', '.join(JSON_TYPES)}"
            )
        return self._set_meta("type", type_)

    def as_string(self) -> "FluentSchema":
        return self.as_type("string")

    def as_number(self) -> "FluentSchema":
        return self.as_type("number")

    def as_integer(self) -> "FluentSchema":
        return self.as_type("integer")

    def as_boolean(self) -> "FluentSchema":
        return self.as_type("boolean")

    def as_array(self) -> "FluentSchema":
        return self.as_type("array")

    def as_object(self) -> "FluentSchema":
        return self.as_type("object")

    def as_null(self) -> "FluentSchema":
        return self.as_type("null")

    # ------------------------------------------------------------------
    # String constraints
    # ------------------------------------------------------------------

    def min_length(self, min_: int) -> "FluentSchema":
        _require_integer("minLength", min_)
        return self._set_meta("minLength", min_)

    def max_length(self, max_: int) -> "FluentSchema":
        _require_integer("maxLength", max_)
        return self._set_meta("maxLength", max_)

    def pattern(self, pattern: str) -> "FluentSchema":
        _require_string("pattern", pattern)
        return self._set_meta("pattern", pattern)

    def format(self, format_: str) -> "FluentSchema":
        _require_string("format", format_)
        return self._set_meta("format", format_)

    # ------------------------------------------------------------------
    # Number constraints
    # ------------------------------------------------------------------

    def minimum(self, min_: int) -> "FluentSchema":
        _require_integer("minimum", min_)
        return self._set_meta("minimum", min_)

    def maximum(self, max_: Union[int, float]) -> "FluentSchema":
        _require_number("maximum", max_)
        return self._set_meta("maximum", max_)

    def multiple_of(self, multiple: Union[int, float]) -> "FluentSchema":
        _require_number("multipleOf", multiple)
        return self._set_meta("multipleOf", multiple)

    def exclusive_minimum(self, min_: Union[int, float]) -> "FluentSchema":
        _require_number("exclusiveMinimum", min_)
        return self._set_meta("exclusiveMinimum", min_)

    def exclusive_maximum(self, max_: Union[int, float]) -> "FluentSchema":
        _require_number("exclusiveMaximum", max_)
        return self._set_meta("exclusiveMaximum", max_)

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------

    def _untyped_attributes(self, keyword: str) -> tuple[str, dict[str, Any]]:
        """Attributes of the current property without its type or constraints.

        Combinator entries are typeless, so type-scoped keywords cannot follow
        them into the result.
        """
        current = self._current(keyword)
        attributes = current.to_attributes()
        attributes.pop("type", None)
        dropped = [key for key in attributes if constraint_category(key) is not None]
        for key in dropped:
            del attributes[key]
        if dropped:
            logger.debug("Dropping %s on '%s' for '%s'", dropped, current.name, keyword)
        return current.name, attributes

    def not_(self) -> "FluentSchema":
        name, attributes = self._untyped_attributes("not")
        attributes["not"] = {}
        return self._refine(name, attributes)

    def _combine(self, keyword: str, other: Any) -> "FluentSchema":
        self._current(keyword)
        if not isinstance(other, FluentSchema):
            raise InvalidArgumentError(
                f"'{keyword}' expects a FluentSchema, got {type(other).__name__}"
            )
        values = list(other.value_of()["properties"].values())
        name, attributes = self._untyped_attributes(keyword)
        negated = attributes.pop("not", None)
        if negated is not None:
            attributes["not"] = {keyword: values}
        else:
            attributes[keyword] = values
        return self._refine(name, attributes)

    def any_of(self, other: "FluentSchema") -> "FluentSchema":
        return self._combine("anyOf", other)

    def all_of(self, other: "FluentSchema") -> "FluentSchema":
        return self._combine("allOf", other)

    def one_of(self, other: "FluentSchema") -> "FluentSchema":
        return self._combine("oneOf", other)

    def required(self) -> "FluentSchema":
        current = self._current("required")
        return FluentSchema(self._document.add_required(current.name))

    # ------------------------------------------------------------------
    # Conditionals (reserved)
    # ------------------------------------------------------------------

    def if_(self, *args: Any, **kwargs: Any) -> "FluentSchema":
        raise UnsupportedKeywordError("if")

    def then(self, *args: Any, **kwargs: Any) -> "FluentSchema":
        raise UnsupportedKeywordError("then")

    def else_(self, *args: Any, **kwargs: Any) -> "FluentSchema":
        raise UnsupportedKeywordError("else")

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def value_of(self) -> dict[str, Any]:
        """Materialize the document into a fresh plain ``dict``.

        ``definitions`` and ``properties`` become mappings keyed by entry
        name.  Nested builders are replaced by their own extracted value.
        """
        doc = self._document
        value: dict[str, Any] = {"$schema": doc.schema_uri}
        for key, field in _DOCUMENT_FIELDS.items():
            attr = getattr(doc, field)
            if attr is not None:
                value[key] = materialize(attr)
        if doc.constraints is not None:
            value.update(doc.constraints.to_attributes())
        value["definitions"] = _flatten(doc.definitions)
        value["properties"] = _flatten(doc.properties)
        value["required"] = list(doc.required)
        return value


def _flatten(entries: tuple) -> dict[str, Any]:
    return {entry.name: materialize(entry.to_attributes()) for entry in entries}


# ---------------------------------------------------------------------------
# Materialization
# ---------------------------------------------------------------------------


@singledispatch
def materialize(value: Any) -> Any:
    """Return a plain, unaliased copy of ``value`` with builders extracted."""
    return copy.deepcopy(value)


@materialize.register(dict)
def _(value: dict) -> dict:
    return {key: materialize(item) for key, item in value.items()}


@materialize.register(list)
@materialize.register(tuple)
def _(value: Union[list, tuple]) -> list:
    return [materialize(item) for item in value]


@materialize.register(FluentSchema)
def _(value: FluentSchema) -> dict:
    return value.value_of()
