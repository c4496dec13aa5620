from __future__ import annotations

import pytest


class TestConstraints:
    def test_string_constraints_dump_aliases(self):
        from fluentschema.models import StringConstraints

        c = StringConstraints(minLength=1, pattern="^a")
        assert c.to_attributes() == {"minLength": 1, "pattern": "^a"}

    def test_number_constraints_keep_ints(self):
        from fluentschema.models import NumberConstraints

        c = NumberConstraints(minimum=0, multipleOf=0.5)
        assert c.to_attributes() == {"minimum": 0, "multipleOf": 0.5}
        assert isinstance(c.to_attributes()["minimum"], int)

    def test_constraint_category(self):
        from fluentschema.models import constraint_category

        assert constraint_category("maxLength") == "string"
        assert constraint_category("exclusiveMaximum") == "number"
        assert constraint_category("title") is None


class TestPropertyEntry:
    def test_to_attributes_skips_unset(self):
        from fluentschema.models import PropertyEntry

        entry = PropertyEntry.model_validate(
            {"name": "a", "type": "string", "$id": "#properties/a", "default": 0}
        )
        assert entry.to_attributes() == {"type": "string", "default": 0, "$id": "#properties/a"}

    def test_constraints_must_match_type(self):
        from pydantic import ValidationError

        from fluentschema.models import PropertyEntry

        with pytest.raises(ValidationError):
            PropertyEntry.model_validate(
                {"name": "a", "type": "boolean", "constraints": {"kind": "string", "minLength": 1}}
            )

    def test_typeless_entry_rejects_constraints(self):
        from pydantic import ValidationError

        from fluentschema.models import PropertyEntry

        with pytest.raises(ValidationError):
            PropertyEntry.model_validate(
                {"name": "a", "not": {}, "constraints": {"kind": "number", "minimum": 1}}
            )

    def test_entries_are_frozen(self):
        from pydantic import ValidationError

        from fluentschema.models import PropertyEntry

        entry = PropertyEntry(name="a", type="string")
        with pytest.raises(ValidationError):
            entry.type = "number"


class TestReferenceEntry:
    def test_reference_has_only_ref(self):
        from fluentschema.models import ReferenceEntry

        entry = ReferenceEntry.model_validate({"name": "a", "$ref": "#definitions/a"})
        assert entry.to_attributes() == {"$ref": "#definitions/a"}
        assert entry.type is None


class TestDocument:
    def _document(self):
        from fluentschema.models import Document

        return Document(schema_uri="http://json-schema.org/draft-07/schema#")

    def test_defaults(self):
        doc = self._document()
        assert doc.type == "object"
        assert doc.properties == ()
        assert doc.definitions == ()
        assert doc.required == ()
        assert doc.last_property is None

    def test_append_returns_new_document(self):
        from fluentschema.models import PropertyEntry

        doc = self._document()
        updated = doc.append("properties", PropertyEntry(name="a", type="string"))
        assert doc.properties == ()
        assert updated.last_property.name == "a"

    def test_replace_last_property(self):
        from fluentschema.models import PropertyEntry, ReferenceEntry

        doc = self._document()
        doc = doc.append("properties", PropertyEntry(name="a", type="string"))
        doc = doc.append("properties", PropertyEntry(name="b", type="string"))
        replaced = doc.replace_last_property(ReferenceEntry(name="b", ref="#x"))
        assert [e.name for e in replaced.properties] == ["a", "b"]
        assert isinstance(replaced.last_property, ReferenceEntry)
        assert isinstance(doc.last_property, PropertyEntry)

    def test_replace_last_property_on_empty(self):
        from fluentschema.models import PropertyEntry

        with pytest.raises(IndexError):
            self._document().replace_last_property(PropertyEntry(name="a"))

    def test_add_required_keeps_duplicates(self):
        doc = self._document().add_required("a").add_required("a")
        assert doc.required == ("a", "a")
