# tests/test_public_api.py
"""Verify the fluentschema top-level public API."""


class TestPublicAPI:

    def test_all_exports(self):
        import fluentschema

        for name in fluentschema.__all__:
            assert hasattr(fluentschema, name)

    def test_version(self):
        import fluentschema

        assert fluentschema.__version__ == "0.1.0"

    def test_chain_methods_present(self):
        from fluentschema import FluentSchema

        for method in (
            "id", "title", "description", "examples", "ref",
            "prop", "definition", "as_type", "as_string", "as_number",
            "as_integer", "as_boolean", "as_array", "as_object", "as_null",
            "min_length", "max_length", "pattern", "format",
            "minimum", "maximum", "multiple_of", "exclusive_minimum", "exclusive_maximum",
            "not_", "any_of", "all_of", "one_of", "required",
            "if_", "then", "else_", "value_of",
        ):
            assert callable(getattr(FluentSchema, method))
