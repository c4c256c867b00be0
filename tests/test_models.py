"""
tests/test_models.py
Unit tests for graphgen.models (structural validation boundary).

Tests cover:
- Defaults of the definition primitives
- Accepted input forms (bare list, mapping with config)
- Batched field-level errors with locations
- YAML text parsing
- Artifact metrics and the result manifest
"""

from __future__ import annotations

from typing import Any, Dict

import pytest
from pydantic import ValidationError

from graphgen.errors import ModelValidationError
from graphgen.models import (
    Argument,
    GeneratedArtifact,
    GenerationConfig,
    GenerationResult,
    Model,
    ModelDefinitions,
    Property,
    parse_model_text,
    parse_models,
)


class TestPrimitives:
    """Defaults and closed value sets."""

    def test_property_defaults(self) -> None:
        prop = Property(name="title", type="String")
        assert prop.required is True
        assert prop.list is False
        assert prop.unique is False
        assert prop.permissions == []

    def test_property_without_optional_keys(self) -> None:
        prop = Property.model_validate({"name": "bio", "type": "String"})
        assert prop.permissions == []
        other = Property.model_validate({"name": "x", "type": "Int"})
        assert other.permissions is not prop.permissions

    def test_argument_without_validators(self) -> None:
        argument = Argument.model_validate({"name": "title", "type": "String"})
        assert argument.validators == []
        assert argument.list is False
        assert argument.required is True

    def test_nested_defaults(self) -> None:
        model = Model.model_validate(
            {
                "name": "Author",
                "properties": [{"name": "bio", "type": "String"}],
                "operations": [
                    {"name": "add", "type": "Create", "arguments": [{"name": "bio", "type": "String"}]}
                ],
            }
        )
        assert model.properties[0].permissions == []
        assert model.operations[0].arguments[0].validators == []

    def test_enum_values_are_stored_as_strings(self) -> None:
        assert Property(name="n", type="Int").type == "Int"

    def test_unknown_scalar(self) -> None:
        with pytest.raises(ValidationError):
            Property(name="n", type="Decimal")

    def test_unknown_operation_kind(self) -> None:
        with pytest.raises(ValidationError):
            Model(name="Book", properties=[], operations=[{"name": "x", "type": "Upsert"}])

    def test_properties_key_required(self) -> None:
        with pytest.raises(ValidationError):
            Model(name="Book")

    def test_extra_keys_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            Model(name="Book", properties=[], color="red")

    def test_invalid_identifier(self) -> None:
        with pytest.raises(ValidationError):
            Model(name="Book Shelf", properties=[])

    def test_computed_fields(self, make_model, book_dict) -> None:
        model = make_model(**book_dict)
        assert model.property_names == ["a", "b", "c"]
        assert model.has_operations


class TestParseModels:
    """parse_models input forms and error batching."""

    def test_mapping_with_config(self, models_dict: Dict[str, Any]) -> None:
        definitions, config = parse_models(models_dict)
        assert definitions.model_names == ["Book", "Author", "Review"]
        assert config.project_name == "library"
        assert config.service_package == "app.services"

    def test_bare_list_uses_default_config(self, book_dict: Dict[str, Any]) -> None:
        definitions, config = parse_models([book_dict])
        assert len(definitions.models) == 1
        assert config == GenerationConfig()

    def test_get_model(self, definitions: ModelDefinitions) -> None:
        author = definitions.get_model("Author")
        assert author is not None
        assert author.relationships[0].type == "Book"
        assert definitions.get_model("Publisher") is None

    def test_missing_models_key(self) -> None:
        with pytest.raises(ModelValidationError) as exc_info:
            parse_models({"config": {}})
        assert exc_info.value.errors[0]["loc"] == ("models",)

    def test_wrong_top_level_type(self) -> None:
        with pytest.raises(ModelValidationError) as exc_info:
            parse_models("Book")  # type: ignore[arg-type]
        assert "got str" in exc_info.value.errors[0]["msg"]

    def test_errors_are_batched(self) -> None:
        raw = {
            "models": [
                {"name": "Book"},
                {"name": "Author", "properties": [{"name": "age", "type": "Long"}]},
            ],
            "config": {"line_length": 10},
        }
        with pytest.raises(ModelValidationError) as exc_info:
            parse_models(raw)
        locs = [err["loc"] for err in exc_info.value.errors]
        assert ("models", 0, "properties") in locs
        assert ("models", 1, "properties", 0, "type") in locs
        assert ("config", "line_length") in locs
        assert "3 error(s)" in str(exc_info.value)

    def test_unknown_validator_kind(self, book_dict: Dict[str, Any]) -> None:
        book_dict["operations"] = [
            {
                "name": "add",
                "type": "Create",
                "arguments": [
                    {"name": "a", "type": "String", "validators": [{"type": "IsShiny"}]}
                ],
            }
        ]
        with pytest.raises(ModelValidationError) as exc_info:
            parse_models([book_dict])
        assert "Unknown validator kind 'IsShiny'" in exc_info.value.errors[0]["msg"]


class TestParseModelText:
    def test_yaml_text(self, models_yaml_text: str) -> None:
        definitions, _ = parse_model_text(models_yaml_text)
        assert len(definitions.models) == 3

    def test_json_text(self) -> None:
        definitions, _ = parse_model_text('[{"name": "Book", "properties": []}]')
        assert definitions.model_names == ["Book"]

    def test_invalid_yaml(self) -> None:
        with pytest.raises(ModelValidationError) as exc_info:
            parse_model_text("models: [unclosed")
        assert exc_info.value.errors[0]["type"] == "yaml_error"

    def test_empty_text(self) -> None:
        with pytest.raises(ModelValidationError):
            parse_model_text("")


class TestResultManifest:
    def test_artifact_metrics(self) -> None:
        artifact = GeneratedArtifact(name="schema.graphql", content="type A\n\ntype B")
        assert artifact.line_count == 3
        assert artifact.size_bytes == len("type A\n\ntype B")

    def test_empty_artifact(self) -> None:
        artifact = GeneratedArtifact(name="documents.graphql", content="")
        assert artifact.line_count == 0

    def test_result_lookup(self) -> None:
        result = GenerationResult()
        result.add_artifact("resolvers.py", "x = 1\n")
        assert result.get("resolvers.py") == "x = 1\n"
        assert result.get("missing.py") is None
        assert result.total_lines == 1
