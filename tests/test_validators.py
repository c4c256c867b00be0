"""
tests/test_validators.py
Unit tests for graphgen.validators (semantic checks).

Tests cover:
- Duplicate, reserved and scalar model names
- PascalCase naming warning
- Duplicate field names and the implicit id field
- Relationship target resolution
- Operation kind and per-root field collisions
- Custom scalar sets and empty fragments
- The validate_full entry point and report formatting
"""

from __future__ import annotations

from typing import Any, Dict, List

import pytest

from graphgen.models import ModelDefinitions
from graphgen.validators import (
    ValidationIssue,
    ValidationResult,
    validate_field_names,
    validate_full,
    validate_model_names,
    validate_operations,
    validate_relationships,
    validate_root_fields,
)


def _model(name: str, **fields: Any) -> Dict[str, Any]:
    return {"name": name, "properties": fields.pop("properties", []), **fields}


# ===========================================================================
# ValidationResult container
# ===========================================================================


class TestValidationResult:
    """Counting and truthiness of the result container."""

    def test_empty_result_is_valid(self) -> None:
        result = ValidationResult()
        assert result.is_valid
        assert bool(result)
        assert len(result) == 0

    def test_warning_keeps_result_valid(self) -> None:
        result = ValidationResult()
        result.add_warning("W", "a warning")
        assert result.is_valid
        assert result.has_warnings
        assert result.warning_count == 1

    def test_error_makes_result_invalid(self) -> None:
        result = ValidationResult()
        result.add_error("E", "an error", {"model": "Book"})
        assert not result
        assert result.error_count == 1
        error = result.errors[0]
        assert (error.level, error.code, error.message) == ("error", "E", "an error")
        assert error.context == {"model": "Book"}

    def test_merge(self) -> None:
        first = ValidationResult()
        first.add_info("I", "info")
        second = ValidationResult()
        second.add_error("E", "error")
        first.merge(second)
        assert first.codes == ["I", "E"]

    def test_format_report_skips_info_by_default(self) -> None:
        result = ValidationResult()
        result.add_info("SOME_INFO", "details")
        result.add_error("SOME_ERROR", "broken", {"model": "Book"})
        report = result.format_report()
        assert "SOME_ERROR" in report
        assert "model: Book" in report
        assert "SOME_INFO" not in report
        assert "SOME_INFO" in result.format_report(include_info=True)

    def test_issue_repr(self) -> None:
        issue = ValidationIssue("warning", "CODE", "message")
        assert str(issue) == "[WARNING] CODE: message"


# ===========================================================================
# Individual checks
# ===========================================================================


class TestModelNames:
    """validate_model_names."""

    def test_reference_models_pass(self, definitions: ModelDefinitions) -> None:
        result = validate_model_names(definitions)
        assert result.is_valid
        assert not result.has_warnings

    def test_duplicate_model_name(self, make_definitions) -> None:
        result = validate_model_names(make_definitions([_model("Book"), _model("Book")]))
        assert result.codes.count("DUPLICATE_MODEL_NAME") == 1

    @pytest.mark.parametrize("name", ["String", "ID", "DateTime"])
    def test_scalar_name(self, make_definitions, name: str) -> None:
        result = validate_model_names(make_definitions([_model(name)]))
        assert "MODEL_NAME_IS_SCALAR" in result.codes

    def test_custom_scalar_name(self, make_definitions) -> None:
        definitions = make_definitions([_model("Decimal")])
        assert validate_model_names(definitions).is_valid
        result = validate_model_names(definitions, ["ID", "Decimal"])
        assert result.codes == ["MODEL_NAME_IS_SCALAR"]

    @pytest.mark.parametrize("name", ["Query", "Mutation", "Sort", "Paginate"])
    def test_reserved_name(self, make_definitions, name: str) -> None:
        result = validate_model_names(make_definitions([_model(name)]))
        assert "MODEL_NAME_RESERVED" in result.codes
        assert not result.is_valid

    def test_lowercase_name_warns(self, make_definitions) -> None:
        result = validate_model_names(make_definitions([_model("book")]))
        assert result.is_valid
        assert [w.code for w in result.warnings] == ["MODEL_NAME_NOT_PASCAL_CASE"]

    def test_snake_case_name_warns(self, make_definitions) -> None:
        result = validate_model_names(make_definitions([_model("Book_Shelf")]))
        assert "MODEL_NAME_NOT_PASCAL_CASE" in result.codes


class TestFieldNames:
    """validate_field_names."""

    def test_duplicate_between_property_and_relationship(self, make_definitions) -> None:
        model = _model(
            "Book",
            properties=[{"name": "author", "type": "String"}],
            relationships=[{"name": "author", "type": "Author"}],
        )
        result = validate_field_names(make_definitions([model, _model("Author")]))
        assert result.codes == ["DUPLICATE_FIELD_NAME"]
        assert result.errors[0].context == {"model": "Book", "field": "author"}

    def test_property_named_id_warns(self, make_definitions) -> None:
        model = _model("Book", properties=[{"name": "id", "type": "Int"}])
        result = validate_field_names(make_definitions([model]))
        assert result.is_valid
        assert result.codes == ["FIELD_SHADOWS_ID"]

    def test_distinct_names_pass(self, definitions: ModelDefinitions) -> None:
        assert len(validate_field_names(definitions)) == 0


class TestRelationships:
    """validate_relationships."""

    def test_unknown_target(self, make_definitions) -> None:
        model = _model("Book", relationships=[{"name": "author", "type": "Writer"}])
        result = validate_relationships(make_definitions([model]))
        assert result.codes == ["RELATIONSHIP_TARGET_MISSING"]
        assert result.errors[0].context["target"] == "Writer"

    def test_scalar_target(self, make_definitions) -> None:
        model = _model("Book", relationships=[{"name": "isbn", "type": "String"}])
        assert validate_relationships(make_definitions([model])).is_valid

    def test_forward_and_cyclic_targets(self, definitions: ModelDefinitions) -> None:
        assert validate_relationships(definitions).is_valid

    def test_custom_scalar_target(self, make_definitions) -> None:
        model = _model("Book", relationships=[{"name": "price", "type": "Decimal"}])
        definitions = make_definitions([model])
        assert not validate_relationships(definitions).is_valid
        scalars = ["Int", "Float", "String", "Boolean", "ID", "DateTime", "Decimal"]
        assert validate_relationships(definitions, scalars).is_valid

    def test_replaced_scalar_set(self, make_definitions) -> None:
        model = _model("Book", relationships=[{"name": "stamp", "type": "DateTime"}])
        result = validate_relationships(make_definitions([model]), ["ID", "String"])
        assert result.codes == ["RELATIONSHIP_TARGET_MISSING"]


class TestOperations:
    """validate_operations and validate_root_fields."""

    def test_duplicate_kind_warns(self, make_definitions) -> None:
        model = _model(
            "Book",
            properties=[{"name": "title", "type": "String"}],
            operations=[{"name": "get", "type": "Show"}, {"name": "find", "type": "Show"}],
        )
        result = validate_operations(make_definitions([model]))
        assert result.is_valid
        assert [w.code for w in result.warnings] == ["DUPLICATE_OPERATION_KIND"]
        assert result.warnings[0].context == {"model": "Book", "kind": "Show"}

    def test_model_without_operations_is_info(self, definitions: ModelDefinitions) -> None:
        result = validate_operations(definitions)
        assert result.codes == ["MODEL_WITHOUT_OPERATIONS"]
        assert "Review" in result.format_report(include_info=True)

    def test_duplicate_root_field_on_one_model(self, make_definitions) -> None:
        model = _model(
            "Book",
            operations=[{"name": "get", "type": "Show"}, {"name": "get", "type": "List"}],
        )
        result = validate_root_fields(make_definitions([model]))
        assert [w.code for w in result.warnings] == ["DUPLICATE_ROOT_FIELD"]
        assert result.warnings[0].context["field"] == "getBook"

    def test_duplicate_root_field_across_models(self, make_definitions) -> None:
        shelf = _model("Shelf", operations=[{"name": "getBook", "type": "Show"}])
        book_shelf = _model("BookShelf", operations=[{"name": "get", "type": "Show"}])
        result = validate_root_fields(make_definitions([shelf, book_shelf]))
        assert result.warnings[0].context == {
            "root": "Query",
            "field": "getBookShelf",
            "models": ["Shelf", "BookShelf"],
        }

    def test_unique_root_fields(self, definitions: ModelDefinitions) -> None:
        assert len(validate_root_fields(definitions)) == 0

    def test_same_field_on_different_roots(self, make_definitions) -> None:
        model = _model(
            "Book",
            operations=[{"name": "main", "type": "Show"}, {"name": "main", "type": "Update"}],
        )
        assert len(validate_root_fields(make_definitions([model]))) == 0

    def test_duplicate_mutation_field(self, make_definitions) -> None:
        model = _model(
            "Book",
            operations=[{"name": "save", "type": "Create"}, {"name": "save", "type": "Update"}],
        )
        result = validate_root_fields(make_definitions([model]))
        assert result.warnings[0].context["root"] == "Mutation"
        assert "Mutation.saveBook" in result.warnings[0].message

    def test_operations_without_properties_warn(self, make_definitions) -> None:
        model = _model("Book", operations=[{"name": "get", "type": "Show"}])
        result = validate_operations(make_definitions([model]))
        assert result.is_valid
        assert [w.code for w in result.warnings] == ["EMPTY_FRAGMENT"]
        assert result.warnings[0].context == {"model": "Book"}

    def test_no_properties_no_operations_is_info_only(self, make_definitions) -> None:
        result = validate_operations(make_definitions([_model("Book")]))
        assert result.codes == ["MODEL_WITHOUT_OPERATIONS"]


# ===========================================================================
# validate_full
# ===========================================================================


class TestValidateFull:
    """The master entry point."""

    def test_reference_models(self, definitions: ModelDefinitions) -> None:
        result = validate_full(definitions)
        assert result.is_valid
        assert not result.has_warnings
        assert result.codes == ["MODEL_WITHOUT_OPERATIONS"]

    def test_collects_from_every_check(self, make_definitions) -> None:
        models: List[Dict[str, Any]] = [
            _model("Query"),
            _model("book", relationships=[{"name": "x", "type": "Ghost"}]),
        ]
        result = validate_full(make_definitions(models))
        assert {"MODEL_NAME_RESERVED", "MODEL_NAME_NOT_PASCAL_CASE", "RELATIONSHIP_TARGET_MISSING"} <= set(
            result.codes
        )
        assert "Validation: 2 error(s), 1 warning(s)" in result.summary()

    def test_empty_definitions(self) -> None:
        assert len(validate_full(ModelDefinitions())) == 0

    def test_scalar_names_reach_every_scalar_check(self, make_definitions) -> None:
        models = [
            _model("Money"),
            _model("Book", relationships=[{"name": "price", "type": "Money"}]),
        ]
        definitions = make_definitions(models)
        assert validate_full(definitions).is_valid
        result = validate_full(definitions, {"ID": None, "Money": None})
        assert result.codes.count("MODEL_NAME_IS_SCALAR") == 1
