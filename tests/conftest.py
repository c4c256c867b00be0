"""
tests/conftest.py
Shared fixtures for the graphgen test suite.

The reference definitions live in ``models_example.yaml`` at the project
root; fixtures hand out deep copies so each test can mutate freely.
"""

from __future__ import annotations

import copy
import pathlib
from typing import Any, Callable, Dict, List

import pytest
import yaml

from graphgen.generator import CompilationOutput, CompilationSession, compile_models
from graphgen.models import GenerationConfig, Model, ModelDefinitions, parse_models


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

ROOT_DIR: pathlib.Path = pathlib.Path(__file__).resolve().parent.parent
MODELS_EXAMPLE_PATH: pathlib.Path = ROOT_DIR / "models_example.yaml"


# ---------------------------------------------------------------------------
# Raw definition fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def raw_models_dict() -> Dict[str, Any]:
    """Load models_example.yaml once per session."""
    assert MODELS_EXAMPLE_PATH.exists(), (
        f"Reference models not found at {MODELS_EXAMPLE_PATH}."
    )
    with open(MODELS_EXAMPLE_PATH, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    assert isinstance(data, dict), "Top-level YAML must be a mapping."
    return data


@pytest.fixture()
def models_dict(raw_models_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Deep copy of the reference data."""
    return copy.deepcopy(raw_models_dict)


@pytest.fixture()
def models_yaml_text(models_dict: Dict[str, Any]) -> str:
    return yaml.dump(models_dict, default_flow_style=False, sort_keys=False)


@pytest.fixture()
def book_dict() -> Dict[str, Any]:
    """A single self-contained model with properties a, b, c."""
    return {
        "name": "Book",
        "properties": [
            {"name": "a", "type": "String"},
            {"name": "b", "type": "Int", "required": False},
            {"name": "c", "type": "String", "list": True},
        ],
        "operations": [
            {"name": "get", "type": "Show"},
        ],
    }


# ---------------------------------------------------------------------------
# Parsed fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def definitions_and_config(models_dict: Dict[str, Any]):
    return parse_models(models_dict)


@pytest.fixture()
def definitions(definitions_and_config) -> ModelDefinitions:
    return definitions_and_config[0]


@pytest.fixture()
def config(definitions_and_config) -> GenerationConfig:
    return definitions_and_config[1]


@pytest.fixture()
def make_model() -> Callable[..., Model]:
    """Build a validated ``Model`` from keyword arguments."""

    def _make(name: str = "Book", **fields: Any) -> Model:
        fields.setdefault("properties", [])
        return Model.model_validate({"name": name, **fields})

    return _make


@pytest.fixture()
def make_definitions() -> Callable[[List[Dict[str, Any]]], ModelDefinitions]:
    def _make(models: List[Dict[str, Any]]) -> ModelDefinitions:
        return ModelDefinitions.model_validate({"models": models})

    return _make


# ---------------------------------------------------------------------------
# Compilation fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def session(config: GenerationConfig) -> CompilationSession:
    return CompilationSession(config)


@pytest.fixture()
def output(definitions: ModelDefinitions, config: GenerationConfig) -> CompilationOutput:
    """The reference definitions compiled once per test."""
    return compile_models(definitions.models, config)
