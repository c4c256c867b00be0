# File: graphgen/generator.py
"""
GraphGen - Compilation Session & Generation Pipeline
======================================================

Two layers:

``CompilationSession``
    The compiler proper.  One session owns one ``TypeRegistry`` and the three
    generators bound to it.  Models are added one at a time; ``finalize()``
    derives the ``Query`` / ``Mutation`` roots and returns every output at
    once.  Compiler errors propagate to the caller unchanged.

``GraphGenerator``
    The pipeline around a session::

        Raw input → Parse → Semantic validation → Compile → Artifacts

    It returns a ``GenerationReport`` with timing and outcome per step.
    Compiler errors are caught here, and only here, and recorded in the
    report.  A failed compilation yields no artifacts at all.

Sessions are cheap and never shared: build one per compilation run.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from graphql import GraphQLScalarType, GraphQLSchema

from graphgen.documents import DocumentGenerator
from graphgen.errors import ModelValidationError, SessionFinalizedError
from graphgen.models import (
    GenerationConfig,
    GenerationResult,
    Model,
    ModelDefinitions,
    parse_model_text,
    parse_models,
)
from graphgen.registry import TypeRegistry
from graphgen.resolvers import ModelSource, ResolverGenerator
from graphgen.schema import SchemaGenerator
from graphgen.utils import Timer
from graphgen.validators import ValidationResult, validate_full

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("graphgen.generator")

SCHEMA_ARTIFACT: str = "schema.graphql"
DOCUMENT_ARTIFACT: str = "documents.graphql"
RESOLVER_ARTIFACT: str = "resolvers.py"


# ---------------------------------------------------------------------------
# Compilation session
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CompilationOutput:
    """Everything one finalized session produced."""

    schema: GraphQLSchema
    schema_sdl: str
    document: str
    resolver_source: str


class CompilationSession:
    """
    One compilation run over a private registry.

    Usage::

        session = CompilationSession(GenerationConfig())
        session.add_model(book)
        session.add_model(author)
        output = session.finalize()
        print(output.schema_sdl)
    """

    def __init__(
        self,
        config: Optional[GenerationConfig] = None,
        scalar_types: Optional[Mapping[str, GraphQLScalarType]] = None,
    ) -> None:
        self.config: GenerationConfig = config or GenerationConfig()
        self.registry: TypeRegistry = TypeRegistry(scalar_types)
        self.schema_generator: SchemaGenerator = SchemaGenerator(self.registry)
        self.document_generator: DocumentGenerator = DocumentGenerator(self.registry)
        self.resolver_generator: ResolverGenerator = ResolverGenerator(self.config)
        self._output: Optional[CompilationOutput] = None

    @property
    def finalized(self) -> bool:
        return self._output is not None

    @property
    def models(self) -> List[Model]:
        return list(self.registry.models)

    def add_model(self, model: Model) -> None:
        """
        Add one model to the session.

        The resolver source is rendered before the model is registered and
        committed after, so a model that fails either step leaves no trace.

        Raises:
            SessionFinalizedError: ``finalize()`` has already been called.
            UnknownTypeError: a property names an unknown type.
            UnknownValidatorError: an argument names an unknown validator.
            UnsupportedOperationError: an operation kind is not recognised.
        """
        if self.finalized:
            raise SessionFinalizedError(model.name)

        rendered: ModelSource = self.resolver_generator.render_model(model)
        self.schema_generator.add_model(model)
        self.resolver_generator.add_rendered(rendered)

    def add_models(self, models: Iterable[Model]) -> None:
        for model in models:
            self.add_model(model)

    def finalize(self) -> CompilationOutput:
        """
        Build the schema, the document and the resolver source.

        Calling it again returns the same output.

        Raises:
            UnknownTypeError: a relationship names an unknown type.
            UnsupportedOperationError: an operation kind is not recognised.
        """
        if self._output is not None:
            return self._output

        schema_sdl: str = self.schema_generator.create()
        document: str = self.document_generator.create()
        resolver_source: str = self.resolver_generator.create()

        assert self.schema_generator.schema is not None
        self._output = CompilationOutput(
            schema=self.schema_generator.schema,
            schema_sdl=schema_sdl,
            document=document,
            resolver_source=resolver_source,
        )
        logger.info("Session finalized with %d model(s).", len(self.registry.models))
        return self._output

    def __repr__(self) -> str:
        state: str = "finalized" if self.finalized else "open"
        return f"<CompilationSession {state}, {len(self.registry.models)} models>"


def compile_models(
    models: Iterable[Model],
    config: Optional[GenerationConfig] = None,
    scalar_types: Optional[Mapping[str, GraphQLScalarType]] = None,
) -> CompilationOutput:
    """Run a whole session over *models* and return its output."""
    session: CompilationSession = CompilationSession(config, scalar_types)
    session.add_models(models)
    return session.finalize()


# ---------------------------------------------------------------------------
# Generation report
# ---------------------------------------------------------------------------


@dataclass(frozen=False, slots=True)
class GenerationStepMetric:
    """Timing and outcome for a single pipeline step."""

    step_name: str = ""
    success: bool = True
    elapsed_seconds: float = 0.0
    detail: str = ""


@dataclass(frozen=False, slots=True)
class GenerationReport:
    """
    Report produced by ``GraphGenerator.generate()``.

    ``result`` holds the artifacts; it is empty unless compilation succeeded.
    """

    success: bool = False
    project_name: str = ""

    total_models_processed: int = 0
    total_elapsed_seconds: float = 0.0

    step_metrics: List[GenerationStepMetric] = field(default_factory=list)
    validation_errors: List[str] = field(default_factory=list)
    validation_warnings: List[str] = field(default_factory=list)
    generation_errors: List[str] = field(default_factory=list)

    result: GenerationResult = field(default_factory=GenerationResult)
    output: Optional[CompilationOutput] = None

    @property
    def artifacts(self) -> Dict[str, str]:
        return {a.name: a.content for a in self.result.artifacts}

    def summary(self) -> str:
        """Return a human-readable summary string."""
        lines: List[str] = []
        status: str = "SUCCESS" if self.success else "FAILED"
        lines.append("=" * 60)
        lines.append("  GraphGen - Generation Report")
        lines.append("=" * 60)
        lines.append(f"  Status:           {status}")
        lines.append(f"  Project:          {self.project_name}")
        lines.append(f"  Models processed: {self.total_models_processed}")
        lines.append(f"  Artifacts:        {len(self.result.artifacts)}")
        lines.append(f"  Total lines:      {self.result.total_lines:,}")
        lines.append(f"  Total time:       {self.total_elapsed_seconds:.3f}s")
        lines.append("-" * 60)

        if self.step_metrics:
            lines.append("  Pipeline Steps:")
            for step in self.step_metrics:
                icon: str = "✓" if step.success else "✗"
                lines.append(
                    f"    {icon} {step.step_name:<28s} "
                    f"{step.elapsed_seconds:>7.3f}s  "
                    f"{step.detail}"
                )

        sections = (
            ("Validation Errors", "✗", self.validation_errors),
            ("Validation Warnings", "⚠", self.validation_warnings),
            ("Generation Errors", "✗", self.generation_errors),
        )
        for title, icon, items in sections:
            if not items:
                continue
            lines.append("-" * 60)
            lines.append(f"  {title} ({len(items)}):")
            for item in items:
                lines.append(f"    {icon} {item}")

        lines.append("=" * 60)
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# GraphGenerator - pipeline orchestrator
# ---------------------------------------------------------------------------


class GraphGenerator:
    """
    Pipeline orchestrator: validate, compile and collect artifacts.

    Usage::

        generator = GraphGenerator()
        report = generator.generate_from_text(Path("models.yaml").read_text())
        print(report.summary())
        schema_sdl = report.artifacts["schema.graphql"]

    ``strict_validation`` and ``fail_on_warnings`` default to the values in
    the ``GenerationConfig`` of each run.  The generator holds no state
    between runs.
    """

    def __init__(
        self,
        *,
        strict_validation: Optional[bool] = None,
        fail_on_warnings: Optional[bool] = None,
        scalar_types: Optional[Mapping[str, GraphQLScalarType]] = None,
    ) -> None:
        self._strict_validation: Optional[bool] = strict_validation
        self._fail_on_warnings: Optional[bool] = fail_on_warnings
        self._scalar_types: Optional[Mapping[str, GraphQLScalarType]] = scalar_types

        logger.debug(
            "GraphGenerator initialised: strict=%s, fail_on_warnings=%s.",
            strict_validation,
            fail_on_warnings,
        )

    # -----------------------------------------------------------------
    # Public entry points
    # -----------------------------------------------------------------

    def generate_from_text(self, text: str) -> GenerationReport:
        """Full pipeline from YAML or JSON text."""
        return self._generate_from(parse_model_text, text)

    def generate_from_data(self, raw: Union[List[Any], Dict[str, Any]]) -> GenerationReport:
        """Full pipeline from already-loaded data (a list or a mapping)."""
        return self._generate_from(parse_models, raw)

    def generate(
        self,
        definitions: ModelDefinitions,
        config: Optional[GenerationConfig] = None,
    ) -> GenerationReport:
        """Full pipeline from parsed definitions."""
        config = config or GenerationConfig()
        report: GenerationReport = GenerationReport(project_name=config.project_name)
        return self._run_pipeline(definitions, config, report, time.perf_counter())

    # -----------------------------------------------------------------
    # Internal: pipeline
    # -----------------------------------------------------------------

    def _generate_from(self, parse: Any, source: Any) -> GenerationReport:
        pipeline_start: float = time.perf_counter()
        report: GenerationReport = GenerationReport()
        failure: Optional[ModelValidationError] = None

        with Timer("parse_models") as t:
            try:
                definitions, config = parse(source)
            except ModelValidationError as exc:
                failure = exc

        if failure is not None:
            report.generation_errors.extend(
                f"{'.'.join(str(p) for p in err.get('loc', ())) or '<root>'}: "
                f"{err.get('msg', '')}"
                for err in failure.errors
            )
            logger.error("%s", failure)
            report.step_metrics.append(GenerationStepMetric(
                step_name="Parse Models",
                success=False,
                elapsed_seconds=t.elapsed,
                detail=f"{len(failure.errors)} error(s)",
            ))
            return self._finalise_report(report, pipeline_start)

        report.project_name = config.project_name
        report.step_metrics.append(GenerationStepMetric(
            step_name="Parse Models",
            success=True,
            elapsed_seconds=t.elapsed,
            detail=f"{len(definitions.models)} models parsed",
        ))
        return self._run_pipeline(definitions, config, report, pipeline_start)

    def _run_pipeline(
        self,
        definitions: ModelDefinitions,
        config: GenerationConfig,
        report: GenerationReport,
        pipeline_start: float,
    ) -> GenerationReport:
        strict: bool = (
            config.strict_validation
            if self._strict_validation is None
            else self._strict_validation
        )

        validation_ok: bool = self._step_validate(definitions, config, report)
        if not validation_ok and strict:
            return self._finalise_report(report, pipeline_start)

        output: Optional[CompilationOutput] = self._step_compile(
            definitions, config, report
        )
        if output is not None:
            self._step_collect(output, report)

        return self._finalise_report(report, pipeline_start)

    def _step_validate(
        self,
        definitions: ModelDefinitions,
        config: GenerationConfig,
        report: GenerationReport,
    ) -> bool:
        """
        Run the semantic checks.

        Returns True if there were no errors, and no warnings when warnings
        are treated as errors.
        """
        fail_on_warnings: bool = (
            config.fail_on_warnings
            if self._fail_on_warnings is None
            else self._fail_on_warnings
        )

        with Timer("validation") as t:
            result: ValidationResult = validate_full(definitions, self._scalar_types)

        report.validation_errors.extend(str(e) for e in result.errors)
        report.validation_warnings.extend(str(w) for w in result.warnings)

        if result.has_errors:
            detail: str = f"{result.error_count} error(s)"
        elif result.has_warnings:
            detail = f"{result.warning_count} warning(s)"
        else:
            detail = "all checks passed"

        passed: bool = result.is_valid and not (fail_on_warnings and result.has_warnings)
        report.step_metrics.append(GenerationStepMetric(
            step_name="Validate Models",
            success=passed,
            elapsed_seconds=t.elapsed,
            detail=detail,
        ))

        for warn in result.warnings:
            logger.warning("  ⚠ %s", warn)

        if result.has_errors:
            for err in result.errors:
                logger.error("  ✗ %s", err)
            return False

        if fail_on_warnings and result.has_warnings:
            report.generation_errors.append(
                f"{result.warning_count} validation warning(s) treated as errors."
            )
            return False

        return True

    def _step_compile(
        self,
        definitions: ModelDefinitions,
        config: GenerationConfig,
        report: GenerationReport,
    ) -> Optional[CompilationOutput]:
        output: Optional[CompilationOutput] = None

        with Timer("compile") as t:
            try:
                output = compile_models(definitions.models, config, self._scalar_types)
            except Exception as exc:
                error_msg: str = f"{type(exc).__name__}: {exc}"
                report.generation_errors.append(error_msg)
                logger.error("Compilation failed: %s", error_msg, exc_info=True)

        report.total_models_processed = len(definitions.models) if output is not None else 0
        report.step_metrics.append(GenerationStepMetric(
            step_name="Compile",
            success=output is not None,
            elapsed_seconds=t.elapsed,
            detail=f"{len(definitions.models)} models",
        ))
        return output

    def _step_collect(self, output: CompilationOutput, report: GenerationReport) -> None:
        with Timer("collect_artifacts") as t:
            report.result.add_artifact(SCHEMA_ARTIFACT, output.schema_sdl)
            report.result.add_artifact(DOCUMENT_ARTIFACT, output.document)
            report.result.add_artifact(RESOLVER_ARTIFACT, output.resolver_source)
            report.output = output

        report.step_metrics.append(GenerationStepMetric(
            step_name="Collect Artifacts",
            success=True,
            elapsed_seconds=t.elapsed,
            detail=(
                f"{len(report.result.artifacts)} artifacts, "
                f"{report.result.total_lines:,} lines"
            ),
        ))

    def _finalise_report(
        self,
        report: GenerationReport,
        pipeline_start: float,
    ) -> GenerationReport:
        """Set final status and timing on the report."""
        report.total_elapsed_seconds = time.perf_counter() - pipeline_start
        report.success = not report.validation_errors and not report.generation_errors
        report.result.success = report.success
        report.result.errors = list(report.generation_errors)

        if report.success:
            logger.info("Generation succeeded in %.3fs.", report.total_elapsed_seconds)
        else:
            logger.error(
                "Generation failed: %d validation error(s), %d generation error(s).",
                len(report.validation_errors),
                len(report.generation_errors),
            )
        return report


# ---------------------------------------------------------------------------
# Convenience entry points
# ---------------------------------------------------------------------------


def generate_from_text(text: str, **options: Any) -> GenerationReport:
    """Shortcut for ``GraphGenerator(**options).generate_from_text(text)``."""
    return GraphGenerator(**options).generate_from_text(text)


def generate_from_data(
    raw: Union[List[Any], Dict[str, Any]],
    **options: Any,
) -> GenerationReport:
    """Shortcut for ``GraphGenerator(**options).generate_from_data(raw)``."""
    return GraphGenerator(**options).generate_from_data(raw)


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "CompilationOutput",
    "CompilationSession",
    "compile_models",
    "GenerationStepMetric",
    "GenerationReport",
    "GraphGenerator",
    "generate_from_text",
    "generate_from_data",
    "SCHEMA_ARTIFACT",
    "DOCUMENT_ARTIFACT",
    "RESOLVER_ARTIFACT",
]

logger.debug("graphgen.generator loaded.")
