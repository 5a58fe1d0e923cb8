"""
Dependency RDF Pipeline - Exports a resolved dependency tree as RDF.

Orchestrates the entire flow: format check → dependency resolution →
tree walk → serialization → round-trip validation.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from deptree_rdf.config.settings import Settings, get_settings
from deptree_rdf.errors import ExportError, SerializationError
from deptree_rdf.loaders import DependencyResolver, create_resolver
from deptree_rdf.models import DependencyNode
from deptree_rdf.triples import (
    RDFFormat,
    SerializationResult,
    Triple,
    TripleGenerator,
    TripleSerializer,
    TripleValidator,
)

logger = logging.getLogger(__name__)


# =============================================================================
# PIPELINE RESULT
# =============================================================================


@dataclass
class PipelineResult:
    """Result from one dependency export."""

    # Timing
    started_at: datetime = field(default_factory=datetime.now)
    completed_at: datetime | None = None
    duration_seconds: float = 0.0

    # Graph
    format: str | None = None
    artifacts: int = 0
    triples_written: int = 0
    bytes_written: int = 0

    # Validation
    validated: bool = False
    validation_errors: list[str] = field(default_factory=list)
    validation_warnings: list[str] = field(default_factory=list)

    # Output
    output_file: str | None = None

    # Failure
    failed_stage: str | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.failed_stage is None and not self.validation_errors

    def finalize(self) -> None:
        """Mark the export as complete and calculate duration."""
        self.completed_at = datetime.now()
        self.duration_seconds = (self.completed_at - self.started_at).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "timing": {
                "started_at": self.started_at.isoformat(),
                "completed_at": self.completed_at.isoformat() if self.completed_at else None,
                "duration_seconds": round(self.duration_seconds, 2),
            },
            "graph": {
                "format": self.format,
                "artifacts": self.artifacts,
                "triples": self.triples_written,
                "bytes": self.bytes_written,
            },
            "validation": {
                "performed": self.validated,
                "errors": len(self.validation_errors),
                "warnings": len(self.validation_warnings),
                "error_details": self.validation_errors[:10],
                "warning_details": self.validation_warnings[:10],
            },
            "output": {
                "file": self.output_file,
            },
            "failure": {
                "stage": self.failed_stage,
                "error": self.error,
            },
        }

    def print_summary(self) -> None:
        """Print a summary of the export."""
        print("\n" + "=" * 60)
        print("📊 DEPENDENCY RDF EXPORT SUMMARY")
        print("=" * 60)

        print(f"\n⏱️  Duration: {self.duration_seconds:.2f}s")

        if self.failed_stage:
            print(f"\n❌ Failed at stage: {self.failed_stage}")
            print(f"   {self.error}")
            print("=" * 60)
            return

        print(f"📦 Artifacts: {self.artifacts}")
        print(f"🔗 Triples: {self.triples_written} ({self.format})")

        if self.validated:
            if self.validation_errors:
                print(f"\n❌ Validation Errors: {len(self.validation_errors)}")
                for error in self.validation_errors[:10]:
                    print(f"   • {error}")
            else:
                print("\n✅ Round-trip validation passed")
            if self.validation_warnings:
                print(f"⚠️  Validation Warnings: {len(self.validation_warnings)}")

        print(f"\n📤 Output File: {self.output_file} ({self.bytes_written} bytes)")
        print("=" * 60)


# =============================================================================
# PIPELINE
# =============================================================================


def _record(triples: Iterable[Triple], sink: list[Triple]) -> Iterator[Triple]:
    for triple in triples:
        sink.append(triple)
        yield triple


class Pipeline:
    """
    deptree-rdf Pipeline

    Orchestrates:
    1. Checking the requested output format
    2. Resolving the dependency tree
    3. Walking the tree into depends-on triples while writing them
    4. Reading the written document back for validation

    Usage:
        pipeline = Pipeline()
        result = pipeline.execute(output_format="n3", output_dir="./target/rdf")
        result.print_summary()
    """

    def __init__(
        self,
        settings: Settings | None = None,
        resolver: DependencyResolver | None = None,
        output_dir: str | Path | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            settings: Configuration settings (uses default if None)
            resolver: Dependency tree source (built from settings if None)
            output_dir: Override directory for the output file
        """
        self.settings = settings or get_settings()
        self.output_dir = (
            Path(output_dir) if output_dir is not None else self.settings.output.output_dir
        )

        # Resolver comes from settings.source on first use
        self._resolver = resolver
        self.triple_generator = TripleGenerator()
        self.serializer = TripleSerializer()
        self.validator = TripleValidator()

        logger.debug("Pipeline initialized (output dir: %s)", self.output_dir)

    @property
    def resolver(self) -> DependencyResolver:
        """Get or create the dependency resolver."""
        if self._resolver is None:
            self._resolver = create_resolver(self.settings.source)
        return self._resolver

    # =========================================================================
    # PIPELINE STAGES
    # =========================================================================

    def resolve(self) -> DependencyNode:
        """Build the dependency tree through the configured resolver."""
        return self.resolver.resolve()

    def write(
        self,
        root: DependencyNode,
        fmt: RDFFormat,
        target: Path,
        record: list[Triple] | None = None,
    ) -> SerializationResult:
        """
        Walk the tree and write its triples to the target file.

        The output directory is created when absent. If writing fails the
        incomplete file is removed.

        Args:
            root: Root of the dependency tree
            fmt: Output format
            target: Output file
            record: Optional list that receives every triple written
        """
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SerializationError(
                f"Could not create output directory {target.parent}: {e}"
            ) from e

        logger.info("Writing RDF dependency information to: %s", target)

        triples = self.triple_generator.walk(root)
        if record is not None:
            triples = _record(triples, record)

        try:
            return self.serializer.to_file(triples, target, fmt)
        except BaseException:
            target.unlink(missing_ok=True)
            raise

    # =========================================================================
    # MAIN EXECUTION
    # =========================================================================

    def execute(
        self,
        output_format: str | None = None,
        output_dir: str | Path | None = None,
        skip_validation: bool | None = None,
    ) -> PipelineResult:
        """
        Execute the complete export.

        Stages run in this order so that a bad format or a failed resolution
        never leaves an output file behind.

        Args:
            output_format: Override output format (xml, n3, ntriples)
            output_dir: Override output directory
            skip_validation: Skip the round-trip check (default: from config)

        Returns:
            PipelineResult with execution summary

        Raises:
            ExportError: Any failure, tagged with the stage it happened in.
                Its ``result`` holds the PipelineResult up to that point.
        """
        result = PipelineResult()
        if skip_validation is None:
            skip_validation = not self.settings.output.validate_output

        try:
            # Stage 1: Configuration
            logger.info("--- STAGE 1: Checking output format ---")
            if output_format is None:
                output_format = self.settings.output.format
            fmt = RDFFormat.parse(output_format)
            result.format = fmt.value
            if output_dir is None:
                output_dir = self.output_dir
            target = Path(output_dir) / fmt.filename

            # Stage 2: Resolution
            logger.info("--- STAGE 2: Resolving dependency tree ---")
            root = self.resolve()

            # Stage 3: Walk + write
            logger.info("--- STAGE 3: Writing RDF dependency graph ---")
            written: list[Triple] | None = None if skip_validation else []
            serialization = self.write(root, fmt, target, record=written)
            result.output_file = str(target)
            result.triples_written = serialization.triple_count
            result.bytes_written = serialization.bytes_written
            result.artifacts = serialization.triple_count + 1

            # Stage 4: Validation
            if not skip_validation:
                logger.info("--- STAGE 4: Validating written graph ---")
                validation = self.validator.validate_file(target, fmt, written)
                result.validated = True
                result.validation_errors = validation.errors
                result.validation_warnings = validation.warnings

        except ExportError as e:
            result.failed_stage = e.stage
            result.error = e.message
            logger.error("Export failed at %s stage: %s", e.stage, e.message)
            e.result = result
            raise

        finally:
            result.finalize()

        return result


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def generate_dependency_rdf(
    format: str,
    output_dir: str | Path,
    resolver: DependencyResolver | None = None,
    settings: Settings | None = None,
) -> PipelineResult:
    """
    Generate dependency RDF: resolve, walk and write in one call.

    Args:
        format: Output format (xml, n3, ntriples)
        output_dir: Directory that receives dependencies.rdf.{format}
        resolver: Dependency tree source (from settings if None)
        settings: Configuration settings (uses default if None)

    Returns:
        PipelineResult with execution summary
    """
    pipeline = Pipeline(settings=settings, resolver=resolver, output_dir=output_dir)
    return pipeline.execute(output_format=format)
