"""
Triple Validator - Checks that a written RDF document reads back correctly.

Parses the serialized output with rdflib and compares the recovered triples
against the ones that were written. This is a syntactic round-trip check,
not a semantic one.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rdflib import Graph, URIRef

from deptree_rdf.triples.generator import DEPENDS_ON, MAVEN_ARTIFACT, Triple
from deptree_rdf.triples.serializer import FORMATS, RDFFormat

logger = logging.getLogger(__name__)

# How many missing/unexpected triples are spelled out in the result
MAX_REPORTED = 10


def _sort_key(triple: tuple) -> tuple[str, ...]:
    return tuple(str(term) for term in triple)


# =============================================================================
# VALIDATION RESULT
# =============================================================================


@dataclass
class ValidationResult:
    """Result of a round-trip validation."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    info: dict[str, Any] = field(default_factory=dict)

    def add_error(self, message: str) -> None:
        """Add an error message."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    def summary(self) -> str:
        """Get a summary of the validation result."""
        status = "VALID" if self.is_valid else "INVALID"
        return f"Validation {status}: {len(self.errors)} errors, {len(self.warnings)} warnings"


# =============================================================================
# TRIPLE VALIDATOR
# =============================================================================


class TripleValidator:
    """
    Validates serialized dependency graphs.

    Performs:
    - Syntactic validation (the document parses in its format)
    - Round-trip validation (same triple set as written)
    - Vocabulary checks (depends-on predicate, artifact URIs)
    """

    def parse(self, data: bytes | str, format: "str | RDFFormat") -> Graph:
        """
        Parse a serialized document into a Graph.

        Raises whatever the rdflib parser raises on malformed input.
        """
        fmt = RDFFormat.parse(format)
        graph = Graph()
        graph.parse(data=data, format=FORMATS[fmt]["parser"])
        return graph

    def validate(
        self,
        data: bytes | str,
        format: "str | RDFFormat",
        expected: Iterable[Triple],
    ) -> ValidationResult:
        """
        Validate a serialized document against the triples written into it.

        Args:
            data: Serialized document
            format: Format the document was written in
            expected: Triples that were written

        Returns:
            ValidationResult with errors and warnings
        """
        result = ValidationResult(is_valid=True)
        expected_set = set(expected)
        result.info["expected_triples"] = len(expected_set)

        logger.info("TripleValidator: Parsing %s document...", RDFFormat.parse(format).value)
        try:
            graph = self.parse(data, format)
        except Exception as e:
            result.add_error(f"Document does not parse: {e}")
            logger.info("Validation complete: %s", result.summary())
            return result

        logger.info("TripleValidator: Comparing triple sets...")
        self._check_triples(graph, expected_set, result)

        logger.info("TripleValidator: Checking vocabulary...")
        self._check_vocabulary(graph, result)

        result.info["triple_count"] = len(graph)
        result.info["subject_count"] = len(set(graph.subjects()))

        logger.info("Validation complete: %s", result.summary())
        return result

    def validate_file(
        self,
        path: Path | str,
        format: "str | RDFFormat",
        expected: Iterable[Triple],
    ) -> ValidationResult:
        """Validate a serialized file. See validate()."""
        return self.validate(Path(path).read_bytes(), format, expected)

    def _check_triples(self, graph: Graph, expected: set, result: ValidationResult) -> None:
        """Check that the parsed graph holds exactly the expected triples."""
        actual = {Triple(s, p, o) for s, p, o in graph}

        missing = expected - actual
        unexpected = actual - expected

        for triple in sorted(missing, key=_sort_key)[:MAX_REPORTED]:
            result.add_error(f"Missing triple: {triple.subject} -> {triple.object}")
        if len(missing) > MAX_REPORTED:
            result.add_error(f"... and {len(missing) - MAX_REPORTED} more missing triples")

        for s, p, o in sorted(unexpected, key=_sort_key)[:MAX_REPORTED]:
            result.add_error(f"Unexpected triple: {s} {p} {o}")
        if len(unexpected) > MAX_REPORTED:
            result.add_error(f"... and {len(unexpected) - MAX_REPORTED} more unexpected triples")

        result.info["missing_triples"] = len(missing)
        result.info["unexpected_triples"] = len(unexpected)

    def _check_vocabulary(self, graph: Graph, result: ValidationResult) -> None:
        """Check that only depends-on edges between artifact URIs were written."""
        for s, p, o in graph:
            if p != DEPENDS_ON:
                result.add_warning(f"Unknown predicate: {p}")
            for term in (s, o):
                if not isinstance(term, URIRef) or not str(term).startswith(str(MAVEN_ARTIFACT)):
                    result.add_warning(f"Not an artifact resource: {term}")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_document(
    data: bytes | str, format: "str | RDFFormat", expected: Iterable[Triple]
) -> ValidationResult:
    """Quick function to round-trip check a serialized document."""
    return TripleValidator().validate(data, format, expected)
