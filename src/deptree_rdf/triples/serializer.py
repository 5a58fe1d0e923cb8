"""
Triple Serializer - Writes depends-on triples as RDF/XML, N3 or N-Triples.

Each syntax is an RDFWriter backend driven through start_rdf(),
handle_triple() and end_rdf(). The writer only writes to the binary sink it
was given; opening and closing the sink is up to the caller.
"""

import io
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO

from rdflib import Graph

from deptree_rdf.errors import ConfigurationError, SerializationError
from deptree_rdf.triples.generator import ARASTREJU, Triple

logger = logging.getLogger(__name__)


# =============================================================================
# SUPPORTED FORMATS
# =============================================================================


class RDFFormat(str, Enum):
    """Output syntaxes understood by the serializer."""

    XML = "xml"
    N3 = "n3"
    NTRIPLES = "ntriples"

    @classmethod
    def parse(cls, value: "str | RDFFormat") -> "RDFFormat":
        """
        Turn a format selector into an RDFFormat.

        Raises:
            ConfigurationError: If the selector names no supported syntax
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            supported = ", ".join(fmt.value for fmt in cls)
            raise ConfigurationError(
                f"No valid output RDF format: {value!r}. Supported: {supported}"
            ) from None

    @property
    def filename(self) -> str:
        """Name of the output file for this format."""
        return f"dependencies.rdf.{self.value}"


FORMATS = {
    RDFFormat.XML: {"rdflib": "pretty-xml", "parser": "xml"},
    RDFFormat.N3: {"rdflib": "n3", "parser": "n3"},
    RDFFormat.NTRIPLES: {"rdflib": "nt", "parser": "nt"},
}


# =============================================================================
# WRITERS
# =============================================================================


class RDFWriter(ABC):
    """Abstract base class for the syntax backends."""

    format: RDFFormat

    def __init__(self, out: BinaryIO):
        """
        Initialize the writer.

        Args:
            out: Binary sink the document is written to (not closed here)
        """
        self.out = out
        self.triple_count = 0
        self.bytes_written = 0
        self._started = False
        self._ended = False

    def start_rdf(self) -> None:
        """Begin the document."""
        if self._started:
            raise SerializationError("Document already started")
        self._started = True
        self._start()

    def handle_triple(self, triple: Triple) -> None:
        """Add one triple to the document."""
        if not self._started or self._ended:
            raise SerializationError("Triple written outside of start_rdf()/end_rdf()")
        self._handle(triple)
        self.triple_count += 1

    def end_rdf(self) -> None:
        """Finish the document and flush the sink."""
        if not self._started or self._ended:
            raise SerializationError("end_rdf() called without an open document")
        self._end()
        self._ended = True
        try:
            self.out.flush()
        except OSError as e:
            raise SerializationError(f"Could not flush RDF output: {e}") from e

    def _write(self, data: bytes) -> None:
        try:
            self.out.write(data)
        except OSError as e:
            raise SerializationError(f"Could not write RDF: {e}") from e
        self.bytes_written += len(data)

    def _start(self) -> None:
        pass

    @abstractmethod
    def _handle(self, triple: Triple) -> None:
        """Backend-specific handling of one triple."""
        pass

    @abstractmethod
    def _end(self) -> None:
        """Backend-specific end of document."""
        pass


class NTriplesWriter(RDFWriter):
    """Streams one line per triple, in the order received."""

    format = RDFFormat.NTRIPLES

    def _handle(self, triple: Triple) -> None:
        line = f"{triple.subject.n3()} {triple.predicate.n3()} {triple.object.n3()} .\n"
        self._write(line.encode("utf-8"))

    def _end(self) -> None:
        pass


class GraphWriter(RDFWriter):
    """
    Collects triples into an rdflib Graph and serializes it at end_rdf().

    rdflib groups statements by subject in these syntaxes, so the order of
    the emitted statements may differ from the input order.
    """

    def _start(self) -> None:
        self.graph = Graph()
        self.graph.bind("arastreju", ARASTREJU)

    def _handle(self, triple: Triple) -> None:
        self.graph.add(triple)

    def _end(self) -> None:
        buffer = io.BytesIO()
        self.graph.serialize(
            destination=buffer,
            format=FORMATS[self.format]["rdflib"],
            encoding="utf-8",
        )
        self._write(buffer.getvalue())


class N3Writer(GraphWriter):
    """Notation3 backend."""

    format = RDFFormat.N3


class RDFXMLWriter(GraphWriter):
    """Pretty RDF/XML backend."""

    format = RDFFormat.XML


WRITERS: dict[RDFFormat, type[RDFWriter]] = {
    RDFFormat.XML: RDFXMLWriter,
    RDFFormat.N3: N3Writer,
    RDFFormat.NTRIPLES: NTriplesWriter,
}


def create_writer(format: "str | RDFFormat", out: BinaryIO) -> RDFWriter:
    """
    Create the writer backend for a format.

    Raises:
        ConfigurationError: If the format is not supported
    """
    return WRITERS[RDFFormat.parse(format)](out)


# =============================================================================
# TRIPLE SERIALIZER
# =============================================================================


@dataclass
class SerializationResult:
    """Outcome of writing one RDF document."""

    format: RDFFormat
    triple_count: int
    bytes_written: int


class TripleSerializer:
    """
    Serializes a triple stream into one of the supported RDF syntaxes.
    """

    def serialize(
        self,
        triples: Iterable[Triple],
        format: "str | RDFFormat",
        out: BinaryIO,
    ) -> SerializationResult:
        """
        Write triples to a binary sink.

        The format is checked before anything is written. Triples are handed
        to the writer in the order received.

        Args:
            triples: Triples to write (consumed once)
            format: Output format (xml, n3, ntriples)
            out: Binary sink, left open

        Returns:
            SerializationResult with counts

        Raises:
            ConfigurationError: If the format is not supported
            SerializationError: If writing fails
        """
        writer = create_writer(format, out)

        writer.start_rdf()
        for triple in triples:
            writer.handle_triple(triple)
        writer.end_rdf()

        logger.debug(
            "Wrote %d triples (%d bytes) as %s",
            writer.triple_count,
            writer.bytes_written,
            writer.format.value,
        )
        return SerializationResult(
            format=writer.format,
            triple_count=writer.triple_count,
            bytes_written=writer.bytes_written,
        )

    def to_file(
        self,
        triples: Iterable[Triple],
        path: Path | str,
        format: "str | RDFFormat" = RDFFormat.XML,
    ) -> SerializationResult:
        """
        Serialize triples to a file.

        The format is validated before the file is created.

        Args:
            triples: Triples to write
            path: Output file path
            format: Output format (xml, n3, ntriples)
        """
        path = Path(path)
        fmt = RDFFormat.parse(format)

        try:
            with open(path, "wb") as out:
                result = self.serialize(triples, fmt, out)
        except OSError as e:
            raise SerializationError(f"IO error occurred writing {path}: {e}") from e

        logger.info("Serialized %d triples to %s (%s)", result.triple_count, path, fmt.value)
        return result

    def get_statistics(self, graph: Graph) -> dict[str, Any]:
        """
        Get statistics about a dependency graph.

        Args:
            graph: RDF graph to analyze

        Returns:
            Dictionary with graph statistics
        """
        subjects = {str(s) for s in graph.subjects()}
        objects = {str(o) for o in graph.objects()}

        return {
            "total_triples": len(graph),
            "unique_subjects": len(subjects),
            "unique_objects": len(objects),
            "roots": sorted(subjects - objects),
            "leaves": len(objects - subjects),
        }


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def serialize_to_bytes(triples: Iterable[Triple], format: "str | RDFFormat") -> bytes:
    """Quick function to serialize triples into an in-memory document."""
    buffer = io.BytesIO()
    TripleSerializer().serialize(triples, format, buffer)
    return buffer.getvalue()


def serialize_to_file(
    triples: Iterable[Triple], path: Path | str, format: "str | RDFFormat" = RDFFormat.XML
) -> SerializationResult:
    """Quick function to serialize triples to a file."""
    return TripleSerializer().to_file(triples, path, format)
