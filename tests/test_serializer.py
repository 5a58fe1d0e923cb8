"""Tests for the RDF writers and the triple serializer."""

import io
import xml.etree.ElementTree as ET

import pytest
from rdflib import Graph

from deptree_rdf.errors import ConfigurationError, SerializationError
from deptree_rdf.models import DependencyNode
from deptree_rdf.triples import (
    FORMATS,
    NTriplesWriter,
    N3Writer,
    RDFFormat,
    RDFXMLWriter,
    TripleGenerator,
    TripleSerializer,
    create_writer,
    serialize_to_bytes,
    serialize_to_file,
    walk,
)

PARSERS = {"xml": "xml", "n3": "n3", "ntriples": "nt"}
RDF_ROOT = "{http://www.w3.org/1999/02/22-rdf-syntax-ns#}RDF"


def parse(data: bytes, format: str) -> Graph:
    graph = Graph()
    graph.parse(data=data, format=PARSERS[format])
    return graph


class FailingSink(io.BytesIO):
    """A sink whose disk is always full."""

    def write(self, data) -> int:
        raise OSError(28, "No space left on device")


class TestRDFFormat:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("xml", RDFFormat.XML),
            ("n3", RDFFormat.N3),
            ("ntriples", RDFFormat.NTRIPLES),
            (RDFFormat.N3, RDFFormat.N3),
        ],
    )
    def test_parse(self, value, expected) -> None:
        assert RDFFormat.parse(value) is expected

    @pytest.mark.parametrize(
        "value", ["turtle", "json-ld", "nt", "", "XML", " n3 ", "NTriples", None]
    )
    def test_unsupported_format(self, value: str) -> None:
        with pytest.raises(ConfigurationError) as excinfo:
            RDFFormat.parse(value)
        assert excinfo.value.stage == "configuration"

    def test_filename(self) -> None:
        assert RDFFormat.NTRIPLES.filename == "dependencies.rdf.ntriples"
        assert RDFFormat.XML.filename == "dependencies.rdf.xml"


class TestWriterSelection:
    @pytest.mark.parametrize(
        "format, writer_class",
        [("xml", RDFXMLWriter), ("n3", N3Writer), ("ntriples", NTriplesWriter)],
    )
    def test_create_writer(self, format, writer_class) -> None:
        assert isinstance(create_writer(format, io.BytesIO()), writer_class)

    def test_format_table_names_rdflib_plugins(self) -> None:
        assert set(FORMATS) == set(RDFFormat)
        assert FORMATS[RDFFormat.XML] == {"rdflib": "pretty-xml", "parser": "xml"}
        assert FORMATS[RDFFormat.NTRIPLES] == {"rdflib": "nt", "parser": "nt"}

    def test_unsupported_format_writes_nothing(self, sample_tree: DependencyNode) -> None:
        out = io.BytesIO()
        with pytest.raises(ConfigurationError):
            TripleSerializer().serialize(walk(sample_tree), "turtle", out)
        assert out.getvalue() == b""


class TestWriterFraming:
    def test_triple_before_start_is_rejected(self, sample_tree: DependencyNode) -> None:
        writer = NTriplesWriter(io.BytesIO())
        with pytest.raises(SerializationError):
            writer.handle_triple(next(walk(sample_tree)))

    def test_triple_after_end_is_rejected(self, sample_tree: DependencyNode) -> None:
        writer = N3Writer(io.BytesIO())
        writer.start_rdf()
        writer.end_rdf()
        with pytest.raises(SerializationError):
            writer.handle_triple(next(walk(sample_tree)))

    def test_double_start_is_rejected(self) -> None:
        writer = RDFXMLWriter(io.BytesIO())
        writer.start_rdf()
        with pytest.raises(SerializationError):
            writer.start_rdf()

    def test_end_without_start_is_rejected(self) -> None:
        with pytest.raises(SerializationError):
            NTriplesWriter(io.BytesIO()).end_rdf()


class TestTripleSerializer:
    @pytest.mark.parametrize("format", ["xml", "n3", "ntriples"])
    def test_round_trip(self, format: str, realistic_tree: DependencyNode) -> None:
        expected = set(walk(realistic_tree))

        data = serialize_to_bytes(walk(realistic_tree), format)

        assert set(parse(data, format)) == expected

    @pytest.mark.parametrize("format", ["xml", "n3", "ntriples"])
    def test_empty_tree_gives_valid_empty_document(
        self, format: str, leaf_tree: DependencyNode
    ) -> None:
        data = serialize_to_bytes(walk(leaf_tree), format)
        assert len(parse(data, format)) == 0

    def test_empty_xml_document_is_framed(self, leaf_tree: DependencyNode) -> None:
        root = ET.fromstring(serialize_to_bytes(walk(leaf_tree), "xml"))
        assert root.tag == RDF_ROOT
        assert len(root) == 0

    def test_ntriples_preserve_input_order(self, sample_tree: DependencyNode) -> None:
        data = serialize_to_bytes(walk(sample_tree), "ntriples").decode("utf-8")
        base = "http://arastreju.org/maven-artifact/org.example"
        predicate = "<http://arastreju.org/depends-on>"

        assert data.splitlines() == [
            f"<{base}:a:1.0> {predicate} <{base}:b:1.0> .",
            f"<{base}:b:1.0> {predicate} <{base}:d:1.0> .",
            f"<{base}:a:1.0> {predicate} <{base}:c:1.0> .",
        ]

    def test_xml_uses_arastreju_prefix(self, sample_tree: DependencyNode) -> None:
        data = serialize_to_bytes(walk(sample_tree), "xml").decode("utf-8")
        assert 'xmlns:arastreju="http://arastreju.org/"' in data
        assert "arastreju:depends-on" in data

    def test_result_counts(self, realistic_tree: DependencyNode) -> None:
        out = io.BytesIO()
        result = TripleSerializer().serialize(walk(realistic_tree), "ntriples", out)

        assert result.format is RDFFormat.NTRIPLES
        assert result.triple_count == 7
        assert result.bytes_written == len(out.getvalue())

    def test_sink_is_left_open(self, sample_tree: DependencyNode) -> None:
        out = io.BytesIO()
        TripleSerializer().serialize(walk(sample_tree), "n3", out)
        assert not out.closed

    @pytest.mark.parametrize("format", ["xml", "n3", "ntriples"])
    def test_write_failure(self, format: str, sample_tree: DependencyNode) -> None:
        with pytest.raises(SerializationError) as excinfo:
            TripleSerializer().serialize(walk(sample_tree), format, FailingSink())
        assert excinfo.value.stage == "write"


class TestToFile:
    def test_writes_file(self, tmp_path, sample_tree: DependencyNode) -> None:
        path = tmp_path / "dependencies.rdf.n3"

        result = serialize_to_file(walk(sample_tree), path, "n3")

        assert path.exists()
        assert result.triple_count == 3
        assert len(parse(path.read_bytes(), "n3")) == 3

    def test_unsupported_format_creates_no_file(self, tmp_path, sample_tree) -> None:
        path = tmp_path / "dependencies.rdf.turtle"
        with pytest.raises(ConfigurationError):
            serialize_to_file(walk(sample_tree), path, "turtle")
        assert not path.exists()

    def test_missing_directory_is_a_write_error(self, tmp_path, sample_tree) -> None:
        path = tmp_path / "missing" / "dependencies.rdf.xml"
        with pytest.raises(SerializationError):
            serialize_to_file(walk(sample_tree), path, "xml")


class TestStatistics:
    def test_statistics(self, realistic_tree: DependencyNode) -> None:
        graph = TripleGenerator().to_graph(realistic_tree)

        stats = TripleSerializer().get_statistics(graph)

        assert stats["total_triples"] == 7
        assert stats["unique_subjects"] == 4
        assert stats["unique_objects"] == 7
        assert stats["roots"] == [
            "http://arastreju.org/maven-artifact/com.example:shop:1.0-SNAPSHOT"
        ]
        assert stats["leaves"] == 4
