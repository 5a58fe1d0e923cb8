"""
Triples Module - depends-on triple generation and serialization.

Components:
- generator.py: Walks a dependency tree into depends-on triples
- serializer.py: Writes triples as RDF/XML, N3 or N-Triples
- validator.py: Reads written documents back and checks them
"""

from .generator import (
    ARASTREJU,
    DEPENDS_ON,
    MAVEN_ARTIFACT,
    Triple,
    TripleGenerator,
    artifact_uri,
    walk,
)
from .serializer import (
    FORMATS,
    N3Writer,
    NTriplesWriter,
    RDFFormat,
    RDFWriter,
    RDFXMLWriter,
    SerializationResult,
    TripleSerializer,
    create_writer,
    serialize_to_bytes,
    serialize_to_file,
)
from .validator import TripleValidator, ValidationResult, validate_document

__all__ = [
    # Generator
    "Triple",
    "TripleGenerator",
    "artifact_uri",
    "walk",
    # Namespaces
    "ARASTREJU",
    "MAVEN_ARTIFACT",
    "DEPENDS_ON",
    # Serializer
    "FORMATS",
    "RDFFormat",
    "RDFWriter",
    "NTriplesWriter",
    "N3Writer",
    "RDFXMLWriter",
    "SerializationResult",
    "TripleSerializer",
    "create_writer",
    "serialize_to_bytes",
    "serialize_to_file",
    # Validator
    "TripleValidator",
    "ValidationResult",
    "validate_document",
]
