"""
deptree-rdf - Writes resolved Maven dependency trees as RDF graphs.

Each "artifact depends on artifact" edge of the tree becomes one
arastreju depends-on triple, serialized as RDF/XML, N3 or N-Triples.
"""

__version__ = "0.1.0"
