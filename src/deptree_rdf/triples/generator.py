"""
Triple Generator - Walks a dependency tree and emits depends-on triples.

Every "artifact depends on artifact" edge becomes one triple of the form
(artifact URI, arastreju:depends-on, dependency URI).
"""

import logging
import re
from collections.abc import Iterator
from typing import NamedTuple

from rdflib import Graph, Namespace, URIRef

from deptree_rdf.errors import DependencyCycleError, MalformedArtifactError
from deptree_rdf.models import Artifact, DependencyNode

logger = logging.getLogger(__name__)


# =============================================================================
# NAMESPACE DEFINITIONS
# =============================================================================

ARASTREJU = Namespace("http://arastreju.org/")

# Artifact resources: {group}:{artifact}:{version} is appended verbatim
MAVEN_ARTIFACT = Namespace("http://arastreju.org/maven-artifact/")

DEPENDS_ON = URIRef("http://arastreju.org/depends-on")

# Characters that may not appear in an IRI reference
_INVALID_IRI_CHARS = re.compile(r'[\s<>"{}|\\^`]')


class Triple(NamedTuple):
    """One (subject, predicate, object) statement."""

    subject: URIRef
    predicate: URIRef
    object: URIRef


# =============================================================================
# URI DERIVATION
# =============================================================================


def artifact_uri(artifact: Artifact) -> URIRef:
    """
    Derive the resource URI of an artifact.

    Args:
        artifact: Artifact identity

    Returns:
        URI of the form http://arastreju.org/maven-artifact/g:a:v

    Raises:
        MalformedArtifactError: If a coordinate is missing, blank or holds
            characters that are not allowed in an IRI
    """
    for name in ("group_id", "artifact_id", "version"):
        value = getattr(artifact, name, None)
        if not isinstance(value, str) or not value.strip():
            raise MalformedArtifactError(f"Artifact {artifact!r} has no {name}")
        if _INVALID_IRI_CHARS.search(value):
            raise MalformedArtifactError(
                f"Artifact {name} {value!r} contains characters not allowed in a URI"
            )
    return MAVEN_ARTIFACT[artifact.compact()]


# =============================================================================
# GRAPH WALKER
# =============================================================================


def walk(root: DependencyNode) -> Iterator[Triple]:
    """
    Traverse a dependency tree depth-first, pre-order.

    For each node, every child yields (node, depends-on, child) and is then
    descended into before its next sibling. The root never appears as an
    object. Triples are produced lazily.

    Args:
        root: Root of the resolved dependency tree

    Yields:
        One Triple per edge of the tree

    Raises:
        MalformedArtifactError: If an artifact cannot be turned into a URI
        DependencyCycleError: If an artifact depends on one of its ancestors
    """
    root_uri = artifact_uri(root.artifact)

    # Each frame: (node URI, node artifact, iterator over remaining children)
    stack = [(root_uri, root.artifact, iter(root.children))]
    ancestors = {root.artifact}

    while stack:
        subject, artifact, children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            ancestors.discard(artifact)
            continue

        if child.artifact in ancestors:
            path = [frame[1].compact() for frame in stack]
            raise DependencyCycleError(path + [child.artifact.compact()])

        child_uri = artifact_uri(child.artifact)
        yield Triple(subject, DEPENDS_ON, child_uri)

        stack.append((child_uri, child.artifact, iter(child.children)))
        ancestors.add(child.artifact)


# =============================================================================
# TRIPLE GENERATOR
# =============================================================================


class TripleGenerator:
    """
    Generates depends-on triples from a resolved dependency tree.

    Wraps walk() and counts what it emitted, so callers can report the size
    of the exported graph once the stream has been consumed.
    """

    def __init__(self):
        self.triple_count = 0

    def walk(self, root: DependencyNode) -> Iterator[Triple]:
        """Yield the triples of the tree, counting them as they go out."""
        self.triple_count = 0
        logger.debug("Walking dependency tree rooted at %s", root.artifact)
        for triple in walk(root):
            self.triple_count += 1
            yield triple
        logger.info("Generated %d depends-on triples", self.triple_count)

    def to_graph(self, root: DependencyNode) -> Graph:
        """
        Collect the triples of a tree into an rdflib Graph.

        Args:
            root: Root of the resolved dependency tree

        Returns:
            rdflib Graph with the arastreju prefix bound
        """
        graph = Graph()
        graph.bind("arastreju", ARASTREJU)
        for triple in self.walk(root):
            graph.add(triple)
        return graph
