"""Shared fixtures: small dependency trees."""

import pytest

from deptree_rdf.models import DependencyNode

from .trees import node


@pytest.fixture
def sample_tree() -> DependencyNode:
    """A with children B and C, B with child D."""
    return node(
        "org.example:a:1.0",
        node("org.example:b:1.0", node("org.example:d:1.0")),
        node("org.example:c:1.0"),
    )


@pytest.fixture
def leaf_tree() -> DependencyNode:
    """A root without dependencies."""
    return node("org.example:lonely:0.1")


@pytest.fixture
def realistic_tree() -> DependencyNode:
    return node(
        "com.example:shop:1.0-SNAPSHOT",
        node(
            "org.springframework:spring-web:6.1.2",
            node("org.springframework:spring-beans:6.1.2"),
            node(
                "org.springframework:spring-core:6.1.2",
                node("org.springframework:spring-jcl:6.1.2"),
            ),
        ),
        node("org.slf4j:slf4j-api:2.0.9"),
        node(
            "junit:junit:4.13.2",
            node("org.hamcrest:hamcrest-core:1.3"),
        ),
    )
