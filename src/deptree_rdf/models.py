"""
Dependency tree models - artifact identities and resolved dependency nodes.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Artifact(BaseModel):
    """Maven coordinates (groupId, artifactId, version) of one artifact."""

    model_config = ConfigDict(frozen=True)

    group_id: str = Field(description="Maven groupId")
    artifact_id: str = Field(description="Maven artifactId")
    version: str = Field(description="Resolved version, compared verbatim")

    def compact(self) -> str:
        """Return the artifact as `groupId:artifactId:version`."""
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    def __str__(self) -> str:
        return self.compact()


class DependencyNode(BaseModel):
    """
    A node of the resolved dependency tree.

    Children are the direct dependencies of the artifact, in the order the
    resolver supplied them.
    """

    artifact: Artifact
    children: list[DependencyNode] = Field(default_factory=list)

    def count_nodes(self) -> int:
        """Count this node and all of its descendants."""
        count = 0
        stack: list[DependencyNode] = [self]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children)
        return count


DependencyNode.model_rebuild()
