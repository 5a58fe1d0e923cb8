"""
Maven Dependency Loader - Builds dependency trees from Maven output.

This module provides:
- JSON parsing for `mvn dependency:tree -DoutputType=json` files
- Text parsing for the default `mvn dependency:tree` tree output
- A resolver that runs Maven itself and reads back its JSON tree
"""

import json
import logging
import re
import subprocess
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from deptree_rdf.errors import ResolutionError
from deptree_rdf.models import Artifact, DependencyNode

logger = logging.getLogger(__name__)

# Leading "[INFO] " (or any log level) when the tree is copied from a build log
_LOG_PREFIX = re.compile(r"^\[[A-Z]+\]\s?")

# Tree drawing in front of each coordinate: "|  ", "   ", "+- ", "\- "
_TREE_LINE = re.compile(r"^(?P<indent>(?:[| ]  )*)(?P<branch>[+\\]- )?(?P<coords>\S.*)$")

# Trailing annotations, e.g. "(optional)" or "(version managed from 1.0)"
_ANNOTATION = re.compile(r"\s+\(.*\)\s*$")

MAVEN_JSON_KEYS = {"groupId": "group_id", "artifactId": "artifact_id", "version": "version"}


# =============================================================================
# RESOLVER INTERFACE
# =============================================================================


class DependencyResolver(ABC):
    """Abstract base class for dependency tree sources."""

    @abstractmethod
    def resolve(self) -> DependencyNode:
        """
        Build the dependency tree.

        Returns:
            Root node of the resolved tree

        Raises:
            ResolutionError: If the tree cannot be built
        """
        pass


# =============================================================================
# JSON TREES
# =============================================================================


def _node_from_json(data: Any, location: str = "root") -> DependencyNode:
    """Convert one maven-dependency-plugin JSON node (and its children)."""
    if not isinstance(data, dict):
        raise ResolutionError(f"Dependency node at {location} is not an object")

    fields = {target: data.get(key) for key, target in MAVEN_JSON_KEYS.items()}
    missing = [key for key, target in MAVEN_JSON_KEYS.items() if fields[target] is None]
    if missing:
        raise ResolutionError(f"Dependency node at {location} has no {', '.join(missing)}")

    try:
        artifact = Artifact(**{k: str(v) for k, v in fields.items()})
    except ValidationError as e:
        raise ResolutionError(f"Invalid artifact at {location}: {e}") from e

    children_data = data.get("children") or []
    if not isinstance(children_data, list):
        raise ResolutionError(f"'children' of {artifact} is not a list")

    children = [
        _node_from_json(child, f"{location}/{i}") for i, child in enumerate(children_data)
    ]
    return DependencyNode(artifact=artifact, children=children)


def parse_json_tree(content: str) -> DependencyNode:
    """
    Parse a dependency tree in maven-dependency-plugin JSON format.

    Only groupId, artifactId, version and children are read; any other
    key (type, scope, classifier, optional...) is ignored.

    Args:
        content: JSON document

    Returns:
        Root DependencyNode
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ResolutionError(f"Dependency tree is not valid JSON: {e}") from e
    return _node_from_json(data)


class JsonTreeResolver(DependencyResolver):
    """Reads a tree written by `mvn dependency:tree -DoutputType=json`."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def resolve(self) -> DependencyNode:
        logger.info("Loading JSON dependency tree from %s", self.path)
        root = parse_json_tree(_read_tree_file(self.path))
        logger.info("Resolved %d artifacts (root: %s)", root.count_nodes(), root.artifact)
        return root


# =============================================================================
# TEXT TREES
# =============================================================================


def parse_coordinates(coords: str, is_root: bool = False) -> Artifact:
    """
    Parse a Maven coordinate string from dependency:tree output.

    Dependencies are printed as g:a:type[:classifier]:version:scope, the
    root project as g:a:type[:classifier]:version (no scope).

    Args:
        coords: Coordinate string
        is_root: Whether this is the first line of the tree

    Returns:
        Artifact identity
    """
    parts = coords.strip().split(":")
    if not is_root:
        parts = parts[:-1]  # drop scope

    if len(parts) == 4:
        group_id, artifact_id, _type, version = parts
    elif len(parts) == 5:
        group_id, artifact_id, _type, _classifier, version = parts
    else:
        raise ResolutionError(f"Cannot parse Maven coordinates: {coords!r}")

    return Artifact(group_id=group_id, artifact_id=artifact_id, version=version)


def parse_text_tree(content: str) -> DependencyNode:
    """
    Parse the text output of `mvn dependency:tree`.

    Example:
        com.example:app:jar:1.0
        +- org.slf4j:slf4j-api:jar:2.0.9:compile
        \\- junit:junit:jar:4.13.2:test
           \\- org.hamcrest:hamcrest-core:jar:1.3:test

    Lines outside the tree (blank lines, build log chatter before the root)
    are skipped.

    Args:
        content: Tree text

    Returns:
        Root DependencyNode
    """
    root: DependencyNode | None = None
    # path[d] is the most recent node seen at depth d
    path: list[DependencyNode] = []

    for lineno, raw in enumerate(content.splitlines(), start=1):
        line = _LOG_PREFIX.sub("", raw.rstrip())
        if not line.strip():
            continue

        match = _TREE_LINE.match(line)
        if not match:
            continue
        coords = _ANNOTATION.sub("", match.group("coords")).strip()

        if root is None:
            if match.group("branch") or match.group("indent"):
                continue
            if coords.count(":") < 3 or " " in coords:
                # log chatter ahead of the tree
                continue
            root = DependencyNode(artifact=parse_coordinates(coords, is_root=True))
            path = [root]
            continue

        if not match.group("branch"):
            # a second unindented line ends the tree
            break
        if coords.startswith("("):
            # verbose mode: omitted duplicate or conflict
            continue

        depth = len(match.group("indent")) // 3 + 1
        if depth > len(path):
            raise ResolutionError(f"Line {lineno}: unexpected indentation: {raw!r}")

        node = DependencyNode(artifact=parse_coordinates(coords))
        path[depth - 1].children.append(node)
        del path[depth:]
        path.append(node)

    if root is None:
        raise ResolutionError("No dependency tree found in text input")
    return root


class TextTreeResolver(DependencyResolver):
    """Reads the plain text output of `mvn dependency:tree`."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def resolve(self) -> DependencyNode:
        logger.info("Loading text dependency tree from %s", self.path)
        root = parse_text_tree(_read_tree_file(self.path))
        logger.info("Resolved %d artifacts (root: %s)", root.count_nodes(), root.artifact)
        return root


# =============================================================================
# MAVEN
# =============================================================================


class MavenCommandResolver(DependencyResolver):
    """
    Asks Maven to resolve the project and reads back its JSON tree.

    Runs `mvn dependency:tree -DoutputType=json -DoutputFile=...` in the
    project directory. Requires maven-dependency-plugin 3.7.0 or newer.
    """

    def __init__(
        self,
        project_dir: Path | str = ".",
        executable: str = "mvn",
        extra_args: list[str] | None = None,
    ):
        self.project_dir = Path(project_dir)
        self.executable = executable
        self.extra_args = list(extra_args or [])

    def build_command(self, output_file: Path) -> list[str]:
        """Command line used to resolve the dependency tree."""
        return [
            self.executable,
            "--batch-mode",
            "--quiet",
            "dependency:tree",
            "-DoutputType=json",
            f"-DoutputFile={output_file}",
            *self.extra_args,
        ]

    def resolve(self) -> DependencyNode:
        if not self.project_dir.is_dir():
            raise ResolutionError(f"Project directory not found: {self.project_dir}")

        with tempfile.TemporaryDirectory(prefix="deptree-rdf-") as tmp:
            output_file = Path(tmp) / "dependency-tree.json"
            command = self.build_command(output_file)
            logger.info("Resolving dependencies: %s", " ".join(command))

            try:
                completed = subprocess.run(
                    command,
                    cwd=self.project_dir,
                    capture_output=True,
                    text=True,
                    check=False,
                )
            except OSError as e:
                raise ResolutionError(f"Could not run {self.executable}: {e}") from e

            if completed.returncode != 0:
                logger.debug("Maven output:\n%s", completed.stdout)
                detail = (completed.stderr or completed.stdout or "").strip().splitlines()
                raise ResolutionError(
                    f"Could not resolve dependencies (exit code {completed.returncode})"
                    + (f": {detail[-1]}" if detail else "")
                )

            return JsonTreeResolver(output_file).resolve()


# =============================================================================
# HELPERS
# =============================================================================


def _read_tree_file(path: Path) -> str:
    if not path.is_file():
        raise ResolutionError(f"Dependency tree file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ResolutionError(f"Could not read dependency tree {path}: {e}") from e


def detect_tree_format(path: Path | str) -> str:
    """Guess 'json' or 'text' from a tree file's extension."""
    return "json" if Path(path).suffix.lower() == ".json" else "text"


def create_resolver(source) -> DependencyResolver:
    """
    Pick the resolver for a source configuration.

    Args:
        source: SourceConfig (tree_file, tree_format, project_dir, maven_*)

    Returns:
        Resolver for a tree file when one is configured, otherwise one that
        runs Maven in the project directory
    """
    if source.tree_file:
        tree_format = source.tree_format
        if tree_format == "auto":
            tree_format = detect_tree_format(source.tree_file)
        if tree_format == "json":
            return JsonTreeResolver(source.tree_file)
        return TextTreeResolver(source.tree_file)

    return MavenCommandResolver(
        project_dir=source.project_dir,
        executable=source.maven_executable,
        extra_args=source.maven_args,
    )
