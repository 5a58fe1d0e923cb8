"""Loaders package for resolved Maven dependency trees."""

from .maven_loader import (
    DependencyResolver,
    JsonTreeResolver,
    MavenCommandResolver,
    TextTreeResolver,
    create_resolver,
    detect_tree_format,
    parse_coordinates,
    parse_json_tree,
    parse_text_tree,
)

__all__ = [
    "DependencyResolver",
    "JsonTreeResolver",
    "TextTreeResolver",
    "MavenCommandResolver",
    "create_resolver",
    "detect_tree_format",
    "parse_coordinates",
    "parse_json_tree",
    "parse_text_tree",
]
