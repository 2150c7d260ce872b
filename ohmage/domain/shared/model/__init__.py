"""Shared domain models."""

from .node import NULL, ArrayNode, Node, NullNode, ObjectNode, ScalarNode
from .value import ValueObject

__all__ = [
    "NULL",
    "ArrayNode",
    "Node",
    "NullNode",
    "ObjectNode",
    "ScalarNode",
    "ValueObject",
]
