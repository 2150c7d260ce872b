"""Generic JSON node model for untyped upload input.

Uploaded metadata arrives as arbitrary JSON. Rather than probing dicts and
lists with isinstance checks at every call site, the input is converted once
into a small closed set of node types:

- ``NullNode``: an explicit JSON ``null``
- ``ScalarNode``: a string, number or boolean
- ``ObjectNode``: a mapping of field names to nodes
- ``ArrayNode``: an ordered sequence of nodes

Callers then ask capability questions (``is_scalar``, ``is_number``,
``has(field)``) instead of inspecting Python types.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ohmage.domain.shared.error import InvalidInputError


class Node:
    """Base class for all JSON nodes."""

    @property
    def is_null(self) -> bool:
        return False

    @property
    def is_scalar(self) -> bool:
        return False

    @property
    def is_value(self) -> bool:
        """True for anything that is not a container: scalars and null."""
        return self.is_scalar or self.is_null

    @property
    def is_number(self) -> bool:
        return False

    @property
    def is_textual(self) -> bool:
        return False

    @property
    def is_object(self) -> bool:
        return False

    @property
    def is_array(self) -> bool:
        return False

    def has(self, name: str) -> bool:
        """Return True if this is an object node with a field called ``name``.

        An explicit ``null`` value still counts as present.
        """
        return False

    def get(self, name: str) -> Node | None:
        """Return the node stored under ``name``, or None if absent."""
        return None

    def to_python(self) -> Any:
        """Convert back into plain Python (dict/list/str/int/float/bool/None)."""
        raise NotImplementedError

    @staticmethod
    def of(value: Any) -> Node:
        """Wrap a parsed JSON value (as produced by ``json.loads``) in nodes."""
        if isinstance(value, Node):
            return value
        if value is None:
            return NULL
        if isinstance(value, (str, bool, int, float)):
            return ScalarNode(value)
        if isinstance(value, Mapping):
            return ObjectNode({str(k): Node.of(v) for k, v in value.items()})
        if isinstance(value, (list, tuple)):
            return ArrayNode(tuple(Node.of(v) for v in value))
        raise TypeError(f"Cannot convert {type(value).__name__} to a JSON node")

    @staticmethod
    def parse(text: str | bytes) -> Node:
        """Parse JSON text into a node tree."""
        try:
            value = json.loads(text)
        except ValueError as e:
            raise InvalidInputError("The JSON could not be parsed.") from e
        return Node.of(value)


@dataclass(frozen=True)
class NullNode(Node):
    """An explicit JSON null."""

    @property
    def is_null(self) -> bool:
        return True

    @property
    def text(self) -> str:
        return "null"

    def to_python(self) -> None:
        return None


NULL = NullNode()


@dataclass(frozen=True)
class ScalarNode(Node):
    """A JSON string, number or boolean."""

    value: str | int | float | bool

    @property
    def is_scalar(self) -> bool:
        return True

    @property
    def is_number(self) -> bool:
        # bool is an int subclass but JSON true/false are not numbers
        return isinstance(self.value, (int, float)) and not isinstance(self.value, bool)

    @property
    def is_textual(self) -> bool:
        return isinstance(self.value, str)

    @property
    def text(self) -> str:
        """Text representation of the value, JSON-style for booleans."""
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)

    def to_python(self) -> str | int | float | bool:
        return self.value


@dataclass(frozen=True)
class ObjectNode(Node):
    """A JSON object."""

    fields: Mapping[str, Node] = field(default_factory=dict)

    @property
    def is_object(self) -> bool:
        return True

    def has(self, name: str) -> bool:
        return name in self.fields

    def get(self, name: str) -> Node | None:
        return self.fields.get(name)

    def to_python(self) -> dict[str, Any]:
        return {k: v.to_python() for k, v in self.fields.items()}


@dataclass(frozen=True)
class ArrayNode(Node):
    """A JSON array."""

    items: tuple[Node, ...] = ()

    @property
    def is_array(self) -> bool:
        return True

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]
