"""Read-only view over Valve KeyValues text files.

App manifests (``appmanifest_<id>.acf``) and the library index
(``libraryfolders.vdf``) share the same tagged key-value tree format.
Parsing is done by the ``vdf`` package; this module wraps the result in
object/scalar nodes so callers can look children up without caring
about the wrong-variant case.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Mapping, Optional, Union

import vdf


class TreeParseError(ValueError):
    """A KeyValues file could not be parsed."""


class ScalarNode:
    """Leaf node holding a string value."""

    __slots__ = ("value",)

    def __init__(self, value: str):
        self.value = value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ScalarNode) and other.value == self.value

    def __repr__(self) -> str:
        return f"ScalarNode({self.value!r})"


class ObjectNode:
    """Node holding named children in file order."""

    __slots__ = ("children",)

    def __init__(self, children: Optional[Mapping[str, "Node"]] = None):
        self.children: dict[str, Node] = dict(children or {})

    def get(self, name: str) -> Optional["Node"]:
        """Return the child called ``name``, or None.

        Exact names win; otherwise the first case-insensitive match is used,
        as Steam itself treats keys case-insensitively.
        """
        node = self.children.get(name)
        if node is not None:
            return node
        folded = name.casefold()
        for key, child in self.children.items():
            if key.casefold() == folded:
                return child
        return None

    def get_object(self, name: str) -> Optional["ObjectNode"]:
        node = self.get(name)
        return node if isinstance(node, ObjectNode) else None

    def get_scalar(self, name: str) -> Optional[ScalarNode]:
        node = self.get(name)
        return node if isinstance(node, ScalarNode) else None

    def names(self) -> list[str]:
        return list(self.children)

    def __iter__(self) -> Iterator[tuple[str, "Node"]]:
        return iter(self.children.items())

    def __len__(self) -> int:
        return len(self.children)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ObjectNode) and other.children == self.children

    def __repr__(self) -> str:
        return f"ObjectNode({self.children!r})"


Node = Union[ObjectNode, ScalarNode]


def build_tree(mapping: Mapping) -> ObjectNode:
    """Convert a nested mapping (as returned by ``vdf``) into nodes."""
    children: dict[str, Node] = {}
    for key, value in mapping.items():
        if isinstance(value, Mapping):
            children[str(key)] = build_tree(value)
        else:
            children[str(key)] = ScalarNode(str(value))
    return ObjectNode(children)


def parse_tree(text: str) -> Optional[ObjectNode]:
    """Parse KeyValues text and return its root object.

    The root object is the value of the first top-level key that holds an
    object (``AppState`` in a manifest, ``libraryfolders`` in the index).

    Returns:
        The root ObjectNode, or None if the document has no root object.

    Raises:
        TreeParseError: If the text is not valid KeyValues.
    """
    try:
        data = vdf.loads(text)
    except SyntaxError as e:
        raise TreeParseError(str(e)) from e

    for node in build_tree(data).children.values():
        if isinstance(node, ObjectNode):
            return node
    return None


def load_tree(path: Union[str, Path]) -> Optional[ObjectNode]:
    """Load a KeyValues file from disk.

    Raises:
        OSError: If the file cannot be read.
        TreeParseError: If the file is not valid KeyValues text.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise TreeParseError(f"{path} is not UTF-8 text") from e
    return parse_tree(text)


__all__ = [
    "Node",
    "ObjectNode",
    "ScalarNode",
    "TreeParseError",
    "build_tree",
    "parse_tree",
    "load_tree",
]
