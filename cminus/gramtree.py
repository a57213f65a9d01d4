"""Syntax tree nodes in left-child / right-sibling form, plus a tree printer."""

from __future__ import annotations

import re
import struct
from dataclasses import dataclass, field
from enum import IntEnum
from itertools import pairwise
from typing import Iterator, Optional

__all__ = ["SymbolKind", "Node", "new_node", "new_token", "new_empty", "format_tree"]

EMPTY_LINE = -1

_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_MIN = -(2**31)
_INT_RANGE = 2**32
_LONG_MAX = 2**63 - 1
_LONG_MIN = -(2**63)


class SymbolKind(IntEnum):
    """Type tags carried by nodes and symbols."""

    NONE = 0
    INT = 1
    FLOAT = 2
    ARRAY = 3
    CONST_INT = 4
    CONST_FLOAT = 5
    FUNCTION = 6
    STRUCT = 7
    ID = 8


@dataclass(eq=False)
class Node:
    """A syntax tree node; ``child`` is the first child, ``sibling`` the next one."""

    name: str
    line: int
    type: int = SymbolKind.NONE
    text: Optional[str] = None
    int_value: Optional[int] = None
    float_value: Optional[float] = None
    child: Optional["Node"] = field(default=None, repr=False)
    sibling: Optional["Node"] = field(default=None, repr=False)

    @property
    def is_empty(self) -> bool:
        """True for a node produced by an empty production."""
        return self.line == EMPTY_LINE

    def children(self) -> list["Node"]:
        """Return the direct children in order."""
        result = []
        node = self.child
        while node is not None:
            result.append(node)
            node = node.sibling
        return result


def _parse_c_int(text: str) -> int:
    """Parse like strtol with base 0, then narrow to a 32-bit int."""
    s = text.lstrip()
    sign = 1
    if s[:1] in ("+", "-"):
        sign = -1 if s[0] == "-" else 1
        s = s[1:]
    if s[:2].lower() == "0x" and len(s) > 2 and s[2] in "0123456789abcdefABCDEF":
        base, digits, s = 16, "0123456789abcdefABCDEF", s[2:]
    elif s.startswith("0"):
        base, digits = 8, "01234567"
    else:
        base, digits = 10, "0123456789"
    prefix = re.match(f"[{digits}]*", s).group(0)
    value = sign * int(prefix, base) if prefix else 0
    value = max(_LONG_MIN, min(_LONG_MAX, value))
    return (value - _INT_MIN) % _INT_RANGE + _INT_MIN


def _parse_c_float(text: str) -> float:
    """Parse the longest numeric prefix like atof, stored as a single-precision float."""
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return 0.0
    value = float(match.group(0))
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return float("inf") if value > 0 else float("-inf")


def new_node(name: str, *args: Node) -> Node:
    """Build a nonterminal over ``args``, inheriting line, type and value from the first."""
    if not args:
        raise ValueError("a nonterminal node needs at least one child")
    first = args[0]
    root = Node(name, first.line, first.type, child=first)
    if first.type == SymbolKind.CONST_INT:
        root.int_value = first.int_value
    elif first.type == SymbolKind.CONST_FLOAT:
        root.float_value = first.float_value
    else:
        root.text = first.text
    for prev, nxt in pairwise(args):
        prev.sibling = nxt
    return root


def new_token(name: str, text: str, line: int) -> Node:
    """Build a terminal node from its lexeme."""
    node = Node(name, line)
    if name in ("ID", "TYPE"):
        node.text = text
        if text == "int":
            node.type = SymbolKind.INT
        elif text == "float":
            node.type = SymbolKind.FLOAT
    elif name == "INT":
        node.int_value = _parse_c_int(text)
        node.type = SymbolKind.CONST_INT
    elif name == "FLOAT":
        node.float_value = _parse_c_float(text)
        node.type = SymbolKind.CONST_FLOAT
    elif name == "RELOP":
        node.text = text
    return node


def new_empty(name: str) -> Node:
    """Build the node for an empty production."""
    return Node(name, EMPTY_LINE)


def _label(node: Node) -> str:
    if node.name in ("ID", "TYPE"):
        return f"{node.name}: {node.text}"
    if node.name == "INT":
        return f"{node.name}: {node.int_value}"
    if node.name == "FLOAT":
        return f"{node.name}: {node.float_value:.6f}"
    if node.child is not None:
        return f"{node.name}({node.line})"
    return node.name


def _tree_lines(node: Optional[Node], level: int) -> Iterator[str]:
    while node is not None:
        if not node.is_empty:
            yield "  " * level + _label(node)
        yield from _tree_lines(node.child, level + 1)
        node = node.sibling


def format_tree(root: Optional[Node], level: int = 0) -> str:
    """Render the tree (and the siblings of ``root``) one node per line, skipping empty ones."""
    return "".join(line + "\n" for line in _tree_lines(root, level))