"""Symbol tables for semantic analysis: variables, arrays, structs and functions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Iterator, Optional

from .gramtree import Node, SymbolKind

__all__ = [
    "Variable",
    "StructType",
    "ArrayType",
    "FunctionType",
    "MatchResult",
    "SymbolTable",
    "search_name",
    "set_node_type",
]

log = logging.getLogger(__name__)


def _walk(node: Optional[Node]) -> Iterator[Node]:
    """Visit a node, its child subtree, then its siblings, in that order."""
    while node is not None:
        yield node
        yield from _walk(node.child)
        node = node.sibling


def search_name(node: Optional[Node], name: str) -> Optional[Node]:
    """Return the first node called ``name`` below ``node`` or among its siblings."""
    return next((n for n in _walk(node) if n.name == name), None)


def set_node_type(node: Optional[Node], name: str, type: int) -> None:
    """Set the type of every node called ``name`` in the tree."""
    for n in _walk(node):
        if n.name == name:
            n.type = type


@dataclass
class Variable:
    """A variable, struct field or function parameter."""

    name: str
    type: int
    struct_name: Optional[str] = None


@dataclass
class StructType:
    """A struct definition; ``fields`` holds the most recently added field first."""

    name: str
    fields: list[Variable] = field(default_factory=list)


@dataclass
class ArrayType:
    """An array with its element type and the sizes of its dimensions."""

    name: str
    type: int
    struct_name: Optional[str] = None
    dimensions: list[int] = field(default_factory=list)


@dataclass
class FunctionType:
    """A declared or defined function with its parameters in order."""

    name: str
    isdef: int
    return_type: int
    params: list[Variable] = field(default_factory=list)


class MatchResult(IntEnum):
    """Outcome of comparing call arguments with a function's parameters."""

    MATCH = 1
    INT_ARGUMENT_MISMATCH = 2
    OTHER_ARGUMENT_MISMATCH = 3
    TOO_MANY_ARGUMENTS = 4
    TOO_FEW_ARGUMENTS = 5


class SymbolTable:
    """Scope-free symbol tables; every list keeps the newest entry first.

    Redefined variables are collected in ``errors`` and set ``has_error``;
    other diagnostics go straight to ``report``.
    """

    def __init__(self, report: Callable[[str], None] = print):
        self.variables: list[Variable] = []
        self.structs: list[StructType] = []
        self.arrays: list[ArrayType] = []
        self.functions: list[FunctionType] = []
        self.errors: list[str] = []
        self.has_error = False
        self.report = report

    # variables

    def add_sym_type(self, node: Optional[Node], name: str, type: int,
                     struct_name: Optional[str]) -> None:
        """Declare every node called ``name`` as a variable of an int, float or struct type."""
        if type not in (SymbolKind.INT, SymbolKind.FLOAT, SymbolKind.STRUCT):
            return
        for n in _walk(node):
            if n.name == name:
                self.add_var(n.text, type, struct_name, n.line)
                self.set_arr_type(n.text, type, struct_name)

    def set_sym_type(self, node: Optional[Node], name: str, type: int,
                     struct_name: Optional[str]) -> None:
        """Give every untyped variable and array named by a ``name`` node the type ``type``."""
        for n in _walk(node):
            if n.name == name:
                self.set_var_type(n.text, type)
                self.set_arr_type(n.text, type, struct_name)

    def add_var(self, name: str, type: int, struct_name: Optional[str], line: int) -> None:
        """Declare a variable unless it is an array, already a variable, or a function."""
        if self.exist_arr(name):
            return
        if self.exist_var(name):
            self.errors.append(f'Error type 3 at line {line}: Redefined variable "{name}".')
            self.has_error = True
            return
        if self.exist_fun(name):
            self.report(f'Error type 3 at line {line}: "{name}" was a function.')
            return
        self.variables.insert(0, Variable(name, type, struct_name))
        log.debug("add var: %s, type: %d", name, type)

    def add_recursive_var(self, node: Optional[Node], type: int,
                          struct_name: Optional[str]) -> None:
        """Declare every ID in the tree as a variable, without any checks."""
        for n in _walk(node):
            if n.name == "ID":
                log.debug("recursive var %s:%d", n.text, type)
                self.variables.insert(0, Variable(n.text, type, struct_name))

    def exist_var(self, name: str) -> bool:
        """Whether a variable of this name exists."""
        return any(v.name == name for v in self.variables)

    def type_var(self, name: str) -> tuple[int, Optional[str]]:
        """Return the newest variable's type and, for a struct, its struct name."""
        for v in self.variables:
            if v.name == name:
                return v.type, (v.struct_name if v.type == SymbolKind.STRUCT else None)
        return SymbolKind.NONE, None

    def set_var_type(self, name: str, type: int) -> None:
        """Set the type of each untyped variable of this name."""
        for v in self.variables:
            if v.name == name:
                if not v.type:
                    v.type = type
                    log.debug("set var: %s, type: %d", name, type)
                else:
                    log.debug("var: %s already has a type: %d", name, v.type)

    def del_var(self, name: str) -> None:
        """Remove the newest variable of this name, if any."""
        for i, v in enumerate(self.variables):
            if v.name == name:
                del self.variables[i]
                log.debug("del var: %s", name)
                return

    # arrays

    def add_arr(self, name: str, type: int, dimen: int,
                struct_name: Optional[str]) -> None:
        """Add a dimension to an existing array, or create the array with it."""
        log.debug("add arr: %s, dimen: %d", name, dimen)
        for arr in self.arrays:
            if arr.name == name:
                arr.dimensions.append(dimen)
                return
        self.arrays.insert(0, ArrayType(name, type, None, [dimen]))

    def del_arr(self, name: str) -> None:
        """Remove matching arrays after the newest entry, skipping the one after each removal."""
        log.debug("del_arr: %s", name)
        i = 0
        while i + 1 < len(self.arrays):
            if self.arrays[i + 1].name == name:
                del self.arrays[i + 1]
            i += 1

    def exist_arr(self, name: str) -> bool:
        """Whether an array of this name exists."""
        return any(a.name == name for a in self.arrays)

    def set_arr_type(self, name: str, type: int, struct_name: Optional[str]) -> None:
        """Set type and struct name of each untyped array of this name."""
        for arr in self.arrays:
            if arr.name == name:
                if not arr.type:
                    arr.type = type
                    arr.struct_name = struct_name
                    log.debug("set arr: %s, type: %d", name, type)
                else:
                    log.debug("arr: %s already has a type: %d", name, arr.type)

    def type_arr(self, name: str) -> int:
        """Return the element type of the newest array of this name, or 0."""
        return next((a.type for a in self.arrays if a.name == name), SymbolKind.NONE)

    # structs

    def add_struct_var(self, node: Optional[Node], fields: list[Variable], type: int) -> None:
        """Add every ID in the tree to ``fields``, reporting redefined fields."""
        for n in _walk(node):
            if n.name != "ID":
                continue
            self.del_var(n.text)
            if any(f.name == n.text for f in fields):
                self.report(f'Error type 15 at line {n.line}: Redefined field "{n.text}".')
            else:
                log.debug("struct var, %s:%d", n.text, type)
                fields.insert(0, Variable(n.text, type))

    def add_struct(self, struct_name: str, deflist: Node) -> None:
        """Define a struct from a DefList whose Defs are ``Specifier DecList SEMI``."""
        struct = StructType(struct_name)
        self.structs.insert(0, struct)
        definition = deflist.child
        while definition is not None:
            specifier = definition.child
            kind = SymbolKind.INT if specifier.child.type == SymbolKind.INT else SymbolKind.FLOAT
            self.add_struct_var(specifier.sibling, struct.fields, kind)
            definition = definition.sibling.child
        log.debug("struct %s", struct_name)

    def exist_struct_field(self, name: str, field: str) -> bool:
        """Whether the struct type of variable ``name`` has a field ``field``."""
        for v in self.variables:
            if v.name != name:
                continue
            struct = next((s for s in self.structs
                           if v.struct_name is not None and s.name == v.struct_name), None)
            if struct is not None:
                return any(f.name == field for f in struct.fields)
        return False

    def exist_struct(self, name: str) -> bool:
        """Whether a struct of this name is defined."""
        return any(s.name == name for s in self.structs)

    # functions

    def add_fun(self, fun_name: str, isdef: int, return_type: int,
                varlist: Optional[Node]) -> None:
        """Record a function; ``varlist`` is a VarList of ``Specifier VarDec`` ParamDecs."""
        fun = FunctionType(fun_name, isdef, return_type)
        self.functions.insert(0, fun)
        param = varlist.child if varlist is not None else None
        while param is not None:
            specifier = param.child
            kind = SymbolKind.INT if specifier.child.type == SymbolKind.INT else SymbolKind.FLOAT
            fun.params.append(Variable(specifier.sibling.child.text, kind))
            param = param.sibling.sibling.child if param.sibling is not None else None

    def match_fun(self, exp: Optional[Node], fun_name: str) -> MatchResult:
        """Compare the argument expressions starting at ``exp`` with the function's parameters."""
        fun = next((f for f in self.functions if f.name == fun_name), None)
        params = iter(fun.params if fun is not None else [])
        param = next(params, None)
        while exp is not None and param is not None:
            log.debug("exp type:%d, param type:%d", exp.type, param.type)
            if exp.type != param.type and exp.type - 3 != param.type:
                break
            exp = exp.sibling.sibling.child if exp.sibling is not None else None
            param = next(params, None)
        if exp is None and param is None:
            return MatchResult.MATCH
        if exp is not None and param is not None:
            if exp.type == SymbolKind.INT:
                return MatchResult.INT_ARGUMENT_MISMATCH
            return MatchResult.OTHER_ARGUMENT_MISMATCH
        if exp is not None:
            return MatchResult.TOO_MANY_ARGUMENTS
        return MatchResult.TOO_FEW_ARGUMENTS

    def exist_fun(self, fun_name: str) -> bool:
        """Whether a function of this name is recorded."""
        return any(f.name == fun_name for f in self.functions)

    def isdef_fun(self, fun_name: str) -> int:
        """The definition flag of the newest function of this name, or 0."""
        return next((f.isdef for f in self.functions if f.name == fun_name), 0)

    def exist_fun_para(self, fun_name: str, para_name: str) -> int:
        """Type of parameter ``para_name`` of the oldest function of this name, or 0."""
        matches = [f for f in self.functions if f.name == fun_name]
        if not matches:
            return SymbolKind.NONE
        return next((p.type for p in matches[-1].params if p.name == para_name),
                    SymbolKind.NONE)