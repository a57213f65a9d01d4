"""Generation of three-address intermediate code from the syntax tree."""

from __future__ import annotations

import itertools
import os
from typing import Optional, TextIO, Union

from .gramtree import Node

__all__ = ["IRTranslator"]

# An expression evaluated only for its effects has no destination; the
# generated code shows it as a null place.
_NO_PLACE = "(null)"


class IRTranslator:
    """Writes intermediate code for functions to a file path or an open text stream.

    With a path, the first function written truncates the file and later
    ones are appended.
    """

    def __init__(self, path: Union[str, os.PathLike, TextIO]):
        if hasattr(path, "write"):
            self._path: Optional[str] = None
            self._stream: Optional[TextIO] = path
        else:
            self._path = os.fspath(path)
            self._stream = None
        self._out: Optional[TextIO] = self._stream
        self._started = False
        self._temps = itertools.count(1)
        self._labels = itertools.count(1)

    def new_temp(self) -> str:
        """Return a fresh temporary name."""
        return f"t{next(self._temps)}"

    def new_label(self) -> str:
        """Return a fresh label name."""
        return f"label{next(self._labels)}"

    def _emit(self, line: str) -> None:
        if self._out is None:
            raise RuntimeError("no output is open; generate code through translate_fun")
        self._out.write(line + "\n")

    def translate_args(self, args: Node) -> None:
        """Generate code for an argument list; only the last argument is passed with ARG."""
        first = args.child
        if first.sibling is None:
            temp = self.new_temp()
            self.translate_exp(first, temp)
            self._emit(f"ARG {temp}")
        else:
            temp = self.new_temp()
            self.translate_args(first.sibling.sibling)
            self.translate_exp(first, temp)

    def translate_exp(self, exp: Node, place: Optional[str]) -> None:
        """Generate code for an expression, storing its value in ``place``."""
        target = place if place is not None else _NO_PLACE
        first = exp.child
        if first.name == "ID":
            self._translate_name(first, target)
        elif first.name == "INT":
            self._emit(f"{target} := #{first.int_value}")
        elif first.name == "MINUS":
            temp = self.new_temp()
            self.translate_exp(first.sibling, temp)
            self._emit(f"{target} := #0 - {temp}")
        elif first.name == "Exp":
            operator = first.sibling
            right = operator.sibling
            if operator.name == "ASSIGNOP":
                temp = self.new_temp()
                var_name = first.text
                self.translate_exp(right, temp)
                self._emit(f"{var_name} := {temp}")
                if place:
                    self._emit(f"{place} := {var_name}")
            elif operator.name in ("PLUS", "MINUS", "STAR"):
                symbol = {"PLUS": "+", "MINUS": "-", "STAR": "*"}[operator.name]
                left_temp = self.new_temp()
                right_temp = self.new_temp()
                self.translate_exp(first, left_temp)
                self.translate_exp(right, right_temp)
                self._emit(f"{target} := {left_temp} {symbol} {right_temp}")
            else:
                label_true = self.new_label()
                label_false = self.new_label()
                self._emit(f"{target} := #0")
                self.translate_cond(exp, label_true, label_false)
                self._emit(f"LABEL {label_true} :")
                self._emit(f"{target} := #1")

    def _translate_name(self, ident: Node, target: str) -> None:
        after = ident.sibling
        if after is None:
            self._emit(f"{target} := {ident.text}")
        elif after.sibling.name == "Args":
            args = after.sibling
            temp = self.new_temp()
            self.translate_exp(args.child, temp)
            if ident.text == "write":
                self._emit(f"WRITE {temp}")
            else:
                self.translate_args(args)
                self._emit(f"{target} := CALL {ident.text}")
        elif ident.text == "read":
            self._emit(f"READ {target}")
        else:
            self._emit(f"{target} := CALL {ident.text}")

    def translate_cond(self, exp: Node, label_true: str, label_false: str) -> None:
        """Generate conditional jumps for a relational condition."""
        first = exp.child
        if first.name != "Exp" or first.sibling.name != "RELOP":
            return
        left_temp = self.new_temp()
        right_temp = self.new_temp()
        self.translate_exp(first, left_temp)
        self.translate_exp(first.sibling.sibling, right_temp)
        operator = first.sibling.text
        self._emit(f"IF {left_temp} {operator} {right_temp} GOTO {label_true}")
        self._emit(f"GOTO {label_false}")

    def translate_stmt(self, stmt: Node) -> None:
        """Generate code for one statement."""
        first = stmt.child
        if first.name == "Exp":
            self.translate_exp(first, None)
        elif first.name == "CompSt":
            self.translate_compst(first)
        elif first.name == "RETURN":
            temp = self.new_temp()
            self.translate_exp(first.sibling, temp)
            self._emit(f"RETURN {temp}")
        elif first.name == "WHILE":
            cond = first.sibling.sibling
            body = cond.sibling.sibling
            start, loop, end = self.new_label(), self.new_label(), self.new_label()
            self._emit(f"LABEL {start} :")
            self.translate_cond(cond, loop, end)
            self._emit(f"LABEL {loop} :")
            self.translate_stmt(body)
            self._emit(f"GOTO {start}")
            self._emit(f"LABEL {end} :")
        elif first.name == "IF":
            cond = first.sibling.sibling
            then_stmt = cond.sibling.sibling
            if then_stmt.sibling is None:
                label_true, label_false = self.new_label(), self.new_label()
                self.translate_cond(cond, label_true, label_false)
                self._emit(f"LABEL {label_true} :")
                self.translate_stmt(then_stmt)
                self._emit(f"LABEL {label_false} :")
            else:
                label_true, label_false, label_end = (
                    self.new_label(),
                    self.new_label(),
                    self.new_label(),
                )
                self.translate_cond(cond, label_true, label_false)
                self._emit(f"LABEL {label_true} :")
                self.translate_stmt(then_stmt)
                self._emit(f"GOTO {label_end}")
                self._emit(f"LABEL {label_false} :")
                self.translate_stmt(then_stmt.sibling.sibling)
                self._emit(f"LABEL {label_end} :")

    def translate_fun(self, fun: Node, compst: Node) -> None:
        """Generate code for a function header and body, followed by a blank line."""
        if self._path is None:
            self._translate_function_body(fun, compst)
            return
        mode = "a" if self._started else "w"
        self._started = True
        with open(self._path, mode, encoding="utf-8") as out:
            self._out = out
            try:
                self._translate_function_body(fun, compst)
            finally:
                self._out = None

    def _translate_function_body(self, fun: Node, compst: Node) -> None:
        ident = fun.child
        self._emit(f"FUNCTION {ident.text} :")
        if ident.sibling.sibling.sibling is not None:
            self.translate_varlist(ident.sibling.sibling)
        self.translate_compst(compst)
        self._emit("")

    def translate_varlist(self, varlist: Node) -> None:
        """Emit PARAM lines, last parameter first."""
        param = varlist.child
        if param.sibling is not None:
            self.translate_varlist(param.sibling.sibling)
        self._emit(f"PARAM {param.child.sibling.child.text}")

    def translate_compst(self, compst: Node) -> None:
        """Generate code for the statements of a compound statement."""
        self.translate_stmtlist(compst.child.sibling.sibling)

    def translate_stmtlist(self, stmtlist: Node) -> None:
        """Generate code for each statement of a statement list."""
        node: Optional[Node] = stmtlist
        while node is not None and node.child is not None:
            self.translate_stmt(node.child)
            node = node.child.sibling