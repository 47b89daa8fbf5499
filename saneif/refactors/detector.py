"""Find if/else statements whose else branch should be the guard clause.

An ``If`` is reported when all of these hold:

* its body and its ``else`` body are both indented blocks;
* the body spans more source lines than the ``else`` body;
* the head of its ``if/elif/else`` chain is a statement directly in a
  function body, and the last statement of that body.

The report carries a fix that turns the short branch into an early exit and
moves the long branch out of the ``if`` (see :mod:`.rewriter`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import libcst as cst
from libcst.metadata import MetadataWrapper, ParentNodeProvider, PositionProvider

from .conditions import else_chain
from .rewriter import SaneIfElseFix

MESSAGE = "Then branch should be shorter then else branch"


@dataclass
class Problem:
    """A reported if/else together with the function that encloses it."""

    node: cst.If
    function: cst.FunctionDef
    line: int
    column: int
    message: str = MESSAGE

    def fix(self, module: cst.Module) -> cst.Module:
        """Apply the guard-clause rewrite to *module* and return the result."""
        new_module, _ = SaneIfElseFix(self.node, self.function).apply(module)
        return new_module


def line_count(module: cst.Module, block: cst.BaseSuite) -> int:
    return len(module.code_for_node(block).splitlines())


class SaneIfElseDetector(cst.CSTVisitor):
    """Collect a :class:`Problem` for every eligible ``If`` in a module."""

    METADATA_DEPENDENCIES = (ParentNodeProvider, PositionProvider)

    def __init__(self) -> None:
        super().__init__()
        self.problems: List[Problem] = []
        self._module: Optional[cst.Module] = None

    def visit_Module(self, node: cst.Module) -> Optional[bool]:
        self._module = node
        return True

    def _parent(self, node: cst.CSTNode) -> Optional[cst.CSTNode]:
        return self.get_metadata(ParentNodeProvider, node, None)

    def visit_If(self, node: cst.If) -> Optional[bool]:
        problem = self._check(node)
        if problem is not None:
            self.problems.append(problem)
        return True

    def _check(self, node: cst.If) -> Optional[Problem]:
        head = else_chain(node, self._parent)[-1]
        block = self._parent(head)
        if not isinstance(block, cst.IndentedBlock):
            return None

        then_block = node.body
        orelse = node.orelse
        if not isinstance(then_block, cst.IndentedBlock):
            return None
        if not isinstance(orelse, cst.Else):
            return None
        if not isinstance(orelse.body, cst.IndentedBlock):
            return None

        function = self._parent(block)
        if not isinstance(function, cst.FunctionDef):
            return None

        if line_count(self._module, then_block) <= line_count(
            self._module, orelse.body
        ):
            return None

        # Nothing may run after the chain.
        if block.body[-1] is not head:
            return None

        pos = self.get_metadata(PositionProvider, node)
        return Problem(node, function, pos.start.line, pos.start.column)


def scan(module: cst.Module) -> List[Problem]:
    """Return the problems in *module*; problem nodes are nodes of *module*."""
    wrapper = MetadataWrapper(module, unsafe_skip_copy=True)
    detector = SaneIfElseDetector()
    wrapper.visit(detector)
    return detector.problems
