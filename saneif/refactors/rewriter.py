"""Rewrite a reported if/else into a guard clause followed by the long branch.

    def f(x):                      def f(x):
        if x:                          if not x:
            a()                            c()
            b()          -->               return
        else:                          a()
            c()                        b()

Every step re-checks the shape it needs and stops quietly when it is not
there, so a fix applied to a module edited since detection never raises.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence, Tuple

import libcst as cst
from libcst.metadata import MetadataWrapper, ParentNodeProvider

from .conditions import (
    append_return,
    else_chain,
    invert_if,
    is_terminator,
    last_statement,
    returns_value,
    unwrap_else,
)


class FixOutcome(Enum):
    # Condition inverted, short branch exits, else removed.
    APPLIED = "applied"
    # Condition inverted only; unwrapping would need a made-up return value.
    INVERTED_ONLY = "inverted_only"
    # The if/else is gone or no longer has an else; nothing changed.
    SKIPPED = "skipped"


class _GuardClauseTransformer(cst.CSTTransformer):
    def __init__(
        self,
        target: cst.If,
        ancestors: Sequence[cst.If],
        block: Optional[cst.IndentedBlock],
        anchor: cst.If,
        function_returns_value: bool,
    ) -> None:
        super().__init__()
        self._target = target
        self._ancestors = ancestors
        self._block = block
        self._anchor = anchor
        self._returns_value = function_returns_value
        self._hoisted: Optional[List[cst.BaseStatement]] = None
        self._trailing: List[cst.EmptyLine] = []
        self.outcome = FixOutcome.SKIPPED

    def _falls_through(self, node: cst.If) -> bool:
        return not is_terminator(last_statement(node.body))

    def _rewrite_target(self, updated_node: cst.If) -> cst.If:
        inverted = invert_if(updated_node)
        if inverted is None:
            return updated_node
        self.outcome = FixOutcome.INVERTED_ONLY

        # Re-fetch the then branch from the inverted node.
        then_block = inverted.body
        if not isinstance(then_block, cst.IndentedBlock):
            return inverted
        if not is_terminator(last_statement(then_block)):
            if self._returns_value:
                return inverted
            then_block = append_return(then_block)
            inverted = inverted.with_changes(body=then_block)

        # The hoisted code runs after the whole chain, so earlier branches
        # must exit too.
        if self._returns_value and any(
            self._falls_through(a) for a in self._ancestors
        ):
            return inverted
        orelse = inverted.orelse
        if self._block is None or not isinstance(orelse, cst.Else):
            return inverted

        self._hoisted, self._trailing = unwrap_else(orelse)
        self.outcome = FixOutcome.APPLIED
        return inverted.with_changes(orelse=None)

    def leave_If(self, original_node: cst.If, updated_node: cst.If) -> cst.If:
        if original_node is self._target:
            return self._rewrite_target(updated_node)
        if self._hoisted is not None and any(
            original_node is a for a in self._ancestors
        ):
            if self._falls_through(updated_node):
                return updated_node.with_changes(body=append_return(updated_node.body))
        return updated_node

    def leave_IndentedBlock(
        self, original_node: cst.IndentedBlock, updated_node: cst.IndentedBlock
    ) -> cst.IndentedBlock:
        if original_node is not self._block or not self._hoisted:
            return updated_node
        index = next(
            i for i, stmt in enumerate(original_node.body) if stmt is self._anchor
        )
        body = list(updated_node.body)
        body[index + 1 : index + 1] = self._hoisted
        if not self._trailing:
            return updated_node.with_changes(body=body)
        # The unwrapped block's footer follows the hoisted statements.
        after = index + 1 + len(self._hoisted)
        if after < len(body):
            following = body[after]
            body[after] = following.with_changes(
                leading_lines=[*self._trailing, *following.leading_lines]
            )
            return updated_node.with_changes(body=body)
        return updated_node.with_changes(
            body=body, footer=[*self._trailing, *updated_node.footer]
        )


class SaneIfElseFix:
    """Turn the else branch of *node* into a guard clause.

    *node* and *function* come from a detection run; :meth:`apply` looks
    *node* up again in the module it is given and re-derives everything else
    from there.
    """

    def __init__(self, node: cst.If, function: cst.FunctionDef) -> None:
        self.node = node
        self.function = function

    def apply(self, module: cst.Module) -> Tuple[cst.Module, FixOutcome]:
        wrapper = MetadataWrapper(module, unsafe_skip_copy=True)
        parents = wrapper.resolve(ParentNodeProvider)
        if self.node not in parents:
            return module, FixOutcome.SKIPPED
        if not isinstance(self.node.orelse, cst.Else):
            return module, FixOutcome.SKIPPED

        chain = else_chain(self.node, parents.get)
        anchor = chain[-1]
        block = parents.get(anchor)
        function = parents.get(block) if block is not None else None
        if not isinstance(function, cst.FunctionDef):
            function = self.function

        transformer = _GuardClauseTransformer(
            target=self.node,
            ancestors=chain[1:],
            block=block if isinstance(block, cst.IndentedBlock) else None,
            anchor=anchor,
            function_returns_value=returns_value(function),
        )
        new_module = module.visit(transformer)
        return new_module, transformer.outcome
