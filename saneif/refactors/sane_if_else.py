"""Refactor: long if / short else at the end of a function  →  guard clause."""

from typing import List, Tuple

import libcst as cst

from .base import Refactor
from .detector import Problem, scan
from .rewriter import FixOutcome, SaneIfElseFix


class SaneIfElse(Refactor):
    """Invert if/else statements whose else branch is the shorter one.

    Transforms:
        def handle(job):
            if job.ready:
                prepare(job)
                run(job)
                report(job)
            else:
                log.info("not ready")

    Into:
        def handle(job):
            if not job.ready:
                log.info("not ready")
                return
            prepare(job)
            run(job)
            report(job)

    Only if/else chains that end a function body are considered.  When the
    function returns a value and the short branch does not end in ``return``
    or ``raise``, the condition is inverted but the ``else`` is kept.
    """

    def __init__(
        self,
        changed_ranges: List[Tuple[int, int]],
        source: str = "",
        apply_fixes: bool = True,
        whole_file: bool = False,
    ) -> None:
        super().__init__(changed_ranges, source=source)
        self.apply_fixes = apply_fixes
        self.whole_file = whole_file

    def _targets(self, module: cst.Module) -> List[Problem]:
        problems = scan(module)
        if not self.whole_file:
            problems = [p for p in problems if self._in_changed_range(p.node)]
        return problems

    def leave_Module(
        self, original_node: cst.Module, updated_node: cst.Module
    ) -> cst.Module:
        targets = self._targets(original_node)
        if not self.apply_fixes:
            for problem in targets:
                self.changes_made.append(
                    f"SaneIfElse: {problem.message} at line {problem.line}"
                )
            return updated_node
        if not targets:
            return updated_node

        # Fix bottom-up: a fix only moves lines at or below its own if, so
        # every remaining target keeps its start position.
        module = original_node
        for target in sorted(targets, key=lambda p: (p.line, p.column), reverse=True):
            current = next(
                (
                    p
                    for p in scan(module)
                    if (p.line, p.column) == (target.line, target.column)
                ),
                None,
            )
            if current is None:
                continue
            module, outcome = SaneIfElseFix(current.node, current.function).apply(
                module
            )
            if outcome is FixOutcome.APPLIED:
                self.changes_made.append(
                    f"SaneIfElse: inverted if/else at line {target.line}"
                )
            elif outcome is FixOutcome.INVERTED_ONLY:
                self.changes_made.append(
                    f"SaneIfElse: inverted if/else at line {target.line}"
                    " (else kept: function returns a value)"
                )
        return module
