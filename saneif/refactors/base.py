"""Abstract base class for CST-based refactors."""

from typing import List, Sequence, Tuple

import libcst as cst
from libcst.metadata import PositionProvider


class Refactor(cst.CSTTransformer):
    """Base class for all saneif refactors.

    Subclasses receive the set of changed line ranges and should only
    transform nodes that overlap with those ranges.
    """

    METADATA_DEPENDENCIES = (PositionProvider,)

    def __init__(
        self,
        changed_ranges: List[Tuple[int, int]],
        source: str = "",
    ) -> None:
        super().__init__()
        self.changed_ranges = changed_ranges
        self.changes_made: List[str] = []

    def _in_changed_range(self, node: cst.CSTNode) -> bool:
        """Return True if the node's line span overlaps any changed range."""
        try:
            pos = self.get_metadata(PositionProvider, node)
        except KeyError:  # pragma: no cover
            return False
        for range_start, range_end in self.changed_ranges:
            if pos.start.line <= range_end and pos.end.line >= range_start:
                return True
        return False

    @classmethod
    def name(cls) -> str:
        return cls.__name__

    def get_changes(self) -> Sequence[str]:
        return self.changes_made
