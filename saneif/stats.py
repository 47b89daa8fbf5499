"""Cumulative statistics for a single saneif run."""

import difflib
from dataclasses import dataclass, field
from typing import List


@dataclass
class RunStats:
    """Holds cumulative counts for a single saneif run."""

    # Condition inverted and else unwrapped
    fixed: int = 0
    # Condition inverted, else kept (function returns a value)
    inverted_only: int = 0
    # Findings reported without fixing (apply_fixes = false)
    reported: int = 0

    files_edited: List[str] = field(default_factory=list)
    lines_changed: int = 0

    def merge(self, other: "RunStats") -> None:
        """Add all counters from *other* into self (files_edited is not merged)."""
        self.fixed += other.fixed
        self.inverted_only += other.inverted_only
        self.reported += other.reported
        self.lines_changed += other.lines_changed

    @property
    def total_edits(self) -> int:
        return self.fixed + self.inverted_only

    def count_lines_changed(self, original: str, new: str) -> None:
        """Add the number of added/removed lines between *original* and *new*."""
        diff = difflib.unified_diff(original.splitlines(), new.splitlines())
        self.lines_changed += sum(
            1
            for line in diff
            if line.startswith(("+", "-")) and not line.startswith(("+++", "---"))
        )

    def format_summary(self) -> List[str]:
        """Return a list of lines forming the human-readable run summary."""
        lines = ["--- saneif summary ---"]
        lines.append("edits:")
        lines.append(f"  guard clause:   {self.fixed}")
        lines.append(f"  inverted only:  {self.inverted_only}")
        lines.append(f"  total:          {self.total_edits}")
        lines.append(f"reported:         {self.reported}")
        if self.files_edited:
            flist = ", ".join(self.files_edited)
            lines.append(f"files edited ({len(self.files_edited)}): {flist}")
        else:
            lines.append("files edited: none")
        lines.append(f"lines changed: {self.lines_changed}")
        return lines
