"""Parse unified diffs into changed line ranges per Python file."""

from typing import Dict, Iterable, List, Tuple

from unidiff import PatchSet


def _merge_ranges(line_numbers: Iterable[int]) -> List[Tuple[int, int]]:
    """Collapse sorted line numbers into inclusive (start, end) runs."""
    ranges: List[Tuple[int, int]] = []
    for lineno in line_numbers:
        if ranges and lineno == ranges[-1][1] + 1:
            ranges[-1] = (ranges[-1][0], lineno)
        else:
            ranges.append((lineno, lineno))
    return ranges


def parse_diff(diff_text: str) -> Dict[str, List[Tuple[int, int]]]:
    """Map each changed ``.py`` file in *diff_text* to its added line ranges.

    Line numbers are 1-based and refer to the new version of the file.
    Deleted files and files with only removals are left out.
    """
    result: Dict[str, List[Tuple[int, int]]] = {}
    for patched_file in PatchSet.from_string(diff_text):
        if patched_file.is_removed_file or not patched_file.path.endswith(".py"):
            continue
        added = sorted(
            line.target_line_no
            for hunk in patched_file
            for line in hunk
            if line.is_added and line.target_line_no is not None
        )
        if added:
            result[patched_file.path] = _merge_ranges(added)
    return result
