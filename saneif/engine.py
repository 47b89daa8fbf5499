"""Load files, apply refactors, verify, and write back."""

from pathlib import Path
from typing import Dict, Generator, List, Optional, Tuple

import libcst as cst
from libcst.metadata import MetadataWrapper

from .config import SaneIfConfig, load_config
from .refactors.sane_if_else import SaneIfElse
from .stats import RunStats

# Single-file refactors, applied in order.
_REFACTORS = [SaneIfElse]


def _categorize_into_stats(stats: RunStats, msg: str) -> None:
    """Increment the appropriate counter in *stats* for a raw change message."""
    if not msg.startswith("SaneIfElse:"):
        return
    if "else kept" in msg:
        stats.inverted_only += 1
    elif "inverted if/else" in msg:
        stats.fixed += 1
    else:
        stats.reported += 1


def _build(RefactorClass: type, ranges, source: str, config: SaneIfConfig):
    return RefactorClass(
        ranges,
        source=source,
        apply_fixes=config.apply_fixes,
        whole_file=config.whole_file,
    )


def _process_file(
    filepath: str,
    ranges: List[Tuple[int, int]],
    source: str,
    config: SaneIfConfig,
    stats: RunStats,
) -> Tuple[str, List[str]]:
    """Run every refactor over *source*; return the new source and messages."""
    msgs: List[str] = []
    for RefactorClass in _REFACTORS:
        try:
            tree = cst.parse_module(source)
        except cst.ParserSyntaxError as exc:
            msgs.append(f"SKIP {filepath} ({RefactorClass.name()}): parse error: {exc}")
            break

        wrapper = MetadataWrapper(tree)
        try:
            transformer = _build(RefactorClass, ranges, source, config)
            new_source = wrapper.visit(transformer).code
        except Exception as exc:
            name = RefactorClass.name()
            msgs.append(f"SKIP {filepath} ({name}): transform error: {exc}")
            continue

        if new_source != source:
            try:
                compile(new_source, filepath, "exec")
            except SyntaxError as exc:  # pragma: no cover
                name = RefactorClass.name()
                msgs.append(f"SKIP {filepath} ({name}): output not valid Python: {exc}")
                continue

        for msg in transformer.get_changes():
            msgs.append(f"{filepath}: {msg}")
            _categorize_into_stats(stats, msg)
        source = new_source
    return source, msgs


def run_engine(
    changed: Dict[str, List[Tuple[int, int]]],
    config: Optional[SaneIfConfig] = None,
    stats: Optional[RunStats] = None,
) -> Generator[str, None, None]:
    """Apply all refactors to changed files and yield summary messages."""
    if config is None:
        config = load_config()
    _stats = stats if stats is not None else RunStats()

    for filepath, ranges in changed.items():
        path = Path(filepath)
        if not path.exists():
            yield f"SKIP {filepath}: file not found"
            continue

        original_source = path.read_text(encoding="utf-8")
        file_stats = RunStats()
        new_source, msgs = _process_file(
            filepath, ranges, original_source, config, file_stats
        )

        if new_source != original_source:
            path.write_text(new_source, encoding="utf-8")
            _stats.files_edited.append(filepath)
            file_stats.count_lines_changed(original_source, new_source)
        _stats.merge(file_stats)
        yield from msgs
