"""Tests for the CLI entry point."""

from io import StringIO
from unittest.mock import patch

import pytest

from saneif.cli import main
from saneif.errors import SaneIfConfigError


def test_empty_stdin_exits_1(capsys):
    with patch("sys.stdin", StringIO("")):
        with pytest.raises(SystemExit) as exc_info:
            main()
    assert exc_info.value.code == 1
    assert "no diff provided" in capsys.readouterr().err


def test_whitespace_stdin_exits_1():
    with patch("sys.stdin", StringIO("   \n  ")):
        with pytest.raises(SystemExit) as exc_info:
            main()
    assert exc_info.value.code == 1


def test_diff_with_no_changed_files(capsys):
    with patch("sys.stdin", StringIO("some diff text")):
        with patch("saneif.cli.parse_diff", return_value={}):
            main()
    assert capsys.readouterr().out == ""


def test_diff_prints_engine_messages(capsys):
    messages = ["foo.py: SaneIfElse: inverted if/else at line 1"]
    with patch("sys.stdin", StringIO("some diff text")):
        with patch("saneif.cli.parse_diff", return_value={"foo.py": [(1, 5)]}):
            with patch("saneif.cli.run_engine", return_value=iter(messages)):
                main()
    assert "SaneIfElse" in capsys.readouterr().out


def test_main_prints_summary(capsys):
    """Summary is printed after all engine messages."""

    def fake_engine(changed, config, stats=None, **kwargs):
        if stats is not None:
            stats.fixed = 2
            stats.files_edited.append("foo.py")
            stats.lines_changed = 4
        return iter(["foo.py: SaneIfElse: inverted if/else at line 1"])

    with patch("sys.stdin", StringIO("some diff text")):
        with patch("saneif.cli.parse_diff", return_value={"foo.py": [(1, 5)]}):
            with patch("saneif.cli.run_engine", side_effect=fake_engine):
                main()
    out = capsys.readouterr().out
    assert out.index("SaneIfElse") < out.index("--- saneif summary ---")
    assert "guard clause:   2" in out
    assert "files edited (1): foo.py" in out
    assert "lines changed: 4" in out


def test_config_error_exits_1(capsys):
    with patch("sys.stdin", StringIO("some diff text")):
        with patch("saneif.cli.parse_diff", return_value={"foo.py": [(1, 5)]}):
            with patch(
                "saneif.cli.load_config",
                side_effect=SaneIfConfigError("apply_fixes must be true or false"),
            ):
                with pytest.raises(SystemExit) as exc_info:
                    main()
    assert exc_info.value.code == 1
    assert "saneif: apply_fixes must be true or false" in capsys.readouterr().err


def test_end_to_end(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "job.py").write_text(
        "def run(job):\n"
        "    if job.ready:\n"
        "        job.prepare()\n"
        "        job.execute()\n"
        "    else:\n"
        "        job.defer()\n",
        encoding="utf-8",
    )
    diff = (
        "--- a/job.py\n"
        "+++ b/job.py\n"
        "@@ -1,2 +1,6 @@\n"
        " def run(job):\n"
        "-    job.execute()\n"
        "+    if job.ready:\n"
        "+        job.prepare()\n"
        "+        job.execute()\n"
        "+    else:\n"
        "+        job.defer()\n"
    )
    with patch("sys.stdin", StringIO(diff)):
        main()
    out = capsys.readouterr().out
    assert "job.py: SaneIfElse: inverted if/else at line 2" in out
    assert "files edited (1): job.py" in out
    assert (tmp_path / "job.py").read_text(encoding="utf-8") == (
        "def run(job):\n"
        "    if not job.ready:\n"
        "        job.defer()\n"
        "        return\n"
        "    job.prepare()\n"
        "    job.execute()\n"
    )
