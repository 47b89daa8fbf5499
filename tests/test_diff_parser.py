"""Tests for diff_parser module."""

from saneif.diff_parser import _merge_ranges, parse_diff

SIMPLE_DIFF = """\
--- a/foo.py
+++ b/foo.py
@@ -1,2 +1,3 @@
 def main():
-    pass
+    print("hello")
+    return 0
"""


def test_parse_simple_diff():
    assert parse_diff(SIMPLE_DIFF) == {"foo.py": [(2, 3)]}


MULTI_FILE_DIFF = """\
--- a/a.py
+++ b/a.py
@@ -1,2 +1,3 @@
 x = 1
+y = 2
 z = 3
--- a/b.py
+++ b/b.py
@@ -5,2 +5,3 @@
 def foo():
+    pass
 return 1
"""


def test_parse_multi_file_diff():
    assert parse_diff(MULTI_FILE_DIFF) == {"a.py": [(2, 2)], "b.py": [(6, 6)]}


def test_parse_empty_diff():
    assert parse_diff("") == {}


def test_parse_no_additions():
    diff = """\
--- a/foo.py
+++ b/foo.py
@@ -1,3 +1,2 @@
 x = 1
-y = 2
 z = 3
"""
    assert parse_diff(diff) == {}


def test_non_python_file_skipped():
    diff = """\
--- a/README.md
+++ b/README.md
@@ -1,1 +1,2 @@
 # title
+text
"""
    assert parse_diff(diff) == {}


def test_removed_file_skipped():
    diff = """\
--- a/gone.py
+++ /dev/null
@@ -1,2 +0,0 @@
-x = 1
-y = 2
"""
    assert parse_diff(diff) == {}


def test_new_file():
    diff = """\
--- /dev/null
+++ b/new.py
@@ -0,0 +1,2 @@
+x = 1
+y = 2
"""
    assert parse_diff(diff) == {"new.py": [(1, 2)]}


def test_non_consecutive_lines_two_ranges():
    diff = """\
--- a/foo.py
+++ b/foo.py
@@ -1,1 +1,5 @@
+a = 1
+b = 2
 c = 3
+d = 4
+e = 5
"""
    assert parse_diff(diff) == {"foo.py": [(1, 2), (4, 5)]}


def test_two_hunks():
    diff = """\
--- a/foo.py
+++ b/foo.py
@@ -1,2 +1,3 @@
 a = 1
+b = 2
 c = 3
@@ -10,2 +11,3 @@
 x = 1
+y = 2
 z = 3
"""
    assert parse_diff(diff) == {"foo.py": [(2, 2), (12, 12)]}


# ---------------------------------------------------------------------------
# _merge_ranges
# ---------------------------------------------------------------------------


def test_merge_ranges_empty():
    assert _merge_ranges([]) == []


def test_merge_ranges_single_run():
    assert _merge_ranges([3, 4, 5]) == [(3, 5)]


def test_merge_ranges_gaps():
    assert _merge_ranges([1, 3, 4, 9]) == [(1, 1), (3, 4), (9, 9)]
