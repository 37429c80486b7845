import os

import pytest

from codemerger.console import Console
from codemerger.core import FileEntry, walk
from codemerger.errors import InvalidRootError, WalkError
from codemerger.patterns import Allow, Deny, PatternSet


def _paths(entries):
    return [e.display_path for e in entries]


def test_deny_mode_excludes_matches_and_binaries(make_tree):
    root = make_tree({"a.txt": "hello", "b.bin": b"\x00\x01\x02"})
    entries = walk(root, Deny(PatternSet.from_lines(["*.bin"])))
    assert entries == [FileEntry("./a.txt", root / "a.txt")]


def test_binary_dropped_even_without_patterns(make_tree):
    root = make_tree({"a.txt": "hello", "img.png": b"\x89PNG\r\n\x1a\n\x00\x00"})
    assert _paths(walk(root, Deny(PatternSet.empty()))) == ["./a.txt"]


def test_deny_mode_prunes_matched_directories(make_tree):
    root = make_tree(
        {
            "src/app.js": "app()",
            "node_modules/lib/index.js": "lib()",
            "pkg/node_modules/x.js": "x()",
        }
    )
    entries = walk(root, Deny(PatternSet.from_lines(["node_modules/"])))
    assert _paths(entries) == ["./src/app.js"]


def test_deny_mode_directory_rule_without_slash(make_tree):
    root = make_tree({"keep.txt": "k", "logs/today.txt": "t"})
    entries = walk(root, Deny(PatternSet.from_lines(["logs"])))
    assert _paths(entries) == ["./keep.txt"]


def test_allow_mode_matches_basename_at_any_depth(make_tree):
    root = make_tree({"keep.js": "a", "nested/keep.js": "b", "other.js": "c"})
    entries = walk(root, Allow(PatternSet.from_lines(["keep.js"])))
    assert _paths(entries) == ["./keep.js", "./nested/keep.js"]


def test_allow_mode_descends_unmatched_directories(make_tree):
    root = make_tree({"a/b/c/deep.py": "x = 1", "a/readme.txt": "hi"})
    entries = walk(root, Allow(PatternSet.from_lines(["*.py"])))
    assert _paths(entries) == ["./a/b/c/deep.py"]


def test_entries_carry_absolute_paths_and_posix_display(make_tree):
    root = make_tree({"dir/sub/file.txt": "content"})
    (entry,) = walk(root, Deny(PatternSet.empty()))
    assert entry.display_path == "./dir/sub/file.txt"
    assert entry.abs_path == root / "dir" / "sub" / "file.txt"


def test_sort_order_is_case_insensitive_and_mixed_depth(make_tree):
    root = make_tree({"B.txt": "b", "a.txt": "a", "a/b.js": "ab", "a.js": "aj"})
    entries = walk(root, Deny(PatternSet.empty()))
    assert _paths(entries) == ["./a.js", "./a.txt", "./a/b.js", "./B.txt"]


def test_custom_classifier_is_used(make_tree):
    root = make_tree({"a.txt": "a", "b.txt": "b"})
    entries = walk(root, Deny(PatternSet.empty()), classifier=lambda p: p.name == "b.txt")
    assert _paths(entries) == ["./b.txt"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlinks_are_not_followed(make_tree, tmp_path):
    root = make_tree({"real/file.txt": "x"})
    try:
        os.symlink(root, root / "loop", target_is_directory=True)
        os.symlink(root / "real" / "file.txt", root / "link.txt")
    except OSError:
        pytest.skip("cannot create symlinks here")
    assert _paths(walk(root, Deny(PatternSet.empty()))) == ["./real/file.txt"]


def test_missing_root_raises(tmp_path):
    with pytest.raises(InvalidRootError):
        walk(tmp_path / "missing", Deny(PatternSet.empty()))


def test_file_root_raises(tmp_path):
    f = tmp_path / "f.txt"
    f.write_text("x")
    with pytest.raises(InvalidRootError):
        walk(f, Deny(PatternSet.empty()))


def test_unlistable_directory_aborts_walk(make_tree, monkeypatch):
    root = make_tree({"ok.txt": "ok", "locked/secret.txt": "s"})
    original_iterdir = type(root).iterdir

    def fake_iterdir(self):
        if self.name == "locked":
            raise PermissionError(13, "Permission denied", str(self))
        return original_iterdir(self)

    monkeypatch.setattr(type(root), "iterdir", fake_iterdir)
    with pytest.raises(WalkError):
        walk(root, Deny(PatternSet.empty()))


def test_verbose_logging_only_when_enabled(make_tree, capsys):
    root = make_tree({"a.txt": "hello", "b.bin": b"\x00\x01"})
    walk(root, Deny(PatternSet.empty()), console=Console(verbose=False))
    assert capsys.readouterr().out == ""

    walk(root, Deny(PatternSet.empty()), console=Console(verbose=True))
    out = capsys.readouterr().out
    assert "[ALLOW] a.txt" in out
    assert "b.bin" in out


def test_sort_order_punctuation_compares_by_code_point(make_tree):
    root = make_tree(
        {"my_file.js": "u", "my-file.js": "h", "src_old/b.js": "b", "src/a.js": "a"}
    )
    entries = walk(root, Deny(PatternSet.empty()))
    assert _paths(entries) == [
        "./my-file.js",
        "./my_file.js",
        "./src/a.js",
        "./src_old/b.js",
    ]


def test_sort_order_uppercase_first_on_case_tie(make_tree):
    root = make_tree({"a.txt": "lower", "A.txt": "upper"})
    if len(list(root.iterdir())) < 2:
        pytest.skip("case-insensitive filesystem")
    entries = walk(root, Deny(PatternSet.empty()))
    assert _paths(entries) == ["./A.txt", "./a.txt"]


def test_empty_files_are_kept(make_tree):
    root = make_tree({"pkg/__init__.py": "", "pkg/mod.py": "x = 1\n"})
    entries = walk(root, Deny(PatternSet.empty()))
    assert _paths(entries) == ["./pkg/__init__.py", "./pkg/mod.py"]


def test_allow_mode_still_drops_binaries(make_tree):
    root = make_tree({"logo.png": b"\x89PNG\r\n\x1a\n\x00\x00", "icon.png.txt": "t"})
    entries = walk(root, Allow(PatternSet.from_lines(["*.png"])))
    assert entries == []
