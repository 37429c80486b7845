from pathlib import Path

import pytest


@pytest.fixture
def make_tree(tmp_path):
    """Create files under ``tmp_path / "src"`` from a {relpath: content} dict."""

    def _make(files):
        root = tmp_path / "src"
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_bytes(content.encode("utf-8"))
        return root

    return _make


@pytest.fixture
def no_clipboard(monkeypatch):
    """Record clipboard writes instead of touching the real clipboard."""
    copied = []
    monkeypatch.setattr("pyperclip.copy", copied.append)
    return copied
