"""Shared fixtures: route trees written into a temporary directory."""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def route_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write ``{relative_path: source}`` under ``tmp_path/api`` and return that dir."""

    def build(files: dict[str, str]) -> Path:
        root = tmp_path / "api"
        root.mkdir(exist_ok=True)
        for relative, source in files.items():
            target = root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(textwrap.dedent(source))
        return root

    return build
