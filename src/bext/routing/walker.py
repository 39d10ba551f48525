"""Recursive route discovery over a routes directory.

Entry order decides which of two overlapping routes wins, so it is
fixed: files before directories, ``index.*`` before other files, then
by name. A directory's name joins the prefix only for its own contents.
"""

import logging
from pathlib import Path

from bext.routing.matcher import RouteMatcher
from bext.routing.parser import is_route_file
from bext.routing.registry import register_route_file
from bext.routing.route import Dirent

logger = logging.getLogger("bext.router")

# Bytecode caches never hold route sources
_SKIPPED_DIRS = frozenset({"__pycache__"})


def read_directory(directory: str | Path) -> list[Dirent]:
    """List *directory* as :class:`Dirent` records.

    Raises:
        FileNotFoundError: If *directory* does not exist.
    """
    root = Path(directory)
    return [
        Dirent(
            name=item.name,
            path=str(item),
            is_file=item.is_file(),
            is_directory=item.is_dir(),
            is_symbolic_link=item.is_symlink(),
        )
        for item in root.iterdir()
    ]


def _sort_key(entry: Dirent) -> tuple[bool, bool, str]:
    is_index = not entry.is_directory and entry.name.startswith("index.")
    return (entry.is_directory, not is_index, entry.name)


def sort_entries(entries: list[Dirent]) -> list[Dirent]:
    """Order entries for registration."""
    return sorted(entries, key=_sort_key)


def walk(
    directory: str | Path,
    prefix: str,
    matcher: RouteMatcher,
    *,
    debug: bool = False,
) -> None:
    """Register every route file under *directory*.

    A missing directory contributes no routes. Any other error, including
    a route file that fails to register, aborts the walk.
    """
    try:
        entries = read_directory(directory)
    except FileNotFoundError:
        logger.debug("No routes directory at %s", directory)
        return

    for entry in sort_entries(entries):
        full_path = str(Path(directory, entry.name).resolve())

        if entry.is_directory:
            if entry.name in _SKIPPED_DIRS:
                continue
            sub_prefix = f"{prefix}/{entry.name}" if prefix else entry.name
            walk(full_path, sub_prefix, matcher, debug=debug)
        elif entry.is_file and is_route_file(entry.name):
            register_route_file(matcher, entry.name, full_path, prefix, debug=debug)
