"""Route file names, path patterns and module introspection.

File naming is the whole routing DSL:

- ``index.py`` maps to the directory URL
- ``[id].py`` is a dynamic segment bound to the ``id`` parameter
- any other ``name.py`` appends ``name`` to the directory URL

Inside a path template, ``[name]`` and the legacy ``:name`` form both
capture one non-empty segment.
"""

import functools
import importlib.util
import re
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType

from bext.errors import RouteLoadError
from bext.routing.route import HTTP_METHODS

ROUTE_FILE_EXTENSIONS = frozenset({".py"})

# Type stubs describe a module, they never serve requests
DECLARATION_SUFFIXES = (".pyi",)

# One dynamic segment: [name] or :name
_DYNAMIC_RE = re.compile(r"\[([^\]]+)\]|:([^/]+)")

_PARAM_GROUP = r"([^/]+)"
_PARAM_GROUP_UNNAMED = r"(?:[^/]+)"

_import_lock = threading.RLock()


@dataclass(frozen=True, slots=True)
class ParsedFileName:
    """What a route file's name says about its URL."""

    name: str
    methods: tuple[str, ...]
    is_index: bool


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A route template compiled to a regex plus its parameter names."""

    pattern: re.Pattern[str]
    keys: tuple[str, ...]


def is_route_file(filename: str) -> bool:
    """Whether *filename* can define a route.

    Only ``.py`` sources count. Stubs and private modules (leading
    underscore, which covers ``__init__.py``) are skipped.
    """
    suffix = Path(filename).suffix.lower()
    if suffix not in ROUTE_FILE_EXTENSIONS:
        return False
    if filename.endswith(DECLARATION_SUFFIXES):
        return False
    return not filename.startswith("_")


def parse_file_name(filename: str) -> ParsedFileName:
    """Derive the route name and index flag from a file name.

    Examples::

        "index.py"  -> ParsedFileName("", ("GET",), is_index=True)
        "[id].py"   -> ParsedFileName("[id]", ("GET",), is_index=False)
        "hello.py"  -> ParsedFileName("hello", ("GET",), is_index=False)

    ``methods`` is only a placeholder; the registry replaces it with
    the functions the module actually exports.
    """
    stem = Path(filename).stem
    if stem == "index":
        return ParsedFileName(name="", methods=("GET",), is_index=True)
    if stem.startswith("[") and stem.endswith("]"):
        return ParsedFileName(name=f"[{stem[1:-1]}]", methods=("GET",), is_index=False)
    return ParsedFileName(name=stem, methods=("GET",), is_index=False)


@functools.cache
def compile_route_pattern(route_path: str) -> CompiledPattern:
    """Compile a route template into an anchored regex.

    ``[name]`` segments always add a key, even when the name repeats.
    Legacy ``:name`` segments skip names already seen; a repeated
    legacy name still has to match a segment but captures nothing, so
    ``len(keys) == pattern.groups`` holds for every template.

    Results are memoized per template string.
    """
    keys: list[str] = []
    parts: list[str] = []
    pos = 0

    for match in _DYNAMIC_RE.finditer(route_path):
        parts.append(re.escape(route_path[pos : match.start()]))
        bracket_key, legacy_key = match.groups()
        if bracket_key is not None:
            keys.append(bracket_key)
            parts.append(_PARAM_GROUP)
        elif legacy_key in keys:
            parts.append(_PARAM_GROUP_UNNAMED)
        else:
            keys.append(legacy_key)
            parts.append(_PARAM_GROUP)
        pos = match.end()

    parts.append(re.escape(route_path[pos:]))
    pattern = re.compile("^" + "".join(parts) + r"/?\Z")
    return CompiledPattern(pattern=pattern, keys=tuple(keys))


def module_name_for(file_path: str | Path) -> str:
    """Stable ``sys.modules`` key for a route file."""
    resolved = str(Path(file_path).resolve())
    return "_bext_route_" + re.sub(r"\W", "_", resolved)


def load_module(file_path: str | Path) -> ModuleType:
    """Import a route file, reusing the module if it was already loaded.

    Modules are registered in ``sys.modules`` under
    :func:`module_name_for` so registration-time introspection and
    request-time loading share one import.

    Raises:
        RouteLoadError: If the file cannot be imported.
    """
    name = module_name_for(file_path)
    with _import_lock:
        module = sys.modules.get(name)
        if module is not None:
            return module

        spec = importlib.util.spec_from_file_location(name, file_path)
        if spec is None or spec.loader is None:
            msg = f"Cannot import route module {file_path}"
            raise RouteLoadError(msg)

        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            del sys.modules[name]
            msg = f"Failed to load route module {file_path}: {exc}"
            raise RouteLoadError(msg) from exc
    return module


def exported_methods(module: ModuleType) -> tuple[str, ...]:
    """HTTP method handlers a module exports, in ``HTTP_METHODS`` order."""
    return tuple(
        method for method in HTTP_METHODS if callable(getattr(module, method, None))
    )


def load_route_methods(file_path: str | Path) -> tuple[str, ...]:
    """Import a route module and return the HTTP methods it handles.

    Raises:
        RouteLoadError: If the import fails or no method is exported.
    """
    module = load_module(file_path)
    methods = exported_methods(module)
    if not methods:
        msg = (
            "Route file must export at least one HTTP method "
            f"({', '.join(HTTP_METHODS)}): {file_path}"
        )
        raise RouteLoadError(msg, code="NO_HTTP_METHODS")
    return methods
