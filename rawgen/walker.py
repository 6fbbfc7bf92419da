"""
Tree walker

Visits every Python file under a root, in sorted order, and regenerates
the ones that import the raw library.
"""

import ast
import os
from pathlib import Path
from typing import Iterator, List, Union

from .driver import Regenerator
from .errors import DiscoveryError, ParseError
from .trace import trace

RAW_IMPORT_PATH = "rawgen.raw"
SOURCE_SUFFIX = ".py"


def imported_modules(module: ast.Module) -> Iterator[str]:
    for node in module.body:
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name
        elif isinstance(node, ast.ImportFrom) and node.module and not node.level:
            yield node.module
            for alias in node.names:
                yield f"{node.module}.{alias.name}"


def imports_raw(path: Union[str, Path]) -> bool:
    """True when the file at path imports the raw library."""
    path = Path(path)
    try:
        source = path.read_bytes()
    except OSError as e:
        raise DiscoveryError(f"read failed: {e}", path) from e

    try:
        module = ast.parse(source, filename=str(path))
    except SyntaxError as e:
        raise ParseError(e.msg, path, e.lineno or 0, e.offset or 0) from e

    for name in imported_modules(module):
        trace("imports", name)
        if name == RAW_IMPORT_PATH:
            return True
    return False


def _raise(err: OSError):
    raise DiscoveryError(f"file not found: {err}", err.filename) from err


def candidates(root: Union[str, Path]) -> Iterator[Path]:
    """Yield files under root in walk order; directories are not yielded."""
    root = Path(root)
    if not root.exists():
        raise DiscoveryError(f"file not found: {root}")
    if not root.is_dir():
        yield root
        return

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for name in sorted(filenames):
            yield Path(dirpath) / name


def walk(root: Union[str, Path], regenerator: Regenerator = None) -> List[Path]:
    """Regenerate every candidate file under root. Stops at the first error."""
    regenerator = regenerator or Regenerator()
    processed = []

    for path in candidates(root):
        trace("walk:", path)
        if path.is_dir():
            trace("skipping: is directory")
            continue
        if path.suffix != SOURCE_SUFFIX:
            trace("skipping: is not a python file")
            continue
        if not imports_raw(path):
            trace("skipping: does not import raw")
            continue

        regenerator.process(path)
        processed.append(path)

    return processed
