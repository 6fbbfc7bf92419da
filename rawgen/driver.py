"""
Regeneration driver

Rewrites one source file: drops the previous generated block, re-parses
what is left and appends a fresh block for every raw record.
"""

import ast
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Union

from .classify import classify, record_decls
from .emitter import CodeEmitter
from .errors import DiscoveryError, ParseError, RawgenError, WriteError
from .planner import plan
from .trace import trace

BLOCK_PATTERN = re.compile(r"#\s*raw:codegen:begin.+?#\s*raw:codegen:end", re.IGNORECASE | re.DOTALL)


def strip_generated(source: str) -> str:
    """Remove generated blocks and trailing whitespace."""
    return BLOCK_PATTERN.sub("", source).rstrip()


class Regenerator:
    def __init__(self, emitter: CodeEmitter = None):
        self.emitter = emitter or CodeEmitter()

    def regenerate(self, source: str, filename: str = "<source>") -> str:
        """Return source with its generated block rebuilt."""
        stripped = strip_generated(source)

        try:
            module = ast.parse(stripped, filename=filename)
        except SyntaxError as e:
            raise ParseError(e.msg, filename, e.lineno or 0, e.offset or 0) from e

        plans = []
        for decl in record_decls(module):
            if not classify(decl):
                trace("not raw:", decl.name)
                continue
            p = plan(decl)
            trace(f"processing: {p.name} -> {p.exported_name}")
            plans.append(p)

        if not plans:
            return stripped + "\n"
        return stripped + "\n\n" + self.emitter.emit_block(plans)

    def process(self, path: Union[str, Path]) -> None:
        path = Path(path)
        try:
            source = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DiscoveryError(f"read failed: {e}", path) from e

        try:
            content = self.regenerate(source, str(path))
        except RawgenError as e:
            if e.path is None:
                e.path = path
            raise

        write_atomic(path, content)
        print("OK", path)


def write_atomic(path: Path, content: str) -> None:
    """Replace path with content through a temp file in the same directory."""
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content.encode("utf-8"))
        shutil.copymode(path, tmp)
        os.replace(tmp, path)
    except OSError as e:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise WriteError(f"write failed: {e}", path) from e
