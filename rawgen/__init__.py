"""
rawgen

Generates exported wrapper types, binary codecs and accessors for Python
classes whose fields are raw primitive types.
"""

__version__ = "0.1.0"

from .driver import Regenerator, strip_generated
from .errors import (
    DiscoveryError,
    IllegalExportedRawTypeError,
    InvalidRawTypeError,
    ParseError,
    RawgenError,
    WriteError,
)
from .walker import imports_raw, walk

__all__ = [
    "Regenerator", "strip_generated", "imports_raw", "walk",
    "RawgenError", "DiscoveryError", "ParseError",
    "IllegalExportedRawTypeError", "InvalidRawTypeError", "WriteError",
]
