"""
Raw type table

One entry per raw primitive tag. The classifier, planner and emitter all
consult this table, so a tag is either fully supported or not at all.
"""

import ast
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class Strategy(str, Enum):
    """How a field moves between its external and fixed representation."""
    DIRECT = "direct"
    NUMERIC_CAST = "numeric-cast"
    TIME_NANOS = "time-nanos"
    DURATION_CAST = "duration-cast"
    STRING_REGION = "string-region"


@dataclass(frozen=True)
class RawType:
    tag: str            # canonical spelling, e.g. "int32" or "raw.String"
    external: str       # annotation used on the exported type
    default: str        # zero value expression on the exported type
    code: str           # struct format code(s) of the fixed representation
    size: int
    align: int
    strategy: Strategy
    cast: Optional[str] = None  # runtime constructor used by numeric-cast

    @property
    def fmt(self) -> str:
        return "<" + self.code


def _int(tag: str, code: str, size: int) -> RawType:
    return RawType(tag, "int", "0", code, size, size, Strategy.NUMERIC_CAST, cast=f"raw.{tag}")


RAW_TYPES: Dict[str, RawType] = {t.tag: t for t in [
    RawType("bool", "bool", "False", "?", 1, 1, Strategy.DIRECT),
    _int("int8", "b", 1),
    _int("int16", "h", 2),
    _int("int32", "i", 4),
    _int("int64", "q", 8),
    _int("uint8", "B", 1),
    _int("uint16", "H", 2),
    _int("uint32", "I", 4),
    _int("uint64", "Q", 8),
    RawType("float32", "float", "0.0", "f", 4, 4, Strategy.DIRECT),
    RawType("float64", "float", "0.0", "d", 8, 8, Strategy.DIRECT),
    RawType("raw.Time", "raw.datetime", "raw.EPOCH", "q", 8, 8, Strategy.TIME_NANOS),
    RawType("raw.Duration", "raw.timedelta", "raw.timedelta()", "q", 8, 8, Strategy.DURATION_CAST),
    RawType("raw.String", "str", '""', "HH", 4, 2, Strategy.STRING_REGION),
]}

# Numeric tags may also be spelled through the library module.
ALIASES: Dict[str, str] = {f"raw.{tag}": tag for tag in RAW_TYPES if "." not in tag}


def type_name(node: ast.AST) -> str:
    """Return the syntactic spelling of a simple or two-part dotted name."""
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute) and isinstance(node.value, ast.Name):
        return node.value.id + "." + node.attr
    return ""


def lookup(name: str) -> Optional[RawType]:
    return RAW_TYPES.get(ALIASES.get(name, name))
