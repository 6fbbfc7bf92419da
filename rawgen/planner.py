"""
Layout/codec planner

Turns an eligible record declaration into a GenerationPlan: exported
names, the external type and strategy of every field, and the byte layout
of the fixed region.
"""

from dataclasses import dataclass, field
from typing import List

from .classify import RecordTypeDecl
from .errors import IllegalExportedRawTypeError, InvalidRawTypeError
from .rawtypes import RawType, Strategy, lookup


@dataclass
class FieldPlan:
    name: str
    exported_name: str
    raw_type: RawType
    offset: int

    @property
    def strategy(self) -> Strategy:
        return self.raw_type.strategy


@dataclass
class GenerationPlan:
    name: str
    exported_name: str
    fields: List[FieldPlan] = field(default_factory=list)
    layout: str = "<"
    size: int = 0

    @property
    def view_name(self) -> str:
        return f"_{self.name}View"


def capitalize(s: str) -> str:
    return s[:1].upper() + s[1:]


def align_up(offset: int, align: int) -> int:
    return (offset + align - 1) // align * align


def plan(decl: RecordTypeDecl) -> GenerationPlan:
    if decl.exported:
        raise IllegalExportedRawTypeError(f"raw struct cannot be exported: {decl.name}", lineno=decl.lineno)

    exported_name = capitalize(decl.name)
    if exported_name == decl.name:
        raise IllegalExportedRawTypeError(f"raw struct has no exported form: {decl.name}", lineno=decl.lineno)

    p = GenerationPlan(decl.name, exported_name)
    codes = []
    offset = 0
    max_align = 1

    for f in decl.fields:
        raw_type = lookup(f.type_name)
        if raw_type is None:
            raise InvalidRawTypeError(
                f"invalid raw type: {f.type_name or '?'} ({decl.name}.{f.name})", lineno=decl.lineno
            )

        aligned = align_up(offset, raw_type.align)
        if aligned > offset:
            codes.append(f"{aligned - offset}x")
        codes.append(raw_type.code)
        p.fields.append(FieldPlan(f.name, capitalize(f.name), raw_type, aligned))

        offset = aligned + raw_type.size
        max_align = max(max_align, raw_type.align)

    size = align_up(offset, max_align)
    if size > offset:
        codes.append(f"{size - offset}x")

    p.layout = "<" + "".join(codes)
    p.size = size
    return p
