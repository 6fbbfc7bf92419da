"""
Type classifier

Finds record declarations in a parsed module and decides whether every
field is a raw primitive.
"""

import ast
from dataclasses import dataclass, field
from typing import Iterator, List

from .rawtypes import lookup, type_name


@dataclass
class Field:
    name: str
    type_name: str      # annotation as written, e.g. "int32" or "raw.String"


@dataclass
class RecordTypeDecl:
    name: str
    fields: List[Field] = field(default_factory=list)
    lineno: int = 0

    @property
    def exported(self) -> bool:
        return self.name[:1].isupper()


def _is_docstring(stmt: ast.stmt) -> bool:
    return (isinstance(stmt, ast.Expr) and isinstance(stmt.value, ast.Constant)
            and isinstance(stmt.value.value, str))


def record_decl(node: ast.ClassDef):
    """Return a RecordTypeDecl for a struct-like class, or None.

    A record has no bases, keywords or decorators, and its body holds only
    bare annotations (optionally after a docstring).
    """
    if node.bases or node.keywords or node.decorator_list:
        return None

    body = node.body[1:] if node.body and _is_docstring(node.body[0]) else node.body
    if not body:
        return None

    fields = []
    for stmt in body:
        if not (isinstance(stmt, ast.AnnAssign) and stmt.value is None
                and isinstance(stmt.target, ast.Name)):
            return None
        fields.append(Field(stmt.target.id, type_name(stmt.annotation)))

    return RecordTypeDecl(node.name, fields, node.lineno)


def record_decls(module: ast.Module) -> Iterator[RecordTypeDecl]:
    """Yield the module-level record declarations in file order."""
    for node in module.body:
        if isinstance(node, ast.ClassDef):
            decl = record_decl(node)
            if decl is not None:
                yield decl


def classify(decl: RecordTypeDecl) -> bool:
    """True when every field of decl resolves to a raw primitive."""
    return all(lookup(f.type_name) is not None for f in decl.fields)
