#!/usr/bin/env python3

import struct
import unittest

from rawgen.classify import Field, RecordTypeDecl
from rawgen.errors import IllegalExportedRawTypeError, InvalidRawTypeError
from rawgen.planner import plan
from rawgen.rawtypes import Strategy


def record(name: str, *fields) -> RecordTypeDecl:
    return RecordTypeDecl(name, [Field(n, t) for n, t in fields])


class PlanTests(unittest.TestCase):
    def test_point(self) -> None:
        p = plan(record("point", ("x", "int32"), ("y", "int32")))
        self.assertEqual(p.exported_name, "Point")
        self.assertEqual(p.view_name, "_pointView")
        self.assertEqual([f.exported_name for f in p.fields], ["X", "Y"])
        self.assertEqual([f.offset for f in p.fields], [0, 4])
        self.assertEqual([f.raw_type.external for f in p.fields], ["int", "int"])
        self.assertEqual(p.layout, "<ii")
        self.assertEqual(p.size, 8)

    def test_alignment_and_padding(self) -> None:
        p = plan(record("rec", ("flag", "bool"), ("when", "raw.Time"), ("name", "raw.String"), ("n", "int8")))
        self.assertEqual([f.offset for f in p.fields], [0, 8, 16, 20])
        self.assertEqual(p.layout, "<?7xqHHb3x")
        self.assertEqual(p.size, 24)
        self.assertEqual(struct.calcsize(p.layout), p.size)

    def test_strategies(self) -> None:
        p = plan(record(
            "rec",
            ("b", "bool"), ("u", "uint16"), ("f", "float64"),
            ("t", "raw.Time"), ("d", "raw.Duration"), ("s", "raw.String"),
        ))
        self.assertEqual([f.strategy for f in p.fields], [
            Strategy.DIRECT, Strategy.NUMERIC_CAST, Strategy.DIRECT,
            Strategy.TIME_NANOS, Strategy.DURATION_CAST, Strategy.STRING_REGION,
        ])

    def test_dotted_numeric_spelling(self) -> None:
        p = plan(record("rec", ("a", "raw.uint64")))
        self.assertEqual(p.fields[0].raw_type.cast, "raw.uint64")
        self.assertEqual(p.layout, "<Q")

    def test_exported_record_is_rejected(self) -> None:
        with self.assertRaises(IllegalExportedRawTypeError) as ctx:
            plan(record("Bad", ("n", "int32")))
        self.assertIn("raw struct cannot be exported: Bad", str(ctx.exception))

    def test_errors_carry_the_record_line(self) -> None:
        with self.assertRaises(IllegalExportedRawTypeError) as ctx:
            plan(RecordTypeDecl("Bad", [Field("n", "int32")], 12))
        self.assertEqual(ctx.exception.lineno, 12)

        with self.assertRaises(InvalidRawTypeError) as ctx:
            plan(RecordTypeDecl("rec", [Field("c", "complex64")], 7))
        self.assertEqual(ctx.exception.lineno, 7)
        ctx.exception.path = "rec.py"
        self.assertEqual(str(ctx.exception), "rec.py:7: invalid raw type: complex64 (rec.c)")

    def test_record_without_exported_form_is_rejected(self) -> None:
        with self.assertRaises(IllegalExportedRawTypeError):
            plan(record("_hidden", ("n", "int32")))

    def test_unmapped_type_is_fatal(self) -> None:
        with self.assertRaises(InvalidRawTypeError) as ctx:
            plan(record("rec", ("n", "int32"), ("c", "complex64")))
        self.assertIn("invalid raw type: complex64", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
