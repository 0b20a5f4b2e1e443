"""
Utilities module tests (sentinel and property helpers).

Scope
- Unset: singleton identity, falsy semantics, stable repr, finality, pickling.
- coalesce: only Unset is replaced; other falsy values are preserved.
- rename: function and decorator forms, argument validation.
- mirror: read-only snapshots of backing fields.

Conventions
- Test method names follow CamelCase per project convention.
"""
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from argosy.utils import *


class UnsetTest(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testNotEqualToNone(self):
        self.assertNotEqual(Unset, None)

    def testUnionWithTypes(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("name", str | Unset)
        self.assertNotIsInstance(1, str | Unset)

    def testPickleRoundTrip(self):
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinalClass(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})


class CoalesceTest(TestCase):
    """Behavioral tests for coalesce()."""

    def testUnsetIsReplaced(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")

    def testUnsetDefaultsToNone(self):
        self.assertIsNone(coalesce(Unset))

    def testFalsyValuesArePreserved(self):
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertEqual(coalesce("", "fallback"), "")


class RenameTest(TestCase):
    """Behavioral tests for rename()."""

    def testFunctionForm(self):
        def work(): ...

        rename(work, "do_work")
        self.assertEqual(work.__name__, "do_work")
        self.assertEqual(work.__qualname__, "do_work")

    def testDecoratorForm(self):
        @rename("do_work")
        def work(): ...

        self.assertEqual(work.__name__, "do_work")

    def testNonCallableRejected(self):
        with self.assertRaises(TypeError):
            rename(1, "name")

    def testNonStringNameRejected(self):
        with self.assertRaises(TypeError):
            rename(lambda: None, 1)

    def testWrongArity(self):
        with self.assertRaises(TypeError):
            rename()


class MirrorTest(TestCase):
    """Behavioral tests for mirror()."""

    def setUp(self):
        class Holder:
            items = mirror("items")
            table = mirror("table")
            tags = mirror("tags")
            name = mirror("name")

        self.holder = Holder()
        self.holder._items = [1, 2]
        self.holder._table = {"a": 1}
        self.holder._tags = {"x"}
        self.holder._name = "holder"

    def testSequenceBecomesTuple(self):
        self.assertEqual(self.holder.items, (1, 2))

    def testMappingBecomesProxy(self):
        self.assertIsInstance(self.holder.table, MappingProxyType)
        with self.assertRaises(TypeError):
            self.holder.table["b"] = 2  # type: ignore[index]

    def testSetBecomesFrozenset(self):
        self.assertEqual(self.holder.tags, frozenset({"x"}))

    def testStringPassesThrough(self):
        self.assertEqual(self.holder.name, "holder")

    def testSnapshotDoesNotAliasBackingField(self):
        items = self.holder.items
        self.holder._items.append(3)
        self.assertEqual(items, (1, 2))

    def testPropertyIsReadOnly(self):
        with self.assertRaises(AttributeError):
            self.holder.items = ()

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == '__main__':
    unittest.main()
