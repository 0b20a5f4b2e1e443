"""
Faults module tests (codes, triggering, rendering).

Scope
- FaultCode: stable values and normalization.
- trigger(): raise vs warn outside shell mode, render-and-exit inside shell mode,
  option merging through copy.replace, hook validation.
- __rich__ rendering: plain and fancy output carry header, message and hint.
- getdoc(): optional host documentation lookup.

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured on a colorless in-memory console for deterministic text.
"""
import copy
import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from argosy import faults
from argosy.faults import *


def _capture():
    return Console(file=io.StringIO(), color_system=None, width=100)


class FaultCodeTest(TestCase):
    """Behavioral tests for FaultCode."""

    def testStableValues(self):
        self.assertEqual(FaultCode.ALREADY_SEALED, 21101)
        self.assertEqual(FaultCode.CONTAINER_SEALED, 21102)
        self.assertEqual(FaultCode.ITEM_NOT_SEALED, 21103)
        self.assertEqual(FaultCode.NAME_CLASH, 21111)
        self.assertEqual(FaultCode.NAME_OVERLAP, 22111)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.NAME_CLASH.normalize(), "21111")


class TriggerTest(TestCase):
    """Behavioral tests for trigger() and the fault base classes."""

    def testErrorIsRaised(self):
        with self.assertRaises(NameClashError) as context:
            trigger(NameClashError("clash", code=FaultCode.NAME_CLASH), name="v")
        self.assertEqual(context.exception.options["name"], "v")
        self.assertEqual(str(context.exception), "clash")

    def testErrorsShareBase(self):
        for cls in (AlreadySealedError, ContainerSealedError, ItemNotSealedError, NameClashError):
            self.assertTrue(issubclass(cls, ContainerException))

    def testWarningIsEmitted(self):
        with self.assertWarns(NameOverlapWarning):
            trigger(NameOverlapWarning("overlap", code=FaultCode.NAME_OVERLAP))

    def testReplaceMergesOptions(self):
        fault = AlreadySealedError("sealed", title="already sealed")
        replaced = copy.replace(fault, hint="seal once")
        self.assertIsNot(replaced, fault)
        self.assertEqual(replaced.message, "sealed")
        self.assertEqual(replaced.options["title"], "already sealed")
        self.assertEqual(replaced.options["hint"], "seal once")
        self.assertNotIn("hint", fault.options)

    def testOptionsAreReadOnly(self):
        fault = AlreadySealedError("sealed", title="already sealed")
        with self.assertRaises(TypeError):
            fault.options["title"] = "other"  # type: ignore[index]

    def testTriggerRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))

    def testShellModeRendersAndExits(self):
        output = _capture()
        with mock.patch.object(faults, "console", output):
            with self.assertRaises(SystemExit) as context:
                trigger(
                    AlreadySealedError("group is already sealed"),
                    shell=True,
                    title="already sealed",
                    code=FaultCode.ALREADY_SEALED,
                    hint="seal once"
                )
        self.assertEqual(context.exception.code, 1)
        rendered = output.file.getvalue()
        self.assertIn("group is already sealed", rendered)
        self.assertIn("21101", rendered)
        self.assertIn("seal once", rendered)

    def testShellModeWarningDoesNotExit(self):
        output = _capture()
        with mock.patch.object(faults, "console", output):
            trigger(NameOverlapWarning("overlap"), shell=True, code=FaultCode.NAME_OVERLAP, hint="allowed")
        self.assertIn("overlap", output.file.getvalue())


class RenderTest(TestCase):
    """Behavioral tests for __rich__ rendering."""

    def testPlainRendering(self):
        output = _capture()
        output.print(NameClashError(
            "flag '-v' and flag '-v' share the short name '-v'",
            title="name clash",
            code=FaultCode.NAME_CLASH,
            hint="rename one of them"
        ))
        rendered = output.file.getvalue()
        self.assertIn("Name Clash", rendered)
        self.assertIn("21111", rendered)
        self.assertIn("share the short name", rendered)
        self.assertIn("rename one of them", rendered)

    def testFancyRendering(self):
        output = _capture()
        output.print(ItemNotSealedError(
            "cannot add an unsealed group",
            title="item not sealed",
            code=FaultCode.ITEM_NOT_SEALED,
            hint="seal it first",
            fancy=True,
            colorful=True
        ))
        rendered = output.file.getvalue()
        self.assertIn("Item Not Sealed", rendered)
        self.assertIn("cannot add an unsealed group", rendered)

    def testHostCodesOverrideNormalization(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__codes__", {FaultCode.NAME_CLASH: "E-CLASH"}, create=True):
            self.assertEqual(FaultCode.NAME_CLASH.normalize(), "E-CLASH")


class GetdocTest(TestCase):
    """Behavioral tests for getdoc()."""

    def testMissingDocIsNone(self):
        self.assertIsNone(getdoc(FaultCode.NAME_CLASH))

    def testHostDocs(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__docs__", {FaultCode.NAME_CLASH: "two options share a name"}, create=True):
            self.assertEqual(getdoc(FaultCode.NAME_CLASH), "two options share a name")

    def testNonCodeRejected(self):
        with self.assertRaises(TypeError):
            getdoc(21111)


if __name__ == '__main__':
    unittest.main()
