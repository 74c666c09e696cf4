"""
Registry module behavioral tests (registration, lookups, accessors, rendering).

Scope
- Validate fluent registration and registry-wide form uniqueness.
- Validate lookups by long/short form and the positional/command accessors.
- Validate read-only exposure of state and the rich table rendering.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (SwitchRegistry and the switch records).
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from switchyard import SwitchRegistry, BooleanSwitch, ArgumentSwitch, OptionSwitch, Positional


class TestRegistration(TestCase):
    """Behavioral tests for add_boolean/add_argument/add_option."""

    def testRegistrationIsFluent(self):
        registry = SwitchRegistry()
        self.assertIs(registry.add_boolean("verbose", "v"), registry)
        self.assertIs(registry.add_argument("output", "o"), registry)
        self.assertIs(registry.add_option("mode", ["hs", "bs", "b"]), registry)
        self.assertEqual(len(registry), 3)

    def testIterationFollowsKindPriority(self):
        registry = (
            SwitchRegistry()
            .add_option("mode", ["hs", "b"])
            .add_argument("output", "o")
            .add_boolean("verbose", "v")
            .add_boolean("quiet", "q")
        )
        self.assertEqual(
            [type(switch) for switch in registry],
            [BooleanSwitch, BooleanSwitch, ArgumentSwitch, OptionSwitch]
        )
        self.assertEqual([switch.long for switch in registry.booleans], ["verbose", "quiet"])

    def testDefaultsAreApplied(self):
        registry = (
            SwitchRegistry()
            .add_boolean("verbose", "v", True)
            .add_argument("output", "o", ["out.bin"], ["a.out"])
            .add_option("mode", ["hs", "bs", "b"], 2)
        )
        boolean, = registry.booleans
        argument, = registry.arguments
        option, = registry.options
        self.assertTrue(boolean.value)
        self.assertEqual(argument.value, ["a.out"])
        self.assertEqual(argument.preset, ("out.bin",))
        self.assertEqual(option.selected, "b")
        self.assertFalse(boolean.overridden or argument.overridden or option.overridden)

    def testFormsAreFolded(self):
        registry = SwitchRegistry().add_boolean("AnotherBoolean", "BS").add_option("Mode", ["HS", "Bs"])
        self.assertEqual(registry.booleans[0].long, "anotherboolean")
        self.assertEqual(registry.booleans[0].short, "bs")
        self.assertEqual(registry.options[0].options, ("hs", "bs"))

    def testDuplicateLongFormAcrossKindsRejected(self):
        registry = SwitchRegistry().add_boolean("mode", "m")
        with self.assertRaises(ValueError):
            registry.add_option("mode", ["fast", "safe"])

    def testDuplicateLongFormIgnoresCase(self):
        registry = SwitchRegistry().add_boolean("verbose")
        with self.assertRaises(ValueError):
            registry.add_argument("VERBOSE")

    def testDuplicateShortFormAgainstOptionRejected(self):
        registry = SwitchRegistry().add_option("mode", ["fast", "safe"])
        with self.assertRaises(ValueError):
            registry.add_boolean("quick", "fast")

    def testDuplicateOptionAgainstShortFormRejected(self):
        registry = SwitchRegistry().add_argument("output", "o")
        with self.assertRaises(ValueError):
            registry.add_option("format", ["x", "o"])

    def testLongAndShortNamespacesAreSeparate(self):
        registry = SwitchRegistry().add_boolean("v", "x").add_boolean("verbose", "v")
        self.assertEqual(len(registry), 2)

    def testRejectedSwitchIsNotRegistered(self):
        registry = SwitchRegistry().add_boolean("verbose", "v")
        with self.assertRaises(ValueError):
            registry.add_boolean("verbose", "w")
        self.assertEqual(len(registry), 1)

    def testOptionDefaultOutOfRangeRejected(self):
        with self.assertRaises(IndexError):
            SwitchRegistry().add_option("mode", ["a", "b"], 2)
        with self.assertRaises(IndexError):
            SwitchRegistry().add_option("mode", ["a", "b"], -1)

    def testOptionDefaultMustBeInteger(self):
        with self.assertRaises(TypeError):
            SwitchRegistry().add_option("mode", ["a", "b"], "a")
        with self.assertRaises(TypeError):
            SwitchRegistry().add_option("mode", ["a", "b"], True)

    def testRegistryOptionsMustBeBooleans(self):
        with self.assertRaises(TypeError):
            SwitchRegistry(strict="yes")


class TestLookups(TestCase):
    """Behavioral tests for find_long/find_short."""

    def setUp(self):
        self.registry = (
            SwitchRegistry()
            .add_boolean("verbose", "v")
            .add_argument("output", "o")
            .add_option("mode", ["hs", "bs", "b"])
            .add_boolean("quiet")
        )

    def testFindLongIsCaseInsensitive(self):
        self.assertIs(self.registry.find_long(BooleanSwitch, "VERBOSE"), self.registry.booleans[0])

    def testFindIsScopedToKind(self):
        self.assertIsNone(self.registry.find_long(ArgumentSwitch, "verbose"))
        self.assertIsNone(self.registry.find_short(OptionSwitch, "v"))

    def testFindShortMatchesAnyOption(self):
        self.assertIs(self.registry.find_short(OptionSwitch, "BS"), self.registry.options[0])

    def testEmptyFormNeverMatches(self):
        self.assertIsNone(self.registry.find_short(BooleanSwitch, ""))
        self.assertIsNone(self.registry.find_long(BooleanSwitch, ""))

    def testUnknownKindRejected(self):
        with self.assertRaises(TypeError):
            self.registry.find_long(Positional, "verbose")


class TestAccessors(TestCase):
    """Behavioral tests for positional/command accessors and read-only state."""

    def testCommandBeforeParseIsNone(self):
        registry = SwitchRegistry()
        self.assertIsNone(registry.command)
        self.assertIsNone(registry.argv)

    def testVectorGivenAtConstruction(self):
        registry = SwitchRegistry(["prog", "file"]).add_boolean("verbose", "v")
        self.assertEqual(registry.command, "prog")
        registry.parse()
        self.assertEqual(registry.positionals, [Positional("file", 1)])
        self.assertEqual(registry.argv, ("prog", "file"))

    def testParseWithoutVectorRejected(self):
        with self.assertRaises(TypeError):
            SwitchRegistry().parse()

    def testEmptyVectorRejected(self):
        with self.assertRaises(ValueError):
            SwitchRegistry().parse([])

    def testStringVectorRejected(self):
        with self.assertRaises(TypeError):
            SwitchRegistry().parse("prog -v")

    def testNonStringTokenRejected(self):
        with self.assertRaises(TypeError):
            SwitchRegistry().parse(["prog", 1])

    def testParseReturnsRegistry(self):
        registry = SwitchRegistry()
        self.assertIs(registry.parse(["prog"]), registry)

    def testPositionalAtOutOfRange(self):
        registry = SwitchRegistry().parse(["prog", "a"])
        self.assertEqual(registry.positional_at(0), Positional("a", 1))
        with self.assertRaises(IndexError):
            registry.positional_at(1)

    def testExposedSequencesAreCopies(self):
        registry = SwitchRegistry().add_argument("output", "o", (), ["a.out"]).parse(["prog", "x"])
        registry.arguments.clear()
        registry.positionals.clear()
        registry.arguments[0].value.append("b.out")
        self.assertEqual(len(registry.arguments), 1)
        self.assertEqual(registry.positional_count, 1)
        self.assertEqual(registry.arguments[0].value, ["a.out"])

    def testStateIsReadOnly(self):
        registry = SwitchRegistry().add_boolean("verbose", "v")
        with self.assertRaises(AttributeError):
            registry.booleans[0].value = True
        with self.assertRaises(AttributeError):
            registry.strict = True


class TestRendering(TestCase):
    """Behavioral tests for the rich table of the registry state."""

    def testTableListsSwitchesAndPositionals(self):
        registry = (
            SwitchRegistry()
            .add_boolean("verbose", "v")
            .add_argument("output", "o", ["out.bin"])
            .add_option("mode", ["hs", "b"])
            .parse(["prog", "-v", "input.s"])
        )
        stream = io.StringIO()
        Console(file=stream, width=120, color_system=None).print(registry)
        output = stream.getvalue()
        self.assertIn("--verbose | -v", output)
        self.assertIn("--mode | -hs | -b", output)
        self.assertIn("overridden", output)
        self.assertIn("'input.s'", output)
        self.assertIn("prog", output)

    def testRepr(self):
        registry = SwitchRegistry().add_boolean("verbose", "v")
        self.assertEqual(repr(registry), "switch-registry(booleans=1, arguments=0, options=0, positionals=0)")


if __name__ == "__main__":
    unittest.main()
