"""
Reporter module behavioral tests (usage text layout).

Scope
- Validate the sections of the usage text and their order.
- Validate labels, descriptions, and switch member wrapping.
- Validate program name resolution.

Conventions
- Test method names follow CamelCase per project convention.
- Output goes to an uncolored capture console.
"""

from __future__ import annotations

import sys
import unittest
from enum import Enum
from unittest import TestCase, mock

from rich.console import Console

from declargs import Argument, Kind, OptionalArgument, OptionalSwitch, Prefix, Schema, Switch, label, program, usage


class Mode(Enum):
    fast = 1
    slow = 2


class Color(Enum):
    black = 0
    blue = 1
    green = 2
    cyan = 3
    red = 4
    magenta = 5


class Wide(Enum):
    an_exceptionally_long_member_name = 1
    another_exceptionally_long_member = 2


def render(schema, **options):
    console = Console(color_system=None, force_terminal=False, width=200)
    with console.capture() as capture:
        result = usage(schema, prog="demo", console=console, **options)
    assert result is None
    return capture.get()


class TestUsage(TestCase):
    """Usage sections, in order."""

    def setUp(self):
        self.schema = Schema(
            Argument("name", Kind.STRING, 1, "who to greet"),
            Switch("mode", Mode, Prefix.HYPHEN, 2),
            Argument("count", Kind.NUMBER, 3),
            OptionalArgument("retries", Kind.NUMBER, "attempts before giving up"),
            OptionalSwitch("level", Mode, Prefix.SLASH),
        )

    def testProgramNameFirst(self):
        self.assertTrue(render(self.schema).startswith("demo\n"))

    def testSignatureTwoPerLine(self):
        lines = render(self.schema).splitlines()
        self.assertEqual(lines[1], "    (name, Type:String) (mode, Switch:Mode)")
        self.assertEqual(lines[2], "    (count, Type:Number)")

    def testSectionsInOrder(self):
        text = render(self.schema)
        positions = [text.index(section) for section in ("Arguments:", "--Required", "--Optional", "--Switches")]
        self.assertEqual(positions, sorted(positions))

    def testRequiredLines(self):
        lines = render(self.schema).splitlines()
        self.assertIn("name Type:String - who to greet", lines)
        self.assertIn("mode Switch:Mode", lines)
        self.assertIn("count Type:Number", lines)

    def testOptionalLines(self):
        lines = render(self.schema).splitlines()
        self.assertIn("[retries Type:Number] - attempts before giving up", lines)
        self.assertIn("[level Switch:Mode]", lines)

    def testSwitchEnumerationListedOnce(self):
        text = render(self.schema)
        self.assertEqual(text.count("Mode -- fast, slow"), 1)

    def testWithoutOptionalsOrSwitches(self):
        text = render(Schema(Argument("name", Kind.STRING, 1)))
        self.assertIn("--Required", text)
        self.assertNotIn("--Optional", text)
        self.assertNotIn("--Switches", text)

    def testMembersWrapEveryFourth(self):
        lines = render(Schema(Switch("color", Color, Prefix.HYPHEN, 1))).splitlines()
        start = lines.index("Color -- black, blue, green, cyan,")
        self.assertEqual(lines[start + 1], "         red, magenta")

    def testLongMembersWrap(self):
        lines = render(Schema(Switch("wide", Wide, Prefix.HYPHEN, 1))).splitlines()
        start = lines.index("Wide -- an_exceptionally_long_member_name,")
        self.assertEqual(lines[start + 1], "        another_exceptionally_long_member")

    def testPlainAndFancy(self):
        self.assertIn("name Type:String", render(self.schema, colorful=False))
        self.assertIn("DEMO USAGE", render(self.schema, fancy=True))

    def testSchemaMethod(self):
        console = Console(color_system=None, force_terminal=False, width=200)
        with console.capture() as capture:
            self.schema.usage(prog="demo", console=console)
        self.assertIn("--Required", capture.get())


class TestHelpers(TestCase):
    """Labels and program name resolution."""

    def testLabel(self):
        self.assertEqual(label(Argument("name", Kind.STRING, 1)), "Type:String")
        self.assertEqual(label(OptionalArgument("count", Kind.NUMBER)), "Type:Number")
        self.assertEqual(label(Switch("mode", Mode, Prefix.HYPHEN, 1)), "Switch:Mode")

    def testExplicitProgram(self):
        self.assertEqual(program("tool"), "tool")

    def testProgramFromArgv(self):
        with mock.patch.object(sys, "argv", ["/usr/local/bin/tool.py", "x"]):
            with mock.patch.object(sys.modules["__main__"], "__prog__", None, create=True):
                self.assertEqual(program(), "tool.py")

    def testProgramFromMain(self):
        with mock.patch.object(sys.modules["__main__"], "__prog__", "custom", create=True):
            self.assertEqual(program(), "custom")


if __name__ == "__main__":
    unittest.main()
