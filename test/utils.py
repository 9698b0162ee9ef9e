"""
Tests for the shared helpers.

This module verifies:
- The Unset sentinel: singleton identity, falsy semantics, unions, finality.
- coalesce() preserving legitimate falsey values.
- mirror() returning copies of mutable backing state.
- ordinal() wording and suffixes.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from declargs.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertEqual(repr(Unset), "Unset")

    def testUnion(self) -> None:
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", Unset | str)
        self.assertNotIsInstance(3, str | Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Derived(UnsetType):  # NOQA: F-841
                pass


class HelpersTest(TestCase):
    """
    Test suite for coalesce(), mirror() and ordinal().
    """

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)

    def testMirrorCopiesContainers(self) -> None:
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ["a"]

        holder = Holder()
        holder.items.append("b")
        self.assertEqual(holder.items, ["a"])
        with self.assertRaises(AttributeError):
            holder.items = []

    def testMirrorKeepsTuples(self) -> None:
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ("a",)

        holder = Holder()
        self.assertIs(holder.items, holder._items)

    def testOrdinalWords(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(10), "tenth")

    def testOrdinalSuffixes(self) -> None:
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(111), "111th")


if __name__ == "__main__":
    unittest.main()
