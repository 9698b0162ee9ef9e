"""
Declargs faults (configuration errors and parse diagnostics) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing parse
  diagnostics. Codes are grouped by domain to keep copy consistent and make
  logs/searches predictable.
- ParseError: base type for user input errors. Carries message + options and
  knows how to render itself as a single, friendly, actionable line.
- SchemaError: base type for configuration errors (defects in the host program).
  These are always raised: no end-user input can fix them.
- trigger(): central entry point to surface a parse diagnostic (respecting
  shell/fancy/colorful/console).

UX goals
- Position-first messages: required-phase messages include the ordinal position
  so users can learn by trying (“at second position”, etc.).
- One line per diagnostic: the offending token and the expected constraint.

Integration
- The parser builds a fault and calls trigger(fault, **options); in shell mode
  (the default) the fault is printed and the parser returns None, otherwise
  the fault is raised.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console()


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - counts (2110x)
      • INSUFFICIENT_ARGUMENTS, TOO_MANY_ARGUMENTS
    - values (2111x)
      • EXPECTED_TEXT, EXPECTED_NUMBER, SWITCH_IDENTIFIER, UNDEFINED_MEMBER
    - optional phase (2112x)
      • MISSING_SEPARATOR, DUPLICATED_OPTIONAL, REPEATED_SEPARATOR

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- count errors (2110x) ---
    INSUFFICIENT_ARGUMENTS = 21101
    TOO_MANY_ARGUMENTS     = 21102

    # --- value errors (2111x) ---
    EXPECTED_TEXT          = 21111
    EXPECTED_NUMBER        = 21112
    SWITCH_IDENTIFIER      = 21113
    UNDEFINED_MEMBER       = 21114

    # --- optional phase errors (2112x) ---
    MISSING_SEPARATOR      = 21121
    DUPLICATED_OPTIONAL    = 21122
    REPEATED_SEPARATOR     = 21123

    def normalize(self):
        """
        Label shown in diagnostics: __codes__[self] from __main__ when defined, else the number.
        """
        labels = getattr(sys.modules.get("__main__"), "__codes__", None) or {}
        return str(labels.get(self, self.value))


class ParseError(Exception):
    """
    User input did not match the schema.

    message is the one-line diagnostic; options carry what the renderer and
    callers need (title, code, hint, token, index, declaration, and the
    prog/colorful/fancy/shell/console runtime options).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return coalesce(self.message, "")

    def __rich__(self):
        palette = defaultdict(str, {
            "prog": "bold #F5F5F5",
            "code": "bold #36C5F0",
            "title": "bold #EF4444",
            "message": "#D4D4D8",
            "arrow": "dim #22C55E",
            "hint": "italic #22C55E",
        } | getattr(sys.modules.get("__main__"), "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def fragment(content, style):
            return Text(str(content or ""), palette[style] if colorful else "")

        code = self.options.get("code")
        header = Text.assemble(
            "[ ",
            fragment(self.options.get("prog"), "prog"),
            " — ",
            fragment(code.normalize() if code is not None else "", "code"),
            " | ",
            fragment(self.options.get("title", "").title(), "title"),
            " ]",
        )
        message = fragment(self.message, "message")

        if self.options.get("fancy", False):
            hint = Text.assemble(fragment(" → ", "arrow"), fragment(self.options.get("hint"), "hint"))
            return Panel(Group(message, hint), title=header, title_align="left")

        return Text.assemble(header, " ", message)

    def __trigger__(self):
        if not self.options.get("shell", True):
            raise self
        self.options.get("console", console).print(self)

    def __replace__(self, **overrides):
        return type(self)(self.message, **self.options | overrides)


class InsufficientArgumentsError(ParseError): ...
class TooManyArgumentsError(ParseError): ...
class ExpectedTextError(ParseError): ...
class ExpectedNumberError(ParseError): ...
class SwitchIdentifierError(ParseError): ...
class UndefinedMemberError(ParseError): ...
class MissingSeparatorError(ParseError): ...
class DuplicatedOptionalError(ParseError): ...
class RepeatedSeparatorError(ParseError): ...


class SchemaError(Exception):
    """
    configuration error: the host program declared an unusable schema.

    these are never rendered-and-swallowed; they abort the host's configuration.
    """


class NoEntryRoutineError(SchemaError): ...
class NoMarkedRoutineError(SchemaError): ...
class MultipleMarkedRoutinesError(SchemaError): ...
class OrderError(SchemaError): ...
class DuplicateOrderError(SchemaError): ...
class DuplicateNameError(SchemaError): ...


def trigger(fault, /, **options):
    """
    Merge options into a copy of fault and surface it.

    The copy is printed on its console in shell mode and raised otherwise;
    fault itself is left untouched. Typical options are the runtime ones
    (prog, colorful, fancy, shell, console) plus context such as index.
    """
    if not callable(getattr(fault, "__trigger__", None)) or not callable(getattr(fault, "__replace__", None)):
        raise TypeError("trigger() argument must define __trigger__ and __replace__")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "ParseError",
    "InsufficientArgumentsError",
    "TooManyArgumentsError",
    "ExpectedTextError",
    "ExpectedNumberError",
    "SwitchIdentifierError",
    "UndefinedMemberError",
    "MissingSeparatorError",
    "DuplicatedOptionalError",
    "RepeatedSeparatorError",
    "SchemaError",
    "NoEntryRoutineError",
    "NoMarkedRoutineError",
    "MultipleMarkedRoutinesError",
    "OrderError",
    "DuplicateOrderError",
    "DuplicateNameError",
    "FaultCode",
    "trigger",
)
