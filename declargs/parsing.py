"""
Declargs argument parser and entry point.

What this module provides
- parse(schema, argv): match an argument vector against a validated Schema.
- getargs(source, argv): the one-call entry point for host programs:
  resolve the schema, read sys.argv, print usage when nothing was given,
  otherwise parse.

Input shape
- A fixed-size required prefix: one token per required declaration, in
  ascending 'order'.
- An unordered optional suffix of 'name=value' tokens, at most one per
  optional declaration.

Outcome
- Success: a read-only mapping (MappingProxyType) from declaration name to Value.
- Failure: one printed diagnostic line, and None. With shell=False the
  diagnostic is raised as a ParseError subclass instead, which is handy for
  embedding and tests.

Quick start
    from enum import Enum
    from declargs import *

    class Mode(Enum):
        fast = 1
        slow = 2

    @declare(
        Argument("name", Kind.STRING, 1, descr="who to greet"),
        Switch("mode", Mode, Prefix.HYPHEN, 2),
        OptionalArgument("retries", Kind.NUMBER),
    )
    def _main():
        ...

    if __name__ == "__main__":
        if (arguments := getargs()) is not None:
            print(arguments["name"], arguments["mode"].member())
"""
import shlex
import sys
from types import MappingProxyType

from . import faults
from .declarations import Kind
from .faults import *
from .reporter import program, usage
from .schema import Schema, resolve
from .utils import *
from .values import Value


def _check(declaration, token, /, where):
    """
    Return the fault describing why token does not satisfy declaration, or None.

    rules
    - switch: the first character must be the declared prefix, and the remainder
      must be the exact name of a member of the declared enumeration.
    - Kind.STRING: the token must not parse as a number.
    - Kind.NUMBER: the token must parse as a number (integer or floating-point).
    """
    if declaration.switch:
        prefix = str(declaration.prefix)
        example = prefix + next(iter(declaration.enum.__members__))

        if token[:1] != prefix:
            return SwitchIdentifierError(
                "invalid switch identifier, got %r, expected %r %s" % (token[:1], prefix, where),
                title="wrong switch identifier",
                code=FaultCode.SWITCH_IDENTIFIER,
                hint="start the value with %r (for example: %s)" % (prefix, example),
                token=token,
                declaration=declaration,
            )
        if token[1:] not in declaration.enum.__members__:
            return UndefinedMemberError(
                "expected switch value, got %r %s" % (token, where),
                title="undefined switch member",
                code=FaultCode.UNDEFINED_MEMBER,
                hint="use one of %s" % ", ".join(prefix + member for member in declaration.enum.__members__),
                token=token,
                declaration=declaration,
            )
        return None

    number = Value(token).isnumber()

    if declaration.kind is Kind.STRING and number:
        return ExpectedTextError(
            "expected text value, got %r %s" % (token, where),
            title="expected text value",
            code=FaultCode.EXPECTED_TEXT,
            hint="%r takes text, not a number" % declaration.name,
            token=token,
            declaration=declaration,
        )
    if declaration.kind is Kind.NUMBER and not number:
        return ExpectedNumberError(
            "expected numerical value, got %r %s" % (token, where),
            title="expected numerical value",
            code=FaultCode.EXPECTED_NUMBER,
            hint="%r takes an integer or a decimal number" % declaration.name,
            token=token,
            declaration=declaration,
        )
    return None


def _value(declaration, token, /):
    return Value(token, declaration) if declaration.switch else Value(token)


def parse(schema, argv, /, *, prog=Unset, colorful=True, fancy=False, shell=True, console=Unset):
    """
    match argv against schema and return the name → Value mapping, or None.

    parameters
    - schema: Schema
      the validated declaration set.
    - argv: Iterable[str] | str
      the argument vector without the program name. a single string is split
      with shell-like rules (shlex) first.
    - prog, colorful, fancy, console
      rendering options forwarded to the diagnostic.
    - shell: bool
      when True (default) diagnostics are printed and None is returned;
      when False they are raised.

    phases
    1. count checks: fewer tokens than required declarations → insufficient
       arguments; more than required + optional (or any extra without optional
       declarations) → too many arguments.
    2. required phase: the first len(required) tokens, one per declaration in
       ascending order, each validated by kind or switch rules.
    3. optional phase (only when tokens remain): every remaining token must
       contain exactly one '=', which splits it into name and raw value. known
       names are validated like the required phase, unknown names are dropped,
       and a name given twice is rejected.

    returns
    - MappingProxyType[str, Value] on success. when optional declarations exist
      and the result ends up empty, None.
    """
    if not isinstance(schema, Schema):
        raise TypeError("parse() first argument must be a schema")
    if isinstance(argv, str):
        argv = shlex.split(argv)
    argv = tuple(argv)
    if not all(isinstance(token, str) for token in argv):
        raise TypeError("parse() second argument must contain only strings")

    options = {
        "prog": program(prog),
        "colorful": colorful,
        "fancy": fancy,
        "shell": shell,
        "console": coalesce(console, faults.console),
    }

    def fail(fault):
        # Raises when shell is False.
        trigger(fault, **options)
        return None

    required = schema.required
    optional = schema.optional

    if len(argv) < len(required):
        return fail(InsufficientArgumentsError(
            "insufficient arguments provided, expected %d required, got %d" % (len(required), len(argv)),
            title="insufficient arguments",
            code=FaultCode.INSUFFICIENT_ARGUMENTS,
            hint="run '%s' without arguments to see the usage" % options["prog"],
        ))
    if len(argv) > len(required) + len(optional):
        return fail(TooManyArgumentsError(
            "too many arguments provided, expected at most %d, got %d" % (len(required) + len(optional), len(argv)),
            title="too many arguments",
            code=FaultCode.TOO_MANY_ARGUMENTS,
            hint="run '%s' without arguments to see the usage" % options["prog"],
        ))

    arguments = {}

    for index, (declaration, token) in enumerate(zip(required, argv), start=1):
        if fault := _check(declaration, token, "for %r at %s position" % (declaration.name, ordinal(index))):
            return fail(fault.__replace__(index=index))
        arguments[declaration.name] = _value(declaration, token)

    if not optional or len(argv) == len(required):
        return MappingProxyType(arguments)

    tokens = argv[len(required):]

    for index, token in enumerate(tokens, start=len(required) + 1):
        if "=" not in token:
            return fail(MissingSeparatorError(
                "found optional argument without splitting indicator at %s position: %r" % (ordinal(index), token),
                title="missing splitting indicator",
                code=FaultCode.MISSING_SEPARATOR,
                hint="write optional arguments as name=value (for example: %s=<value>)" % optional[0].name,
                token=token,
                index=index,
            ))
        if token.count("=") > 1:
            return fail(RepeatedSeparatorError(
                "found optional argument with more than one splitting indicator at %s position: %r" % (ordinal(index), token),
                title="repeated splitting indicator",
                code=FaultCode.REPEATED_SEPARATOR,
                hint="write optional arguments as name=value with a single '='",
                token=token,
                index=index,
            ))

    declarations = {declaration.name: declaration for declaration in optional}

    for index, token in enumerate(tokens, start=len(required) + 1):
        name, _, raw = token.partition("=")

        # Unknown optional names are dropped, not reported.
        if (declaration := declarations.get(name)) is None:
            continue

        if name in arguments:
            return fail(DuplicatedOptionalError(
                "optional argument %r at %s position was already given" % (name, ordinal(index)),
                title="duplicated optional argument",
                code=FaultCode.DUPLICATED_OPTIONAL,
                hint="give %r only once" % name,
                token=token,
                index=index,
                declaration=declaration,
            ))
        if fault := _check(declaration, raw, "for optional %r" % name):
            return fail(fault.__replace__(index=index))
        arguments[name] = _value(declaration, raw)

    return MappingProxyType(arguments) if arguments else None


def getargs(source=Unset, argv=Unset, /, *, prog=Unset, colorful=True, fancy=False, shell=True, console=Unset):
    """
    resolve the schema, read the argument vector, and parse it.

    parameters
    - source: Schema | declared routine | ModuleType | str | Unset
      where the declarations come from; Unset discovers the single declared
      routine of __main__. resolved afresh on every call.
    - argv: Iterable[str] | str | Unset
      the argument vector without the program name; Unset reads sys.argv[1:].
    - prog, colorful, fancy, shell, console
      see parse() and usage().

    returns
    - None after printing usage when argv is empty.
    - otherwise whatever parse() returns.

    raises
    - SchemaError subclasses for unusable declarations (always, regardless of shell).
    """
    schema = resolve(source)

    if argv is Unset:
        argv = sys.argv[1:]
    if isinstance(argv, str):
        argv = shlex.split(argv)
    if not (argv := tuple(argv)):
        return usage(schema, prog=prog, colorful=colorful, fancy=fancy, console=console)

    return parse(schema, argv, prog=prog, colorful=colorful, fancy=fancy, shell=shell, console=console)


__all__ = (
    "parse",
    "getargs",
)
