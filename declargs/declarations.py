r"""
Declargs argument declarations and the @declare decorator.

Overview
- Declarations (one schema entry each)
  • Argument: required, positional, value-bearing (Kind.NUMBER or Kind.STRING), fixed 'order'.
  • Switch: required, prefixed enumeration member (e.g. -fast, /verbose), fixed 'order'.
  • OptionalArgument: optional 'name=value' pair carrying a Kind-typed value.
  • OptionalSwitch: optional 'name=<prefix><member>' pair.

- Decorator
  • @declare(...): attach declarations to the program's entry routine so that
    the schema can be discovered later (see declargs.schema.discover).

- Introspection & representation
  • DeclarationType metaclass provides stable __repr__/__rich_repr__ and exposes
    the fields listed in __introspectable__ via read-only properties.

Metadata (sanitized on construction)
- Shared (all declarations)
  • name: str matching r"[^\W\d]\w*(-\w+)*" (used as the result-map key).
  • descr: Unset | str, stripped; omitted or blank descriptions become None.
- Required only
  • order: int, the 1-based position. Range and uniqueness are checked by the Schema.
- Positional only
  • kind: Kind (or its value, "Number" / "String").
- Switch only
  • enum: an enum.Enum subclass with at least one member.
  • prefix: Prefix (or its character, "-" / "/").

Quick example:
    >>> from enum import Enum
    >>> from declargs import *
    >>> class Mode(Enum):
    ...     fast = 1
    ...     slow = 2
    >>> @declare(
    ...     Argument("name", Kind.STRING, 1, descr="who to greet"),
    ...     Switch("mode", Mode, Prefix.HYPHEN, 2),
    ...     OptionalArgument("retries", Kind.NUMBER),
    ... )
    ... def _main(): ...
"""
import functools
import operator
import re
from enum import Enum, StrEnum

from .utils import *


class Kind(StrEnum):
    """
    Type of value a positional declaration accepts.
    """
    NUMBER = "Number"
    STRING = "String"


class Prefix(StrEnum):
    """
    Character that must lead a switch token.
    """
    HYPHEN = "-"
    SLASH = "/"


class DeclarationType(type):
    """
    Metaclass that turns declarations into introspectable, sealed value objects.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and usage output.
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Seal concrete declaration classes (sealed=True) against subclassing.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - switch(name='mode', enum=<enum 'Mode'>, prefix=<Prefix.HYPHEN: '-'>, order=2, descr=None)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if options.get("sealed", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the fields shared by every declaration.

    - name: must be a string; trimmed; must be a valid identifier-like name
      (Unicode letters allowed, inner hyphens allowed, no leading digit).
    - descr: Unset or a string. Blank strings count as "no description" and
      become None, like an omitted description.

    Raises
    - TypeError: when 'name' or 'descr' has the wrong type.
    - ValueError: when 'name' is empty or malformed.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif not re.fullmatch(r"[^\W\d]\w*(-\w+)*", name):
        raise ValueError(f"{cls.__typename__} 'name' must be an identifier (letters, digits, '_' and inner '-')")
    metadata["name"] = name

    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str):
        descr = descr.strip() or Unset
    metadata["descr"] = coalesce(descr)


def _sanitize_required_metadata(cls, metadata, /):
    """
    Internal: validate the 'order' of required declarations.

    Only the type is enforced here; the Schema rejects orders below 1 and
    duplicated orders because those depend on the whole declaration set.
    """
    if not isinstance(order := metadata["order"], int) or isinstance(order, bool):
        raise TypeError(f"{cls.__typename__} 'order' must be an integer")


def _sanitize_positional_metadata(cls, metadata, /):
    """
    Internal: validate and normalize the 'kind' of positional declarations.
    """
    if not isinstance(kind := metadata["kind"], str):
        raise TypeError(f"{cls.__typename__} 'kind' must be a Kind")
    try:
        metadata["kind"] = Kind(kind)
    except ValueError:
        raise ValueError(f"{cls.__typename__} 'kind' must be one of {', '.join(repr(kind.value) for kind in Kind)}") from None


def _sanitize_switch_metadata(cls, metadata, /):
    """
    Internal: validate and normalize the 'enum' and 'prefix' of switch declarations.

    - enum: must be an enum.Enum subclass with at least one member.
    - prefix: Prefix or one of its characters ("-" or "/").
    """
    if not isinstance(enumeration := metadata["enum"], type) or not issubclass(enumeration, Enum):
        raise TypeError(f"{cls.__typename__} 'enum' must be an enumeration type")
    elif not enumeration.__members__:
        raise ValueError(f"{cls.__typename__} 'enum' must define at least one member")

    if not isinstance(prefix := metadata["prefix"], str):
        raise TypeError(f"{cls.__typename__} 'prefix' must be a Prefix")
    try:
        metadata["prefix"] = Prefix(prefix)
    except ValueError:
        raise ValueError(f"{cls.__typename__} 'prefix' must be one of {', '.join(repr(prefix.value) for prefix in Prefix)}") from None


class Declaration(metaclass=DeclarationType):
    """
    Common base of the four declaration variants.

    Class-level flags
    - required: the declaration takes a fixed position (has an 'order').
    - switch: the declaration accepts a prefixed enumeration member.
    """
    __introspectable__ = ("name", "descr")

    required = False
    switch = False

    def __new__(cls, *args, **kwargs):
        if cls is Declaration:
            raise TypeError("type 'Declaration' cannot be instantiated directly")
        return super().__new__(cls)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in type(self).__introspectable__)

    def __hash__(self):
        return hash((type(self), *(getattr(self, name) for name in type(self).__introspectable__)))

    @classmethod
    def _build(cls, metadata, /):
        self = super().__new__(cls)
        # Mirror sanitized metadata into private fields; read-only properties expose them.
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self


class Argument(Declaration, sealed=True):
    """
    Required positional declaration with a typed value.

    The token at position 'order' must parse as a number for Kind.NUMBER and
    must not parse as a number for Kind.STRING.
    """
    __introspectable__ = ("name", "kind", "order", "descr")

    required = True

    def __new__(cls, name, kind, order, descr=Unset):
        metadata = {
            "name": name,
            "kind": kind,
            "order": order,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_required_metadata(cls, metadata)
        _sanitize_positional_metadata(cls, metadata)
        return cls._build(metadata)


class Switch(Declaration, sealed=True):
    """
    Required switch declaration: '<prefix><member>' at position 'order'.
    """
    __introspectable__ = ("name", "enum", "prefix", "order", "descr")

    required = True
    switch = True

    def __new__(cls, name, enum, prefix, order, descr=Unset):
        metadata = {
            "name": name,
            "enum": enum,
            "prefix": prefix,
            "order": order,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_required_metadata(cls, metadata)
        _sanitize_switch_metadata(cls, metadata)
        return cls._build(metadata)


class OptionalArgument(Declaration, sealed=True):
    """
    Optional 'name=value' declaration with a typed value; matched by name.
    """
    __introspectable__ = ("name", "kind", "descr")

    def __new__(cls, name, kind, descr=Unset):
        metadata = {
            "name": name,
            "kind": kind,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_positional_metadata(cls, metadata)
        return cls._build(metadata)


class OptionalSwitch(Declaration, sealed=True):
    """
    Optional 'name=<prefix><member>' declaration; matched by name.
    """
    __introspectable__ = ("name", "enum", "prefix", "descr")

    switch = True

    def __new__(cls, name, enum, prefix, descr=Unset):
        metadata = {
            "name": name,
            "enum": enum,
            "prefix": prefix,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_switch_metadata(cls, metadata)
        return cls._build(metadata)


def declare(*declarations):
    """
    Decorator attaching declarations to the program's entry routine.

    Usage
        @declare(
            Argument("file", Kind.STRING, 1),
            OptionalArgument("retries", Kind.NUMBER),
        )
        def _main(): ...

    Behavior
    - Validates that every argument is a declaration and that it decorates a callable.
    - Stores the declarations on the callable as __declarations__, in the order
      they are listed. Stacked @declare decorators keep top-to-bottom order.
    - Returns the callable unchanged otherwise.
    """
    if not declarations:
        raise TypeError("@declare() requires at least one declaration")
    for declaration in declarations:
        if not isinstance(declaration, Declaration):
            raise TypeError("@declare() arguments must be declarations")

    @rename("declare")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@declare() must be applied to a callable")
        # Decorators apply bottom-up, so earlier (upper) declarations go first.
        callback.__declarations__ = declarations + getattr(callback, "__declarations__", ())
        return callback

    return wrapper


__all__ = (
    # Enumerations
    "Kind",
    "Prefix",

    # Classes (declarations)
    "Declaration",
    "Argument",
    "Switch",
    "OptionalArgument",
    "OptionalSwitch",

    # Decorators
    "declare",
)

del DeclarationType
