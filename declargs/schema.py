"""
Declargs schema: validation and discovery of declaration sets.

What this module provides
- Schema: a first-class, validated set of declarations.
  • required: declarations with an 'order', sorted ascending.
  • optional: 'name=value' declarations, in the order the host listed them.
  • Validation happens once, at construction, and raises SchemaError subclasses:
      – OrderError: a required order below 1.
      – DuplicateOrderError: two required declarations share an order.
      – DuplicateNameError: two declarations share a name (result keys must be unique).
    Contiguity of orders (1, 2, 3, ...) is not required; only ascending rank matters.

- discover(source): locate the single private entry routine (name starting
  with "_") carrying @declare(...) declarations inside a module
  (the running __main__ by default).

- resolve(source): turn a Schema, a declared routine, a module, or nothing
  (→ __main__) into a freshly validated Schema.

Configuration errors are defects of the host program, never of its user: they
always raise, and are never printed-and-swallowed like parse diagnostics.
"""
import importlib
import inspect
import sys
from collections import Counter
from types import ModuleType

from .declarations import Declaration
from .faults import *
from .utils import *


class Schema:
    """
    Validated declaration set for one program.

    Parameters
    - *declarations: Declaration
      The host's declarations, in listing order.

    Properties
    - declarations: every declaration, in listing order.
    - required: required declarations sorted by 'order'.
    - optional: optional declarations, in listing order.
    - switches: distinct enumeration types referenced by any switch, first-seen order.

    Example
        >>> schema = Schema(
        ...     Argument("name", Kind.STRING, 1),
        ...     Switch("mode", Mode, Prefix.HYPHEN, 2),
        ... )
        >>> dict(schema.parse(["Alice", "-fast"]))
        {'name': value('Alice', kind='text'), 'mode': value('-fast', kind='member')}
    """

    declarations = mirror("declarations")
    required = mirror("required")
    optional = mirror("optional")

    def __init__(self, *declarations):
        for declaration in declarations:
            if not isinstance(declaration, Declaration):
                raise TypeError("schema arguments must be declarations")

        required = [declaration for declaration in declarations if declaration.required]
        optional = [declaration for declaration in declarations if not declaration.required]

        if any(declaration.order < 1 for declaration in required):
            raise OrderError("order of required arguments must begin at 1")

        required.sort(key=lambda declaration: declaration.order)

        for order, count in Counter(declaration.order for declaration in required).items():
            if count > 1:
                raise DuplicateOrderError("duplicate required order %d for %s" % (
                    order,
                    ", ".join(repr(declaration.name) for declaration in required if declaration.order == order)
                ))

        for name, count in Counter(declaration.name for declaration in declarations).items():
            if count > 1:
                raise DuplicateNameError("duplicate argument name %r" % name)

        self._declarations = declarations
        self._required = tuple(required)
        self._optional = tuple(optional)

    @property
    def switches(self):
        return tuple(dict.fromkeys(declaration.enum for declaration in self._declarations if declaration.switch))

    def parse(self, argv, /, **options):
        """
        Parse argv against this schema (see declargs.parsing.parse).
        """
        from .parsing import parse
        return parse(self, argv, **options)

    def usage(self, **options):
        """
        Print usage text for this schema (see declargs.reporter.usage).
        """
        from .reporter import usage
        return usage(self, **options)

    def __getitem__(self, name):
        for declaration in self._declarations:
            if declaration.name == name:
                return declaration
        raise KeyError(name)

    def __contains__(self, name):
        return any(declaration.name == name for declaration in self._declarations)

    def __iter__(self):
        return iter(self._declarations)

    def __len__(self):
        return len(self._declarations)

    def __eq__(self, other):
        if not isinstance(other, Schema):
            return NotImplemented
        return self._declarations == other._declarations

    def __hash__(self):
        return hash(self._declarations)

    def __repr__(self):
        return "schema(%s)" % ", ".join(map(repr, self._declarations))

    def __rich_repr__(self):
        yield "required", self._required
        yield "optional", self._optional


def _module(source, /):
    if source is Unset:
        return sys.modules["__main__"]
    if isinstance(source, ModuleType):
        return source
    if isinstance(source, str):
        try:
            return importlib.import_module(source)
        except ImportError:
            raise TypeError(f"unable to import module {source!r}") from None
    raise TypeError("discover() argument must be a module or a module name")


def _candidates(module, /):
    """
    Yield the private routines defined in module: functions bound to a name
    starting with '_', plus static and class methods with such names in the
    classes it defines.
    """
    seen = set()
    for name, object in vars(module).items():
        # The same object may be bound under several names.
        if id(object) in seen or getattr(object, "__module__", None) != module.__name__:
            continue
        if inspect.isfunction(object):
            if _private(name):
                seen.add(id(object))
                yield object
        elif inspect.isclass(object):
            seen.add(id(object))
            for member, routine in vars(object).items():
                if isinstance(routine, staticmethod | classmethod) and _private(member):
                    yield routine


def _private(name, /):
    return name.startswith("_") and not (name.startswith("__") and name.endswith("__"))


def _declarations(routine, /):
    if isinstance(routine, staticmethod | classmethod):
        return getattr(routine, "__declarations__", ()) or getattr(routine.__func__, "__declarations__", ())
    return getattr(routine, "__declarations__", ())


def discover(source=Unset, /):
    """
    Find the single entry routine carrying declarations and return them.

    parameters
    - source: ModuleType | str | Unset
      the module to search (or its importable name); Unset means __main__.

    returns
    - tuple[Declaration, ...] in the order the host listed them.

    raises
    - NoEntryRoutineError: the module defines no private routine at all.
    - NoMarkedRoutineError: no routine carries @declare(...) declarations.
    - MultipleMarkedRoutinesError: more than one routine carries declarations.
    """
    module = _module(source)

    if not (candidates := list(_candidates(module))):
        raise NoEntryRoutineError(f"no possible entry routines found in module {module.__name__!r}")

    marked = [candidate for candidate in candidates if _declarations(candidate)]
    if not marked:
        raise NoMarkedRoutineError(f"no marked entry routines found in module {module.__name__!r}")
    if len(marked) > 1:
        raise MultipleMarkedRoutinesError("multiple marked entry routines found in module %r: %s" % (
            module.__name__,
            ", ".join(repr(getattr(routine, "__qualname__", routine)) for routine in marked)
        ))

    return tuple(_declarations(marked[0]))


def resolve(source=Unset, /):
    """
    Build a freshly validated Schema from whatever the host hands over.

    - Schema: returned as-is (already validated, immutable).
    - callable carrying @declare(...) declarations: its declarations.
    - ModuleType | str | Unset: discover(source).
    """
    if isinstance(source, Schema):
        return source
    if callable(source) and not isinstance(source, type):
        if not (declarations := _declarations(source)):
            raise NoMarkedRoutineError(f"routine {getattr(source, '__qualname__', source)!r} carries no declarations")
        return Schema(*declarations)
    return Schema(*discover(source))


__all__ = (
    "Schema",
    "discover",
    "resolve",
)
