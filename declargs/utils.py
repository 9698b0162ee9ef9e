"""
Declargs helpers shared by the declaration, schema, value and parsing layers.

- Unset: the "not provided" sentinel, distinct from None.
- coalesce(object, default): Unset → default; everything else passes through.
- rename(name): decorator giving generated functions a stable name for
  tracebacks and reprs.
- mirror(name): read-only property over the private "_<name>" field.
- ordinal(number): position wording used in diagnostics.

    >>> coalesce(Unset, "-")
    '-'
    >>> coalesce(None, "-") is None
    True
    >>> ordinal(3), ordinal(22)
    ('third', '22nd')
"""
import functools
from collections.abc import Mapping, Sequence, Set
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel.

    UnsetType() always returns the same instance, which is falsey, prints as
    "Unset" and can take part in isinstance unions (str | Unset).
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __or__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    __ror__ = __or__

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return default when object is Unset, otherwise object (None, 0 and "" included).
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator setting __name__ and __qualname__ of the decorated function to name.
    """
    if not isinstance(name, str):
        raise TypeError("@rename() argument must be a string")

    def wrapper(function):
        function.__name__ = function.__qualname__ = name
        return function

    return wrapper


def _detach(object):
    # Lists, dicts and sets are copied; tuples and strings are already safe to share.
    if isinstance(object, tuple | str):
        return object
    if isinstance(object, Mapping):
        return dict(object)
    if isinstance(object, Set):
        return set(object)
    if isinstance(object, Sequence):
        return list(object)
    return object


def mirror(name, /):
    """
    Read-only property returning self._<name> (a copy when it is a mutable container).
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _detach(getattr(self, "_" + name))

    return property(getter)


_WORDS = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")


def ordinal(number, /):
    """
    Spell 1..10 out ("first"…"tenth"); use numeric ordinals ("11th", "21st", "112th") above.
    """
    if 1 <= number <= len(_WORDS):
        return _WORDS[number - 1]
    if 10 < number % 100 < 20:
        return f"{number}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "ordinal",
    "UnsetType",
    "Unset",
)
