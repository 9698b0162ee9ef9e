"""
Declargs runtime values.

Value wraps exactly one raw token captured from the argument vector and
classifies it once, at construction, into a ValueKind:

- MEMBER   the token decodes (prefix + member name) to a member of the switch
           enumeration it was parsed for.
- INTEGER  the token parses as an int.
- FLOAT    the token parses as a float (Python floats are double precision,
           so there is no separate single-precision kind).
- TEXT     anything else.

Accessors are explicit and typed: asking for an interpretation the stored kind
does not support raises ValueKindError instead of coercing silently.

    >>> value = Value("3")
    >>> value.kind, int(value), float(value)
    (<ValueKind.INTEGER: 'integer'>, 3, 3.0)
    >>> str(value)
    '3'
"""
import math
from enum import Enum, StrEnum
from typing import final

from rich.text import Text

from .utils import Unset


class ValueKind(StrEnum):
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    MEMBER = "member"


class ValueKindError(TypeError):
    """
    Raised when a Value is read as a kind it does not hold.
    """

    def __init__(self, requested, value, /):
        super().__init__(f"cannot read {value.kind} value {value.token!r} as {requested}")
        self.requested = requested
        self.value = value


def _number(token, /):
    """
    Parse a token as an int, then as a finite float; Unset when it is neither.

    Tokens with underscore digit grouping, and tokens whose float is not finite
    ("inf", "nan", "1e999"), are text.
    """
    if "_" in token:
        return Unset
    try:
        return int(token)
    except ValueError:
        pass
    try:
        number = float(token)
    except ValueError:
        return Unset
    return number if math.isfinite(number) else Unset


def _member(token, enum, prefix=Unset, /):
    """
    Strip one leading identifier character and look the rest up by exact member name.

    When a prefix is given the first character must match it; Unset is returned
    on any mismatch.
    """
    if prefix is not Unset and token[:1] != prefix:
        return Unset
    return enum.__members__.get(token[1:], Unset)


@final
class Value:
    """
    Immutable, tagged wrapper around one parsed token.

    Parameters
    - token: str (positional-only), never None.
    - switch: the switch declaration the token was matched against, if any.
      When given and the token decodes to one of its members, the value is a MEMBER.
    """
    __slots__ = ("_token", "_kind", "_payload")

    def __new__(cls, token, /, switch=Unset):
        if not isinstance(token, str):
            raise TypeError("value token must be a string")

        self = super().__new__(cls)
        object.__setattr__(self, "_token", token)

        if switch is not Unset and (member := _member(token, switch.enum, switch.prefix)) is not Unset:
            kind, payload = ValueKind.MEMBER, member
        elif isinstance(number := _number(token), int):
            kind, payload = ValueKind.INTEGER, number
        elif isinstance(number, float):
            kind, payload = ValueKind.FLOAT, number
        else:
            kind, payload = ValueKind.TEXT, token

        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_payload", payload)
        return self

    @property
    def token(self):
        return self._token

    @property
    def kind(self):
        return self._kind

    def isnumber(self):
        """
        Whether the raw token parses as an integer or a floating-point number.

        This looks at the token itself, so a switch member spelled like a
        number still answers True.
        """
        return _number(self._token) is not Unset

    def number(self):
        """
        Return the numeric payload (int for INTEGER, float for FLOAT).
        """
        if self._kind not in (ValueKind.INTEGER, ValueKind.FLOAT):
            raise ValueKindError("number", self)
        return self._payload

    def member(self, enum=Unset, /):
        """
        Return the enumeration member this value names.

        - MEMBER values return their stored member; when enum is given it must
          be the member's enumeration.
        - Other values require enum: the first character is stripped and the
          remainder must be an exact member name.
        """
        if self._kind is ValueKind.MEMBER:
            if enum is not Unset and not isinstance(self._payload, enum):
                raise ValueKindError(f"{enum.__name__} member", self)
            return self._payload
        if enum is Unset:
            raise ValueKindError("member", self)
        if not (isinstance(enum, type) and issubclass(enum, Enum)):
            raise TypeError("member() argument must be an enumeration type")
        if (member := _member(self._token, enum)) is Unset:
            raise ValueKindError(f"{enum.__name__} member", self)
        return member

    def __str__(self):
        return self._token

    def __int__(self):
        if self._kind is not ValueKind.INTEGER:
            raise ValueKindError("integer", self)
        return self._payload

    def __float__(self):
        if self._kind not in (ValueKind.INTEGER, ValueKind.FLOAT):
            raise ValueKindError("float", self)
        return float(self._payload)

    def __eq__(self, other):
        if isinstance(other, Value):
            return self._token == other._token and self._kind is other._kind
        if isinstance(other, str):
            return self._token == other
        return NotImplemented

    def __hash__(self):
        return hash(self._token)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __repr__(self):
        return f"value({self._token!r}, kind={self._kind.value!r})"

    def __rich__(self):
        return Text.assemble((repr(self._token), "green"), (f" ({self._kind})", "dim"))


__all__ = (
    "Value",
    "ValueKind",
    "ValueKindError",
)
