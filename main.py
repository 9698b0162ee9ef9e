from enum import Enum

from rich.pretty import pprint

from declargs import *


class Color(Enum):
    black = 0
    blue = 1
    green = 2
    cyan = 3
    red = 4
    magenta = 5
    yellow = 6
    gray = 7
    white = 8


@declare(
    Switch("arg1", Prefix, Prefix.HYPHEN, 1, "Description of first argument"),
    Switch("arg2", Prefix, Prefix.HYPHEN, 2, "Description of second argument"),
    Switch("arg3", Color, Prefix.HYPHEN, 3, "Description of third argument"),
    Switch("arg4", Color, Prefix.HYPHEN, 4, "Description of fourth argument"),
    Argument("arg5", Kind.STRING, 5, "Description of fifth argument"),
    OptionalSwitch("arg6", Prefix, Prefix.HYPHEN, "Description of sixth argument"),
    OptionalSwitch("arg7", Prefix, Prefix.HYPHEN, "Description of seventh argument"),
    OptionalSwitch("arg8", Color, Prefix.HYPHEN, "Description of eighth argument"),
    OptionalSwitch("arg9", Color, Prefix.HYPHEN, "Description of ninth argument"),
    OptionalArgument("arg10", Kind.NUMBER, "Description of tenth argument"),
)
def _main():
    pass


if __name__ == '__main__':
    if (arguments := getargs()) is not None:
        pprint(dict(arguments))
