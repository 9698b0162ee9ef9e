"""
Declargs usage reporter.

Rendered when the program is started without any argument. The text is derived
from the same declarations the parser validates against:

    demo.py
        (name, Type:String) (mode, Switch:Mode)


    Arguments:

    --Required
    name Type:String - who to greet
    mode Switch:Mode

    --Optional
    [retries Type:Number] - attempts before giving up

    --Switches
    Mode -- fast, slow

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- Define __prog__ in __main__ (or pass prog=...) to override the program name.
- colorful=False strips styles; fancy=True wraps the text in a panel.
"""
import os.path
import sys
from collections import defaultdict

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from . import faults
from .utils import *

# Member lists break before a member when it and its predecessor exceed this width.
_MEMBERS_WIDTH = 36
_MEMBERS_PER_LINE = 4


def program(prog=Unset, /):
    """
    Resolve the program name: explicit prog, then __prog__ in __main__, then argv[0]'s file name.
    """
    if prog is not Unset:
        return prog
    return getattr(sys.modules.get("__main__"), "__prog__", None) or os.path.basename(sys.argv[0] if sys.argv else "")


def label(declaration, /):
    """
    Return the "Type:<kind>" or "Switch:<enum name>" label of a declaration.
    """
    if declaration.switch:
        return "Switch:" + declaration.enum.__name__
    return "Type:" + declaration.kind


def usage(schema, /, *, prog=Unset, colorful=True, fancy=False, console=Unset):
    """
    Print usage text for schema and return None.

    sections, in order
    - program name
    - inline signature of required declarations, two per line
    - "--Required": name, label and description of each required declaration
    - "--Optional": same layout, bracketed (only when optional declarations exist)
    - "--Switches": every distinct enumeration with its member names (only when switches exist)
    """
    console = coalesce(console, faults.console)

    styles = defaultdict(str, {
        # === Head ===
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "signature": "#A3A3A3",  # Neutral gray punctuation
        "signature-name": "#737373",
        "signature-label": "#737373",

        # === Sections ===
        "arguments-label": "bold #FFFFFF",
        "required-section": "bold #36C5F0",  # SKY-BLUE
        "optional-section": "bold #FFD600",  # AMBER
        "switches-section": "bold #EF4444",  # RED

        # === Arguments ===
        "argument-name": "bold #22C55E",  # GREEN
        "argument-label": "#737373",
        "required-type": "#00E6FF",
        "optional-type": "#FFB400",
        "bracket": "#A3A3A3",
        "argument-description": "#9CA3AF",

        # === Switches ===
        "enum-name": "bold #EF4444",
        "member": "#00E6FF",
    } | getattr(sys.modules.get("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        return Text(str(fragment), styler(style))

    def line(declaration, *, bracketed):
        kind, _, name = label(declaration).partition(":")
        section = Text()
        if bracketed:
            section.append(text("[", "bracket"))
        section.append(text(declaration.name, "argument-name"))
        section.append(text(f" {kind}:", "argument-label"))
        section.append(text(name, "optional-type" if bracketed else "required-type"))
        if bracketed:
            section.append(text("]", "bracket"))
        if declaration.descr:
            section.append(text(" - ", "signature"))
            section.append(text(declaration.descr, "argument-description"))
        return section

    renders = Text()
    renders.append(text(program(prog), "program-name"))

    # Inline signature, two fragments per line
    for index, declaration in enumerate(schema.required):
        kind, _, name = label(declaration).partition(":")
        renders.append("\n    (" if index % 2 == 0 else " (", styler("signature"))
        renders.append(text(declaration.name, "signature-name"))
        renders.append(text(f", {kind}:", "signature"))
        renders.append(text(name, "signature-label"))
        renders.append(")", styler("signature"))

    renders.append("\n\n\n")
    renders.append(text("Arguments:", "arguments-label"))
    renders.append("\n\n")
    renders.append(text("--Required", "required-section"))

    for declaration in schema.required:
        renders.append("\n").append(line(declaration, bracketed=False))

    if schema.optional:
        renders.append("\n\n")
        renders.append(text("--Optional", "optional-section"))
        for declaration in schema.optional:
            renders.append("\n").append(line(declaration, bracketed=True))

    if switches := schema.switches:
        renders.append("\n\n")
        renders.append(text("--Switches", "switches-section"))
        for enumeration in switches:
            head = text(enumeration.__name__, "enum-name").append(" --", styler("signature"))
            indent = len(head)
            renders.append("\n").append(head)
            members = list(enumeration.__members__)
            for index, member in enumerate(members):
                if index > 0:
                    renders.append(",", styler("signature"))
                    if len(members[index - 1]) + len(member) > _MEMBERS_WIDTH or index % _MEMBERS_PER_LINE == 0:
                        renders.append("\n" + " " * indent)
                renders.append(" ").append(text(member, "member"))

    renderable = renders
    if fancy:
        renderable = Panel(
            Group(renders),
            title=Text.assemble("[", " ", f"{program(prog)} USAGE".upper(), " ", "]", style=styler("program-name")),
            title_align="left",
        )

    console.print(renderable)


__all__ = (
    "usage",
    "label",
    "program",
)
