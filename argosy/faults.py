"""
Argosy faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every declaration issue
  the container core can report. Codes are grouped by domain so logs and
  searches stay predictable.
- ContainerException / ContainerWarning: base types that carry message + options
  and know how to render themselves in a friendly, lowercased, actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Nature of the faults
- Every fault here is a programmer mistake in a static option declaration
  (sealing twice, adding to a frozen group, two options sharing a name).
  They surface at construction time; there is nothing to retry.

Integration
- Containers build faults and route them through Container.trigger(fault), which
  merges the container's shell/fancy/colorful flags and calls trigger().
- In non-shell mode, errors are raised and warnings go through warnings.warn;
  in shell mode, both are rendered via rich on stderr.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the container core (stable identifiers).

    grouping (by high-level domain)
    - lifecycle (2110x)
      • ALREADY_SEALED, CONTAINER_SEALED, ITEM_NOT_SEALED
    - naming (2111x)
      • NAME_CLASH
    - warnings (22xxx)
      • NAME_OVERLAP

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- lifecycle errors (21xxx) ---
    ALREADY_SEALED              = 21101
    CONTAINER_SEALED            = 21102
    ITEM_NOT_SEALED             = 21103

    # --- naming errors (21xxx) ---
    NAME_CLASH                  = 21111

    # --- warnings (22xxx) ---
    NAME_OVERLAP                = 22111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, title_style, message_style):
    """
    shared rich renderer for errors and warnings.

    options consulted (all optional)
    - colorful: style fragments using the palette (overridable via __main__.__styles__).
    - fancy: wrap the body in a Panel titled by the header.
    - ratio: shrink the panel width by this factor (used for nested renders).
    - title, code, hint: header title, fault code and trailing hint.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = text(getattr(main, "__prog__", "argosy"), styler("prog-name"))

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(options["code"].normalize() if "code" in options else "?", styler("code")),
        " | ",
        text(options.get("title", type(fault).__name__).title(), styler(title_style)),
        " ]"
    )
    message = text(fault.message, styler(message_style))
    hint = Text.assemble(text(" → ", styler("hint-arrow")), text(options.get("hint"), styler("hint")))

    if fancy:
        try:
            width = int((console.width - 4) * options["ratio"])
        except KeyError:
            width = None
        return Panel(Group(message, hint), title=header, title_align="left", width=width)

    return Group(header, message, hint)


class ContainerException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message or ""

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error-title", "error-message")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class AlreadySealedError(ContainerException): ...
class ContainerSealedError(ContainerException): ...
class ItemNotSealedError(ContainerException): ...
class NameClashError(ContainerException): ...


class ContainerWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message or ""

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning-title", "warning-message")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class NameOverlapWarning(ContainerWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, errors are raised
      and warnings are emitted through the warnings module.

    typical options
    - shell, fancy, colorful, title, code, hint, docs, and any context the reporter
      may want to show (e.g., container/item/items/name).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ContainerException",
    "AlreadySealedError",
    "ContainerSealedError",
    "ItemNotSealedError",
    "NameClashError",
    "ContainerWarning",
    "NameOverlapWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
