r"""
Argosy option-like leaves.

Overview
- Flag: presence-only switch, e.g. -v / --verbose.
- Option: value-bearing switch, e.g. -o / --output=FILE, which also accepts its
  argument glued to the short name ("sticky" form, -oFILE).

Names
- Names are stored bare, without dash prefixes: short_name="v", long_name="verbose".
- Each name must match r"[^\W_](-?[^\W_]+)*": unicode letters/digits with single
  inner hyphens (e.g. "v", "dry-run", "größe"). Underscores are rejected.
- At least one of short_name/long_name must be given. A short name may be longer
  than one character ("bg"); sticky matching always prefers the longest one.

Capability hooks (the only entry points the container core calls)
- __option__()                       → self; marks the leaf as option-like.
- __match__(short_name=, long_name=) → the matching name, or None.
- __abbreviation__(partial_name)     → 0 when long_name starts with partial_name,
                                       math.inf otherwise.
- __sticky__(namearg)                → len(short_name) when namearg starts with it
                                       (value-bearing options only), 0 otherwise.

Both classes are Traversable so a leaf reachable twice is enumerated once per pass.
"""
import math
import re

from rich.text import Text

from .items import ItemType, Traversable
from .utils import *


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the presentation metadata shared by all leaves.

    - descr: optional short description. If omitted (Unset), it becomes None.
      If provided, it must be a non-empty string (or rich Text) after trimming.

    Raises
    - TypeError: if 'descr' is not a string, Text or Unset.
    - ValueError: if 'descr' is a string but empty after trimming.
    """
    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


def _sanitize_named_metadata(cls, metadata, /):
    """
    Internal: validate and normalize short_name/long_name.

    Raises
    - TypeError: when neither name is given or a name is not a string.
    - ValueError: when a name is empty after trimming or fails the name pattern.
    """
    if metadata["short_name"] is Unset and metadata["long_name"] is Unset:
        raise TypeError(f"{cls.__typename__} must specify a short or a long name")

    for field in ("short_name", "long_name"):
        if (name := metadata[field]) is Unset:
            metadata[field] = None
            continue
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} '{field}' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} '{field}' cannot be empty")
        elif not re.fullmatch(r"[^\W_](-?[^\W_]+)*", name):
            raise ValueError(f"{cls.__typename__} '{field}' must be a bare option name without dashes (e.g. 'v' or 'dry-run')")
        metadata[field] = name


class NamedItem(Traversable, metaclass=ItemType):
    """
    Common base of option-like leaves: names, metadata and the matching hooks.

    Not meant to be instantiated directly; use Flag or Option.
    """

    def __option__(self):
        """
        Introspection hook: identify this leaf as option-like.
        """
        return self

    def __match__(self, *, short_name=Unset, long_name=Unset):
        """
        Exact match against the given name(s).

        Returns the name that matched (short name checked first), or None.
        """
        if short_name is not Unset and self.short_name is not None and short_name == self.short_name:
            return short_name
        if long_name is not Unset and self.long_name is not None and long_name == self.long_name:
            return long_name
        return None

    def __abbreviation__(self, partial_name, /):
        """
        Abbreviation distance: 0 when the long name begins with `partial_name`,
        math.inf (excluded) otherwise, including when there is no long name.
        """
        if self.long_name is not None and self.long_name.startswith(partial_name):
            return 0
        return math.inf

    def __sticky__(self, namearg, /):
        """
        Sticky distance: length of the short name when `namearg` starts with it, else 0.
        """
        if self.short_name is not None and namearg.startswith(self.short_name):
            return len(self.short_name)
        return 0


class Flag(NamedItem):
    """
    Named, presence-only switch.

    A flag carries no argument, so it never takes part in sticky matching.

    Properties
    - short_name, long_name: bare names (None when not given).
    - descr: short description for help renderers, or None.
    - hidden: suppress from help output.
    """

    __introspectable__ = (
        "short_name",
        "long_name",
        "descr",
        "hidden",
    )

    def __init__(self, short_name=Unset, long_name=Unset, *, descr=Unset, hidden=False):
        metadata = {
            "short_name": short_name,
            "long_name": long_name,
            "descr": descr,
            "hidden": bool(hidden),
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_named_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def __sticky__(self, namearg, /):
        return 0


class Option(NamedItem):
    """
    Named, value-bearing switch.

    Highlights
    - 'argument' is the label of the value in help (defaults to "ARG").
    - Sticky-capable: "-oFILE" resolves to this option with argument "FILE"
      when short_name is "o".

    Properties
    - short_name, long_name: bare names (None when not given).
    - argument: value label, e.g. "FILE".
    - descr: short description for help renderers, or None.
    - hidden: suppress from help output.
    """

    __introspectable__ = (
        "short_name",
        "long_name",
        "argument",
        "descr",
        "hidden",
    )

    def __init__(self, short_name=Unset, long_name=Unset, *, argument="ARG", descr=Unset, hidden=False):
        metadata = {
            "short_name": short_name,
            "long_name": long_name,
            "argument": argument,
            "descr": descr,
            "hidden": bool(hidden),
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_named_metadata(type(self), metadata)

        if not isinstance(argument, str):
            raise TypeError(f"{type(self).__typename__} 'argument' must be a string")
        elif not (argument := argument.strip()):
            raise ValueError(f"{type(self).__typename__} 'argument' cannot be empty")
        metadata["argument"] = argument

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


__all__ = (
    "NamedItem",
    "Flag",
    "Option",
)
