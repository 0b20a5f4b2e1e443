"""
Argosy option enumeration and lookup.

Enumeration
- map_options(visit, root): depth-first, pre-order walk calling visit(option)
  for every option-like leaf reachable from root, in insertion order. Each
  container and option is marked traversed as it is processed, so a sub-tree
  reachable through two paths is visited once, and a second walk over an
  un-reset root visits nothing.
- do_options(container): the reset-then-enumerate bracket; every independent
  top-level scan goes through it.

Lookup strategies (one enumeration pass each)
- search_option_by_name:          exact short/long name, first match returns.
- search_option_by_abbreviation:  partial long name, best distance wins.
- search_sticky_option:           "-xVALUE" style, longest short-name prefix wins.
- search_option:                  keyword dispatch between the first two.

Ties always go to the option enumerated first (insertion order). Absence is
reported as None, never as an error.
"""
import math
from typing import NamedTuple

from .containers import Container
from .items import untraverse, isoption
from .utils import *


class NameMatch(NamedTuple):
    """
    An option found by name or abbreviation, with the full name that matched.
    """
    option: object
    name: str


class StickyMatch(NamedTuple):
    """
    An option found in a sticky token, with the argument glued after its short name.
    """
    option: object
    argument: str


def map_options(visit, root, /):
    """
    Call `visit` on every option-like leaf reachable from `root`, depth-first.

    - containers not yet traversed recurse into their items in stored order,
      then get marked traversed (also when empty or when nothing was visited).
    - option-like leaves not yet traversed are visited, then marked.
    - anything else (captions, plain strings) is skipped.

    The caller is responsible for resetting markers first; see do_options().
    """
    if isinstance(root, Container):
        if not root.traversed:
            for item in root:
                map_options(visit, item)
        root.__traverse__()
    elif isoption(root):
        if not getattr(root, "traversed", False):
            visit(root.__option__())
        if callable(hook := getattr(type(root), "__traverse__", None)):
            hook(root)


def do_options(container, /):
    """
    Yield every option reachable from `container`, in enumeration order.

    The whole tree is untraversed first, so each call is an independent,
    complete scan.
    """
    options = []
    map_options(options.append, untraverse(container))
    yield from options


def search_option_by_name(container, /, *, short_name=Unset, long_name=Unset):
    """
    Find the first option whose short or long name matches exactly.

    parameters
    - short_name, long_name: bare names; at least one must be given. When both
      are given, an option matches on either (short checked first).

    returns
    - NameMatch(option, name) for the first match in enumeration order.
    - None when nothing matches.
    """
    if short_name is Unset and long_name is Unset:
        raise TypeError("search_option_by_name() requires a 'short_name' or a 'long_name'")
    for name in (short_name, long_name):
        if not isinstance(name, str | Unset):
            raise TypeError("search_option_by_name() names must be strings")

    for option in do_options(container):
        if (name := option.__match__(short_name=short_name, long_name=long_name)) is not None:
            return NameMatch(option, name)
    return None


def search_option_by_abbreviation(container, partial_name, /):
    """
    Resolve `partial_name` to the option whose long name it abbreviates.

    Every option reports an abbreviation distance; options whose long name does
    not start with `partial_name` report math.inf and are never chosen. A
    strictly smaller distance replaces the current best, so the first option
    enumerated wins ties.

    returns
    - NameMatch(option, long_name) with the completed long name.
    - None when no long name starts with `partial_name`.
    """
    if not isinstance(partial_name, str):
        raise TypeError("search_option_by_abbreviation() 'partial_name' must be a string")

    best, distance = None, math.inf
    for option in do_options(container):
        if (candidate := option.__abbreviation__(partial_name)) < distance:
            best, distance = option, candidate

    if best is None:
        return None
    return NameMatch(best, best.long_name)


def search_sticky_option(container, namearg, /):
    """
    Split a sticky token (short name immediately followed by its argument).

    `namearg` is the token without its leading dash, e.g. "xVALUE". Every option
    reports a sticky distance (the length of its short name when `namearg`
    starts with it, 0 otherwise); a strictly greater distance replaces the
    current best, so the longest short name wins and the first option
    enumerated wins ties.

    returns
    - StickyMatch(option, argument) where argument is `namearg` minus the matched short name.
    - None when no option matches.
    """
    if not isinstance(namearg, str):
        raise TypeError("search_sticky_option() 'namearg' must be a string")

    best, distance = None, 0
    for option in do_options(container):
        if (candidate := option.__sticky__(namearg)) > distance:
            best, distance = option, candidate

    if best is None:
        return None
    return StickyMatch(best, namearg[distance:])


def search_option(container, /, *, short_name=Unset, long_name=Unset, partial_name=Unset):
    """
    Dispatch to the right lookup strategy.

    - short_name and/or long_name → search_option_by_name()
    - partial_name alone           → search_option_by_abbreviation()
    - nothing, or partial_name mixed with an exact name → TypeError
    """
    if short_name is not Unset or long_name is not Unset:
        if partial_name is not Unset:
            raise TypeError("search_option() cannot mix 'partial_name' with 'short_name' or 'long_name'")
        return search_option_by_name(container, short_name=short_name, long_name=long_name)
    if partial_name is not Unset:
        return search_option_by_abbreviation(container, partial_name)
    raise TypeError("search_option() requires a 'short_name', a 'long_name' or a 'partial_name'")


__all__ = (
    "NameMatch",
    "StickyMatch",
    "map_options",
    "do_options",
    "search_option_by_name",
    "search_option_by_abbreviation",
    "search_sticky_option",
    "search_option",
)
