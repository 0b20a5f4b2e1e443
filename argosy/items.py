r"""
Argosy items: the shared shape of everything a container can hold.

Overview
- ItemType metaclass
  • gives item classes a stable __typename__ (camel-case split with hyphens),
    read-only properties for every name in __introspectable__, and stable
    __repr__/__rich_repr__ implementations for diagnostics and rich.pretty.

- Traversable mixin + untraverse()
  • a transient "already visited" marker used by option enumeration to visit a
    shared sub-tree once per pass; untraverse() clears it recursively.

- is_sealed(item)
  • the "is this node frozen" capability, defined on every object. Plain
    strings, captions and options are always sealed; containers answer from
    their own flag through the __sealed__() hook.

- isoption(item)
  • true for option-like leaves (objects exposing __option__()).

- Caption
  • a decorative free-text leaf (e.g., a paragraph shown between options).

Hooks
- __sealed__()     → bool, overridden by containers.
- __traverse__()   → set own marker (enumeration only).
- __untraverse__() → reset own marker (containers reset their items first).
- __option__()     → identifies option-like leaves (see argosy.options).
"""
import functools
import operator
import re

from rich.text import Text

from .utils import *


class ItemType(type):
    """
    Metaclass that turns item classes into introspectable descriptors.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in fault messages.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

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
            **options
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - flag(short_name='v', long_name='verbose', ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        if "__repr__" not in namespace:
            self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        if "__rich_repr__" not in namespace:
            self.__rich_repr__ = __rich_repr__

        return self


class Traversable:
    """
    Mixin carrying the transient traversal marker.

    The marker is set by an in-progress enumeration (see argosy.search) and
    cleared by untraverse(). It is shared mutable state on the node: only one
    enumeration per tree may be in flight at a time.
    """
    _traversed = False

    @property
    def traversed(self):
        return self._traversed

    def __traverse__(self):
        self._traversed = True

    def __untraverse__(self):
        self._traversed = False


def untraverse(object, /):
    """
    Reset the traversal marker of `object` and everything reachable from it.

    - objects without a marker (plain strings, foreign objects) are left alone.
    - containers reset every item in their sequence before themselves.
    - returns `object` unchanged, so calls can be chained.
    - idempotent: resetting an already-reset tree is a no-op.
    """
    if callable(hook := getattr(type(object), "__untraverse__", None)):
        hook(object)
    return object


def is_sealed(item, /):
    """
    Tell whether `item` is frozen for composition purposes.

    Leaves are never explicitly sealed, so anything without a __sealed__()
    hook (plain strings, captions, options) counts as already closed.
    """
    if callable(hook := getattr(type(item), "__sealed__", None)):
        return bool(hook(item))
    return True


def isoption(item, /):
    """
    Tell whether `item` is option-like (exposes the __option__() hook).
    """
    return callable(getattr(type(item), "__option__", None))


class Caption(metaclass=ItemType):
    """
    Decorative free-text leaf.

    Captions sit between options purely for presentation (help renderers read
    them); they carry no names, never clash and are skipped by enumeration.
    """

    __introspectable__ = (
        "contents",
        "hidden",
    )

    def __init__(self, contents, /, *, hidden=False):
        if not isinstance(contents, str | Text):
            raise TypeError(f"{type(self).__typename__} 'contents' must be a string")
        elif isinstance(contents, str) and not contents.strip():
            raise ValueError(f"{type(self).__typename__} 'contents' cannot be empty")
        self._contents = contents
        self._hidden = bool(hidden)

    def __rich__(self):
        return Text(str(self.contents), style="dim" if self.hidden else "")


__all__ = (
    "ItemType",
    "Traversable",
    "untraverse",
    "is_sealed",
    "isoption",
    "Caption",
)
