"""
Argosy container layer: build, compose and freeze groups of command-line items.

What this module provides
- Container: an ordered, append-only-until-sealed sequence of items (options,
  flags, captions, plain strings, other containers).
- Group: a container with a header, as shown by help renderers.
- seal(container): one-way freeze, gated by a pairwise name-clash check.
- add_to(container, item): guarded append.
- check_name_clash(x, y): recursive short/long name comparison across leaves
  and containers.
- group(*items, ...): build, fill and seal a Group in one call.

Lifecycle
    constructed empty → items added one at a time → sealed exactly once → read-only

    from argosy import Container, Flag, Option, group

    verbosity = group(Flag("v", "verbose"), Flag("q", "quiet"), header="Verbosity")
    main = Container()
    main.add("Usage: tool [OPTIONS]").add(verbosity).add(Option("o", "output"))
    main.seal()

Invariants
- A sealed container never changes: add_to() and a second seal() both fail.
- Only sealed items can be added, so sub-containers are frozen before they
  are composed (which also rules out containment cycles).
- Sealing either succeeds completely or leaves the container unsealed.

Faults
- Every violation is reported through Container.trigger(), which merges the
  container's shell/fancy/colorful flags into the fault (see argosy.faults).
"""
from rich.text import Text

from .faults import *
from .items import ItemType, Traversable, untraverse, is_sealed, isoption
from .utils import *


def _typename(item):
    return getattr(type(item), "__typename__", type(item).__name__.lower())


def _label(item):
    """
    Human-friendly designation of an option-like leaf for fault messages.
    """
    names = []
    if item.short_name is not None:
        names.append("-" + item.short_name)
    if item.long_name is not None:
        names.append("--" + item.long_name)
    return "%s %r" % (_typename(item), "/".join(names))


class Container(Traversable, metaclass=ItemType):
    """
    Ordered holder of items with a one-way sealed state.

    Responsibilities
    - Keep items in insertion order (traversal order and clash-check order).
    - Answer the __sealed__() capability from its own flag.
    - Reset its traversal marker and all of its items' on __untraverse__().
    - Carry the runtime fault options (shell/fancy/colorful) used when one of
      its operations fails.

    Properties
    - items: read-only snapshot (tuple) of the current sequence.
    - sealed: whether seal() succeeded.
    - shell, fancy, colorful: fault rendering flags.
    """

    __introspectable__ = (
        "items",
        "sealed",
        "shell",
        "fancy",
        "colorful",
    )
    __displayable__ = (
        "items",
        "sealed",
    )

    def __init__(self, *, shell=False, fancy=False, colorful=False):
        self._items = []
        self._sealed = False
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)

    def __sealed__(self):
        return self._sealed

    def __untraverse__(self):
        for item in self._items:
            untraverse(item)
        self._traversed = False

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(tuple(self._items))

    def __contains__(self, item, /):
        return item in self._items

    def add(self, item, /):
        """
        Append `item` (see add_to) and return the container for chaining.
        """
        add_to(self, item)
        return self

    def seal(self):
        """
        Freeze the container (see seal) and return it.
        """
        return seal(self)

    def _options(self):
        return {
            "container": self,
            "shell": self._shell,
            "fancy": self._fancy,
            "colorful": self._colorful,
        }

    def trigger(self, fault, /, **options):
        """
        Surface `fault` with this container's runtime flags merged in.
        """
        trigger(fault, **(options | self._options()))


class Group(Container):
    """
    Container with presentation metadata.

    Properties (in addition to Container's)
    - header: title shown above the group's items by help renderers, or None.
    - hidden: suppress the whole group from help output.
    """

    __introspectable__ = Container.__introspectable__ + (
        "header",
        "hidden",
    )
    __displayable__ = (
        "header",
        "items",
        "sealed",
        "hidden",
    )

    def __init__(self, *, header=Unset, hidden=False, **options):
        super().__init__(**options)
        if not isinstance(header, str | Text | Unset):
            raise TypeError(f"{type(self).__typename__} 'header' must be a string")
        elif isinstance(header, str) and not (header := header.strip()):
            raise ValueError(f"{type(self).__typename__} 'header' cannot be empty")
        self._header = coalesce(header)
        self._hidden = bool(hidden)


def _check_name_clash(x, y, overlaps, options):
    if isinstance(x, Container):
        for item in x:
            _check_name_clash(item, y, overlaps, options)
    elif isinstance(y, Container):
        for item in y:
            _check_name_clash(x, item, overlaps, options)
    elif isoption(x) and isoption(y):
        x, y = x.__option__(), y.__option__()

        for field, kind, dashes in (("short_name", "short", "-"), ("long_name", "long", "--")):
            if (name := getattr(x, field)) is not None and name == getattr(y, field):
                return trigger(NameClashError(
                    "%s and %s share the %s name %r" % (_label(x), _label(y), kind, dashes + name),
                    title="name clash",
                    code=FaultCode.NAME_CLASH,
                    hint="rename one of them or drop the duplicate %s name" % kind,
                    items=(x, y),
                    name=name,
                    docs=getdoc(FaultCode.NAME_CLASH)
                ), **options)

        for one, other in ((x, y), (y, x)):
            if one.short_name is not None and one.short_name == other.long_name:
                overlaps.append(NameOverlapWarning(
                    "short name %r of %s matches the long name %r of %s" % (
                        "-" + one.short_name, _label(one), "--" + other.long_name, _label(other)
                    ),
                    title="name overlap",
                    code=FaultCode.NAME_OVERLAP,
                    hint="this is allowed, but users may confuse the two spellings",
                    items=(one, other),
                    name=one.short_name,
                    docs=getdoc(FaultCode.NAME_OVERLAP)
                ))


def check_name_clash(x, y, /, **options):
    """
    Recursively check `x` and `y` for colliding short or long names.

    Shapes
    - container × anything: every item of x against y.
    - leaf × container:     x against every item of y.
    - option × option:      short names compared with short names, long names
                            with long names; any equality raises NameClashError.
    - anything else (captions, plain strings): nothing to compare.

    A short name equal to the other option's long name is allowed ("-ab" vs
    "--ab" are distinct on the command line); it is reported through a
    NameOverlapWarning once the whole check has passed. The same option
    compared with itself clashes.

    Extra keyword options are forwarded to trigger() with every fault.
    """
    overlaps = []
    _check_name_clash(x, y, overlaps, options)
    for warning in overlaps:
        trigger(warning, **options)


def seal(container, /):
    """
    Freeze `container` after checking every pair of its items for name clashes.

    behavior
    - fails with AlreadySealedError when the container is already sealed.
    - compares every unordered pair (i, j), i < j, in stored order with
      check_name_clash(); the first clash aborts with NameClashError and the
      container stays unsealed.
    - otherwise flips the sealed flag, for good, and only then reports the
      short/long overlaps found along the way.

    returns
    - the container.
    """
    if not isinstance(container, Container):
        raise TypeError("seal() argument must be a container")

    if container.sealed:
        return container.trigger(AlreadySealedError(
            "%s is already sealed" % type(container).__typename__,
            title="already sealed",
            code=FaultCode.ALREADY_SEALED,
            hint="seal a container exactly once, after its last item was added",
            docs=getdoc(FaultCode.ALREADY_SEALED)
        ))

    items, overlaps = container._items, []
    for index, item in enumerate(items):
        for other in items[index + 1:]:
            _check_name_clash(item, other, overlaps, container._options())

    container._sealed = True
    for warning in overlaps:
        container.trigger(warning)
    return container


def add_to(container, item, /):
    """
    Append `item` to the end of `container`.

    behavior
    - fails with ContainerSealedError when the container is sealed.
    - fails with ItemNotSealedError when the item is not sealed (see is_sealed).
    - otherwise appends; duplicates are not filtered here (seal() rejects
      duplicated options through the name-clash check).

    returns
    - the container.
    """
    if not isinstance(container, Container):
        raise TypeError("add_to() first argument must be a container")

    if container.sealed:
        return container.trigger(ContainerSealedError(
            "cannot add %r to a sealed %s" % (item, type(container).__typename__),
            title="container sealed",
            code=FaultCode.CONTAINER_SEALED,
            hint="add every item before sealing the container",
            item=item,
            docs=getdoc(FaultCode.CONTAINER_SEALED)
        ))

    if not is_sealed(item):
        return container.trigger(ItemNotSealedError(
            "cannot add an unsealed %s to a %s" % (_typename(item), type(container).__typename__),
            title="item not sealed",
            code=FaultCode.ITEM_NOT_SEALED,
            hint="seal the nested container before adding it",
            item=item,
            docs=getdoc(FaultCode.ITEM_NOT_SEALED)
        ))

    container._items.append(item)
    return container


def group(*items, header=Unset, hidden=False, **options):
    """
    Build a Group, add `items` in order and seal it.

    Usage
        verbosity = group(Flag("v", "verbose"), Flag("q", "quiet"), header="Verbosity")

    Parameters
    - *items: anything add_to() accepts (sealed containers, options, strings...).
    - header, hidden: Group metadata.
    - **options: Container runtime flags (shell, fancy, colorful).

    Returns
    - Group: the sealed group.
    """
    self = Group(header=header, hidden=hidden, **options)
    for item in items:
        add_to(self, item)
    return seal(self)


__all__ = (
    "Container",
    "Group",
    "check_name_clash",
    "seal",
    "add_to",
    "group",
)
