from abc import ABC, abstractmethod
from collections.abc import Iterable
from functools import singledispatch
from itertools import islice
from typing import Any, Union, cast

from typing_extensions import TypedDict, Unpack

PrintCountSetting = Union[bool, int, None]

SURPASSED_PRINT_LENGTH = "..."
SURPASSED_PRINT_LEVEL = "#"

PRINT_LENGTH: PrintCountSetting = 50
PRINT_LEVEL: PrintCountSetting = None
PRINT_READABLY = True
PRINT_SEPARATOR = " "


class PrintSettings(TypedDict, total=False):
    human_readable: bool
    print_length: PrintCountSetting
    print_level: PrintCountSetting
    print_readably: bool


def _dec_print_level(lvl: PrintCountSetting) -> PrintCountSetting:
    """Decrement the print level if it is numeric."""
    if isinstance(lvl, int) and not isinstance(lvl, bool):
        return lvl - 1
    return lvl


def process_lrepr_kwargs(**kwargs: Unpack[PrintSettings]) -> PrintSettings:
    """Process keyword arguments, decreasing the print-level. Should be called
    after examining the print level for the current level."""
    return cast(
        PrintSettings, dict(kwargs, print_level=_dec_print_level(kwargs["print_level"]))
    )


class LispObject(ABC):
    """Abstract base class for objects which would like to customize their
    ``__str__`` and Python ``__repr__`` representation.

    Objects print as parenthesized, space separated forms. ``str`` requests the
    human readable form, but that only affects a bare top level string: the
    elements of a collection always print readably, so ``str`` and ``repr`` of
    a list both show string elements quoted."""

    __slots__ = ()

    def __repr__(self):
        return self.lrepr()

    def __str__(self):
        return self.lrepr(human_readable=True)

    @abstractmethod
    def _lrepr(self, **kwargs: Unpack[PrintSettings]) -> str:
        """Private representation method. Callers (including object internal
        callers) should not call this method directly, but instead should use
        the module function :py:meth:`lrepr` ."""
        raise NotImplementedError()

    def lrepr(self, **kwargs: Unpack[PrintSettings]) -> str:
        """Return a string representation of this object."""
        return lrepr(self, **kwargs)


def seq_lrepr(
    iterable: Iterable[Any],
    start: str,
    end: str,
    **kwargs: Unpack[PrintSettings],
) -> str:
    """Produce a representation of a sequential collection, bookended with the
    start and end string supplied. The keyword arguments will be passed along to
    lrepr for the sequence elements."""
    print_level = kwargs["print_level"]
    if (
        isinstance(print_level, int)
        and not isinstance(print_level, bool)
        and print_level < 1
    ):
        return SURPASSED_PRINT_LEVEL

    kwargs = process_lrepr_kwargs(**kwargs)

    trailer = []
    print_length = kwargs["print_length"]
    if isinstance(print_length, int) and not isinstance(print_length, bool):
        items = list(islice(iterable, print_length + 1))
        if len(items) > print_length:
            items.pop()
            trailer.append(SURPASSED_PRINT_LENGTH)
    else:
        items = list(iterable)

    kw_items = kwargs.copy()
    kw_items["human_readable"] = False
    items = list(map(lambda o: lrepr(o, **kw_items), items))
    return f"{start}{PRINT_SEPARATOR.join(items + trailer)}{end}"


# pylint: disable=unused-argument
@singledispatch
def lrepr(
    o: Any,
    human_readable: bool = False,
    print_length: PrintCountSetting = PRINT_LENGTH,
    print_level: PrintCountSetting = PRINT_LEVEL,
    print_readably: bool = PRINT_READABLY,
) -> str:
    """Return a string representation of an object.

    Permissible keyword arguments are:
    - human_readable: if logical True, print strings without quotations or
                      escape sequences (default: false)
    - print_length: the number of items in a collection which will be printed,
                    or no limit if bound to a logical falsey value (default: 50)
    - print_level: the depth of the object graph to print, starting with 0, or
                   no limit if bound to a logical falsey value (default: None)
    - print_readably: if logical true, print strings quoted with
                      non-alphanumeric characters converted to escape
                      sequences; if logical false, print them bare (default: true)

    Objects which are not registered below print with their Python ``repr``."""
    return repr(o)


@lrepr.register(LispObject)
def _lrepr_lisp_obj(
    o: Any,
    human_readable: bool = False,
    print_length: PrintCountSetting = PRINT_LENGTH,
    print_level: PrintCountSetting = PRINT_LEVEL,
    print_readably: bool = PRINT_READABLY,
) -> str:
    return o._lrepr(
        human_readable=human_readable,
        print_length=print_length,
        print_level=print_level,
        print_readably=print_readably,
    )


@lrepr.register(bool)
def _lrepr_bool(o: bool, **_) -> str:
    return repr(o).lower()


@lrepr.register(type(None))
def _lrepr_nil(_: None, **__) -> str:
    return "nil"


@lrepr.register(str)
def _lrepr_str(
    o: str, human_readable: bool = False, print_readably: bool = PRINT_READABLY, **_
) -> str:
    if human_readable or not print_readably:
        return o
    escaped = o.encode("unicode_escape").replace(b'"', rb"\"").decode("utf-8")
    return f'"{escaped}"'
