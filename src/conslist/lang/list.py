import itertools
from abc import abstractmethod
from collections.abc import Iterable, Iterator
from typing import Any, Generic, Optional, TypeVar

import attr
from typing_extensions import Unpack

from conslist.lang.obj import LispObject, PrintSettings, seq_lrepr

T = TypeVar("T")


def list_equals(l1: "ImmutableList", l2: Any) -> bool:
    """Return True if two lists contain exactly the same elements in the same
    order. Return False if one list is shorter than the other."""
    assert isinstance(l1, ImmutableList)

    if not isinstance(l2, ImmutableList):
        return NotImplemented

    sentinel = object()
    for e1, e2 in itertools.zip_longest(l1, l2, fillvalue=sentinel):
        if bool(e1 is sentinel) or bool(e2 is sentinel):
            return False
        if e1 != e2:
            return False
    return True


class ImmutableList(LispObject, Generic[T]):
    """``ImmutableList`` is a persistent, singly-linked list with exactly two
    variants: :py:class:`Empty` and :py:class:`Cons`.

    Lists are never modified after construction. Tails are shared freely between
    lists, so consing onto an existing list never copies it.

    Do not subclass this type further. Create lists with the :py:func:`of`,
    :py:func:`from_iterable` and :py:func:`empty` factories below, or by calling
    :py:meth:`cons` on an existing list."""

    __slots__ = ()

    class _ListIter(Iterator[T]):
        """Stateful iterator for lists.

        Iterating with a loop rather than recursion keeps the Python stack flat
        no matter how long the list is."""

        __slots__ = ("_cur",)

        def __init__(self, l: "ImmutableList[T]"):
            self._cur = l

        def __next__(self):
            if self._cur.is_empty:
                raise StopIteration
            v = self._cur.first
            self._cur = self._cur.rest
            return v

        def __repr__(self):  # pragma: no cover
            return repr(self._cur)

    @property
    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError()

    @property
    @abstractmethod
    def first(self) -> Optional[T]:
        raise NotImplementedError()

    @property
    @abstractmethod
    def rest(self) -> "ImmutableList[T]":
        raise NotImplementedError()

    def cons(self, *elems: T) -> "ImmutableList[T]":
        """Return a new list with each of `elems` consed on in turn, so the last
        element given becomes the new head."""
        l: ImmutableList[T] = self
        for elem in elems:
            l = Cons(elem, l)
        return l

    def _lrepr(self, **kwargs: Unpack[PrintSettings]) -> str:
        return seq_lrepr(iter(self), "(", ")", **kwargs)

    def __eq__(self, other):
        if self is other:
            return True
        return list_equals(self, other)

    def __hash__(self):
        return hash(tuple(self))

    def __iter__(self):
        return self._ListIter(self)

    def __len__(self):
        n = 0
        for _ in self:
            n += 1
        return n

    def __bool__(self):
        return not self.is_empty


class Empty(ImmutableList):
    """The empty list. Use the module level :py:data:`EMPTY` instance."""

    __slots__ = ()

    def __reduce__(self):
        return "EMPTY"

    @property
    def is_empty(self) -> bool:
        return True

    @property
    def first(self) -> None:
        return None

    @property
    def rest(self) -> "Empty":
        return self


@attr.frozen(eq=False, repr=False)
class Cons(ImmutableList[T]):
    """A list cell holding `head` in front of the (possibly shared) list `tail`."""

    head: T
    tail: ImmutableList[T] = attr.field(
        validator=attr.validators.instance_of(ImmutableList)
    )

    def __reduce__(self):
        return from_iterable, (tuple(self),)

    @property
    def is_empty(self) -> bool:
        return False

    @property
    def first(self) -> T:
        return self.head

    @property
    def rest(self) -> ImmutableList[T]:
        return self.tail


EMPTY: ImmutableList[Any] = Empty()


def empty() -> ImmutableList[Any]:
    """Return the empty list."""
    return EMPTY


def from_iterable(members: Iterable[T]) -> ImmutableList[T]:
    """Creates a new list from the elements of `members`, preserving their order."""
    if isinstance(members, ImmutableList):
        return members
    l: ImmutableList[T] = EMPTY
    for elem in reversed(tuple(members)):
        l = Cons(elem, l)
    return l


def of(*members: T) -> ImmutableList[T]:
    """Creates a new list from members."""
    return from_iterable(members)
