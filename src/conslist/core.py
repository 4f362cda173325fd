import logging
from typing import Any, Callable, Optional, TypeVar

from pyrsistent import pmap

from conslist.lang.exception import EmptyListUnderflow
from conslist.lang.list import EMPTY, Cons, ImmutableList
from conslist.lang.reduced import Reduced
from conslist.logconfig import TRACE

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")
B = TypeVar("B")


def _underflow(op: str, message: str, strict: bool, **data: Any) -> None:
    """Signal that `op` needed more elements than its list argument holds.

    Lenient callers get a trace log and carry on with the empty list; strict
    callers get an :py:class:`EmptyListUnderflow`."""
    if strict:
        logger.debug(f"Strict '{op}' ran out of elements")
        raise EmptyListUnderflow(message, pmap(dict(data, op=op)))
    logger.log(TRACE, f"'{op}' ran out of elements; returning the empty list")


def cons(head: T, tail: ImmutableList[T]) -> ImmutableList[T]:
    """Creates a new list where `head` is the first element and `tail` is the rest.
    The tail is shared, not copied."""
    return Cons(head, tail)


###################
# Fold Primitives #
###################


def fold_left(l: ImmutableList[T], z: B, f: Callable[[B, T], Any]) -> B:
    """Reduce `l` from the head end, threading the accumulator `z` through
    `f(acc, elem)` strictly left to right.

    If `f` returns a :py:class:`conslist.lang.reduced.Reduced` instance, the fold
    stops immediately and returns the wrapped value."""
    acc = z
    for elem in l:
        acc = f(acc, elem)
        if isinstance(acc, Reduced):
            return acc.deref()
    return acc


def fold_right(l: ImmutableList[T], z: B, f: Callable[[T, B], B]) -> B:
    """Reduce `l` from the tail end, so `f(elem, acc)` is called with each element
    paired with the fold of every element after it, starting from `z`.

    The traversal runs over the reversed list in a loop rather than recursing, so
    stack depth does not grow with list length. Values returned by `f` are never
    treated as :py:class:`Reduced`."""
    acc = z
    for elem in reverse(l):
        acc = f(elem, acc)
    return acc


def fold_left_via_fold_right(l: ImmutableList[T], z: B, f: Callable[[B, T], B]) -> B:
    """Same result as :py:func:`fold_left` (without early termination), expressed
    as a right fold over the reversed list."""
    return fold_right(reverse(l), z, lambda elem, acc: f(acc, elem))


def fold_right_via_fold_left(l: ImmutableList[T], z: B, f: Callable[[T, B], B]) -> B:
    """Same result as :py:func:`fold_right`, expressed as a left fold over the
    reversed list.

    The accumulator travels boxed in a 1-tuple, so a :py:class:`Reduced` returned
    by `f` is never mistaken for a request to stop the left fold."""
    boxed = fold_left(reverse(l), (z,), lambda acc, elem: (f(elem, acc[0]),))
    return boxed[0]


##############
# Arithmetic #
##############


def sum(ints: ImmutableList[int]) -> int:  # pylint: disable=redefined-builtin
    """Return the total of the elements of `ints`, or 0 for the empty list."""
    return fold_left(ints, 0, lambda acc, x: acc + x)


def _product_step(acc: float, x: float):
    if x == 0.0:
        return Reduced(0.0)
    return acc * x


def product(doubles: ImmutableList[float]) -> float:
    """Return the product of the elements of `doubles`, or 1.0 for the empty list.

    The first 0.0 element ends the computation at once; nothing after it is
    examined."""
    return fold_left(doubles, 1.0, _product_step)


def sum_right(ints: ImmutableList[int]) -> int:
    return fold_right(ints, 0, lambda x, acc: x + acc)


def product_right(doubles: ImmutableList[float]) -> float:
    return fold_right(doubles, 1.0, lambda x, acc: x * acc)


def sum_left(ints: ImmutableList[int]) -> int:
    return fold_left(ints, 0, lambda acc, x: acc + x)


def product_left(nums: ImmutableList[float]) -> float:
    return fold_left(nums, 1, lambda acc, x: acc * x)


def add_one(ints: ImmutableList[int]) -> ImmutableList[int]:
    return map(ints, lambda x: x + 1)


def doubles_to_strings(doubles: ImmutableList[float]) -> ImmutableList[str]:
    return map(doubles, str)


def add_pairwise(a: ImmutableList[int], b: ImmutableList[int]) -> ImmutableList[int]:
    """Return the elementwise sums of `a` and `b`, truncated to the shorter list."""
    return zip_with(a, b, lambda x, y: x + y)


#############
# Structure #
#############


def head(l: ImmutableList[T], strict: bool = False) -> Optional[T]:
    """Return the first element of `l`.

    Return None for the empty list, or raise :py:class:`EmptyListUnderflow` if
    `strict` is True."""
    if isinstance(l, Cons):
        return l.head
    _underflow("head", "Cannot take the head of an empty list", strict)
    return None


def tail(l: ImmutableList[T], strict: bool = False) -> ImmutableList[T]:
    """Return `l` without its first element.

    The empty list has no tail. By default this returns the empty list; if
    `strict` is True, :py:class:`EmptyListUnderflow` is raised instead."""
    if isinstance(l, Cons):
        return l.tail
    _underflow("tail", "Cannot take the tail of an empty list", strict)
    return EMPTY


def set_head(l: ImmutableList[T], h: T, strict: bool = False) -> ImmutableList[T]:
    """Return a list with `h` in place of the first element of `l`, sharing the
    tail of `l`. The empty list is returned unchanged unless `strict` is True."""
    if isinstance(l, Cons):
        return Cons(h, l.tail)
    _underflow("set_head", "Cannot replace the head of an empty list", strict)
    return EMPTY


def drop(l: ImmutableList[T], n: int, strict: bool = False) -> ImmutableList[T]:
    """Return `l` without its first `n` elements.

    If `n` is not positive, `l` itself is returned. Dropping past the end of the
    list yields the empty list, or raises :py:class:`EmptyListUnderflow` when
    `strict` is True."""
    if n <= 0:
        return l

    cur = l
    dropped = 0
    while dropped < n:
        if not isinstance(cur, Cons):
            _underflow(
                "drop",
                f"Cannot drop {n} elements from a list of {dropped} elements",
                strict,
                n=n,
                dropped=dropped,
            )
            return EMPTY
        cur = cur.tail
        dropped += 1
    return cur


def drop_while(l: ImmutableList[T], pred: Callable[[T], bool]) -> ImmutableList[T]:
    """Return the suffix of `l` starting at the first element for which `pred`
    returns a falsey value."""
    cur = l
    while isinstance(cur, Cons) and pred(cur.head):
        cur = cur.tail
    return cur


def init(l: ImmutableList[T], strict: bool = False) -> ImmutableList[T]:
    """Return every element of `l` except the last.

    Single element lists yield the empty list. The empty list yields the empty
    list, or raises :py:class:`EmptyListUnderflow` when `strict` is True."""
    if not isinstance(l, Cons):
        _underflow("init", "Cannot take the init of an empty list", strict)
        return EMPTY
    return reverse(tail(reverse(l)))


def length(l: ImmutableList[Any]) -> int:
    return fold_right(l, 0, lambda _, acc: acc + 1)


def length_left(l: ImmutableList[Any]) -> int:
    return fold_left(l, 0, lambda acc, _: acc + 1)


def reverse(l: ImmutableList[T]) -> ImmutableList[T]:
    """Return the elements of `l` in reverse order, built in a single left fold."""
    return fold_left(l, EMPTY, lambda acc, x: Cons(x, acc))


def append(a: ImmutableList[T], b: ImmutableList[T]) -> ImmutableList[T]:
    """Return the elements of `a` followed by the elements of `b`.

    Fresh cells are built for `a` only; `b` is shared as the tail of the result,
    so `append(EMPTY, b)` is `b` itself."""
    return fold_right(a, b, cons)


def concat(ll: ImmutableList[ImmutableList[T]]) -> ImmutableList[T]:
    """Flatten a list of lists by one level, preserving the order of both the
    outer and inner lists."""
    return fold_right(ll, EMPTY, append)


##################
# Transformation #
##################


def map(  # pylint: disable=redefined-builtin
    l: ImmutableList[T], f: Callable[[T], U]
) -> ImmutableList[U]:
    return fold_right(l, EMPTY, lambda x, acc: Cons(f(x), acc))


def filter(  # pylint: disable=redefined-builtin
    l: ImmutableList[T], pred: Callable[[T], bool]
) -> ImmutableList[T]:
    """Return the elements of `l` for which `pred` is truthy, in their original
    relative order."""
    return fold_right(l, EMPTY, lambda x, acc: Cons(x, acc) if pred(x) else acc)


def flat_map(
    l: ImmutableList[T], f: Callable[[T], ImmutableList[U]]
) -> ImmutableList[U]:
    """Apply `f` to each element of `l` and concatenate the resulting lists."""
    return fold_right(l, EMPTY, lambda x, acc: append(f(x), acc))


def filter_via_flat_map(
    l: ImmutableList[T], pred: Callable[[T], bool]
) -> ImmutableList[T]:
    return flat_map(l, lambda x: Cons(x, EMPTY) if pred(x) else EMPTY)


def zip_with(
    a: ImmutableList[T], b: ImmutableList[U], f: Callable[[T, U], V]
) -> ImmutableList[V]:
    """Combine `a` and `b` elementwise with `f`.

    The result is as long as the shorter input; the walk stops as soon as either
    list runs out."""
    acc: ImmutableList[V] = EMPTY
    xs, ys = a, b
    while isinstance(xs, Cons) and isinstance(ys, Cons):
        acc = Cons(f(xs.head, ys.head), acc)
        xs, ys = xs.tail, ys.tail
    return reverse(acc)


def _starts_with(l: ImmutableList[T], prefix: ImmutableList[T]) -> bool:
    xs, ys = l, prefix
    while isinstance(ys, Cons):
        if not isinstance(xs, Cons) or xs.head != ys.head:
            return False
        xs, ys = xs.tail, ys.tail
    return True


def has_subsequence(sup: ImmutableList[T], sub: ImmutableList[T]) -> bool:
    """Return True if the elements of `sub` appear as a contiguous run within `sup`.

    Each suffix of `sup` is compared against `sub` in turn. The empty list is a
    subsequence of every list."""
    cur = sup
    while True:
        if _starts_with(cur, sub):
            return True
        if not isinstance(cur, Cons):
            return False
        cur = cur.tail
