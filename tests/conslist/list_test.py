import pickle

import attr
import pytest

import conslist.lang.list as llist
from conslist.lang.obj import LispObject, lrepr


@pytest.mark.parametrize("variant", [llist.Empty, llist.Cons])
def test_list_variant_membership(variant):
    assert issubclass(variant, llist.ImmutableList)
    assert issubclass(variant, LispObject)


def test_empty():
    assert llist.EMPTY is llist.empty()
    assert llist.EMPTY is llist.of()
    assert llist.EMPTY is llist.from_iterable([])
    assert llist.EMPTY.is_empty
    assert None is llist.EMPTY.first
    assert llist.EMPTY is llist.EMPTY.rest
    assert not llist.EMPTY
    assert 0 == len(llist.EMPTY)
    assert [] == list(llist.EMPTY)


def test_of_preserves_order():
    l = llist.of(1, 2, 3)
    assert [1, 2, 3] == list(l)
    assert not l.is_empty
    assert l
    assert 1 == l.first
    assert llist.of(2, 3) == l.rest
    assert llist.Cons(1, llist.Cons(2, llist.Cons(3, llist.EMPTY))) == l


def test_from_iterable():
    assert llist.of(1, 2, 3) == llist.from_iterable(range(1, 4))
    assert llist.of("a", "b") == llist.from_iterable(iter("ab"))

    l = llist.of(1, 2)
    assert l is llist.from_iterable(l)


def test_cons_shares_tail():
    tail = llist.of(2, 3)
    l1 = tail.cons(1)
    l2 = tail.cons(0)
    assert llist.of(1, 2, 3) == l1
    assert llist.of(0, 2, 3) == l2
    assert l1.rest is tail
    assert l2.rest is tail
    assert llist.of(2, 3) == tail


def test_cons_many():
    assert llist.of(1) == llist.EMPTY.cons(1)
    assert llist.of(3, 2, 1) == llist.EMPTY.cons(1, 2, 3)
    assert llist.of(5, 4, 1) == llist.of(1).cons(4, 5)


@pytest.mark.parametrize("tail", [None, [2, 3], (2,), "23"])
def test_cons_requires_list_tail(tail):
    with pytest.raises(TypeError):
        llist.Cons(1, tail)


def test_cons_is_frozen():
    l = llist.of(1, 2)
    with pytest.raises(attr.exceptions.FrozenInstanceError):
        l.head = 5
    with pytest.raises(attr.exceptions.FrozenInstanceError):
        l.tail = llist.EMPTY
    assert llist.of(1, 2) == l


def test_list_equals():
    assert llist.of(1, 2, 3) == llist.of(1, 2, 3)
    assert llist.of(1, 2, 3) != llist.of(1, 2)
    assert llist.of(1, 2) != llist.of(1, 2, 3)
    assert llist.of(1, 2, 3) != llist.of(1, 2, 4)
    assert llist.of(None) != llist.EMPTY
    assert llist.of(llist.of(1), 2) == llist.of(llist.of(1), 2)


@pytest.mark.parametrize("other", [[1, 2, 3], (1, 2, 3), "123", None])
def test_list_not_equal_to_other_types(other):
    assert llist.of(1, 2, 3) != other
    assert not llist.of(1, 2, 3) == other


def test_list_hash():
    assert hash(llist.of(1, 2, 3)) == hash(llist.of(1, 2, 3))
    assert hash(llist.EMPTY) == hash(llist.of())

    cache = {llist.of("a", "b"): 1}
    assert 1 == cache[llist.from_iterable("ab")]


def test_list_len():
    assert 0 == len(llist.of())
    assert 1 == len(llist.of(None))
    assert 3 == len(llist.of(1, 2, 3))


def test_list_iteration_is_stack_safe(big_list):
    assert 50_000 == len(big_list)
    assert list(range(50_000)) == list(big_list)
    assert big_list == llist.from_iterable(range(50_000))


@pytest.mark.parametrize(
    "o",
    [
        llist.of(),
        llist.of(1),
        llist.of(1, "two", None, 4.0),
        llist.of(llist.of("string", 4), llist.EMPTY),
    ],
)
def test_list_pickleability(pickle_protocol: int, o: llist.ImmutableList):
    assert o == pickle.loads(pickle.dumps(o, protocol=pickle_protocol))


def test_empty_list_unpickles_to_singleton(pickle_protocol: int):
    pickled = pickle.dumps(llist.EMPTY, protocol=pickle_protocol)
    assert llist.EMPTY is pickle.loads(pickled)


def test_long_list_pickleability(pickle_protocol: int, big_list):
    assert big_list == pickle.loads(pickle.dumps(big_list, protocol=pickle_protocol))


@pytest.mark.parametrize(
    "l,str_repr",
    [
        (llist.of(), "()"),
        (llist.of(1), "(1)"),
        (llist.of(1, 2, 3), "(1 2 3)"),
        (llist.of("a", "b"), '("a" "b")'),
        (llist.of(None, True, 1.5), "(nil true 1.5)"),
        (llist.of(llist.of(1, 2), llist.EMPTY, 3), "((1 2) () 3)"),
    ],
)
def test_list_repr(l: llist.ImmutableList, str_repr: str):
    assert repr(l) == str_repr


@pytest.mark.parametrize(
    "l,str_repr",
    [
        (llist.of(), "()"),
        (llist.of(1, 2), "(1 2)"),
        (llist.of("a", "b"), '("a" "b")'),
        (llist.of(llist.of("a"), None), '(("a") nil)'),
    ],
)
def test_list_str_prints_elements_readably(l: llist.ImmutableList, str_repr: str):
    assert str(l) == str_repr
    assert repr(l) == str(l)


def test_lrepr_str():
    assert '"a\\"b"' == lrepr('a"b')
    assert 'a"b' == lrepr('a"b', human_readable=True)
    assert 'a"b' == lrepr('a"b', print_readably=False)
    assert "(a b)" == lrepr(llist.of("a", "b"), print_readably=False)


def test_list_repr_print_length():
    l = llist.from_iterable(range(5))
    assert "(0 1 ...)" == lrepr(l, print_length=2)
    assert "(0 1 2 3 4)" == lrepr(l, print_length=5)
    assert "(0 1 2 3 4)" == lrepr(l, print_length=None)
    assert "(...)" == lrepr(l, print_length=0)


def test_list_repr_print_level():
    l = llist.of(llist.of(1, llist.of(2)), 3)
    assert "#" == lrepr(l, print_level=0)
    assert "(# 3)" == lrepr(l, print_level=1)
    assert "((1 #) 3)" == lrepr(l, print_level=2)
    assert "((1 (2)) 3)" == lrepr(l, print_level=None)


def test_long_list_repr_is_truncated(big_list):
    r = repr(big_list)
    assert r.startswith("(0 1 2 ")
    assert r.endswith(" 49 ...)")
