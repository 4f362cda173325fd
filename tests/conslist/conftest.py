import pytest

import conslist.lang.list as llist


@pytest.fixture(params=[3, 4, 5])
def pickle_protocol(request) -> int:
    return request.param


@pytest.fixture
def big_list() -> llist.ImmutableList[int]:
    """A list long enough that any per-element recursion would exhaust the stack."""
    return llist.from_iterable(range(50_000))
