from typing import Generic, TypeVar

import attr

T = TypeVar("T")


@attr.frozen
class Reduced(Generic[T]):
    """Wrapper returned from a :py:func:`conslist.core.fold_left` step function to
    end the fold early. The fold returns the wrapped value without visiting any
    further elements."""

    value: T

    def deref(self) -> T:
        return self.value
