import attr
from pyrsistent import PMap, pmap

from conslist.lang.obj import lrepr


@attr.define(repr=False, str=False)
class ExceptionInfo(Exception):
    """Exception carrying an immutable map of contextual data about the failure."""

    message: str
    data: PMap = attr.field(factory=pmap, converter=pmap)

    def __repr__(self):
        return (
            f"conslist.lang.exception.ExceptionInfo({self.message}, "
            f"{self._data_repr()})"
        )

    def __str__(self):
        return f"{self.message} {self._data_repr()}"

    def _data_repr(self) -> str:
        entries = " ".join(
            sorted(f"{lrepr(k)} {lrepr(v)}" for k, v in self.data.items())
        )
        return f"{{{entries}}}"


class EmptyListUnderflow(ExceptionInfo):
    """Raised by strict list operations which need at least one more element
    than the list holds."""

    def __repr__(self):
        return (
            f"conslist.lang.exception.EmptyListUnderflow({self.message}, "
            f"{self._data_repr()})"
        )
