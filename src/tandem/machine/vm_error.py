"""Structured virtual machine errors

A VmError carries one or more error kinds. Several kinds can describe a
single failure at once, e.g. a bad element inside a call's only argument is
both a BadArgument (the argument) and a TypeMismatch (the element).
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Type, TypeVar

from ..exceptions import UserResolvableError
from .serialisable import TandemSerialisable


@dataclass(frozen=True)
class VmErrorKind(TandemSerialisable):
    """Base for all error kinds"""

    def serialise(self) -> dict:
        return dict(kind=type(self).__name__, **super().serialise())


@dataclass(frozen=True)
class ArityError(VmErrorKind):
    expected: int
    actual: int

    def __str__(self):
        return f"Wrong number of arguments {self.actual}, expected {self.expected}"


@dataclass(frozen=True)
class BadArgument(VmErrorKind):
    index: int

    def __str__(self):
        return f"Bad argument #{self.index}"


@dataclass(frozen=True)
class TypeMismatch(VmErrorKind):
    index: int
    expected: str
    actual: str

    def __str__(self):
        return f"Expected `{self.expected}`, but found `{self.actual}` (at #{self.index})"


@dataclass(frozen=True)
class StackUnderflow(VmErrorKind):
    def __str__(self):
        return "Tried to pop from an empty stack"


@dataclass(frozen=True)
class StackOverflow(VmErrorKind):
    limit: int

    def __str__(self):
        return f"Stack exceeded its limit of {self.limit} values"


@dataclass(frozen=True)
class NotAccessibleMut(VmErrorKind):
    type_name: str

    def __str__(self):
        return f"Cannot take exclusive access to `{self.type_name}`, it is already in use"


@dataclass(frozen=True)
class FutureCompleted(VmErrorKind):
    def __str__(self):
        return "Future has already been awaited"


@dataclass(frozen=True)
class MissingFunction(VmErrorKind):
    name: str

    def __str__(self):
        return f"No function `{self.name}'"


K = TypeVar("K", bound=VmErrorKind)


class VmError(UserResolvableError):
    """Virtual machine error"""

    def __init__(self, *kinds: VmErrorKind, suggested_fix: str = ""):
        if not kinds:
            raise ValueError("VmError needs at least one kind")
        self.kinds: Tuple[VmErrorKind, ...] = kinds
        super().__init__("; ".join(map(str, kinds)), suggested_fix)

    def find(self, kind: Type[K]) -> Optional[K]:
        """Get the first error kind of the given class"""
        return next((k for k in self.kinds if isinstance(k, kind)), None)

    def serialise(self) -> list:
        return [k.serialise() for k in self.kinds]

    def __repr__(self):
        return f"<VmError {list(self.kinds)!r}>"
