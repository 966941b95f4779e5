"""The argument stack

Built-in functions receive their arguments on the stack and leave their
result there (see module.py for the calling convention).
"""

from typing import Optional

from .types import TdType
from .vm_error import StackOverflow, StackUnderflow, VmError


class Stack:
    """Data stack shared by a VM and the functions it calls"""

    def __init__(self, data=(), limit: Optional[int] = None):
        self.limit = limit
        self._ds = []
        for val in data:
            self.push(val)

    def push(self, val: TdType):
        if not isinstance(val, TdType):
            raise TypeError(f"Cannot store {val} ({type(val)})")
        if self.limit is not None and len(self._ds) >= self.limit:
            raise VmError(StackOverflow(self.limit))
        self._ds.append(val)

    def pop(self) -> TdType:
        try:
            return self._ds.pop()
        except IndexError:
            raise VmError(StackUnderflow()) from None

    def peek(self, offset: int) -> TdType:
        """Peek at the Nth value from the top of the stack (0-indexed)"""
        if offset < 0:
            raise ValueError(f"Can't peek at negative offset {offset}")
        try:
            return self._ds[-(offset + 1)]
        except IndexError:
            raise VmError(StackUnderflow()) from None

    def truncate(self, depth: int):
        """Drop everything above depth"""
        del self._ds[depth:]

    def __len__(self):
        return len(self._ds)

    def __str__(self):
        return f"<Stack {id(self)} depth={len(self._ds)}>"
