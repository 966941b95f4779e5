"""Machine futures"""

import inspect
import logging

from ..exceptions import UnexpectedError
from .types import TdType, to_tandem_type
from .vm_error import FutureCompleted, NotAccessibleMut, VmError

LOG = logging.getLogger(__name__)


class TdFuture(TdType):
    """A handle to a pending computation

    The computation is any Python awaitable (usually a coroutine). It is
    driven at most once, by whoever holds exclusive access to the future
    (see borrow_mut). Copies of the handle share the computation.
    """

    def __init__(self, awaitable):
        if not inspect.isawaitable(awaitable):
            raise TypeError(f"Can't make a future from {type(awaitable)}")
        self._awaitable = awaitable
        self._borrowed = False
        self._completed = False

    @property
    def is_completed(self) -> bool:
        return self._completed

    @property
    def is_borrowed(self) -> bool:
        return self._borrowed

    def as_future(self):
        return self

    def borrow_mut(self) -> "FutureGuard":
        """Take exclusive access to this future"""
        if self._borrowed:
            raise VmError(NotAccessibleMut(self.type_name))
        self._borrowed = True
        return FutureGuard(self)

    async def _resolve(self) -> TdType:
        if self._completed:
            raise VmError(FutureCompleted())
        self._completed = True
        LOG.debug("Resolving %s", self)
        awaitable, self._awaitable = self._awaitable, None
        return to_tandem_type(await awaitable)

    def __del__(self):
        # Nobody started the computation, and now nobody can.
        awaitable = getattr(self, "_awaitable", None)
        if inspect.iscoroutine(awaitable):
            awaitable.close()

    def __repr__(self):
        status = "completed" if self._completed else "pending"
        return f"<TdFuture {id(self)} {status}>"


class FutureGuard:
    """Exclusive access to a TdFuture

    Released after resolving, or explicitly with release() (also on leaving
    a `with` block).
    """

    def __init__(self, future: TdFuture):
        self.future = future
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self):
        if not self._released:
            self._released = True
            self.future._borrowed = False

    async def resolve(self) -> TdType:
        """Drive the future to completion and return its value"""
        if self._released:
            raise UnexpectedError(f"Access to {self.future} was already released")
        try:
            return await self.future._resolve()
        finally:
            self.release()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.release()
