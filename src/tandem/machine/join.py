"""Joining a collection of futures

join() takes one value, an empty tuple, a tuple or a list whose elements are
all futures, and waits for every future to finish. The results come back in
the positions of the futures that produced them, wrapped in the same kind of
collection, whatever order the futures actually finished in.

The stages are:

1. classify: what shape is the input?
2. coerce:   take exclusive access to every element's future (all of them,
             before anything runs)
3. join_all: run them concurrently, writing each result into its own slot
4. reconstruct: wrap the slots in the input's shape

The first failure aborts the whole join. Siblings still running are
cancelled and nothing partial is returned.
"""

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from ..exceptions import UnexpectedError
from .future import FutureGuard
from .types import TdEmpty, TdList, TdTuple, TdType
from .vm_error import BadArgument, TypeMismatch, VmError

LOG = logging.getLogger(__name__)

EXPECTED_COLLECTION = "tuple or list of futures"
EXPECTED_ELEMENT = "Future"


class ShapeKind(enum.Enum):
    EMPTY = "empty"
    TUPLE = "tuple"
    LIST = "list"


@dataclass(frozen=True)
class Shape:
    kind: ShapeKind
    items: Sequence[TdType]

    def __len__(self):
        return len(self.items)


def classify(value: TdType) -> Shape:
    """Work out the shape of the value to join"""
    items = value.as_tuple()
    if items is not None:
        kind = ShapeKind.TUPLE if len(items) else ShapeKind.EMPTY
        return Shape(kind, tuple(items))

    items = value.as_list()
    if items is not None:
        return Shape(ShapeKind.LIST, tuple(items))

    raise VmError(
        BadArgument(0),
        TypeMismatch(index=0, expected=EXPECTED_COLLECTION, actual=value.type_name),
    )


def coerce(items: Sequence[TdType]) -> List[FutureGuard]:
    """Take exclusive access to the future in each element

    Either every element is taken, or none are: on failure, any access
    already taken is given back, and the futures are never polled.
    """
    guards = []
    try:
        for index, item in enumerate(items):
            future = item.as_future()
            if future is None:
                raise VmError(
                    BadArgument(0),
                    TypeMismatch(
                        index=index, expected=EXPECTED_ELEMENT, actual=item.type_name
                    ),
                )
            guards.append(future.borrow_mut())
    except VmError:
        for guard in guards:
            guard.release()
        raise
    return guards


class JoinResult:
    """Fixed-size, write-once result slots"""

    _UNSET = object()

    def __init__(self, size: int):
        self._slots = [self._UNSET] * size

    def write(self, index: int, value: TdType):
        if self._slots[index] is not self._UNSET:
            raise UnexpectedError(f"Join result slot {index} written twice")
        self._slots[index] = value

    def missing(self) -> List[int]:
        return [i for i, v in enumerate(self._slots) if v is self._UNSET]

    def complete(self) -> List[TdType]:
        missing = self.missing()
        if missing:
            raise UnexpectedError(f"Join finished with unwritten slots {missing}")
        return list(self._slots)

    def __len__(self):
        return len(self._slots)


async def _indexed(index: int, guard: FutureGuard):
    return index, await guard.resolve()


async def join_all(guards: Sequence[FutureGuard]) -> List[TdType]:
    """Resolve every guarded future concurrently, collecting results by index"""
    results = JoinResult(len(guards))
    if not guards:
        return results.complete()

    # The index of each task is fixed here, and never changes.
    indices: Dict[asyncio.Task, int] = {}
    for index, guard in enumerate(guards):
        indices[asyncio.ensure_future(_indexed(index, guard))] = index
    LOG.debug("Joining %d futures", len(indices))

    waiting = set(indices)
    try:
        while waiting:
            done, waiting = await asyncio.wait(
                waiting, return_when=asyncio.FIRST_COMPLETED
            )
            # Look at every exception so that none go unretrieved
            failed = sorted(
                (t for t in done if t.cancelled() or t.exception() is not None),
                key=indices.get,
            )
            if failed:
                first = failed[0]
                LOG.info(
                    "Join aborted: future %d failed, dropping %d still running",
                    indices[first],
                    len(waiting),
                )
                if first.cancelled():
                    raise asyncio.CancelledError()
                raise first.exception()

            for task in done:
                index, value = task.result()
                if index != indices[task]:
                    raise UnexpectedError(f"Task for slot {indices[task]} reported {index}")
                LOG.debug("Future %d completed", index)
                results.write(index, value)
    finally:
        for task in waiting:
            task.cancel()
        for guard in guards:
            guard.release()

    return results.complete()


def reconstruct(kind: ShapeKind, values: List[TdType]) -> TdType:
    """Wrap the joined values in the shape of the original collection"""
    if kind is ShapeKind.EMPTY:
        return TdEmpty()
    elif kind is ShapeKind.TUPLE:
        return TdTuple(values)
    elif kind is ShapeKind.LIST:
        return TdList(values)
    raise UnexpectedError(f"Can't reconstruct {kind}")


async def join(value: TdType) -> TdType:
    """Wait for a collection of futures and join their results"""
    shape = classify(value)
    if not shape.items:
        # Nothing to wait for, so no suspension point either
        return reconstruct(shape.kind, [])

    guards = coerce(shape.items)
    values = await join_all(guards)
    return reconstruct(shape.kind, values)
