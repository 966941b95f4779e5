"""The Tandem virtual machine host

The Vm doesn't execute bytecode. It calls built-in functions through the
stack calling convention, and drives the futures they return on the running
asyncio event loop.
"""

import itertools
import logging
from typing import Optional

from .context import Context
from .probe import Probe
from .stack import Stack
from .types import TdType, to_tandem_type

LOG = logging.getLogger(__name__)

_VMIDS = itertools.count()


def shortstr(obj, maxl=20) -> str:
    """Convert an object to string and truncate to a maximum length"""
    s = str(obj)
    return (s[:maxl] + "...") if len(s) > maxl else s


class Vm:
    """Calls built-ins installed in a Context"""

    def __init__(self, context: Context, *, stack_limit: Optional[int] = None, probe=True):
        self.vmid = next(_VMIDS)
        self.context = context
        self.stack = Stack(limit=stack_limit)
        self.probe = Probe(self.vmid, enabled=probe)

    def call(self, path: str, *args) -> TdType:
        """Call a built-in and return its result

        Async built-ins return a TdFuture without doing any work; see
        async_call.
        """
        fn = self.context.lookup(path)
        depth = len(self.stack)
        self.probe.event("call", function=path, num_args=len(args))
        try:
            for arg in args:
                self.stack.push(to_tandem_type(arg))
            fn(self.stack, len(args))
            result = self.stack.pop()
        except Exception:
            self.stack.truncate(depth)
            raise

        if len(self.stack) != depth:
            LOG.warning("%s left %d values on the stack", path, len(self.stack) - depth)
            self.stack.truncate(depth)
        LOG.debug("%s returned %s", path, shortstr(result))
        return result

    async def async_call(self, path: str, *args) -> TdType:
        """Call a built-in and wait for its result"""
        return await self.wait(self.call(path, *args))

    async def wait(self, value: TdType) -> TdType:
        """Drive a future to completion. Other values are returned as-is."""
        future = value.as_future()
        if future is None:
            return value

        self.probe.event("await", future=repr(future))
        result = await future.borrow_mut().resolve()
        self.probe.event("resolved", value=shortstr(result))
        return result

    def __repr__(self):
        return f"<Vm {self.vmid}>"
