"""Modules of built-in functions

Built-ins use a raw calling convention: the function is called with the
VM's argument Stack and the number of arguments the caller pushed. It must
pop exactly that many values and push exactly one result. Async built-ins
push a TdFuture and return straight away; the work happens when the future
is awaited.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from ..exceptions import ContextError
from .stack import Stack

LOG = logging.getLogger(__name__)

RawHandler = Callable[[Stack, int], None]


@dataclass(frozen=True)
class RawFunction:
    """A built-in function and its metadata"""

    item: Tuple[str, ...]
    name: str
    handler: RawHandler = field(compare=False)
    args: Optional[int] = None
    is_async: bool = False
    docs: str = ""

    @property
    def path(self) -> str:
        return "::".join(self.item + (self.name,))

    def __call__(self, stack: Stack, args: int):
        self.handler(stack, args)


class Module:
    """A named collection of built-in functions, e.g. std::future"""

    def __init__(self, *item: str):
        if not item:
            raise ContextError("A module needs a name")
        self.item = tuple(item)
        self.functions: Dict[str, RawFunction] = {}

    @property
    def name(self) -> str:
        return "::".join(self.item)

    def raw_function(self, name: str, *, args: Optional[int] = None, is_async: bool = False):
        """Register a raw built-in. The handler's docstring becomes its docs."""

        def _register(handler: RawHandler) -> RawHandler:
            if name in self.functions:
                raise ContextError(f"{self.name}::{name} is already registered")
            self.functions[name] = RawFunction(
                item=self.item,
                name=name,
                handler=handler,
                args=args,
                is_async=is_async,
                docs=inspect.getdoc(handler) or "",
            )
            LOG.debug("Registered %s::%s", self.name, name)
            return handler

        return _register

    def __iter__(self):
        return iter(self.functions.values())

    def __repr__(self):
        return f"<Module {self.name} ({len(self.functions)} functions)>"
