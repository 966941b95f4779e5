"""The set of built-in functions available to a VM"""

import logging
from typing import Dict, Iterable, List

from ..exceptions import ContextError, UserResolvableError
from .module import Module, RawFunction
from .vm_error import MissingFunction, VmError

LOG = logging.getLogger(__name__)


class MissingModule(UserResolvableError):
    """Unknown module"""


class Context:
    """Installed modules, with their functions indexed by path"""

    def __init__(self):
        self.modules: List[Module] = []
        self.functions: Dict[str, RawFunction] = {}

    @classmethod
    def with_modules(cls, names: Iterable[str]) -> "Context":
        """Create a context with the named standard modules installed"""
        from ..modules import STD_MODULES

        ctx = cls()
        for name in names:
            try:
                factory = STD_MODULES[name]
            except KeyError:
                raise MissingModule(
                    f"`{name}'", f"Available modules: {', '.join(sorted(STD_MODULES))}"
                ) from None
            ctx.install(factory())
        return ctx

    def install(self, module: Module):
        for fn in module:
            if fn.path in self.functions:
                raise ContextError(f"Conflicting function `{fn.path}'")
        for fn in module:
            self.functions[fn.path] = fn
        self.modules.append(module)
        LOG.info("Installed %s", module.name)

    def lookup(self, path: str) -> RawFunction:
        try:
            return self.functions[path]
        except KeyError:
            raise VmError(MissingFunction(path)) from None

    def __contains__(self, path):
        return path in self.functions
