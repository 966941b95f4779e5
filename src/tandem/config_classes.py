"""Tandem configuration data, usually stored in tandem.toml"""

from dataclasses import dataclass

# Constants
DEFAULT_STACK_LIMIT = 1024
DEFAULT_MODULES = ("std::future",)


@dataclass(unsafe_hash=True)
class RuntimeConfig:
    stack_limit: int = DEFAULT_STACK_LIMIT
    modules: tuple = DEFAULT_MODULES
    probe: bool = True

    def __post_init__(self):
        # lists are not hashable, and Config must be hashable
        self.modules = tuple(self.modules)
        if not all(isinstance(m, str) for m in self.modules):
            raise ValueError(f"modules must be names, not {self.modules!r}")
        if self.stack_limit is not None:
            # bool is an int subclass
            if type(self.stack_limit) is not int:
                raise ValueError(f"stack_limit must be an integer, not {self.stack_limit!r}")
            if self.stack_limit < 1:
                raise ValueError(f"stack_limit must be positive, not {self.stack_limit}")
        if not isinstance(self.probe, bool):
            raise ValueError(f"probe must be true or false, not {self.probe!r}")
