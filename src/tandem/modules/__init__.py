"""Standard modules"""

from . import future

# Module name -> factory
STD_MODULES = {
    "std::future": future.module,
}
