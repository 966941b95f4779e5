"""The Tandem machine: values, futures and the calling convention"""

from .context import Context
from .machine import Vm
from .stack import Stack
