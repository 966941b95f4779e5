"""The `std::future` module"""

import logging

from ..machine.future import TdFuture
from ..machine.join import join
from ..machine.module import Module
from ..machine.stack import Stack
from ..machine.vm_error import ArityError, VmError

LOG = logging.getLogger(__name__)


def raw_join(stack: Stack, args: int):
    """Waits for a collection of futures to complete and joins their result.

    Examples:

        let a = async { 1 };
        let b = async { 2 };
        let (a, b) = std::future::join((a, b)).await;

    Using a list:

        let [a, b] = std::future::join([a, b]).await;

    Joining an empty collection:

        let () = std::future::join(()).await;
        let [] = std::future::join([]).await;
    """
    if args != 1:
        raise VmError(ArityError(expected=1, actual=args))

    value = stack.pop()
    LOG.debug("join %s", value)
    # Not started until someone awaits the future
    stack.push(TdFuture(join(value)))


def module() -> Module:
    """Construct the `std::future` module"""
    m = Module("std", "future")
    m.raw_function("join", args=1, is_async=True)(raw_join)
    return m
