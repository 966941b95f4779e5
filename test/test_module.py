"""Test modules, contexts and std::future metadata"""
import pytest

from tandem.exceptions import ContextError, UserResolvableError
from tandem.machine.context import Context, MissingModule
from tandem.machine.module import Module, RawFunction
from tandem.machine.stack import Stack
from tandem.machine.types import TdInt
from tandem.machine.vm_error import MissingFunction, VmError
from tandem.modules import STD_MODULES
from tandem.modules import future as std_future


def make_module():
    m = Module("test", "maths")

    @m.raw_function("double", args=1)
    def double(stack, args):
        """Double a number"""
        stack.push(TdInt(stack.pop() * 2))

    return m


def test_raw_function_metadata():
    m = make_module()
    fn = m.functions["double"]
    assert isinstance(fn, RawFunction)
    assert fn.path == "test::maths::double"
    assert fn.args == 1
    assert not fn.is_async
    assert fn.docs == "Double a number"


def test_raw_function_call():
    fn = make_module().functions["double"]
    stack = Stack([TdInt(4)])
    fn(stack, 1)
    assert stack.pop() == TdInt(8)


def test_duplicate_in_module():
    m = make_module()
    with pytest.raises(ContextError):
        m.raw_function("double")(lambda stack, args: None)


def test_module_needs_name():
    with pytest.raises(ContextError):
        Module()


def test_context_lookup():
    ctx = Context()
    ctx.install(make_module())
    assert "test::maths::double" in ctx
    assert ctx.lookup("test::maths::double").name == "double"

    with pytest.raises(VmError) as exc:
        ctx.lookup("test::maths::triple")
    assert exc.value.find(MissingFunction).name == "test::maths::triple"


def test_context_conflict():
    ctx = Context()
    ctx.install(make_module())
    with pytest.raises(ContextError):
        ctx.install(make_module())
    assert len(ctx.modules) == 1


def test_std_future_metadata():
    m = std_future.module()
    assert m.name == "std::future"
    join = m.functions["join"]
    assert join.path == "std::future::join"
    assert join.args == 1
    assert join.is_async
    assert "Waits for a collection of futures" in join.docs
    assert "std::future::join(()).await" in join.docs


def test_with_modules():
    ctx = Context.with_modules(["std::future"])
    assert "std::future::join" in ctx
    assert set(STD_MODULES) == {"std::future"}


def test_with_unknown_module():
    with pytest.raises(MissingModule) as exc:
        Context.with_modules(["std::nope"])
    assert isinstance(exc.value, UserResolvableError)
    assert "std::future" in exc.value.suggested_fix


def test_any_arity_by_default():
    m = Module("test")
    m.raw_function("anything")(lambda stack, args: None)
    assert m.functions["anything"].args is None
