"""Test structured VM errors"""
import json

import pytest

from tandem.exceptions import TandemError, UserResolvableError
from tandem.machine.vm_error import *


def test_needs_a_kind():
    with pytest.raises(ValueError):
        VmError()


def test_composite():
    err = VmError(BadArgument(0), TypeMismatch(index=2, expected="Future", actual="Int"))
    assert isinstance(err, UserResolvableError)
    assert isinstance(err, TandemError)
    assert err.find(BadArgument).index == 0
    assert err.find(TypeMismatch).index == 2
    assert err.find(ArityError) is None
    assert "Bad argument #0" in str(err)
    assert "Expected `Future`, but found `Int` (at #2)" in str(err)


def test_kinds_compare_by_value():
    assert ArityError(expected=1, actual=2) == ArityError(expected=1, actual=2)
    assert TypeMismatch(0, "Future", "Int") != TypeMismatch(1, "Future", "Int")


def test_serialise():
    err = VmError(ArityError(expected=1, actual=0))
    data = json.loads(json.dumps(err.serialise()))
    assert data == [dict(kind="ArityError", expected=1, actual=0)]


def test_message():
    err = VmError(MissingFunction("std::nope"), suggested_fix="Check the name")
    assert err.msg == "No function `std::nope'"
    assert err.suggested_fix == "Check the name"
    assert str(err).startswith("Virtual machine error: No function")
