"""Dynamic value types

Every value the machine handles is a TdType. The set of variants is closed:
collections (TdEmpty, TdTuple, TdList, TdHash), futures (see future.py) and
atomic or literal data.

Code that needs a particular capability asks for it with as_tuple(),
as_list() or as_future(), which return None when the value doesn't have it,
rather than switching on the concrete class.
"""

from collections import UserDict, UserList
from typing import Optional, Sequence


class TdType:
    """Base class"""

    # Name reported in type errors. Defaults to the class name without "Td".
    tdname = None

    @property
    def type_name(self) -> str:
        return self.tdname or type(self).__name__[2:]

    def as_tuple(self) -> Optional[Sequence["TdType"]]:
        """The elements of this value, if it is tuple-shaped"""
        return None

    def as_list(self) -> Optional[Sequence["TdType"]]:
        """The elements of this value, if it is list-shaped"""
        return None

    def as_future(self):
        """The future handle, if this value is a future"""
        return None

    def __repr__(self):
        return f"<{type(self).__name__}>"


### Atomics


class TdAtomic(TdType):
    """Atomic (singleton) types"""

    def __eq__(self, other):
        return type(self) == type(other)

    def __hash__(self):
        return hash(type(self).__name__)


class TdEmpty(TdAtomic):
    """The empty tuple, ()"""

    tdname = "Tuple"

    def as_tuple(self):
        return ()

    def __repr__(self):
        return "<TdEmpty ()>"


class TdTrue(TdAtomic):
    """Represent True"""

    tdname = "Bool"


class TdFalse(TdAtomic):
    """Represent False"""

    tdname = "Bool"


class TdNull(TdAtomic):
    """Represent Null (None)"""


### Literals


class TdLiteral(TdType):
    """A literal data which has an underlying Python type"""

    def __init__(self, value):
        # Restrict to JSON literals (and disallow subclasses of them)
        if type(value) not in (str, float, int):
            raise ValueError(value, type(value))
        self.value = value

    def __repr__(self):
        kind = type(self).__name__
        return f"<{kind} {self.value}>"


class TdFloat(float, TdLiteral):
    pass


class TdInt(int, TdLiteral):
    pass


class TdString(str, TdLiteral):
    pass


### Collections


class TdTuple(tuple, TdType):
    """A fixed-length, immutable sequence of values"""

    def as_tuple(self):
        return self

    def __repr__(self):
        items = ", ".join(map(repr, self))
        return f"<TdTuple ({items})>"


class TdList(UserList, TdType):
    """A growable sequence of values"""

    def as_list(self):
        return self.data

    def __repr__(self):
        return f"<TdList {self.data!r}>"


class TdHash(UserDict, TdType):
    def __repr__(self):
        return f"<TdHash {self.data!r}>"


### Type Conversion


def py_list_to_td(lst: list) -> TdList:
    """Recursively convert list to TdList"""
    return TdList([to_tandem_type(x) for x in lst])


def py_tuple_to_td(tup: tuple) -> TdType:
    """Recursively convert tuple to TdTuple, or TdEmpty if it has no elements"""
    if not tup:
        return TdEmpty()
    return TdTuple(to_tandem_type(x) for x in tup)


def py_dict_to_td(dct: dict) -> TdHash:
    """Recursively convert dict to TdHash"""
    return TdHash({to_tandem_type(k): to_tandem_type(v) for k, v in dct.items()})


PY_TO_TD = {
    int: TdInt,
    float: TdFloat,
    str: TdString,
    list: py_list_to_td,
    tuple: py_tuple_to_td,
    dict: py_dict_to_td,
}


TD_TO_PY = {
    TdNull: lambda _: None,
    TdTrue: lambda _: True,
    TdFalse: lambda _: False,
    TdEmpty: lambda _: (),
    TdInt: int,
    TdFloat: float,
    TdString: str,
    TdTuple: lambda tup: tuple(to_py_type(v) for v in tup),
    TdList: lambda lst: [to_py_type(v) for v in lst],
    TdHash: lambda hsh: {to_py_type(k): to_py_type(v) for k, v in hsh.items()},
}


def to_tandem_type(py_val) -> TdType:
    if isinstance(py_val, TdType):
        return py_val
    elif py_val is None:
        return TdNull()
    elif py_val is True:
        return TdTrue()
    elif py_val is False:
        return TdFalse()

    try:
        return PY_TO_TD[type(py_val)](py_val)
    except KeyError:
        raise TypeError(f"Can't convert {type(py_val)} to a Tandem type")


def to_py_type(tandem_val: TdType):
    try:
        return TD_TO_PY[type(tandem_val)](tandem_val)
    except KeyError:
        raise TypeError(f"Can't convert {type(tandem_val)} to a Python type")
