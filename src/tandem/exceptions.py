"""Top level Tandem exceptions

Two families: errors the user can do something about (a bad argument to a
built-in, a broken config file), and errors that indicate a bug in Tandem
itself.
"""


class TandemError(Exception):
    """Base for all Tandem errors"""


class UserResolvableError(TandemError):
    """An error which the user can probably solve"""

    def __init__(self, msg: str, suggested_fix: str = ""):
        super().__init__(msg)
        self.msg = msg
        self.suggested_fix = suggested_fix

    def __str__(self):
        head = self.msg if type(self) == UserResolvableError else f"{self.__doc__}: {self.msg}"
        if self.suggested_fix:
            return f"{head}\n\n{self.suggested_fix}"
        return head


class UnexpectedError(TandemError):
    """An error which is unexpected and with no obvious solution"""

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg

    def __str__(self):
        if type(self) == UnexpectedError:
            return self.msg
        else:
            return f"{self.__doc__}:\n{self.msg}"


class ContextError(UnexpectedError):
    """Bad module or function registration"""
