from mal import LispValue


class MalError(Exception):
    """ Base class for all mal errors"""
    pass


class MalSyntaxError(MalError):
    """ Raised by the reader on malformed source text"""


class MalUnresolvedSymbol(MalError):
    """ Raised when a symbol is not bound in any frame of the environment chain"""


class MalArityError(MalError):
    """ Raised when a special form or function receives the wrong number of arguments"""


class MalTypeError(MalError):
    """ Raised when a special form or builtin receives an argument of the wrong type"""


class MalException(MalError):
    """Raised by the `throw` builtin; carries an arbitrary mal value."""

    def __init__(self, value: LispValue):
        super().__init__(f"MalException(value={value!r})")
        self.value: LispValue = value
