

class KappaError(Exception):
    """ Base class for all Kappa errors"""
    pass


class KappaSyntaxError(KappaError):
    """ Raised by the reader when the input is malformed"""

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)
        self.line = line
        self.column = column


class KappaUnboundSymbol(KappaError):
    """ Raised when a symbol is used before it is bound"""
    pass


class KappaArityError(KappaError):
    """ Raised when the number of arguments passed to a function is incorrect"""


class KappaTypeError(KappaError):
    """ Raised when the types of arguments passed to a function are incorrect"""


class KappaInvalidSymbol(KappaTypeError):
    """ Raised when a symbol is required but something else was given"""


class KappaApplicationError(KappaError):
    """ Raised when a value cannot be applied, or a map lookup cannot be resolved"""


class KappaArithmeticError(KappaError):
    """ Raised on integer division or modulo by zero"""


class KappaNativeError(KappaError):
    """ Raised when a native host function reports an error"""


class KappaRecursionError(KappaError):
    """ Raised when evaluation exhausts the host call stack"""
