
class KappaError(Exception):
    """ Base class for all kappa errors"""

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))

class KappaSyntaxError(KappaError):
    """ Raised when the program text cannot be parsed.

    `remaining` is the unconsumed input at the point the failing parser gave up,
    which is enough to recover the line and column of the failure.
    """

    def __init__(self, message: str, remaining: str = ""):
        super().__init__(message, remaining)
        self.message = message
        self.remaining = remaining

    def __str__(self) -> str:
        return self.message

class KappaUnboundSymbol(KappaError):
    """ Raised when a variable is used before it is bound"""

class KappaTypeError(KappaError):
    """ Raised when a value of the wrong type reaches a call, builtin or branch"""

class KappaFieldError(KappaError):
    """ Raised when an object does not have the requested field"""
