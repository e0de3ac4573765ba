## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class AjisaiError(Exception):
    kind = "Error"

    def __init__(self, message: str = "", *, word=None, stack=None):
        """Base class for all errors raised by the engine."""
        super().__init__(message)
        self.word: str = word
        self.stack: list = stack


class AjisaiParseError(AjisaiError):
    kind = "ParseError"

    def __init__(self, reason, *, line=None, column=None, token=None):
        super().__init__(reason)
        self.reason = reason
        self.line = line
        self.column = column
        self.token = token


class AjisaiStackUnderflow(AjisaiError, IndexError):
    kind = "StackUnderflow"

    def __init__(self, message: str = "", *, needed: int = 0, available: int = 0, word=None):
        super().__init__(message, word=word)
        self.needed = needed
        self.available = available


class AjisaiTypeError(AjisaiError, TypeError):
    """Runtime type problem found by checking values on the stack at the point of use."""
    kind = "TypeError"

    def __init__(self, message: str = "", *, operation=None, expected=None):
        super().__init__(message, word=operation)
        self.operation = operation
        self.expected = expected


class AjisaiUnknownWord(AjisaiError, NameError):
    kind = "UnknownWord"

    def __init__(self, message: str = "", *, name=None):
        super().__init__(message, word=name)
        self.name = name


class AjisaiUnknownBuiltin(AjisaiUnknownWord):
    kind = "UnknownBuiltin"


class AjisaiDivisionByZero(AjisaiError, ZeroDivisionError):
    kind = "DivisionByZero"


class AjisaiIndexError(AjisaiError, IndexError):
    kind = "IndexOutOfBounds"

    def __init__(self, message: str = "", *, index=None, length=None, word=None):
        super().__init__(message, word=word)
        self.index = index
        self.length = length


class AjisaiLengthMismatch(AjisaiError, ValueError):
    kind = "LengthMismatch"

    def __init__(self, message: str = "", *, lengths=(), word=None):
        super().__init__(message, word=word)
        self.lengths = tuple(lengths)


class AjisaiDependencyError(AjisaiError, RuntimeError):
    """A word cannot be removed or replaced while other words still call it."""
    kind = "DependencyViolation"

    def __init__(self, message: str = "", *, word=None, dependents=()):
        super().__init__(message, word=word)
        self.dependents = tuple(sorted(dependents))


class AjisaiRedefineBuiltin(AjisaiError, NameError):
    kind = "RedefineBuiltin"


class AjisaiDeleteBuiltin(AjisaiRedefineBuiltin):
    kind = "DeleteBuiltin"


class AjisaiWordNotFound(AjisaiError, KeyError):
    kind = "WordNotFound"

    def __str__(self):
        # KeyError would quote the message otherwise.
        return Exception.__str__(self)


class AjisaiLoopLimit(AjisaiError, RuntimeError):
    kind = "LoopLimitExceeded"

    def __init__(self, message: str = "", *, limit: int = 0, word=None):
        super().__init__(message, word=word)
        self.limit = limit


class AjisaiRecursionLimit(AjisaiError, RecursionError):
    kind = "RecursionLimitExceeded"

    def __init__(self, message: str = "", *, limit: int = 0, word=None):
        super().__init__(message, word=word)
        self.limit = limit


class AjisaiRegisterEmpty(AjisaiError, LookupError):
    kind = "RegisterEmpty"
