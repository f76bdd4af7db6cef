"""
Exception hierarchy for the engine.

Boundary errors (bad input from a caller) subclass ValueError; broken
preconditions inside the engine subclass AssertionError and are not meant
to be caught.
"""


class EngineError(Exception):
    """Base class for everything the engine raises on purpose."""


class InvalidIndex(EngineError, ValueError):
    """A move targets a cell outside 0-8 or a cell that is already marked."""


class InvalidBoard(EngineError, ValueError):
    """A board or its text form is malformed."""


class InvalidConfig(EngineError, ValueError):
    pass


class InvariantViolation(EngineError, AssertionError):
    """The engine was called in a state legal play can never produce."""


class GameOver(EngineError):
    pass


class NotYourTurn(EngineError):
    pass
