"""Faults raised while searching for the fake bar."""


class FakeBarError(Exception):
    """
    Base class of all search faults.

    The weighings attribute holds the weighing log collected before the
    fault. It is empty until a search session attaches its log.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.weighings = ()


class InvariantViolation(FakeBarError):
    """The search reached an impossible state. The session must be aborted."""


class TransportTimeout(FakeBarError, TimeoutError):
    """The scale did not show a result or did not confirm a reset in time."""


class UnrecognizedSignal(FakeBarError):
    """The scale returned a result glyph or a message we cannot decode."""

    def __init__(self, message: str, signal: str):
        super().__init__(message)
        self.signal = signal


class AnswerRejected(FakeBarError):
    """The scale rejected the bar selected as fake."""

    def __init__(self, message: str, item: int):
        super().__init__(message)
        self.item = item
