"""Exceptions raised (or returned as failure results) by the conversion core."""


class ConversionError(Exception):
    """Base class for every error of the NFA to regex conversion."""


class InvalidSelection(ConversionError):
    """The state cannot be eliminated: start, accept, unknown or already eliminated."""

    def __init__(self, state_id, reason):
        self.state_id = state_id
        self.reason = reason
        super().__init__(f"Cannot select {state_id}: {reason}")


class NoHistory(ConversionError):
    """Step back requested with nothing left to undo."""

    def __init__(self, message="Cannot step back - no previous states available"):
        super().__init__(message)


class SessionNotStarted(ConversionError):
    """An operation that needs a running conversion was called before start()."""

    def __init__(self, message="Start conversion first"):
        super().__init__(message)


class MalformedAutomaton(ConversionError):
    """The automaton breaks a structural invariant (start, accept, endpoints)."""

    def __init__(self, problems):
        if isinstance(problems, str):
            problems = [problems]
        self.problems = list(problems)
        super().__init__("Malformed automaton: " + "; ".join(self.problems))


class RegexSyntaxError(ConversionError, ValueError):
    """A regex fragment could not be parsed."""

    def __init__(self, message, text=None, position=None):
        self.text = text
        self.position = position
        if position is not None:
            message = f"{message} at position {position}"
        super().__init__(message)
