"""
Exceptions raised by the state pattern engine.
"""
from typing import Any, Optional


class StatePatternError(Exception):
    """Base exception for state pattern errors."""

    pass


class UnresolvedHandlerError(StatePatternError, AttributeError):
    """Raised when a forwarded handler is not implemented by the current state."""

    def __init__(self, handler_name: str, state: Any):
        self.handler_name = handler_name
        self.state = state
        self.message = (
            f"{type(state).__qualname__} does not implement handler '{handler_name}'"
        )
        super().__init__(self.message)


class StateResolutionError(StatePatternError, LookupError):
    """Raised when a stored state token cannot be mapped to a state class."""

    def __init__(self, token: Optional[str], message: Optional[str] = None):
        self.token = token
        self.message = message or f"Cannot resolve state token: {token!r}"
        super().__init__(self.message)


class InitialStateNotDeclaredError(StatePatternError, RuntimeError):
    """Raised when a stateful class is used before its initial state is declared."""

    pass
