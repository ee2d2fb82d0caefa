"""
State pattern for Python objects.

A stateful object delegates its handler methods to one of several
interchangeable state objects and switches between them at runtime,
replacing flag checks with polymorphic dispatch. States get enter/exit
hooks around every transition and keep a reference to the state they
replaced.

Persistence of the current state on pydantic records lives in
``state_pattern.records``.
"""

from .delegation import DelegatedHandler, StateMachineDefinition
from .exceptions import (
    InitialStateNotDeclaredError,
    StatePatternError,
    StateResolutionError,
    UnresolvedHandlerError,
)
from .hooks import on_state_change
from .state import State, resolve_state
from .stateful import Stateful

__version__ = "0.1.0"
__author__ = "State Pattern Contributors"
__license__ = "MIT"

__all__ = [
    "State",
    "Stateful",
    "on_state_change",
    "resolve_state",
    "StateMachineDefinition",
    "DelegatedHandler",
    "StatePatternError",
    "UnresolvedHandlerError",
    "StateResolutionError",
    "InitialStateNotDeclaredError",
]
