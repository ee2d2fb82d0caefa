"""
Forwarding of state handlers onto stateful classes.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable

from .exceptions import UnresolvedHandlerError
from .state import State


@dataclass(frozen=True)
class StateMachineDefinition:
    """
    Per-class description of a state machine.

    Built once when a stateful class declares its initial state. The handler
    set comes from the initial state class only; handlers that only other
    states define are not forwarded.
    """

    initial_state: type[State]
    handler_names: frozenset[str]

    @classmethod
    def for_initial_state(cls, state_class: type[State]) -> "StateMachineDefinition":
        """
        Build the definition for a given initial state.

        Raises:
            TypeError: If state_class is not a State subclass
        """
        if not (inspect.isclass(state_class) and issubclass(state_class, State)):
            raise TypeError(f"Initial state must be a State subclass, got {state_class!r}")
        return cls(initial_state=state_class, handler_names=state_class.handler_names())


class DelegatedHandler:
    """Descriptor forwarding a handler call to the owner's current state."""

    def __init__(self, name: str):
        self.name = name

    def __set_name__(self, owner: type, name: str):
        self.name = name

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self

        def forward(*args: Any, **kwargs: Any) -> Any:
            return self.dispatch(instance, *args, **kwargs)

        forward.__name__ = self.name
        forward.__qualname__ = f"{owner.__qualname__}.{self.name}"
        return forward

    def dispatch(self, instance: Any, *args: Any, **kwargs: Any) -> Any:
        """Call the handler on the instance's current state and return its result."""
        state = instance.current_state
        handler: Callable[..., Any] = getattr(state, self.name, None)  # type: ignore[assignment]
        if handler is None or not callable(handler):
            raise UnresolvedHandlerError(self.name, state)
        return handler(*args, **kwargs)

    def __repr__(self) -> str:
        return f"DelegatedHandler({self.name!r})"


def install_handlers(cls: type, definition: StateMachineDefinition) -> list[str]:
    """
    Install a DelegatedHandler on cls for every handler in the definition.

    Attributes defined in the body of cls itself are left alone.

    Returns:
        Names of the handlers that were installed
    """
    installed = []
    for name in sorted(definition.handler_names):
        current = cls.__dict__.get(name)
        if current is not None and not isinstance(current, DelegatedHandler):
            continue
        setattr(cls, name, DelegatedHandler(name))
        installed.append(name)
    return installed
