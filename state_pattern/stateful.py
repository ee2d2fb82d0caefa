"""
Stateful mixin: owns the current state, runs transitions and forwards
handler calls to the current state.
"""

import logging
from typing import Any, Callable, ClassVar, Optional, Union

from .delegation import StateMachineDefinition, install_handlers
from .exceptions import InitialStateNotDeclaredError
from .hooks import collect_hooks
from .state import State, resolve_state

# Set up logger for this module
logger = logging.getLogger(__name__)


class Stateful:
    """
    Mixin that gives a class a current state.

    Handlers declared by the initial state are available on the stateful
    object itself and are forwarded to whatever state is current when they
    are called.

    Example:
        >>> class Button(Stateful, initial_state=Off):
        ...     pass
        ...
        >>> button = Button()
        >>> button.press()   # forwarded to Off().press()
        'on'
        >>> button.current_state
        <On of Button>

        States nested in the class body are declared after the body:
        >>> class Lamp(Stateful):
        ...     class Lit(State): ...
        ...     class Dark(State): ...
        >>> Lamp.set_initial_state(Lamp.Dark)
    """

    state_machine: ClassVar[Optional[StateMachineDefinition]] = None

    # Set on first entry; read with getattr since it starts out unset
    _current_state_instance: Optional[State]

    # Hook list (populated by __init_subclass__)
    _state_change_hooks: ClassVar[list[Callable[..., None]]] = []

    def __init_subclass__(cls, initial_state: Optional[type[State]] = None, **kwargs: Any):
        """
        Collect state change hooks and declare the initial state.

        Args:
            initial_state: Optional initial state (alternative to set_initial_state)
            **kwargs: Additional arguments passed to parent
        """
        super().__init_subclass__(**kwargs)

        # Collect hooks from mixins and the current class
        cls._state_change_hooks = collect_hooks(cls, '_is_state_change_hook')

        if initial_state is not None:
            cls.set_initial_state(initial_state)

    @classmethod
    def set_initial_state(cls, state_class: type[State]) -> None:
        """
        Declare the state new instances start in.

        Computes the handler set from state_class and installs forwarding
        methods for it on this class.

        Raises:
            TypeError: If state_class is not a State subclass
        """
        definition = StateMachineDefinition.for_initial_state(state_class)
        cls.state_machine = definition
        installed = install_handlers(cls, definition)
        logger.debug(f"{cls.__qualname__} starts in {state_class.__qualname__}, forwarding {installed}")

    @classmethod
    def initial_state_class(cls) -> type[State]:
        """
        Get the declared initial state.

        Raises:
            InitialStateNotDeclaredError: If no initial state was declared
        """
        if cls.state_machine is None:
            raise InitialStateNotDeclaredError(
                f"No initial state declared for {cls.__name__}. "
                f"Pass initial_state=... to the class definition or call {cls.__name__}.set_initial_state(...)."
            )
        return cls.state_machine.initial_state

    @property
    def current_state(self) -> State:
        """The current state instance, entering the initial state on first access."""
        if getattr(self, '_current_state_instance', None) is None:
            initial = self.initial_state_class()
            logger.debug(f"{type(self).__qualname__}: entering initial state {initial.__qualname__}")
            self.enter_state(initial)
        return self._current_state_instance  # type: ignore[return-value]

    @current_state.setter
    def current_state(self, value: Union[type[State], str]) -> None:
        """Switch state without running enter/exit. Accepts a state class or token."""
        state_class = resolve_state(value) if isinstance(value, str) else value
        self.set_state(state_class)

    def set_state(self, state_class: type[State]) -> State:
        """
        Make an instance of state_class the current state.

        Does nothing if the current state is already of state_class. No
        enter or exit hooks run here.

        Returns:
            The current state instance
        """
        current: Optional[State] = getattr(self, '_current_state_instance', None)
        if current is None or type(current) is not state_class:
            current = state_class(self, current)
            self._current_state_instance = current

        for hook in type(self)._state_change_hooks:
            hook(self, current)

        return current

    def enter_state(self, state_class: type[State]) -> State:
        """Set the state and call enter() on it if a new instance was created."""
        previous = getattr(self, '_current_state_instance', None)
        state = self.set_state(state_class)
        if state is not previous:
            state.enter()
        return state

    def transition_to(self, state_class: type[State]) -> State:
        """Exit the current state, then enter state_class."""
        current = self.current_state
        current.exit()
        logger.debug(f"{type(self).__qualname__}: {type(current).__qualname__} -> {state_class.__qualname__}")
        return self.enter_state(state_class)
