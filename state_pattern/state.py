"""
State definitions for stateful objects.

A subclass of State is one named behaviour of a stateful object. An instance
of that subclass is created every time the stateful object enters the state
and is bound to the stateful object and to the state instance it replaced.
"""

import inspect
import logging
import pkgutil
import weakref
from typing import Any, MutableMapping, Optional

from .exceptions import StateResolutionError

# Set up logger for this module
logger = logging.getLogger(__name__)

# Maps state tokens to live state classes, filled in as State subclasses are defined
_registry: MutableMapping[str, type["State"]] = weakref.WeakValueDictionary()


class State:
    """
    Base class for states.

    Subclasses define the handler methods the stateful object forwards to
    them, and may override ``enter`` and ``exit`` to run side effects around
    a transition.

    Example:
        >>> class On(State):
        ...     def press(self):
        ...         self.transition_to(Off)
        ...         return "off"
        ...
        >>> class Off(State):
        ...     def press(self):
        ...         self.transition_to(On)
        ...         return "on"

    The persisted token of a state is its ``state_name``. It defaults to the
    dotted module path of the class and can be pinned in the class body:

        >>> class Archived(State):
        ...     state_name = "archived"
    """

    state_name: str = "state_pattern.state.State"

    def __init_subclass__(cls, **kwargs: Any):
        """Assign the state token and register the class under it."""
        super().__init_subclass__(**kwargs)

        if "state_name" not in cls.__dict__:
            cls.state_name = f"{cls.__module__}.{cls.__qualname__}"

        existing = _registry.get(cls.state_name)
        if existing is not None and existing is not cls:
            logger.warning(
                f"State token '{cls.state_name}' re-registered: "
                f"{existing.__qualname__} replaced by {cls.__qualname__}"
            )
        _registry[cls.state_name] = cls

    def __init__(self, stateful: Any, previous_state: Optional["State"] = None):
        self._stateful = stateful
        self._previous_state = previous_state

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__} of {type(self._stateful).__qualname__}>"

    @property
    def stateful(self) -> Any:
        """The object this state belongs to."""
        return self._stateful

    @property
    def previous_state(self) -> Optional["State"]:
        """The state instance that was current before this one, if any."""
        return self._previous_state

    @classmethod
    def handler_names(cls) -> frozenset[str]:
        """
        Names of the handler methods this state class declares.

        Public callables defined on the subclass, excluding everything the
        State base class provides (lifecycle hooks and accessors) and
        nested classes.
        """
        names = set()
        for name in dir(cls):
            if name.startswith("_") or name in _STATE_BASE_NAMES:
                continue
            attr = getattr(cls, name)
            if inspect.isclass(attr) or not callable(attr):
                continue
            names.add(name)
        return frozenset(names)

    def transition_to(self, state_class: type["State"]) -> None:
        """Move the owning stateful object to another state."""
        self._stateful.transition_to(state_class)

    def enter(self) -> None:
        """Called once when this instance becomes the current state."""
        pass

    def exit(self) -> None:
        """Called once before the stateful object leaves this state."""
        pass


_STATE_BASE_NAMES = frozenset(dir(State))


def resolve_state(token: Optional[str]) -> type[State]:
    """
    Map a state token back to its state class.

    Registered tokens are looked up first. Anything else is treated as a
    dotted import path (``package.module.Host.On``).

    Args:
        token: The stored state name

    Returns:
        The State subclass the token names

    Raises:
        StateResolutionError: If the token is empty or does not name a State subclass
    """
    if not token:
        raise StateResolutionError(token, "Empty state token")

    state_class = _registry.get(token)
    if state_class is not None:
        return state_class

    try:
        resolved = pkgutil.resolve_name(token)
    except (ImportError, AttributeError, ValueError) as e:
        raise StateResolutionError(token) from e

    if not (inspect.isclass(resolved) and issubclass(resolved, State)):
        raise StateResolutionError(token, f"State token {token!r} does not name a State subclass")

    return resolved
