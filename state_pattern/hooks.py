"""
Hook markers shared by stateful classes and records.
"""

from typing import Callable, Any, TypeVar

F = TypeVar('F', bound=Callable[..., Any])


def on_state_change(func: F) -> F:
    """
    Decorator to mark a method as a state change hook.

    Called with the resulting current state after every set_state call,
    including calls that leave the current state unchanged.

    Example:
        >>> class AuditedDoor(Stateful, initial_state=Closed):
        ...     @on_state_change
        ...     def record(self, state):
        ...         audit_log.append(state.state_name)
    """
    setattr(func, '_is_state_change_hook', True)  # type: ignore[attr-defined]
    return func


def collect_hooks(cls: type, marker: str) -> list[Callable[..., Any]]:
    """
    Collect the methods of cls carrying a hook marker attribute.

    Base class hooks come before subclass hooks, and hooks within a class
    keep their definition order. A hook overridden by an unmarked method in
    a subclass is dropped.
    """
    hooks = []
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if name.startswith('__') or not callable(attr):
                continue
            if not getattr(attr, marker, False):
                continue
            if _resolve_attribute(cls, name) is attr and attr not in hooks:
                hooks.append(attr)
    return hooks


def _resolve_attribute(cls: type, name: str) -> Any:
    """Find the class dict entry that attribute lookup on cls would use."""
    for klass in cls.__mro__:
        if name in vars(klass):
            return vars(klass)[name]
    return None
