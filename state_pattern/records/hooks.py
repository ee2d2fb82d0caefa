"""
Hook decorators for record lifecycle.

Hooks can be defined on the record class or on mixins; Record collects
them when the class is defined.
"""

from typing import Callable, Any, TypeVar

F = TypeVar('F', bound=Callable[..., Any])


def before_save(func: F) -> F:
    """
    Decorator to mark a method as a before_save hook.

    Called before the record is written to the backend.

    Example:
        >>> class TimestampMixin:
        ...     @before_save
        ...     def set_timestamps(self):
        ...         self.updated_at = datetime.now()
    """
    setattr(func, '_is_before_save_hook', True)  # type: ignore[attr-defined]
    return func


def after_save(func: F) -> F:
    """
    Decorator to mark a method as an after_save hook.

    Called after the record is written to the backend.
    """
    setattr(func, '_is_after_save_hook', True)  # type: ignore[attr-defined]
    return func


def after_initialize(func: F) -> F:
    """
    Decorator to mark a method as an after_initialize hook.

    Called every time a record is constructed, whether it is new or
    materialized from the backend.

    Example:
        >>> class DefaultsMixin:
        ...     @after_initialize
        ...     def fill_defaults(self):
        ...         if self.priority is None:
        ...             self.priority = 3
    """
    setattr(func, '_is_after_initialize_hook', True)  # type: ignore[attr-defined]
    return func


def after_load(func: F) -> F:
    """
    Decorator to mark a method as an after_load hook.

    Called after data is loaded from the backend and the record is
    instantiated. Runs after the after_initialize hooks.
    """
    setattr(func, '_is_after_load_hook', True)  # type: ignore[attr-defined]
    return func
