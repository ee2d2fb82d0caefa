"""
Records whose current state is persisted.

The current state's token is written to a record field every time the state
is set, and read back to restore the state whenever a record is constructed
or copied.
"""

import inspect
import logging
from typing import Any, ClassVar, Mapping, Optional

from pydantic import BaseModel, PrivateAttr, model_validator

from state_pattern.exceptions import StateResolutionError
from state_pattern.hooks import on_state_change
from state_pattern.records.base import Record
from state_pattern.records.hooks import after_initialize
from state_pattern.state import State, resolve_state
from state_pattern.stateful import Stateful

# Set up logger for this module
logger = logging.getLogger(__name__)


class StatefulRecord(Stateful, Record):
    """
    Record with a persisted current state.

    Example:
        >>> class Button(StatefulRecord, model_backend=InMemoryBackend()):
        ...     id: str = Field(primary_key=True)
        ...
        ...     class On(State):
        ...         def press(self):
        ...             self.transition_to(Button.Off)
        ...             return "off"
        ...
        ...     class Off(State):
        ...         def press(self):
        ...             self.transition_to(Button.On)
        ...             return "on"
        ...
        >>> Button.set_initial_state(Button.Off)
        >>> button = Button.create(id="1")
        >>> button.state == Button.Off.state_name
        True
        >>> button.press()
        'on'
        >>> button.save()

        The token can be stored in another field:
        >>> class Switch(Button, state_attribute="position"):
        ...     position: Optional[str] = None
    """

    # Name of the field holding the state token
    state_attribute: ClassVar[str] = "state"

    state: Optional[str] = None

    _current_state_instance: Optional[State] = PrivateAttr(default=None)

    def __init_subclass__(cls, state_attribute: Optional[str] = None, **kwargs: Any):
        """
        Args:
            state_attribute: Optional token field name (alternative to set_state_attribute)
            **kwargs: Additional arguments passed to parent
        """
        super().__init_subclass__(**kwargs)

        if state_attribute is not None:
            cls.state_attribute = state_attribute

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        """Check the token field once Pydantic has collected the fields."""
        super().__pydantic_init_subclass__(**kwargs)
        cls._check_state_attribute(cls.state_attribute)

    @classmethod
    def _check_state_attribute(cls, name: str) -> None:
        if name not in cls.model_fields:
            raise TypeError(
                f"{cls.__name__}.state_attribute is '{name}' but {cls.__name__} has no field named '{name}'"
            )

    @classmethod
    def set_state_attribute(cls, name: str) -> None:
        """
        Store the state token in another field.

        Raises:
            TypeError: If the record has no field with that name
        """
        cls._check_state_attribute(name)
        cls.state_attribute = name

    @model_validator(mode="before")
    @classmethod
    def _accept_current_state(cls, data: Any) -> Any:
        """Allow Button(current_state=...) with a state class or token."""
        if isinstance(data, dict) and "current_state" in data:
            data = dict(data)
            value = data.pop("current_state")
            if inspect.isclass(value) and issubclass(value, State):
                value = value.state_name
            data[cls.state_attribute] = value
        return data

    def get_state_token(self) -> Optional[str]:
        """Read the stored state token."""
        return getattr(self, self.__class__.state_attribute)

    def set_state_token(self, token: Optional[str]) -> None:
        """Write the state token without changing the current state."""
        setattr(self, self.__class__.state_attribute, token)

    @on_state_change
    def _write_state_token(self, state: State) -> None:
        """Keep the token field in step with the current state."""
        self.set_state_token(state.state_name)

    @after_initialize
    def restore_state(self) -> None:
        """
        Set the current state from the stored token.

        A record with no stored token enters the initial state, running its
        enter hook. A stored token is restored without running any hook, and
        falls back to the initial state when it cannot be resolved.
        """
        state_class = self.initial_state_class()
        token = self.get_state_token()

        if not token:
            logger.debug(f"{self.__class__.__name__}: entering initial state {state_class.__qualname__}")
            self.enter_state(state_class)
            return

        try:
            state_class = resolve_state(token)
        except StateResolutionError as e:
            logger.warning(
                f"{self.__class__.__name__}: {e}, falling back to {state_class.__qualname__}"
            )

        self.set_state(state_class)

    def _rebind_state(self) -> None:
        """Give a copied record its own state instance, restored from its token."""
        self._current_state_instance = None
        self.restore_state()

    def __copy__(self) -> "StatefulRecord":
        copied = super().__copy__()
        copied._rebind_state()
        return copied

    def __deepcopy__(self, memo: Optional[dict[int, Any]] = None) -> "StatefulRecord":
        copied = super().__deepcopy__(memo)
        copied._rebind_state()
        return copied

    def model_copy(self, *, update: Optional[Mapping[str, Any]] = None, deep: bool = False) -> "StatefulRecord":
        """Copy the record; the copy's state is restored from its own token."""
        copied = super().model_copy(update=update, deep=deep)
        copied._rebind_state()
        return copied

    def __eq__(self, other: Any) -> bool:
        """Records are equal when they are of the same class and hold the same data."""
        if not isinstance(other, BaseModel):
            return NotImplemented
        return type(self) is type(other) and self.model_dump() == other.model_dump()
