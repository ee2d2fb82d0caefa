"""
Base record class.

Provides an ActiveRecord-style interface using Pydantic for validation.
"""

import logging
from typing import Any, Optional, ClassVar, Callable

from pydantic import BaseModel, ConfigDict

from state_pattern.hooks import collect_hooks
from state_pattern.records.backends import Backend, NotFoundError
from state_pattern.records.fields import is_primary_key

# Set up logger for this module
logger = logging.getLogger(__name__)


class Record(BaseModel):
    """
    Base class for persisted records.

    Example:
        >>> class Ticket(Record):
        ...     model_backend: ClassVar[Backend] = InMemoryBackend()
        ...
        ...     id: str = Field(primary_key=True)
        ...     title: str
        ...
        >>> ticket = Ticket.create(id="1", title="Broken lamp")
        >>> ticket.title = "Broken desk lamp"
        >>> ticket.save()

        Alternative syntax using class parameter:
        >>> class Ticket(Record, model_backend=InMemoryBackend()):
        ...     id: str = Field(primary_key=True)
        ...     title: str
    """

    model_config = ConfigDict(
        validate_assignment=True,  # Validate on attribute assignment
        arbitrary_types_allowed=True,  # Allow custom types
        from_attributes=True,  # Allow ORM mode
    )

    # Backend configuration
    model_backend: ClassVar[Optional[Backend]] = None

    # Track if this is a new record or loaded from the backend
    _is_persisted: bool = False

    # Hook lists (populated by __init_subclass__)
    _before_save_hooks: ClassVar[list[Callable[["Record"], None]]] = []
    _after_save_hooks: ClassVar[list[Callable[["Record"], None]]] = []
    _after_initialize_hooks: ClassVar[list[Callable[["Record"], None]]] = []
    _after_load_hooks: ClassVar[list[Callable[["Record"], None]]] = []

    def __init_subclass__(cls, model_backend: Optional[Backend] = None, **kwargs: Any):
        """
        Collect hooks from mixins when the record class is defined.

        Args:
            model_backend: Optional backend to use for this record (alternative to ClassVar)
            **kwargs: Additional arguments passed to parent
        """
        super().__init_subclass__(**kwargs)

        # Support class parameter pattern: class Ticket(Record, model_backend=InMemoryBackend())
        if model_backend is not None:
            cls.model_backend = model_backend

        cls._before_save_hooks = collect_hooks(cls, '_is_before_save_hook')
        cls._after_save_hooks = collect_hooks(cls, '_is_after_save_hook')
        cls._after_initialize_hooks = collect_hooks(cls, '_is_after_initialize_hook')
        cls._after_load_hooks = collect_hooks(cls, '_is_after_load_hook')

    def model_post_init(self, __context: Any) -> None:
        """Run after_initialize hooks once Pydantic has validated the fields."""
        for hook in self.__class__._after_initialize_hooks:
            hook(self)

    @classmethod
    def _get_backend(cls) -> Backend:
        """
        Get the backend for this record.

        Raises:
            RuntimeError: If no backend is configured
        """
        if cls.model_backend is not None:
            return cls.model_backend

        raise RuntimeError(
            f"No backend configured for {cls.__name__}. "
            f"Set {cls.__name__}.model_backend = YourBackend() or pass model_backend=YourBackend() to class definition."
        )

    @classmethod
    def primary_key_field(cls) -> Optional[str]:
        """Name of the field marked with Field(primary_key=True), if any."""
        for field_name, field_info in cls.model_fields.items():
            if is_primary_key(field_info):
                return field_name
        return None

    @classmethod
    def _from_storage(cls, data: dict[str, Any]) -> "Record":
        """Materialize a record from backend data and run after_load hooks."""
        instance = cls(**data)
        instance._is_persisted = True

        for hook in cls._after_load_hooks:
            hook(instance)

        return instance

    @classmethod
    def create(cls, **kwargs: Any) -> "Record":
        """
        Create and save a new record in one operation.

        Raises:
            ValidationError: If field validation fails
            DuplicateKeyError: If the primary key is already taken

        Example:
            >>> ticket = Ticket.create(id="1", title="Broken lamp")
        """
        instance = cls(**kwargs)
        instance.save()
        return instance

    def save(self) -> "Record":
        """
        Validate and save this record to the backend.

        Creates a new record if not persisted, otherwise updates existing.

        Callbacks:
            - Calls all @before_save methods before persisting
            - Calls all @after_save methods after persisting

        Returns:
            Self for method chaining
        """
        for hook in self.__class__._before_save_hooks:
            hook(self)

        backend = self._get_backend()
        data = self.model_dump()

        if not self._is_persisted:
            backend.create(self.__class__, data)
            self._is_persisted = True
        else:
            backend.update(self.__class__, data)

        for hook in self.__class__._after_save_hooks:
            hook(self)

        return self

    def delete(self) -> bool:
        """
        Delete this record from the backend.

        Returns:
            True if deleted successfully
        """
        deleted = self._get_backend().delete(self.__class__, self.model_dump())
        self._is_persisted = False
        return deleted

    def reload(self) -> "Record":
        """
        Load a fresh copy of this record from the backend.

        Raises:
            NotFoundError: If the record is no longer stored
        """
        pk_field = self.primary_key_field()
        if pk_field is None:
            raise ValueError(f"No primary key field defined for {self.__class__.__name__}")

        fresh = self.get(**{pk_field: getattr(self, pk_field)})
        if fresh is None:
            raise NotFoundError(f"Record not found with key: {getattr(self, pk_field)}")
        return fresh

    @classmethod
    def get(cls, **filters: Any) -> Optional["Record"]:
        """
        Get a single record by primary key or filters.

        Returns:
            Record instance, or None if not found

        Example:
            >>> ticket = Ticket.get(id="1")
        """
        data = cls._get_backend().get(cls, **filters)
        if data:
            return cls._from_storage(data)
        return None

    @classmethod
    def all(cls) -> list["Record"]:
        """Get all records of this class."""
        return [cls._from_storage(data) for data in cls._get_backend().all(cls)]

    @classmethod
    def count(cls, **filters: Any) -> int:
        """Count stored records matching filters."""
        return cls._get_backend().count(cls, **filters)
