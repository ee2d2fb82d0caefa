"""
Storage backends for records.

Defines the backend interface and a dict-based in-memory implementation
for tests and examples.
"""

import logging
from abc import ABC, abstractmethod
from copy import deepcopy
from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from state_pattern.records.base import Record

# Set up logger for this module
logger = logging.getLogger(__name__)


class Backend(ABC):
    """
    Abstract base class for storage backends.

    Backends store plain dicts produced by ``Record.model_dump()`` and hand
    dicts back; building record instances is the record class's job.
    """

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Backend identifier."""
        pass

    @abstractmethod
    def create(self, model_class: type["Record"], data: dict[str, Any]) -> dict[str, Any]:
        """
        Create a new record in the backend.

        Returns:
            Dictionary of created record data

        Raises:
            DuplicateKeyError: If a record with the same primary key exists
        """
        pass

    @abstractmethod
    def update(self, model_class: type["Record"], data: dict[str, Any]) -> dict[str, Any]:
        """
        Update an existing record.

        Raises:
            NotFoundError: If record doesn't exist
        """
        pass

    @abstractmethod
    def get(self, model_class: type["Record"], **filters: Any) -> Optional[dict[str, Any]]:
        """
        Get a single record by primary key or other field values.

        Returns:
            Dictionary of record data, or None if not found
        """
        pass

    @abstractmethod
    def delete(self, model_class: type["Record"], data: dict[str, Any]) -> bool:
        """
        Delete a record.

        Returns:
            True if a record was deleted
        """
        pass

    @abstractmethod
    def all(self, model_class: type["Record"]) -> list[dict[str, Any]]:
        """Get the data of every stored record of a model class."""
        pass

    @abstractmethod
    def count(self, model_class: type["Record"], **filters: Any) -> int:
        """Count records matching filters."""
        pass

    @abstractmethod
    def clear(self, model_class: Optional[type["Record"]] = None) -> None:
        """Remove stored records, for one model class or all of them."""
        pass

    def get_entity_type(self, model_class: type["Record"]) -> str:
        """Name records of model_class are stored under."""
        return model_class.__name__

    def get_primary_key_value(self, model_class: type["Record"], data: dict[str, Any]) -> Any:
        """
        Get the primary key value from record data.

        Raises:
            ValueError: If the model has no primary key field
        """
        pk_field = model_class.primary_key_field()
        if pk_field is None:
            raise ValueError(f"No primary key field defined for {model_class.__name__}")
        return data[pk_field]


class InMemoryBackend(Backend):
    """
    In-memory storage backend using Python dicts.

    Stores all data in memory. Data is lost when the process ends.

    Example:
        >>> class Ticket(Record, model_backend=InMemoryBackend()):
        ...     id: str = Field(primary_key=True)
        ...     title: str
        >>>
        >>> ticket = Ticket.create(id="1", title="Broken lamp")
    """

    def __init__(self) -> None:
        # Storage: {entity_type: {pk: record_data}}
        self._storage: dict[str, dict[Any, dict[str, Any]]] = {}

    @property
    def backend_name(self) -> str:
        """Backend identifier."""
        return 'memory'

    def _get_storage(self, model_class: type["Record"]) -> dict[Any, dict[str, Any]]:
        """Get storage dict for a model class."""
        entity_type = self.get_entity_type(model_class)
        if entity_type not in self._storage:
            self._storage[entity_type] = {}
        return self._storage[entity_type]

    def create(self, model_class: type["Record"], data: dict[str, Any]) -> dict[str, Any]:
        """Create a new record in memory."""
        storage = self._get_storage(model_class)
        pk_value = self.get_primary_key_value(model_class, data)

        if pk_value in storage:
            raise DuplicateKeyError(f"Record with key {pk_value} already exists")

        storage[pk_value] = deepcopy(data)
        logger.debug(f"Created {self.get_entity_type(model_class)} {pk_value}")
        return deepcopy(data)

    def update(self, model_class: type["Record"], data: dict[str, Any]) -> dict[str, Any]:
        """Update an existing record."""
        storage = self._get_storage(model_class)
        pk_value = self.get_primary_key_value(model_class, data)

        if pk_value not in storage:
            raise NotFoundError(f"Record not found with key: {pk_value}")

        storage[pk_value] = deepcopy(data)
        logger.debug(f"Updated {self.get_entity_type(model_class)} {pk_value}")
        return deepcopy(data)

    def get(self, model_class: type["Record"], **filters: Any) -> Optional[dict[str, Any]]:
        """Get the first record whose fields match all filters."""
        storage = self._get_storage(model_class)

        for record in storage.values():
            if all(record.get(k) == v for k, v in filters.items()):
                return deepcopy(record)

        return None

    def delete(self, model_class: type["Record"], data: dict[str, Any]) -> bool:
        """Delete a record."""
        storage = self._get_storage(model_class)
        pk_value = self.get_primary_key_value(model_class, data)

        if pk_value in storage:
            del storage[pk_value]
            return True

        return False

    def all(self, model_class: type["Record"]) -> list[dict[str, Any]]:
        """Get every stored record of a model class."""
        return [deepcopy(record) for record in self._get_storage(model_class).values()]

    def count(self, model_class: type["Record"], **filters: Any) -> int:
        """Count records matching filters."""
        storage = self._get_storage(model_class)

        if not filters:
            return len(storage)

        return sum(
            1 for record in storage.values()
            if all(record.get(k) == v for k, v in filters.items())
        )

    def clear(self, model_class: Optional[type["Record"]] = None) -> None:
        """
        Clear all data (useful for testing).

        Args:
            model_class: Optional model class to clear. If None, clears all.
        """
        if model_class is not None:
            entity_type = self.get_entity_type(model_class)
            self._storage.pop(entity_type, None)
        else:
            self._storage.clear()


class BackendError(Exception):
    """Base exception for backend errors."""
    pass


class NotFoundError(BackendError):
    """Record not found in backend."""
    pass


class DuplicateKeyError(BackendError):
    """Unique constraint violation."""
    pass
