"""
Persisted state for records.

An ActiveRecord-style record layer built on Pydantic, and StatefulRecord,
which stores the current state's token in a record field and restores the
state whenever a record is constructed or loaded.
"""

from state_pattern.records.backends import (
    Backend,
    BackendError,
    DuplicateKeyError,
    InMemoryBackend,
    NotFoundError,
)
from state_pattern.records.base import Record
from state_pattern.records.fields import Field
from state_pattern.records.hooks import (
    after_initialize,
    after_load,
    after_save,
    before_save,
)
from state_pattern.records.stateful import StatefulRecord

__all__ = [
    "Record",
    "StatefulRecord",
    "Field",
    "Backend",
    "InMemoryBackend",
    "BackendError",
    "NotFoundError",
    "DuplicateKeyError",
    "before_save",
    "after_save",
    "after_initialize",
    "after_load",
]
