"""
Field definitions for records.

Wraps Pydantic's Field with the ORM metadata the record layer needs.
"""

from typing import Any, Optional, Callable
from pydantic import Field as PydanticField
from pydantic.fields import FieldInfo
from pydantic_core import PydanticUndefined


def Field(
    default: Any = PydanticUndefined,
    *,
    default_factory: Optional[Callable[[], Any]] = None,
    description: Optional[str] = None,
    # ORM-specific options
    primary_key: bool = False,
    **extra: Any,
) -> FieldInfo:
    """
    Define a record field with validation and ORM metadata.

    Args:
        default: Default value for the field
        default_factory: Factory function for default values
        description: Field description
        primary_key: Whether this is the primary key
        **extra: Additional Pydantic field arguments

    Example:
        >>> class Ticket(Record):
        ...     id: str = Field(primary_key=True)
        ...     title: str = Field(max_length=200)
    """
    json_schema_extra = extra.pop("json_schema_extra", {})
    json_schema_extra.update({"orm": {"primary_key": primary_key}})

    if default_factory is not None:
        return PydanticField(  # type: ignore[no-any-return, call-overload, misc]
            default_factory=default_factory,
            description=description,
            json_schema_extra=json_schema_extra,
            **extra,
        )
    return PydanticField(  # type: ignore[no-any-return, call-overload, misc]
        default=default,
        description=description,
        json_schema_extra=json_schema_extra,
        **extra,
    )


def get_field_orm_metadata(field_info: FieldInfo) -> dict[str, Any]:
    """Extract ORM metadata from a FieldInfo object."""
    if hasattr(field_info, "json_schema_extra") and field_info.json_schema_extra:
        extra = field_info.json_schema_extra
        if isinstance(extra, dict):
            orm_data = extra.get("orm", {})
            if isinstance(orm_data, dict):
                return orm_data
    return {}


def is_primary_key(field_info: FieldInfo) -> bool:
    """Check if a field is a primary key."""
    return bool(get_field_orm_metadata(field_info).get("primary_key", False))
