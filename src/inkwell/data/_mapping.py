"""Row-to-dataclass mapping.

Converts raw database rows (dicts) into frozen dataclasses using field
introspection. Extra columns are ignored; ``int`` fields coerce string
values because SQLite may hand them back untyped.
"""

import dataclasses
from typing import Any, TypeVar

T = TypeVar("T")


def _field_names(cls: type) -> dict[str, Any]:
    if not dataclasses.is_dataclass(cls):
        msg = f"{cls.__name__} is not a dataclass; inkwell.data maps rows to dataclasses"
        raise TypeError(msg)
    return {f.name: f.type for f in dataclasses.fields(cls)}


def _coerce(value: Any, target: Any) -> Any:
    if target in (int, "int") and isinstance(value, str):
        return int(value) if value != "" else 0
    return value


def map_row(cls: type[T], row: dict[str, Any]) -> T:
    """Map a dict-like row to a dataclass instance.

    Raises ``TypeError`` if required fields are missing from the row.
    """
    fields = _field_names(cls)
    return cls(**{k: _coerce(v, fields[k]) for k, v in row.items() if k in fields})


def map_rows(cls: type[T], rows: list[dict[str, Any]]) -> list[T]:
    """Map a list of dict-like rows to dataclass instances."""
    fields = _field_names(cls)
    return [cls(**{k: _coerce(v, fields[k]) for k, v in row.items() if k in fields}) for row in rows]
