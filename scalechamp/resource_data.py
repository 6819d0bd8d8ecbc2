# SPDX-FileCopyrightText: 2025 - Canonical Ltd
# SPDX-License-Identifier: Apache-2.0

from typing import Any, Mapping

from scalechamp.errors import FieldSetError
from scalechamp.schema import Field, FieldType


class ResourceData:
    """Configuration and observed state of a single resource.

    The orchestrating engine hands one of these to every lifecycle call.
    ``config`` holds the values declared by the user for this run, ``state``
    the values recorded by the previous run. Lifecycle calls read desired
    values with get(), compare them against the previous run with
    has_change() and record what they observe with set().
    """

    def __init__(
        self,
        schema: Mapping[str, Field],
        config: Mapping[str, Any],
        state: Mapping[str, Any] | None = None,
        id: str | None = None,
    ):
        unknown = set(config) - set(schema)
        if unknown:
            raise ValueError(f"Unknown fields in configuration: {sorted(unknown)}")
        self.schema = schema
        self._config = dict(config)
        self._prior = dict(state or {})
        self._written: dict[str, Any] = {}
        self._id = id

    @property
    def id(self) -> str | None:
        return self._id

    def set_id(self, id: str | None) -> None:
        """Assign the resource identity.

        The identity is set once, when the resource is created, and only
        ever cleared afterwards.

        :raises ValueError: if a different identity is already assigned
        """
        if id is not None and self._id is not None and id != self._id:
            raise ValueError(
                f"Resource identity is already {self._id!r}, refusing {id!r}"
            )
        self._id = id

    def _field(self, key: str) -> Field:
        try:
            return self.schema[key]
        except KeyError:
            raise KeyError(f"Field {key!r} is not part of the schema") from None

    def _normalize(self, field: Field, value: Any) -> Any:
        if field.type == FieldType.SET and value is not None:
            return frozenset(value)
        return value

    def _prior_value(self, key: str) -> Any:
        field = self._field(key)
        if key in self._prior:
            return self._normalize(field, self._prior[key])
        if field.default is not None:
            return field.default
        return field.type.zero_value()

    def get(self, key: str) -> Any:
        """Return the current value of a field.

        Values written during this run win, then user configuration, then
        the previous state for computed fields, then the schema default,
        then the zero value of the field type.
        """
        field = self._field(key)
        if key in self._written:
            return self._written[key]
        if key in self._config and self._config[key] is not None:
            return self._normalize(field, self._config[key])
        if field.computed:
            return self._prior_value(key)
        if field.default is not None:
            return field.default
        return field.type.zero_value()

    def has_change(self, key: str) -> bool:
        """Whether the desired value differs from the previous state."""
        field = self._field(key)
        if field.computed and (key not in self._config or self._config[key] is None):
            return False
        return self.get(key) != self._prior_value(key)

    def set(self, key: str, value: Any) -> None:
        """Record an observed value for a field.

        :raises FieldSetError: if the field is unknown or the value does not
                               match the field type
        """
        field = self.schema.get(key)
        if field is None:
            raise FieldSetError(key, "not part of the schema")
        if value is not None and not field.type.accepts(value):
            raise FieldSetError(
                key, f"expected {field.type.value}, got {type(value).__name__}"
            )
        self._written[key] = self._normalize(field, value)

    def state(self) -> dict[str, Any]:
        """Return the values to persist for the next run."""
        state: dict[str, Any] = {}
        for key in self.schema:
            value = self.get(key)
            if isinstance(value, frozenset):
                value = sorted(value)
            state[key] = value
        return state

