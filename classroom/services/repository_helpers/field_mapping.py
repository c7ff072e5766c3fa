# /classroom/services/repository_helpers/field_mapping.py

"""
Declarative, bidirectional field mapping between backend table rows and
domain records.

An `EntityMapping` describes one table: its name, the domain model, and one
`FieldSpec` per column. The same descriptor drives both directions of the
translation, so adding a column is a one-line change instead of an edit to
every read and write path.

Reading (`to_domain`) is total: a missing or null column becomes the declared
default. Writing (`to_external`) is strict: only declared columns are emitted,
numbers are coerced from strings, and a value that cannot be coerced raises
`InvalidArgumentError` before anything reaches the network.
"""

import logging
import math
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict

from ..coercion import coerce_id, unwrap_reference
from ..exceptions import InvalidArgumentError
from ...models.boundary_model import OrderBy, SortDirection

logger = logging.getLogger(__name__)

ID_COLUMN = "Id"
NAME_COLUMN = "Name"

_TRUE_STRINGS = {"true", "1", "yes", "y"}


class FieldKind(str, Enum):
    TEXT = "text"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    REFERENCE = "reference"
    TIMESTAMP = "timestamp"


class FieldSpec(BaseModel):
    """How one domain field maps onto one backend column."""
    model_config = ConfigDict(frozen=True)

    domain: str
    external: str
    kind: FieldKind = FieldKind.TEXT
    default: Any = ""
    choices: Optional[Tuple[str, ...]] = None
    # Values accepted on write when narrower than `choices`.
    write_choices: Optional[Tuple[str, ...]] = None
    required: bool = False
    # Immutable columns are written on create only.
    immutable: bool = False

    # --- external -> domain ---

    def read(self, raw: Any) -> Any:
        if raw is None or (isinstance(raw, str) and raw == ""):
            return self.default

        if self.kind == FieldKind.REFERENCE:
            return unwrap_reference(raw)

        if self.kind == FieldKind.BOOLEAN:
            if isinstance(raw, str):
                return raw.strip().lower() in _TRUE_STRINGS
            return bool(raw)

        if self.kind in (FieldKind.INTEGER, FieldKind.NUMBER):
            try:
                number = float(raw)
            except (TypeError, ValueError):
                logger.warning("Column %s held a non-numeric value %r; using default.", self.external, raw)
                return self.default
            if not math.isfinite(number):
                return self.default
            if self.kind == FieldKind.INTEGER:
                return int(number)
            return number

        text = raw.value if isinstance(raw, Enum) else str(raw)
        if self.choices and text not in self.choices:
            logger.warning("Column %s held unknown value %r; using default.", self.external, text)
            return self.default
        return text

    # --- domain -> external ---

    def write(self, value: Any) -> Any:
        if isinstance(value, Enum):
            value = value.value
        blank = isinstance(value, str) and value.strip() == ""
        missing = value is None or (blank and (self.kind != FieldKind.TEXT or self.choices is not None))

        if missing:
            if self.required or (self.write_choices and self.default not in self.write_choices):
                raise InvalidArgumentError(f"{self.domain} is required")
            return self.default

        if self.kind == FieldKind.REFERENCE:
            return coerce_id(value, label=self.domain)

        if self.kind == FieldKind.BOOLEAN:
            if isinstance(value, str):
                return value.strip().lower() in _TRUE_STRINGS
            return bool(value)

        if self.kind in (FieldKind.INTEGER, FieldKind.NUMBER):
            if isinstance(value, bool):
                raise InvalidArgumentError(f"{self.domain} must be a number, got {value!r}")
            try:
                number = float(value)
            except (TypeError, ValueError):
                raise InvalidArgumentError(f"{self.domain} must be a number, got {value!r}")
            if not math.isfinite(number):
                raise InvalidArgumentError(f"{self.domain} must be a finite number, got {value!r}")
            if self.kind == FieldKind.INTEGER:
                if not number.is_integer():
                    raise InvalidArgumentError(f"{self.domain} must be a whole number, got {value!r}")
                return int(number)
            return number

        if blank and self.required:
            raise InvalidArgumentError(f"{self.domain} is required")

        text = str(value)
        allowed = self.write_choices or self.choices
        if allowed and text not in allowed:
            raise InvalidArgumentError(
                f"{self.domain} must be one of {', '.join(allowed)}; got {text!r}"
            )
        return text


DomainInput = Union[BaseModel, Mapping[str, Any]]


class EntityMapping(BaseModel):
    """Everything a repository needs to know about one backend table."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    entity: str
    table: str
    domain_model: Type[BaseModel]
    columns: Tuple[FieldSpec, ...]
    # Builds the backend's display "Name" column from the written values.
    display_name: Callable[[Dict[str, Any]], str]
    page_size: int = 100
    list_page_size: Optional[int] = None
    # Ordering applied to per-student queries, when the entity has one.
    student_order: Optional[OrderBy] = None

    # --- Descriptor lookups ---

    def column(self, domain_field: str) -> FieldSpec:
        for spec in self.columns:
            if spec.domain == domain_field:
                return spec
        raise InvalidArgumentError(f"{self.entity} has no field '{domain_field}'")

    def has_field(self, domain_field: str) -> bool:
        return any(spec.domain == domain_field for spec in self.columns)

    def field_selector(self) -> List[str]:
        return [NAME_COLUMN] + [spec.external for spec in self.columns]

    def immutable_columns(self) -> List[FieldSpec]:
        return [spec for spec in self.columns if spec.immutable]

    # --- Translation ---

    def to_domain(self, record: Optional[Mapping[str, Any]]) -> BaseModel:
        """Translates a backend row into a validated domain model instance."""
        record = record or {}
        values: Dict[str, Any] = {"id": unwrap_reference(record.get(ID_COLUMN))}
        for spec in self.columns:
            values[spec.domain] = spec.read(record.get(spec.external))
        return self.domain_model.model_validate(values)

    def to_external(self, record: DomainInput) -> Dict[str, Any]:
        """
        Translates a domain record into the write shape the backend accepts.
        Only declared columns (plus the synthesized Name and, when present,
        the Id) are emitted.
        """
        if isinstance(record, BaseModel):
            data = record.model_dump(mode="json")
        else:
            data = dict(record)

        written: Dict[str, Any] = {}
        payload: Dict[str, Any] = {}
        for spec in self.columns:
            value = spec.write(data.get(spec.domain))
            written[spec.domain] = value
            payload[spec.external] = value

        payload[NAME_COLUMN] = self.display_name(written)
        if data.get("id") is not None:
            payload[ID_COLUMN] = coerce_id(data["id"])
        return payload


def order_descending(domain_field: str) -> OrderBy:
    return OrderBy(field=domain_field, direction=SortDirection.DESC)
