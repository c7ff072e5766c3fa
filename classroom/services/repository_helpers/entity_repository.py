# /classroom/services/repository_helpers/entity_repository.py

"""
A single repository class serving every backend table.

Each instance is configured by an `EntityMapping` and talks to whatever
`TableClient` it is given. It translates rows through the mapping, converts
boundary responses into domain records, and turns every unsuccessful response
into one of the exceptions in `services.exceptions`. It holds no state beyond
those two collaborators and never applies business rules.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from .field_mapping import DomainInput, EntityMapping, FieldKind, ID_COLUMN
from .table_client import TableClient
from ..coercion import coerce_id, parse_day, require_day
from ..exceptions import (
    BoundaryUnavailableError,
    InvalidArgumentError,
    NotFoundError,
    ValidationFailedError,
    WriteFailedError,
)
from ...models.boundary_model import (
    NOT_FOUND_CODE,
    DeleteResponse,
    FilterPredicate,
    OrderBy,
    PredicateOperator,
    ReadResponse,
    SortDirection,
    WriteResponse,
)

logger = logging.getLogger(__name__)


class EntityRepository:
    def __init__(self, mapping: EntityMapping, client: TableClient):
        self.mapping = mapping
        self.client = client

    @property
    def entity(self) -> str:
        return self.mapping.entity

    # --- Response parsing ---

    def _parse(self, model, response: Any, action: str):
        try:
            return model.model_validate(response)
        except ValidationError as e:
            logger.error("Malformed response while trying to %s %s: %s", action, self.entity, e)
            raise BoundaryUnavailableError(f"Malformed response from backend while trying to {action} {self.entity}") from e

    def _written_row(self, response: Any, action: str) -> Dict[str, Any]:
        parsed = self._parse(WriteResponse, response, action)

        if not parsed.success and not parsed.results:
            logger.error("Error trying to %s %s: %s", action, self.entity, parsed.message)
            if parsed.code == NOT_FOUND_CODE:
                raise NotFoundError(parsed.message or f"{self.entity} not found")
            raise WriteFailedError(parsed.message or f"Failed to {action} {self.entity}")

        results = parsed.results or []
        for result in results:
            if result.success:
                continue
            logger.error("Failed to %s %s record: %s", action, self.entity, result.model_dump())
            if result.errors:
                first = result.errors[0]
                raise ValidationFailedError(first.field, first.message)
            if result.code == NOT_FOUND_CODE:
                raise NotFoundError(result.message or f"{self.entity} not found")
            raise WriteFailedError(result.message or f"Failed to {action} {self.entity}")

        for result in results:
            if result.data is not None:
                return result.data
        raise WriteFailedError(f"Failed to {action} {self.entity}")

    async def _fetch(
        self,
        where: Optional[List[FilterPredicate]] = None,
        order_by: Optional[List[OrderBy]] = None,
        limit: Optional[int] = None,
    ) -> List[BaseModel]:
        response = await self.client.list_records(
            self.mapping.table,
            fields=self.mapping.field_selector(),
            where=[p.model_dump(mode="json") for p in (where or [])],
            order_by=[o.model_dump(mode="json") for o in (order_by or [])],
            limit=limit or self.mapping.page_size,
            offset=0,
        )
        parsed = self._parse(ReadResponse, response, "fetch")
        if not parsed.success:
            logger.error("Error fetching %s records: %s", self.entity, parsed.message)
            raise BoundaryUnavailableError(parsed.message or f"Failed to fetch {self.entity} records")
        rows = parsed.data or []
        if not isinstance(rows, list):
            raise BoundaryUnavailableError(f"Expected a list of {self.entity} records from backend")
        return [self.mapping.to_domain(row) for row in rows]

    # --- CRUD ---

    async def list_all(self) -> List[BaseModel]:
        """Fetches one page (the mapping's fixed page size) of records."""
        return await self._fetch(limit=self.mapping.list_page_size or self.mapping.page_size)

    async def get_by_id(self, record_id: Any) -> BaseModel:
        record_id = coerce_id(record_id, label=f"{self.entity} id")
        response = await self.client.get_record(self.mapping.table, record_id, self.mapping.field_selector())
        parsed = self._parse(ReadResponse, response, "fetch")
        if not parsed.success:
            logger.error("Error fetching %s %s: %s", self.entity, record_id, parsed.message)
            raise NotFoundError(parsed.message or f"{self.entity} not found")
        if not parsed.data:
            raise NotFoundError(f"{self.entity} not found")
        return self.mapping.to_domain(parsed.data)

    async def create(self, record: DomainInput) -> BaseModel:
        payload = self.mapping.to_external(record)
        payload.pop(ID_COLUMN, None)
        now = datetime.now(timezone.utc).isoformat()
        for spec in self.mapping.immutable_columns():
            if spec.kind == FieldKind.TIMESTAMP:
                payload[spec.external] = now

        response = await self.client.write_records(self.mapping.table, [payload])
        return self.mapping.to_domain(self._written_row(response, "create"))

    async def update(self, record_id: Any, record: DomainInput) -> BaseModel:
        """Replaces every writable column of the record; immutable columns are left untouched."""
        record_id = coerce_id(record_id, label=f"{self.entity} id")
        payload = self.mapping.to_external(record)
        for spec in self.mapping.immutable_columns():
            payload.pop(spec.external, None)
        payload[ID_COLUMN] = record_id

        response = await self.client.write_records(self.mapping.table, [payload])
        return self.mapping.to_domain(self._written_row(response, "update"))

    async def delete(self, record_id: Any) -> bool:
        """
        Returns True only when the backend reports this id as removed. Other
        ids failing in the same batch do not affect the outcome.
        """
        record_id = coerce_id(record_id, label=f"{self.entity} id")
        response = await self.client.delete_records(self.mapping.table, [record_id])
        parsed = self._parse(DeleteResponse, response, "delete")

        if not parsed.results:
            if not parsed.success:
                logger.error("Error deleting %s %s: %s", self.entity, record_id, parsed.message)
                if parsed.code == NOT_FOUND_CODE:
                    raise NotFoundError(parsed.message or f"{self.entity} not found")
                raise WriteFailedError(parsed.message or f"Failed to delete {self.entity}")
            return False

        entry = next((r for r in parsed.results if r.id == record_id), None)
        if entry is None and len(parsed.results) == 1 and parsed.results[0].id is None:
            entry = parsed.results[0]
        if entry is None:
            return False
        if entry.success:
            return True

        logger.error("Failed to delete %s %s: %s", self.entity, record_id, entry.message)
        if entry.code == NOT_FOUND_CODE:
            raise NotFoundError(entry.message or f"{self.entity} not found")
        raise WriteFailedError(entry.message or f"Failed to delete {self.entity}")

    # --- Filtered Queries ---

    async def find_by(self, domain_field: str, value: Any, order_by: Optional[OrderBy] = None) -> List[BaseModel]:
        """
        Records whose `domain_field` equals `value`. The predicate is pushed
        down to the backend and re-applied to the mapped records.
        """
        spec = self.mapping.column(domain_field)
        if spec.kind == FieldKind.REFERENCE:
            target = coerce_id(value, label=domain_field)
        else:
            target = spec.write(value)

        predicate = FilterPredicate(field=spec.external, operator=PredicateOperator.EQUAL_TO, values=[target])
        ordering = [self._external_order(order_by)] if order_by else None
        records = await self._fetch(where=[predicate], order_by=ordering)
        matched = [r for r in records if self._domain_value(r, domain_field) == target]
        return self._sorted(matched, order_by)

    async def find_by_day(self, domain_field: str, day: Any) -> List[BaseModel]:
        """Records whose `domain_field` falls on the same calendar day as `day`."""
        spec = self.mapping.column(domain_field)
        target = require_day(day)
        predicate = FilterPredicate(field=spec.external, operator=PredicateOperator.SAME_DAY, values=[target.isoformat()])
        records = await self._fetch(where=[predicate])
        return [r for r in records if parse_day(getattr(r, domain_field)) == target]

    async def get_by_student(self, student_id: Any) -> List[BaseModel]:
        self._require_field("studentId")
        return await self.find_by("studentId", student_id, order_by=self.mapping.student_order)

    async def get_by_assignment(self, assignment_id: Any) -> List[BaseModel]:
        self._require_field("assignmentId")
        return await self.find_by("assignmentId", assignment_id)

    async def get_by_date(self, day: Any) -> List[BaseModel]:
        self._require_field("date")
        return await self.find_by_day("date", day)

    # --- Internal helpers ---

    def _require_field(self, domain_field: str) -> None:
        if not self.mapping.has_field(domain_field):
            raise InvalidArgumentError(f"{self.entity} records cannot be filtered by {domain_field}")

    def _external_order(self, order_by: OrderBy) -> OrderBy:
        return OrderBy(field=self.mapping.column(order_by.field).external, direction=order_by.direction)

    @staticmethod
    def _domain_value(record: BaseModel, domain_field: str) -> Any:
        value = getattr(record, domain_field)
        return value.value if isinstance(value, Enum) else value

    @staticmethod
    def _sorted(records: List[BaseModel], order_by: Optional[OrderBy]) -> List[BaseModel]:
        if order_by is None:
            return records
        return sorted(
            records,
            key=lambda r: str(getattr(r, order_by.field) or ""),
            reverse=order_by.direction == SortDirection.DESC,
        )
